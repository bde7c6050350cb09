"""Upload strategies module."""
from .chunking import ChunkPlanner, calculate_chunks
from .upload import SingleArchiveUpload, MultipartUpload, StubUpload

__all__ = [
    'ChunkPlanner',
    'calculate_chunks',
    'SingleArchiveUpload',
    'MultipartUpload',
    'StubUpload',
]
