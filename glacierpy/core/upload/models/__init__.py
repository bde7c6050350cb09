"""Upload models."""
from .upload_models import (
    FileInfo,
    UploadPart,
    UploadJob,
    UploadKind,
    UploadResult,
    UploadConfig,
    RetryPolicy,
    chunk_size_from_mb,
    required_parts,
    MIB,
    MAX_CHUNK_SIZE,
    MAX_PARTS,
    STUB_ARCHIVE_ID
)

__all__ = [
    'FileInfo',
    'UploadPart',
    'UploadJob',
    'UploadKind',
    'UploadResult',
    'UploadConfig',
    'RetryPolicy',
    'chunk_size_from_mb',
    'required_parts',
    'MIB',
    'MAX_CHUNK_SIZE',
    'MAX_PARTS',
    'STUB_ARCHIVE_ID'
]
