"""
Upload module for Glacier archive uploads.

Plans a file into parts, picks a single or multipart transfer by size and
runs it with bounded concurrency and per-part retries.
"""
from .facade import UploadFacade
from .coordinator import UploadCoordinator
from .selector import StrategySelector
from .models import (
    FileInfo,
    UploadPart,
    UploadJob,
    UploadKind,
    UploadResult,
    UploadConfig,
    RetryPolicy
)
from .protocols import (
    ChecksumComputer,
    ByteSource,
    FileReaderProtocol,
    GlacierApiProtocol,
    UploadStrategy
)

__all__ = [
    # Main classes
    'UploadFacade',
    'UploadCoordinator',
    'StrategySelector',

    # Models
    'FileInfo',
    'UploadPart',
    'UploadJob',
    'UploadKind',
    'UploadResult',
    'UploadConfig',
    'RetryPolicy',

    # Protocols
    'ChecksumComputer',
    'ByteSource',
    'FileReaderProtocol',
    'GlacierApiProtocol',
    'UploadStrategy',
]
