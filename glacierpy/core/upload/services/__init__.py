"""Upload services module."""
from .file_service import FileValidator, AsyncFileReader, FileRange
from .executor import ConcurrentRetryExecutor, RetryableTask, BatchProcessError
from .vault_service import VaultEnsurer

__all__ = [
    'FileValidator',
    'AsyncFileReader',
    'FileRange',
    'ConcurrentRetryExecutor',
    'RetryableTask',
    'BatchProcessError',
    'VaultEnsurer',
]
