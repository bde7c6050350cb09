"""
glacierpy - Async Python uploader for Amazon S3 Glacier vaults.

Usage:
    >>> from glacierpy import GlacierUploader, UploadConfig
    >>>
    >>> config = UploadConfig.from_options(size_mb=8, vault_name="backups")
    >>> async with GlacierUploader(config) as glacier:
    ...     result = await glacier.upload("backup.tar")
    ...     print(result.archive_id)
"""
import logging
from .client import GlacierUploader

# Configuration
from .core.api import (
    APIConfig,
    SSLConfig,
    TimeoutConfig,
    AsyncGlacierClient,
    GlacierAPIError
)
from .core.upload import (
    UploadConfig,
    UploadResult,
    RetryPolicy,
    UploadFacade
)
from .core.exceptions import (
    GlacierPyException,
    ConfigError,
    UploadError,
    UploadErrorKind
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for glacierpy modules.

    This ensures that all glacierpy loggers are properly configured
    to show log messages at the specified level.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'glacierpy',
        'glacierpy.client',
        'glacierpy.api',
        'glacierpy.upload',
        'glacierpy.upload.coordinator',
        'glacierpy.upload.planner',
        'glacierpy.upload.selector',
        'glacierpy.upload.vault',
        'glacierpy.upload.file',
        'glacierpy.upload.executor',
        'glacierpy.upload.single',
        'glacierpy.upload.multipart',
        'glacierpy.upload.stub',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'GlacierUploader',
    'APIConfig',
    'SSLConfig',
    'TimeoutConfig',
    'AsyncGlacierClient',
    'GlacierAPIError',
    'UploadConfig',
    'UploadResult',
    'RetryPolicy',
    'UploadFacade',
    'GlacierPyException',
    'ConfigError',
    'UploadError',
    'UploadErrorKind',
    'setup_logging',
]
