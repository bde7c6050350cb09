"""
GlacierUploader - High-level async client for Glacier archive uploads.

Example:
    >>> config = UploadConfig.from_options(size_mb=8, vault_name="backups")
    >>> async with GlacierUploader(config) as glacier:
    ...     result = await glacier.upload("backup.tar")
    ...     print(result.archive_id)
"""
from pathlib import Path
from typing import Optional, Union

from .core.api import APIConfig, AsyncGlacierClient
from .core.upload import UploadConfig, UploadFacade, UploadResult
from .core.logging import get_logger

logger = get_logger('glacierpy.client')


class GlacierUploader:
    """
    Uploads files to a Glacier vault.

    Owns the API client and wires the upload subsystem for one
    configuration. Use as an async context manager so the HTTP session is
    closed when done.
    """

    def __init__(
        self,
        config: Optional[UploadConfig] = None,
        api_config: Optional[APIConfig] = None,
        work_dir: Optional[Union[str, Path]] = None,
        api_client: Optional[AsyncGlacierClient] = None
    ):
        """
        Initialize uploader.

        Args:
            config: Upload configuration
            api_config: Glacier API configuration
            work_dir: Directory relative file paths are resolved against
            api_client: Pre-built API client (api_config is ignored)
        """
        self._config = config or UploadConfig()
        self._api = api_client or AsyncGlacierClient(api_config)
        self._facade = UploadFacade(self._api, self._config, work_dir=work_dir)

    @property
    def config(self) -> UploadConfig:
        return self._config

    async def __aenter__(self) -> 'GlacierUploader':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def upload(self, file_path: Union[str, Path]) -> UploadResult:
        """
        Upload a file as a new archive.

        Args:
            file_path: File to upload

        Returns:
            UploadResult with the archive ID

        Raises:
            UploadError: If the upload fails
        """
        return await self._facade.upload(file_path)

    async def close(self) -> None:
        """Release the HTTP session."""
        await self._api.close()
        logger.debug("Uploader closed")
