"""
Upload facade.

Provides a simplified interface for archive uploads.
Follows Facade Pattern - wires the upload subsystem from its parts.
"""
from pathlib import Path
from typing import Optional, Union

from .coordinator import UploadCoordinator
from .models import UploadConfig, UploadResult
from .protocols import ChecksumComputer, GlacierApiProtocol
from .selector import StrategySelector
from .services import AsyncFileReader, ConcurrentRetryExecutor, FileValidator, VaultEnsurer
from .strategies import ChunkPlanner, MultipartUpload, SingleArchiveUpload, StubUpload
from ..hashing import TreeHashCalculator


class UploadFacade:
    """
    Simplified interface for Glacier archive uploads.

    Hides the complexity of planning, vault provisioning and the transfer
    strategies behind a single upload() call.

    Example:
        >>> from glacierpy.core.upload import UploadFacade, UploadConfig
        >>> uploader = UploadFacade(api_client, UploadConfig(vault_name='backups'))
        >>> result = await uploader.upload("backup.tar")
        >>> print(f"Uploaded: {result.archive_id}")
    """

    def __init__(
        self,
        api_client: GlacierApiProtocol,
        config: Optional[UploadConfig] = None,
        work_dir: Optional[Union[str, Path]] = None,
        checksum: Optional[ChecksumComputer] = None,
        executor: Optional[ConcurrentRetryExecutor] = None
    ):
        """
        Initialize upload facade.

        Args:
            api_client: Glacier API client
            config: Upload configuration (defaults if not provided)
            work_dir: Directory relative paths are resolved against
            checksum: Tree hash calculator
            executor: Executor for multipart part uploads
        """
        self._config = config or UploadConfig()
        file_reader = AsyncFileReader(FileValidator(work_dir))

        selector = StrategySelector(
            single=SingleArchiveUpload(api_client, self._config),
            multipart=MultipartUpload(api_client, self._config, executor),
            stub=StubUpload()
        )

        self._coordinator = UploadCoordinator(
            config=self._config,
            file_reader=file_reader,
            planner=ChunkPlanner(file_reader, checksum or TreeHashCalculator()),
            vault_ensurer=VaultEnsurer(api_client),
            selector=selector
        )

    @property
    def config(self) -> UploadConfig:
        return self._config

    async def upload(self, file_path: Union[str, Path]) -> UploadResult:
        """
        Upload a file to the configured vault.

        Args:
            file_path: Path to file to upload

        Returns:
            UploadResult with the archive ID

        Raises:
            UploadError: If the upload fails
        """
        return await self._coordinator.upload(file_path)
