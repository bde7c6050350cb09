"""
Upload coordinator.

Orchestrates the upload process using injected dependencies.
Follows Dependency Inversion Principle - depends on abstractions, not concretions.
"""
from pathlib import Path
from typing import Optional, Union
import time

from .models import UploadConfig, UploadResult, MAX_PARTS, required_parts
from .protocols import FileReaderProtocol, LoggerProtocol
from .selector import StrategySelector
from .services import VaultEnsurer
from .strategies import ChunkPlanner
from ..exceptions import UploadError, UploadErrorKind, map_upload_error
from ..logging import get_logger


class UploadCoordinator:
    """
    Coordinates the file upload process.

    Sequence: read file, validate its size, plan the job, ensure the vault
    exists, select the strategy and run it. Every failure leaves upload()
    as an UploadError of exactly one kind.
    """

    def __init__(
        self,
        config: UploadConfig,
        file_reader: FileReaderProtocol,
        planner: ChunkPlanner,
        vault_ensurer: VaultEnsurer,
        selector: StrategySelector,
        logger: Optional[LoggerProtocol] = None
    ):
        """
        Initialize upload coordinator.

        Args:
            config: Upload configuration
            file_reader: Reads the file to upload
            planner: Splits the file into parts
            vault_ensurer: Creates the vault if needed
            selector: Chooses and runs the transfer strategy
            logger: Logger instance
        """
        self._config = config
        self._file_reader = file_reader
        self._planner = planner
        self._vault_ensurer = vault_ensurer
        self._selector = selector
        self._logger = logger or get_logger('glacierpy.upload.coordinator')

    async def upload(self, file_path: Union[str, Path]) -> UploadResult:
        """
        Execute the complete upload process.

        Args:
            file_path: File to upload

        Returns:
            UploadResult with the archive ID

        Raises:
            UploadError: On any failure
        """
        try:
            return await self._upload(file_path)
        except Exception as e:
            error = map_upload_error(e)
            self._logger.error(error.message)
            raise error from e

    async def _upload(self, file_path: Union[str, Path]) -> UploadResult:
        start = time.time()
        file_info = await self._file_reader.read(file_path)
        size_mb = file_info.size / (1024 * 1024)
        self._logger.info(f"Starting upload: {file_info.path} ({size_mb:.2f} MB)")

        self._check_file_size(file_info.size)

        job = await self._planner.plan(file_info, self._config.chunk_size)

        if self._config.dry_run:
            self._logger.info(f"Dry run: not checking vault {self._config.vault_name}")
        else:
            await self._vault_ensurer.ensure(self._config.vault_name)

        self._selector.select(job.kind, self._config.dry_run)
        result = await self._selector.upload(job)

        self._logger.info(f"Upload finished in {time.time() - start:.2f}s: {result.archive_id}")
        return UploadResult(archive_id=result.archive_id)

    def _check_file_size(self, size: int) -> None:
        """
        Reject files that are empty or need more than MAX_PARTS parts.

        Raises:
            UploadError: EMPTY_FILE or MAX_PARTS_EXCEEDED
        """
        if size < 1:
            raise UploadError(UploadErrorKind.EMPTY_FILE)

        parts = required_parts(size, self._config.chunk_size)
        if parts > MAX_PARTS:
            raise UploadError(
                UploadErrorKind.MAX_PARTS_EXCEEDED,
                f"{parts} parts of {self._config.chunk_size} bytes required"
            )
