"""
Archive transfer strategies.

SingleArchiveUpload sends a file in one request, MultipartUpload runs the
initiate / upload parts / complete protocol and StubUpload transfers
nothing (dry runs).
"""
from typing import List, Optional, Sequence
import time

from ..models import UploadConfig, UploadPart, UploadResult, STUB_ARCHIVE_ID
from ..protocols import GlacierApiProtocol
from ..services.executor import ConcurrentRetryExecutor, RetryableTask
from ...exceptions import UploadError, UploadErrorKind
from ...logging import get_logger


class SingleArchiveUpload:
    """Uploads a file that fits in one part with a single request."""

    def __init__(self, api: GlacierApiProtocol, config: UploadConfig):
        self._api = api
        self._config = config
        self._logger = get_logger('glacierpy.upload.single')

    async def upload(self, parts: Sequence[UploadPart], tree_hash: str) -> UploadResult:
        """
        Upload the only part of a file.

        Raises:
            UploadError: SINGLE_UPLOAD_FAILED or ARCHIVE_ID_MISSING
        """
        if len(parts) != 1:
            raise UploadError(
                UploadErrorKind.SINGLE_UPLOAD_FAILED,
                f"expected exactly one part, got {len(parts)}"
            )
        part = parts[0]

        self._logger.info(f"Uploading archive ({part.size} bytes) to vault {self._config.vault_name}")
        try:
            body = await part.source.read()
            archive_id = await self._api.upload_archive(
                self._config.vault_name, body, self._config.description
            )
        except Exception as e:
            raise UploadError(UploadErrorKind.SINGLE_UPLOAD_FAILED, str(e)) from e

        if not archive_id:
            raise UploadError(UploadErrorKind.ARCHIVE_ID_MISSING)

        self._logger.info(f"Archive uploaded: {archive_id}")
        return UploadResult(archive_id=archive_id)


class MultipartUpload:
    """
    Uploads a file in parts.

    Phases run strictly in order: initiate, transfer every part through the
    executor, complete. Each phase fails with its own error kind so callers
    can tell "never started", "partially transferred" and "transferred but
    not finalized" apart.
    """

    def __init__(
        self,
        api: GlacierApiProtocol,
        config: UploadConfig,
        executor: Optional[ConcurrentRetryExecutor] = None
    ):
        self._api = api
        self._config = config
        self._executor = executor or ConcurrentRetryExecutor()
        self._logger = get_logger('glacierpy.upload.multipart')

    async def upload(self, parts: Sequence[UploadPart], tree_hash: str) -> UploadResult:
        """
        Run the multipart protocol.

        Raises:
            UploadError: INITIATE_FAILED, MULTIPART_ID_MISSING,
                PARTS_TRANSFER_FAILED, COMPLETE_FAILED or ARCHIVE_ID_MISSING
        """
        if len(parts) < 2:
            raise UploadError(
                UploadErrorKind.INITIATE_FAILED,
                f"expected at least two parts, got {len(parts)}"
            )
        vault_name = self._config.vault_name
        upload_id = await self._initiate(vault_name)

        start = time.time()
        await self._transfer(parts, upload_id, vault_name)
        self._logger.info(f"All {len(parts)} parts uploaded in {time.time() - start:.2f}s")

        total_size = parts[-1].end + 1
        archive_id = await self._complete(upload_id, vault_name, tree_hash, total_size)
        return UploadResult(archive_id=archive_id)

    async def _initiate(self, vault_name: str) -> str:
        self._logger.info(
            f"Initiating multipart upload to vault {vault_name} "
            f"(part size {self._config.chunk_size} bytes)"
        )
        try:
            upload_id = await self._api.initiate_multipart_upload(
                vault_name, self._config.chunk_size, self._config.description
            )
        except Exception as e:
            raise UploadError(UploadErrorKind.INITIATE_FAILED, str(e)) from e

        if not upload_id:
            raise UploadError(UploadErrorKind.MULTIPART_ID_MISSING)

        self._logger.debug(f"Multipart upload ID: {upload_id}")
        return upload_id

    async def _transfer(self, parts: Sequence[UploadPart], upload_id: str, vault_name: str) -> None:
        tasks = self._create_upload_tasks(parts, upload_id, vault_name)
        self._logger.info(
            f"Uploading {len(tasks)} parts ({self._config.concurrency} at a time)"
        )
        try:
            await self._executor.run(tasks, self._config.concurrency, self._config.retry)
        except Exception as e:
            raise UploadError(UploadErrorKind.PARTS_TRANSFER_FAILED, str(e)) from e

    async def _complete(self, upload_id: str, vault_name: str, checksum: str, archive_size: int) -> str:
        self._logger.info(f"Completing multipart upload ({archive_size} bytes)")
        try:
            archive_id = await self._api.complete_multipart_upload(
                vault_name, upload_id, checksum, archive_size
            )
        except Exception as e:
            raise UploadError(UploadErrorKind.COMPLETE_FAILED, str(e)) from e

        if not archive_id:
            raise UploadError(UploadErrorKind.ARCHIVE_ID_MISSING)

        self._logger.info(f"Archive uploaded: {archive_id}")
        return archive_id

    def _create_upload_tasks(
        self,
        parts: Sequence[UploadPart],
        upload_id: str,
        vault_name: str
    ) -> List[RetryableTask]:
        return [
            self._create_upload_task(part, index, upload_id, vault_name)
            for index, part in enumerate(parts)
        ]

    def _create_upload_task(
        self,
        part: UploadPart,
        index: int,
        upload_id: str,
        vault_name: str
    ) -> RetryableTask:
        async def work() -> None:
            body = await part.source.read()
            await self._api.upload_multipart_part(vault_name, upload_id, part.content_range, body)

        return RetryableTask(id=f"{index + 1}: {part.start}-{part.end}", work=work)


class StubUpload:
    """Pretends to upload; used for dry runs."""

    def __init__(self):
        self._logger = get_logger('glacierpy.upload.stub')

    async def upload(self, parts: Sequence[UploadPart], tree_hash: str) -> UploadResult:
        self._logger.info(f"Dry run: skipping upload of {len(parts)} part(s) with tree hash {tree_hash}")
        return UploadResult(archive_id=STUB_ARCHIVE_ID)
