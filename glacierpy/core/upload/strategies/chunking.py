"""
Upload planning.

Splits a file into fixed-size parts and decides between a single request
and a multipart upload.
"""
from typing import List, Tuple
import asyncio

from ..models import FileInfo, UploadJob, UploadKind, UploadPart
from ..protocols import ChecksumComputer, FileReaderProtocol
from ...exceptions import UploadError, UploadErrorKind
from ...logging import get_logger


def calculate_chunks(file_size: int, chunk_size: int) -> List[Tuple[int, int]]:
    """
    Calculate part boundaries for a file.

    Every part is chunk_size bytes long except the last one, which holds
    the remainder (a full chunk when file_size is a multiple of chunk_size).

    Args:
        file_size: Total file size in bytes (> 0)
        chunk_size: Part size in bytes (> 0)

    Returns:
        List of (start, end) tuples, end inclusive
    """
    if chunk_size <= 0:
        raise ValueError("Chunk size must be positive")
    if file_size <= 0:
        raise ValueError("Cannot split an empty file")

    chunks = []
    cursor = 0

    while (file_size - cursor) - chunk_size > 0:
        end = cursor + chunk_size - 1
        chunks.append((cursor, end))
        cursor = end + 1

    chunks.append((cursor, file_size - 1))
    return chunks


class ChunkPlanner:
    """
    Turns a file into an UploadJob.

    The tree hash is computed once over the whole file contents; each part
    gets a lazy byte source so part data is only loaded when transferred.
    """

    def __init__(self, file_reader: FileReaderProtocol, checksum: ChecksumComputer):
        self._file_reader = file_reader
        self._checksum = checksum
        self._logger = get_logger('glacierpy.upload.planner')

    async def plan(self, file_info: FileInfo, chunk_size: int) -> UploadJob:
        """
        Plan the upload of a file.

        The tree hash is computed in the default executor so other tasks
        keep running while a large file is hashed.

        Args:
            file_info: File to upload
            chunk_size: Part size in bytes

        Returns:
            UploadJob with kind, tree hash and ordered parts

        Raises:
            UploadError: PLANNING_FAILED if parts or checksum cannot be created
        """
        try:
            chunks = calculate_chunks(file_info.size, chunk_size)
            parts = tuple(
                UploadPart(start, end, self._file_reader.read_range(file_info.path, start, end))
                for start, end in chunks
            )
            loop = asyncio.get_running_loop()
            tree_hash = await loop.run_in_executor(None, self._checksum.compute, file_info.contents)
        except Exception as e:
            raise UploadError(UploadErrorKind.PLANNING_FAILED, str(e)) from e

        kind = UploadKind.SINGLE if len(parts) == 1 else UploadKind.MULTIPART
        self._logger.info(
            f"Planned {kind.value} upload of {file_info.path}: "
            f"{len(parts)} part(s) of up to {chunk_size} bytes"
        )
        self._logger.debug(f"Tree hash: {tree_hash}")

        return UploadJob(kind=kind, tree_hash=tree_hash, parts=parts)
