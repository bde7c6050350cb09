"""
Protocol definitions for upload module.

Defines the capabilities the upload engine consumes. Each one is a small
interface so tests can substitute mocks and strategies can be swapped.
"""
from typing import Protocol, Dict, Any, Optional, Sequence
from pathlib import Path

from .models import FileInfo, UploadPart, UploadResult


class ChecksumComputer(Protocol):
    """Protocol for tree hash computation."""

    def compute(self, data: bytes) -> str:
        """
        Compute the tree hash of data.

        Args:
            data: Bytes to hash

        Returns:
            Hex encoded tree hash
        """
        ...


class ByteSource(Protocol):
    """Lazily materialized bytes of an upload part."""

    async def read(self) -> bytes:
        """Load the bytes."""
        ...


class FileReaderProtocol(Protocol):
    """Protocol for file reading operations."""

    async def read(self, file_path: str) -> FileInfo:
        """
        Read a whole file.

        Raises:
            UploadError: FILE_READ_FAILED if the file cannot be read
        """
        ...

    def read_range(self, file_path: Path, start: int, end: int) -> ByteSource:
        """
        Create a lazy source for an inclusive byte range of a file.

        Args:
            file_path: Path to the file
            start: First byte offset
            end: Last byte offset (inclusive)
        """
        ...


class GlacierApiProtocol(Protocol):
    """Remote calls used for archive uploads."""

    async def describe_vault(self, vault_name: str) -> Dict[str, Any]: ...

    async def create_vault(self, vault_name: str) -> None: ...

    async def upload_archive(
        self,
        vault_name: str,
        body: bytes,
        description: Optional[str] = None
    ) -> Optional[str]: ...

    async def initiate_multipart_upload(
        self,
        vault_name: str,
        part_size: int,
        description: Optional[str] = None
    ) -> Optional[str]: ...

    async def upload_multipart_part(
        self,
        vault_name: str,
        upload_id: str,
        byte_range: str,
        body: bytes
    ) -> None: ...

    async def complete_multipart_upload(
        self,
        vault_name: str,
        upload_id: str,
        checksum: str,
        archive_size: int
    ) -> Optional[str]: ...


class UploadStrategy(Protocol):
    """Protocol for archive transfer strategies."""

    async def upload(self, parts: Sequence[UploadPart], tree_hash: str) -> UploadResult:
        """
        Transfer the parts of a file.

        Args:
            parts: Planned parts in ascending order
            tree_hash: Tree hash of the whole file

        Returns:
            UploadResult with the archive ID
        """
        ...


class LoggerProtocol(Protocol):
    """Protocol for logger objects."""

    def debug(self, msg: str) -> None: ...
    def info(self, msg: str) -> None: ...
    def warning(self, msg: str) -> None: ...
    def error(self, msg: str) -> None: ...
