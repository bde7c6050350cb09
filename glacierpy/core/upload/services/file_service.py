"""
File validation and reading services.

Single Responsibility: Each class handles one specific task.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Optional, Union
import aiofiles

from ..models import FileInfo
from ...exceptions import UploadError, UploadErrorKind
from ...logging import get_logger


class FileValidator:
    """
    Validates files before upload.

    Responsibilities:
    - Resolve relative paths against the working directory
    - Check file existence
    - Verify file is not a directory
    """

    def __init__(self, work_dir: Optional[Union[str, Path]] = None):
        self._work_dir = Path(work_dir) if work_dir else Path.cwd()

    def resolve(self, file_path: Union[str, Path]) -> Path:
        """Absolute path of file_path."""
        path = Path(file_path)
        return path if path.is_absolute() else self._work_dir / path

    def validate(self, file_path: Union[str, Path]) -> Tuple[Path, int]:
        """
        Validate a file for upload.

        Args:
            file_path: Path to the file

        Returns:
            Tuple of (absolute Path, file size in bytes)

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If path is not a regular file
        """
        path = self.resolve(file_path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        if not path.is_file():
            raise ValueError(f"Path is not a file: {path}")

        return path, path.stat().st_size


@dataclass(frozen=True)
class FileRange:
    """
    Lazy byte source for an inclusive range of a file.

    Nothing is read until read() is awaited.
    """
    path: Path
    start: int
    end: int

    async def read(self) -> bytes:
        """
        Load the range.

        Raises:
            OSError: If the file cannot be read or is shorter than the range
        """
        length = self.end - self.start + 1
        async with aiofiles.open(self.path, 'rb') as f:
            await f.seek(self.start)
            data = await f.read(length)
        if len(data) != length:
            raise OSError(
                f"Short read from {self.path}: expected {length} bytes at "
                f"{self.start}, got {len(data)}"
            )
        return data


class AsyncFileReader:
    """
    Asynchronous file reader.

    Uses aiofiles for non-blocking I/O operations.
    """

    def __init__(self, validator: Optional[FileValidator] = None):
        self._validator = validator or FileValidator()
        self._logger = get_logger('glacierpy.upload.file')

    async def read(self, file_path: Union[str, Path]) -> FileInfo:
        """
        Read an entire file.

        Args:
            file_path: Path to the file, relative to the working directory

        Returns:
            FileInfo with path, size and contents

        Raises:
            UploadError: FILE_READ_FAILED if the file cannot be read
        """
        try:
            path, _ = self._validator.validate(file_path)
            async with aiofiles.open(path, 'rb') as f:
                contents = await f.read()
        except (OSError, ValueError) as e:
            self._logger.error(f"Failed to read {file_path}: {e}")
            raise UploadError(UploadErrorKind.FILE_READ_FAILED, str(e)) from e

        self._logger.debug(f"Read {path} ({len(contents)} bytes)")
        return FileInfo(path=path, size=len(contents), contents=contents)

    def read_range(self, file_path: Path, start: int, end: int) -> FileRange:
        """Create a lazy source for bytes start..end (inclusive) of a file."""
        return FileRange(path=Path(file_path), start=start, end=end)
