"""
Data models for upload module.

Uses dataclasses for immutable, type-safe data structures.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple
from pathlib import Path
import math

from ...exceptions import ConfigError
from ...logging import LOG_LEVELS

MIB = 1024 * 1024
MAX_CHUNK_SIZE = 4 * 1024 * MIB  # 4 GiB
MAX_PARTS = 10_000
DEFAULT_CONCURRENCY = 5
DEFAULT_VAULT_NAME = 'my-vault'
DEFAULT_LOG_LEVEL = 'info'
STUB_ARCHIVE_ID = 'stub'


class UploadKind(Enum):
    """How a file is transferred."""
    SINGLE = 'single'
    MULTIPART = 'multipart'


@dataclass(frozen=True)
class FileInfo:
    """
    A file read for upload.

    Attributes:
        path: Absolute path of the file
        size: File size in bytes
        contents: Complete file contents
    """
    path: Path
    size: int
    contents: bytes = field(repr=False)


@dataclass(frozen=True)
class UploadPart:
    """
    A contiguous byte range of the source file.

    Attributes:
        start: First byte offset (inclusive)
        end: Last byte offset (inclusive)
        source: Lazy byte source for the range
    """
    start: int
    end: int
    source: object = field(repr=False, compare=False)

    @property
    def size(self) -> int:
        """Returns part size in bytes."""
        return self.end - self.start + 1

    @property
    def content_range(self) -> str:
        """Content-Range header value for this part."""
        return f"bytes {self.start}-{self.end}/*"


@dataclass(frozen=True)
class UploadJob:
    """
    Planned upload of one file.

    Attributes:
        kind: SINGLE for exactly one part, MULTIPART otherwise
        tree_hash: Tree hash of the whole file
        parts: Ascending, contiguous parts covering the file
    """
    kind: UploadKind
    tree_hash: str
    parts: Tuple[UploadPart, ...]

    @property
    def total_size(self) -> int:
        """Archive size as implied by the last part."""
        return self.parts[-1].end + 1


@dataclass(frozen=True)
class UploadResult:
    """Result of a successful upload."""
    archive_id: str


@dataclass(frozen=True)
class RetryPolicy:
    """
    Retry policy for part uploads.

    Attributes:
        times: Additional attempts after the first failure
        interval_ms: Fixed delay between attempts in milliseconds
    """
    times: int = 5
    interval_ms: int = 0

    def __post_init__(self):
        if self.times < 0:
            raise ConfigError("retry times must not be negative")
        if self.interval_ms < 0:
            raise ConfigError("retry interval must not be negative")

    @property
    def interval(self) -> float:
        """Delay between attempts in seconds."""
        return self.interval_ms / 1000


def chunk_size_from_mb(size_mb: Optional[float] = None) -> int:
    """
    Derive the part size in bytes from a size in MB.

    Sizes below 1 MB give 1 MiB; other sizes are rounded down to
    1 MiB times a power of two.

    Raises:
        ConfigError: If size_mb is above 4096
    """
    if size_mb is None or size_mb < 1:
        return MIB

    if size_mb > MAX_CHUNK_SIZE // MIB:
        raise ConfigError("chunk size exceeds maximum of 4GB")
    return MIB * 2 ** math.floor(math.log2(size_mb))


def required_parts(file_size: int, chunk_size: int) -> int:
    """Number of parts needed to upload file_size bytes."""
    return -(-file_size // chunk_size)


@dataclass(frozen=True)
class UploadConfig:
    """
    Configuration for archive uploads.

    Attributes:
        chunk_size: Part size in bytes (1 MiB times a power of two, max 4 GiB)
        concurrency: Maximum parts uploaded simultaneously
        vault_name: Destination vault
        description: Optional archive description
        dry_run: Plan the upload without transferring anything
        retry: Retry policy for part uploads
        log_level: One of error, warn, info, verbose, debug, silly
    """
    chunk_size: int = MIB
    concurrency: int = DEFAULT_CONCURRENCY
    vault_name: str = DEFAULT_VAULT_NAME
    description: Optional[str] = None
    dry_run: bool = False
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self):
        """Validate and normalize config."""
        errors = []
        size = self.chunk_size
        if size < MIB or size % MIB or (size // MIB) & (size // MIB - 1):
            errors.append("chunk_size: must be 1MB times a power of two")
        elif size > MAX_CHUNK_SIZE:
            errors.append("chunk_size: exceeds maximum of 4GB")
        if self.concurrency < 1:
            errors.append("concurrency: must be >= 1")
        if not self.vault_name:
            errors.append("vault_name: must not be empty")
        if self.log_level not in LOG_LEVELS:
            errors.append(f"log_level: must be one of {', '.join(LOG_LEVELS)}")
        if errors:
            raise ConfigError("; ".join(errors))

        if not self.description:
            object.__setattr__(self, 'description', None)

    @classmethod
    def from_options(
        cls,
        size_mb: Optional[float] = None,
        concurrency: Optional[int] = None,
        vault_name: Optional[str] = None,
        description: Optional[str] = None,
        dry_run: Optional[bool] = None,
        retry: Optional[RetryPolicy] = None,
        log_level: Optional[str] = None
    ) -> 'UploadConfig':
        """
        Build a config from user options, applying defaults for missing ones.

        Args:
            size_mb: Proposed part size in MB
            concurrency: Parts to upload simultaneously
            vault_name: Destination vault
            description: Archive description
            dry_run: Skip the actual transfer
            retry: Retry policy
            log_level: Log level name

        Raises:
            ConfigError: If any option is invalid
        """
        return cls(
            chunk_size=chunk_size_from_mb(size_mb),
            concurrency=concurrency if concurrency is not None else DEFAULT_CONCURRENCY,
            vault_name=vault_name if vault_name is not None else DEFAULT_VAULT_NAME,
            description=description,
            dry_run=bool(dry_run),
            retry=retry or RetryPolicy(),
            log_level=log_level or DEFAULT_LOG_LEVEL,
        )
