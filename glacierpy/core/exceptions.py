"""
Exceptions for glacierpy upload operations.

Every failure of an upload is reported as an UploadError carrying exactly
one UploadErrorKind. Components raise the kind of their own phase and the
coordinator rewrites whatever escapes through map_upload_error().
"""
from enum import Enum
from typing import Optional


class GlacierPyException(Exception):
    """Base exception for all glacierpy errors."""


class ConfigError(GlacierPyException):
    """Invalid upload or API configuration."""


class UploadErrorKind(Enum):
    """Closed set of upload failure kinds."""

    EMPTY_FILE = "Selected file is empty"
    MAX_PARTS_EXCEEDED = "Maximum number of 10000 upload parts exceeded"
    FILE_READ_FAILED = "Failed to read a file"
    PLANNING_FAILED = "Failed to create upload job"
    NO_STRATEGY_SELECTED = "No upload strategy was selected"
    UNKNOWN_STRATEGY = "An unknown upload strategy was selected"
    INITIATE_FAILED = "Failed to initiate multipart upload"
    MULTIPART_ID_MISSING = "Multipart upload ID is missing"
    PARTS_TRANSFER_FAILED = "Failed to upload multipart part(s)"
    COMPLETE_FAILED = "Failed to complete multipart upload"
    SINGLE_UPLOAD_FAILED = "Failed to upload an archive"
    ARCHIVE_ID_MISSING = "Archive ID is missing"
    CONTAINER_DESCRIBE_FAILED = "Failed to get info for vault"
    CONTAINER_CREATE_FAILED = "Failed to create new vault"
    UNKNOWN = "Uploader unknown error"

    @property
    def message(self) -> str:
        return self.value


class UploadError(GlacierPyException):
    """
    Upload failure of a single, well known kind.

    Attributes:
        kind: Failure kind
        cause: Text of the upstream error, if any
    """

    def __init__(self, kind: UploadErrorKind, cause: Optional[str] = None):
        self.kind = kind
        self.cause = cause or None
        super().__init__(self.message)

    @property
    def message(self) -> str:
        if self.cause:
            return f"{self.kind.message}: {self.cause}"
        return self.kind.message


def map_upload_error(error: BaseException) -> UploadError:
    """
    Rewrite any failure into the upload error taxonomy.

    UploadErrors keep their kind and cause; anything else is an UNKNOWN
    error embedding the original text.
    """
    if isinstance(error, UploadError):
        return UploadError(error.kind, error.cause)
    return UploadError(UploadErrorKind.UNKNOWN, str(error) or type(error).__name__)
