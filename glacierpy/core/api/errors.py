"""Glacier API errors."""
import json
from typing import Optional


class GlacierAPIError(Exception):
    """
    Exception raised for non-successful Glacier API responses.

    Attributes:
        status: HTTP status code
        code: Service error code (e.g. 'ResourceNotFoundException')
        message: Service error message
    """

    def __init__(self, status: int, code: Optional[str] = None, message: Optional[str] = None):
        self.status = status
        self.code = code or 'UnknownError'
        self.message = message or f"HTTP {status}"
        super().__init__(f"{self.code} ({status}): {self.message}")

    @property
    def is_not_found(self) -> bool:
        return self.status == 404

    @classmethod
    def from_response(cls, status: int, body: str) -> 'GlacierAPIError':
        """Build from an error response body ({"code": ..., "message": ...})."""
        try:
            data = json.loads(body) if body else {}
        except ValueError:
            return cls(status, message=body.strip() or None)
        if not isinstance(data, dict):
            return cls(status)
        return cls(status, data.get('code'), data.get('message'))
