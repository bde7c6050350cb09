"""Glacier API layer."""
from .config import APIConfig, SSLConfig, TimeoutConfig, DEFAULT_REGION
from .errors import GlacierAPIError
from .async_client import AsyncGlacierClient

__all__ = [
    'APIConfig',
    'SSLConfig',
    'TimeoutConfig',
    'DEFAULT_REGION',
    'GlacierAPIError',
    'AsyncGlacierClient',
]
