"""
API configuration module.

Provides configuration for the Glacier API client.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import ssl

DEFAULT_REGION = 'eu-central-1'


@dataclass
class SSLConfig:
    """
    SSL/TLS configuration.

    Allows customization of SSL behavior for security requirements.
    """
    verify: bool = True
    ca_file: Optional[str] = None

    def create_ssl_context(self):
        """Create SSL context from configuration (False disables verification)."""
        if not self.verify:
            return False

        context = ssl.create_default_context()
        if self.ca_file:
            context.load_verify_locations(self.ca_file)
        return context


@dataclass
class TimeoutConfig:
    """
    Timeout configuration.

    Granular control over different timeout types.
    """
    total: float = 600.0  # Parts may be several GB
    connect: float = 30.0
    sock_read: float = 120.0

    def to_aiohttp_timeout(self):
        """Convert to aiohttp ClientTimeout."""
        import aiohttp
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read
        )


@dataclass
class APIConfig:
    """
    Complete API configuration.

    Centralizes all options for the Glacier API client. When no region is
    given the region configured for botocore (environment, shared config)
    is used, falling back to DEFAULT_REGION.
    """
    region: Optional[str] = None
    account_id: str = '-'
    endpoint: Optional[str] = None
    api_version: str = '2012-06-01'
    user_agent: str = 'glacierpy/1.0.0'

    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)

    extra_headers: Dict[str, str] = field(default_factory=dict)

    # Connection pool settings
    limit_per_host: int = 20
    limit: int = 100

    @classmethod
    def default(cls) -> 'APIConfig':
        """Create default configuration."""
        return cls()

    def endpoint_for(self, region: str) -> str:
        """Service endpoint (without trailing slash) for region."""
        if self.endpoint:
            return self.endpoint.rstrip('/')
        return f"https://glacier.{region}.amazonaws.com"

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit': self.limit,
            'limit_per_host': self.limit_per_host,
            'ssl': self.ssl.create_ssl_context(),
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        headers = {
            'User-Agent': self.user_agent,
            **self.extra_headers
        }

        return {
            'headers': headers,
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
