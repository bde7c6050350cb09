"""
Async Glacier API client.

Talks to the Glacier REST API over aiohttp. Requests are signed with
botocore's SigV4 signer, which also resolves credentials and the default
region the same way the AWS CLI does.
"""
from typing import Dict, Optional, Any, Tuple
from urllib.parse import quote
import asyncio
import json
import aiohttp
import botocore.session
from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest

from .config import APIConfig, DEFAULT_REGION
from .errors import GlacierAPIError
from ..hashing import TreeHashCalculator
from ..logging import get_logger

SERVICE_NAME = 'glacier'


class AsyncGlacierClient:
    """
    Asynchronous Glacier API client.

    Implements the remote calls needed for uploading archives: vault
    lookup and creation, single archive upload and the three multipart
    calls.

    Example:
        >>> async with AsyncGlacierClient(APIConfig(region='eu-central-1')) as client:
        ...     await client.describe_vault('my-vault')
    """

    def __init__(
        self,
        config: Optional[APIConfig] = None,
        credentials=None,
        session: Optional[aiohttp.ClientSession] = None,
        hasher: Optional[TreeHashCalculator] = None
    ):
        """
        Initialize async API client.

        Args:
            config: API configuration (uses defaults if not provided)
            credentials: botocore credentials (resolved lazily if not provided)
            session: Optional shared aiohttp session
            hasher: Checksum calculator for request payloads
        """
        self._config = config or APIConfig.default()
        self._credentials = credentials
        self._session = session
        self._owns_session = session is None
        self._hasher = hasher or TreeHashCalculator()
        self._botocore_session = None
        self._region = self._config.region
        self._logger = get_logger('glacierpy.api')

    @property
    def config(self) -> APIConfig:
        """Get current configuration."""
        return self._config

    @property
    def region(self) -> str:
        """Region requests are signed for."""
        if self._region is None:
            configured = self._get_botocore_session().get_config_variable('region')
            self._region = configured or DEFAULT_REGION
        return self._region

    async def __aenter__(self) -> 'AsyncGlacierClient':
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _get_botocore_session(self):
        if self._botocore_session is None:
            self._botocore_session = botocore.session.get_session()
        return self._botocore_session

    def _get_credentials(self):
        """
        Current credentials snapshot.

        The credentials object is kept as resolved so refreshable
        credentials (STS, instance profiles) renew before each request.
        """
        if self._credentials is None:
            self._credentials = self._get_botocore_session().get_credentials()
        if self._credentials is None:
            return None
        return self._credentials.get_frozen_credentials()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(**self._config.get_connector_kwargs()),
                **self._config.get_session_kwargs()
            )
            self._owns_session = True
        return self._session

    async def close(self):
        """Close session if we own it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def _checksums(self, body: bytes) -> Tuple[str, str]:
        """Tree hash and linear hash of body, computed in the default executor."""
        loop = asyncio.get_running_loop()
        tree_hash = await loop.run_in_executor(None, self._hasher.compute, body)
        linear_hash = await loop.run_in_executor(None, self._hasher.linear, body)
        return tree_hash, linear_hash

    def _vault_path(self, vault_name: str) -> str:
        account = quote(self._config.account_id, safe='-')
        return f"/{account}/vaults/{quote(vault_name, safe='')}"

    def _build_url(self, path: str) -> str:
        return f"{self._config.endpoint_for(self.region)}{path}"

    def _sign(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: bytes
    ) -> Dict[str, str]:
        """Return headers with SigV4 authentication added."""
        request = AWSRequest(method=method, url=url, data=body, headers=headers)
        SigV4Auth(self._get_credentials(), SERVICE_NAME, self.region).add_auth(request)
        return dict(request.headers.items())

    async def _request(
        self,
        method: str,
        path: str,
        headers: Optional[Dict[str, str]] = None,
        body: bytes = b''
    ) -> Tuple[int, Any, str]:
        """
        Send a signed request.

        Returns:
            Tuple of (status, response headers, response text)

        Raises:
            GlacierAPIError: If the service answers with a non-2xx status
            aiohttp.ClientError: If a network error occurs
        """
        url = self._build_url(path)
        request_headers = {
            'x-amz-glacier-version': self._config.api_version,
            **(headers or {}),
        }
        if 'x-amz-content-sha256' not in request_headers:
            request_headers['x-amz-content-sha256'] = self._hasher.linear(body)
        signed = self._sign(method, url, request_headers, body)
        session = await self._ensure_session()

        self._logger.debug(f"{method} {path} ({len(body)} bytes)")
        async with session.request(method, url, data=body or None, headers=signed) as response:
            text = await response.text()
            if response.status >= 300:
                error = GlacierAPIError.from_response(response.status, text)
                self._logger.debug(f"{method} {path} failed: {error}")
                raise error
            return response.status, response.headers, text

    async def describe_vault(self, vault_name: str) -> Dict[str, Any]:
        """
        Get vault metadata.

        Raises:
            GlacierAPIError: With status 404 if the vault does not exist
        """
        _, _, text = await self._request('GET', self._vault_path(vault_name))
        return json.loads(text) if text else {}

    async def create_vault(self, vault_name: str) -> None:
        """Create a vault (succeeds if it already exists)."""
        await self._request('PUT', self._vault_path(vault_name))

    async def upload_archive(
        self,
        vault_name: str,
        body: bytes,
        description: Optional[str] = None
    ) -> Optional[str]:
        """
        Upload an archive in a single request.

        Returns:
            Archive ID, or None if the response did not carry one
        """
        tree_hash, linear_hash = await self._checksums(body)
        headers = {
            'x-amz-sha256-tree-hash': tree_hash,
            'x-amz-content-sha256': linear_hash,
        }
        if description:
            headers['x-amz-archive-description'] = description
        _, response_headers, _ = await self._request(
            'POST', f"{self._vault_path(vault_name)}/archives", headers, body
        )
        return response_headers.get('x-amz-archive-id')

    async def initiate_multipart_upload(
        self,
        vault_name: str,
        part_size: int,
        description: Optional[str] = None
    ) -> Optional[str]:
        """
        Start a multipart upload.

        Returns:
            Upload ID, or None if the response did not carry one
        """
        headers = {'x-amz-part-size': str(part_size)}
        if description:
            headers['x-amz-archive-description'] = description
        _, response_headers, _ = await self._request(
            'POST', f"{self._vault_path(vault_name)}/multipart-uploads", headers
        )
        return response_headers.get('x-amz-multipart-upload-id')

    async def upload_multipart_part(
        self,
        vault_name: str,
        upload_id: str,
        byte_range: str,
        body: bytes
    ) -> None:
        """
        Upload one part of a multipart upload.

        Args:
            vault_name: Target vault
            upload_id: ID returned by initiate_multipart_upload
            byte_range: Content-Range value, e.g. 'bytes 0-1048575/*'
            body: Part data
        """
        tree_hash, linear_hash = await self._checksums(body)
        headers = {
            'Content-Range': byte_range,
            'x-amz-sha256-tree-hash': tree_hash,
            'x-amz-content-sha256': linear_hash,
        }
        path = f"{self._vault_path(vault_name)}/multipart-uploads/{quote(upload_id, safe='')}"
        await self._request('PUT', path, headers, body)

    async def complete_multipart_upload(
        self,
        vault_name: str,
        upload_id: str,
        checksum: str,
        archive_size: int
    ) -> Optional[str]:
        """
        Assemble the uploaded parts into an archive.

        Returns:
            Archive ID, or None if the response did not carry one
        """
        headers = {
            'x-amz-sha256-tree-hash': checksum,
            'x-amz-archive-size': str(archive_size),
        }
        path = f"{self._vault_path(vault_name)}/multipart-uploads/{quote(upload_id, safe='')}"
        _, response_headers, _ = await self._request('POST', path, headers)
        return response_headers.get('x-amz-archive-id')
