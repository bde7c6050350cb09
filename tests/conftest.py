"""Pytest fixtures for glacierpy tests."""
import os
import tempfile
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest

from glacierpy.core.upload.models import UploadPart


class BytesSource:
    """In-memory byte source for upload parts."""

    def __init__(self, data: bytes):
        self.data = data
        self.reads = 0

    async def read(self) -> bytes:
        self.reads += 1
        return self.data


def make_parts(sizes):
    """Build contiguous parts with in-memory sources for the given sizes."""
    parts = []
    cursor = 0
    for size in sizes:
        data = bytes([len(parts) % 256]) * size
        parts.append(UploadPart(cursor, cursor + size - 1, BytesSource(data)))
        cursor += size
    return parts


@pytest.fixture
def api():
    """Mock Glacier API client."""
    client = Mock()
    client.describe_vault = AsyncMock(return_value={'VaultName': 'my-vault'})
    client.create_vault = AsyncMock(return_value=None)
    client.upload_archive = AsyncMock(return_value='archive-id')
    client.initiate_multipart_upload = AsyncMock(return_value='upload-id')
    client.upload_multipart_part = AsyncMock(return_value=None)
    client.complete_multipart_upload = AsyncMock(return_value='archive-id')
    return client


@pytest.fixture
def temp_file():
    """Create temporary file with known content."""
    fd, path = tempfile.mkstemp()
    os.write(fd, b"0123456789ABCDEFGHIJ")  # 20 bytes
    os.close(fd)
    yield Path(path)
    os.unlink(path)


@pytest.fixture
def empty_file():
    """Create empty temporary file."""
    fd, path = tempfile.mkstemp()
    os.close(fd)
    yield Path(path)
    os.unlink(path)


@pytest.fixture
def parts():
    """Factory for contiguous in-memory upload parts."""
    return make_parts


@pytest.fixture
def byte_source():
    """In-memory byte source class."""
    return BytesSource
