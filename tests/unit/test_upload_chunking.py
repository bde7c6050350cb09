"""Tests for upload planning."""
import asyncio
import hashlib
import threading
from pathlib import Path
from unittest.mock import Mock

import pytest

from glacierpy.core.exceptions import UploadError, UploadErrorKind
from glacierpy.core.upload.models import FileInfo, UploadKind
from glacierpy.core.upload.services import AsyncFileReader, FileRange
from glacierpy.core.upload.strategies.chunking import ChunkPlanner, calculate_chunks


class TestCalculateChunks:
    """Test suite for calculate_chunks."""

    def test_file_smaller_than_chunk(self):
        """Test file smaller than chunk size gives one part."""
        assert calculate_chunks(8, 10) == [(0, 7)]

    def test_file_split_evenly(self):
        """Test file that is a multiple of the chunk size."""
        assert calculate_chunks(8, 2) == [(0, 1), (2, 3), (4, 5), (6, 7)]

    def test_file_equal_to_chunk(self):
        """Test file exactly one chunk long."""
        assert calculate_chunks(10, 10) == [(0, 9)]

    def test_remainder_in_last_part(self):
        """Test last part holds the remainder."""
        assert calculate_chunks(7, 3) == [(0, 2), (3, 5), (6, 6)]

    def test_single_byte(self):
        """Test one byte file."""
        assert calculate_chunks(1, 1024) == [(0, 0)]

    @pytest.mark.parametrize("size,chunk", [
        (1, 1), (2, 1), (9, 3), (10, 3), (11, 3), (1000, 7), (4096, 1024), (4097, 1024),
    ])
    def test_parts_cover_file(self, size, chunk):
        """Test parts are ascending, contiguous and cover the whole file."""
        chunks = calculate_chunks(size, chunk)

        assert chunks[0][0] == 0
        assert chunks[-1][1] == size - 1
        for (_, end), (next_start, _) in zip(chunks, chunks[1:]):
            assert next_start == end + 1
        assert all(end - start + 1 <= chunk for start, end in chunks)
        assert len(chunks) == -(-size // chunk)

    def test_invalid_chunk_size(self):
        """Test non-positive chunk size raises error."""
        with pytest.raises(ValueError, match="positive"):
            calculate_chunks(10, 0)

    def test_empty_file(self):
        """Test empty file raises error."""
        with pytest.raises(ValueError, match="empty"):
            calculate_chunks(0, 10)


class TestChunkPlanner:
    """Test suite for ChunkPlanner."""

    @pytest.fixture
    def checksum(self):
        """Checksum computer returning a fixed hash."""
        computer = Mock()
        computer.compute = Mock(return_value="tree-hash")
        return computer

    @pytest.fixture
    def planner(self, checksum):
        """Create planner instance."""
        return ChunkPlanner(AsyncFileReader(), checksum)

    def file_info(self, size):
        return FileInfo(path=Path("/data/file.bin"), size=size, contents=b"x" * size)

    @pytest.mark.asyncio
    async def test_single_part_job(self, planner):
        """Test small file is planned as single upload."""
        job = await planner.plan(self.file_info(8), 10)

        assert job.kind == UploadKind.SINGLE
        assert [(p.start, p.end) for p in job.parts] == [(0, 7)]
        assert job.tree_hash == "tree-hash"

    @pytest.mark.asyncio
    async def test_multipart_job(self, planner):
        """Test larger file is planned as multipart upload."""
        job = await planner.plan(self.file_info(8), 2)

        assert job.kind == UploadKind.MULTIPART
        assert [(p.start, p.end) for p in job.parts] == [(0, 1), (2, 3), (4, 5), (6, 7)]
        assert job.total_size == 8

    @pytest.mark.asyncio
    @pytest.mark.parametrize("size,chunk", [
        (1, 1), (1, 10), (2, 1), (9, 3), (10, 10), (11, 10), (1000, 7), (4096, 4096), (4097, 4096),
    ])
    async def test_kind_matches_part_count(self, planner, size, chunk):
        """Test a job is SINGLE exactly when it has one part."""
        job = await planner.plan(self.file_info(size), chunk)

        assert (job.kind == UploadKind.SINGLE) == (len(job.parts) == 1)
        assert job.total_size == size

    @pytest.mark.asyncio
    async def test_checksum_computed_once_over_contents(self, planner, checksum):
        """Test tree hash is computed over the whole file once."""
        info = self.file_info(8)
        await planner.plan(info, 2)

        checksum.compute.assert_called_once_with(info.contents)

    @pytest.mark.asyncio
    async def test_parts_have_lazy_range_sources(self, planner):
        """Test each part gets a range source of its own bytes."""
        job = await planner.plan(self.file_info(5), 2)

        assert job.parts[2].source == FileRange(Path("/data/file.bin"), 4, 4)

    @pytest.mark.asyncio
    async def test_hashing_does_not_block_event_loop(self):
        """Test other tasks keep running while the tree hash is computed."""
        started = threading.Event()
        release = threading.Event()
        ticks = 0
        seen_by_hash = []

        def slow_compute(data):
            started.set()
            release.wait(2)
            seen_by_hash.append(ticks)
            return "tree-hash"

        async def ticker():
            nonlocal ticks
            while not started.is_set():
                await asyncio.sleep(0.001)
            for _ in range(5):
                ticks += 1
                await asyncio.sleep(0)
            release.set()

        checksum = Mock()
        checksum.compute = Mock(side_effect=slow_compute)
        planner = ChunkPlanner(AsyncFileReader(), checksum)

        job, _ = await asyncio.gather(planner.plan(self.file_info(8), 2), ticker())

        assert seen_by_hash == [5]
        assert job.tree_hash == "tree-hash"

    @pytest.mark.asyncio
    async def test_checksum_failure(self, checksum):
        """Test checksum errors become PLANNING_FAILED."""
        checksum.compute.side_effect = RuntimeError("hash broke")
        planner = ChunkPlanner(AsyncFileReader(), checksum)

        with pytest.raises(UploadError) as exc_info:
            await planner.plan(self.file_info(8), 2)

        assert exc_info.value.kind == UploadErrorKind.PLANNING_FAILED
        assert "hash broke" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_invalid_chunk_size(self, planner):
        """Test invalid chunk size becomes PLANNING_FAILED."""
        with pytest.raises(UploadError) as exc_info:
            await planner.plan(self.file_info(8), 0)

        assert exc_info.value.kind == UploadErrorKind.PLANNING_FAILED

    @pytest.mark.asyncio
    async def test_real_tree_hash(self):
        """Test planning with the real tree hash calculator."""
        from glacierpy.core.hashing import TreeHashCalculator

        planner = ChunkPlanner(AsyncFileReader(), TreeHashCalculator())
        job = await planner.plan(self.file_info(8), 4)

        assert job.tree_hash == hashlib.sha256(b"x" * 8).hexdigest()
