"""Tests for the concurrent retry executor."""
import asyncio
from unittest.mock import AsyncMock

import pytest

from glacierpy.core.upload.models import RetryPolicy
from glacierpy.core.upload.services.executor import (
    BatchProcessError,
    ConcurrentRetryExecutor,
    RetryableTask
)


class TestConcurrentRetryExecutor:
    """Test suite for ConcurrentRetryExecutor."""

    @pytest.fixture
    def executor(self):
        """Create executor instance."""
        return ConcurrentRetryExecutor()

    @pytest.mark.asyncio
    async def test_runs_every_task_once(self, executor):
        """Test succeeding tasks are invoked exactly once each."""
        works = [AsyncMock(return_value=i) for i in range(3)]
        tasks = [RetryableTask(str(i), work) for i, work in enumerate(works)]

        await executor.run(tasks, 1)

        assert [work.await_count for work in works] == [1, 1, 1]

    @pytest.mark.asyncio
    async def test_failing_task_retried(self, executor):
        """Test failing task is invoked 1 + times times."""
        work = AsyncMock(side_effect=RuntimeError("no success"))

        with pytest.raises(BatchProcessError) as exc_info:
            await executor.run([RetryableTask("a", work)], 2, RetryPolicy(times=3))

        assert work.await_count == 4
        assert exc_info.value.failed == 1
        assert "no success" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_default_retry_policy(self, executor):
        """Test default policy retries five times."""
        work = AsyncMock(side_effect=RuntimeError("no success"))

        with pytest.raises(BatchProcessError):
            await executor.run([RetryableTask("a", work)], 1)

        assert work.await_count == 6

    @pytest.mark.asyncio
    async def test_no_retries(self, executor):
        """Test times=0 means a single attempt."""
        work = AsyncMock(side_effect=RuntimeError("boom"))

        with pytest.raises(BatchProcessError):
            await executor.run([RetryableTask("a", work)], 1, RetryPolicy(times=0))

        assert work.await_count == 1

    @pytest.mark.asyncio
    async def test_recovers_after_transient_failure(self, executor):
        """Test task succeeding on a retry counts as success."""
        work = AsyncMock(side_effect=[RuntimeError("flaky"), RuntimeError("flaky"), None])

        await executor.run([RetryableTask("a", work)], 1, RetryPolicy(times=5))

        assert work.await_count == 3

    @pytest.mark.asyncio
    async def test_failure_does_not_stop_siblings(self, executor):
        """Test all tasks drain even when one fails permanently."""
        failing = AsyncMock(side_effect=RuntimeError("down"))
        others = [AsyncMock() for _ in range(4)]
        tasks = [RetryableTask("bad", failing)] + [
            RetryableTask(str(i), work) for i, work in enumerate(others)
        ]

        with pytest.raises(BatchProcessError) as exc_info:
            await executor.run(tasks, 2, RetryPolicy(times=2))

        assert failing.await_count == 3
        assert [work.await_count for work in others] == [1, 1, 1, 1]
        assert exc_info.value.failed == 1
        assert exc_info.value.total == 5
        assert list(exc_info.value.errors) == ["bad"]

    @pytest.mark.asyncio
    async def test_counts_every_failed_task(self, executor):
        """Test failed count covers all permanently failed tasks."""
        tasks = [
            RetryableTask(str(i), AsyncMock(side_effect=RuntimeError(f"err {i}")))
            for i in range(5)
        ]

        with pytest.raises(BatchProcessError) as exc_info:
            await executor.run(tasks, 3, RetryPolicy(times=0))

        assert exc_info.value.failed == 5
        assert "2 more" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_concurrency_limit(self, executor):
        """Test no more than N tasks are in flight."""
        in_flight = 0
        peak = 0

        async def work():
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1

        tasks = [RetryableTask(str(i), work) for i in range(10)]
        await executor.run(tasks, 3)

        assert peak == 3

    @pytest.mark.asyncio
    async def test_tasks_start_in_order(self, executor):
        """Test tasks are pulled in their original order."""
        started = []

        def make_work(i):
            async def work():
                started.append(i)
                await asyncio.sleep(0)
            return work

        tasks = [RetryableTask(str(i), make_work(i)) for i in range(6)]
        await executor.run(tasks, 1)

        assert started == list(range(6))

    @pytest.mark.asyncio
    async def test_retry_interval(self):
        """Test configured delay is applied between attempts."""
        sleep = AsyncMock()
        executor = ConcurrentRetryExecutor(sleep=sleep)
        work = AsyncMock(side_effect=RuntimeError("boom"))

        with pytest.raises(BatchProcessError):
            await executor.run([RetryableTask("a", work)], 1, RetryPolicy(times=2, interval_ms=250))

        assert sleep.await_count == 2
        sleep.assert_awaited_with(0.25)

    @pytest.mark.asyncio
    async def test_empty_task_list(self, executor):
        """Test nothing to do succeeds."""
        await executor.run([], 4)

    @pytest.mark.asyncio
    async def test_invalid_concurrency(self, executor):
        """Test non-positive concurrency raises error."""
        with pytest.raises(ValueError, match="positive"):
            await executor.run([RetryableTask("a", AsyncMock())], 0)
