"""
Bounded-concurrency task execution with retries.

A fixed number of workers pull tasks from a shared FIFO iterator. Each
task is retried on failure; tasks that fail every attempt are counted and
reported together once all tasks have finished.
"""
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterator, Optional, Sequence
import asyncio
import time

from ..models import RetryPolicy
from ...logging import get_logger

logger = get_logger('glacierpy.upload.executor')


@dataclass(frozen=True)
class RetryableTask:
    """
    Unit of work for ConcurrentRetryExecutor.

    Attributes:
        id: Human readable identifier used in logs and errors
        work: Zero-argument coroutine function performing the work
    """
    id: str
    work: Callable[[], Awaitable[Any]]


class BatchProcessError(Exception):
    """
    Raised when one or more tasks failed permanently.

    Attributes:
        failed: Number of permanently failed tasks
        errors: Last error text per failed task ID
    """

    def __init__(self, errors: Dict[str, str], total: int):
        self.errors = errors
        self.failed = len(errors)
        self.total = total
        details = '; '.join(f"{task_id}: {error}" for task_id, error in list(errors.items())[:3])
        if self.failed > 3:
            details += f"; ... ({self.failed - 3} more)"
        super().__init__(f"{self.failed} of {total} task(s) failed: {details}")


class ConcurrentRetryExecutor:
    """
    Runs tasks with at most N in flight.

    Tasks start in their original order; completion order is not
    constrained. The run always drains: a permanently failed task never
    stops its siblings.
    """

    def __init__(self, sleep: Optional[Callable[[float], Awaitable[Any]]] = None):
        self._sleep = sleep or asyncio.sleep

    async def run(
        self,
        tasks: Sequence[RetryableTask],
        concurrency: int,
        retry: Optional[RetryPolicy] = None
    ) -> None:
        """
        Execute all tasks.

        Args:
            tasks: Tasks in dispatch order
            concurrency: Maximum tasks in flight (> 0)
            retry: Retry policy (default: 5 retries, no delay)

        Raises:
            ValueError: If concurrency is not positive
            BatchProcessError: If any task failed after exhausting its retries
        """
        if concurrency < 1:
            raise ValueError("Concurrency must be positive")
        retry = retry or RetryPolicy()
        if not tasks:
            return

        pending = iter(tasks)
        errors: Dict[str, str] = {}
        workers = min(concurrency, len(tasks))

        logger.debug(f"Processing {len(tasks)} task(s) with {workers} worker(s)")
        start = time.time()

        await asyncio.gather(*(self._worker(pending, retry, errors) for _ in range(workers)))

        elapsed = time.time() - start
        if errors:
            logger.error(f"{len(errors)} of {len(tasks)} task(s) failed permanently after {elapsed:.2f}s")
            raise BatchProcessError(errors, len(tasks))
        logger.debug(f"All {len(tasks)} task(s) completed in {elapsed:.2f}s")

    async def _worker(
        self,
        pending: Iterator[RetryableTask],
        retry: RetryPolicy,
        errors: Dict[str, str]
    ) -> None:
        for task in pending:
            error = await self._attempt(task, retry)
            if error is not None:
                errors[task.id] = error

    async def _attempt(self, task: RetryableTask, retry: RetryPolicy) -> Optional[str]:
        """Run a task until it succeeds or retries are exhausted; return the last error text."""
        attempts = 1 + retry.times
        last_error = None

        for attempt in range(1, attempts + 1):
            try:
                await task.work()
                logger.debug(f"Task {task.id} completed (attempt {attempt})")
                return None
            except Exception as e:
                last_error = str(e) or type(e).__name__
                if attempt < attempts:
                    logger.warning(f"Task {task.id} failed (attempt {attempt}/{attempts}), retrying: {last_error}")
                    if retry.interval_ms:
                        await self._sleep(retry.interval)

        logger.error(f"Task {task.id} failed after {attempts} attempt(s): {last_error}")
        return last_error
