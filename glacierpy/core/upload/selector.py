"""
Upload strategy selection.

Holds the active transfer strategy and dispatches upload jobs to it.
"""
from typing import Optional

from .models import UploadJob, UploadKind, UploadResult
from .protocols import UploadStrategy
from ..exceptions import UploadError, UploadErrorKind
from ..logging import get_logger


class StrategySelector:
    """
    Chooses and runs the transfer strategy for an upload job.

    Selection depends only on the dry-run flag and the job kind: dry runs
    always use the stub strategy, otherwise SINGLE and MULTIPART jobs use
    their dedicated strategies.

    Example:
        >>> selector = StrategySelector(single, multipart, stub)
        >>> selector.select(job.kind, dry_run=False)
        >>> result = await selector.upload(job)
    """

    def __init__(
        self,
        single: UploadStrategy,
        multipart: UploadStrategy,
        stub: UploadStrategy
    ):
        self._strategies = {
            UploadKind.SINGLE: single,
            UploadKind.MULTIPART: multipart,
        }
        self._stub = stub
        self._strategy: Optional[UploadStrategy] = None
        self._logger = get_logger('glacierpy.upload.selector')

    @property
    def strategy(self) -> Optional[UploadStrategy]:
        """Currently selected strategy."""
        return self._strategy

    def set_strategy(self, strategy: UploadStrategy) -> None:
        """Use strategy for subsequent uploads."""
        self._strategy = strategy

    def select(self, kind: UploadKind, dry_run: bool = False) -> UploadStrategy:
        """
        Select the strategy for a job kind.

        Raises:
            UploadError: UNKNOWN_STRATEGY if kind has no strategy
        """
        if dry_run:
            strategy = self._stub
        else:
            strategy = self._strategies.get(kind)
            if strategy is None:
                raise UploadError(UploadErrorKind.UNKNOWN_STRATEGY, f"kind {kind!r}")

        self._logger.debug(f"Selected {type(strategy).__name__} for {getattr(kind, 'value', kind)} upload")
        self.set_strategy(strategy)
        return strategy

    async def upload(self, job: UploadJob) -> UploadResult:
        """
        Upload a job with the selected strategy.

        Raises:
            UploadError: NO_STRATEGY_SELECTED if no strategy was set
        """
        if self._strategy is None:
            raise UploadError(UploadErrorKind.NO_STRATEGY_SELECTED)
        return await self._strategy.upload(job.parts, job.tree_hash)
