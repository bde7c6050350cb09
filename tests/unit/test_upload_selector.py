"""Tests for StrategySelector."""
from unittest.mock import AsyncMock, Mock

import pytest

from glacierpy.core.exceptions import UploadError, UploadErrorKind
from glacierpy.core.upload.models import UploadJob, UploadKind, UploadResult
from glacierpy.core.upload.selector import StrategySelector


def make_strategy(archive_id):
    strategy = Mock()
    strategy.upload = AsyncMock(return_value=UploadResult(archive_id))
    return strategy


class TestStrategySelector:
    """Test suite for StrategySelector."""

    @pytest.fixture
    def single(self):
        return make_strategy("single-id")

    @pytest.fixture
    def multipart(self):
        return make_strategy("multipart-id")

    @pytest.fixture
    def stub(self):
        return make_strategy("stub")

    @pytest.fixture
    def selector(self, single, multipart, stub):
        """Create selector instance."""
        return StrategySelector(single, multipart, stub)

    def test_no_strategy_initially(self, selector):
        """Test nothing is selected before select()."""
        assert selector.strategy is None

    @pytest.mark.parametrize("kind,expected", [
        (UploadKind.SINGLE, "single"),
        (UploadKind.MULTIPART, "multipart"),
    ])
    def test_select_by_kind(self, selector, request, kind, expected):
        """Test job kind maps to its dedicated strategy."""
        strategy = selector.select(kind)

        assert strategy is request.getfixturevalue(expected)
        assert selector.strategy is strategy

    @pytest.mark.parametrize("kind", [UploadKind.SINGLE, UploadKind.MULTIPART, "bogus"])
    def test_dry_run_always_stub(self, selector, stub, kind):
        """Test dry run selects stub whatever the job kind."""
        assert selector.select(kind, dry_run=True) is stub

    def test_unknown_kind(self, selector):
        """Test kind without strategy raises UNKNOWN_STRATEGY."""
        with pytest.raises(UploadError) as exc_info:
            selector.select("bogus")

        assert exc_info.value.kind == UploadErrorKind.UNKNOWN_STRATEGY
        assert selector.strategy is None

    def test_set_strategy(self, selector, stub):
        """Test strategy can be set directly."""
        selector.set_strategy(stub)

        assert selector.strategy is stub

    @pytest.mark.asyncio
    async def test_upload_delegates(self, selector, multipart, parts):
        """Test upload passes job parts and tree hash to the strategy."""
        job = UploadJob(UploadKind.MULTIPART, "tree-hash", tuple(parts([2, 2])))
        selector.select(job.kind)

        result = await selector.upload(job)

        assert result.archive_id == "multipart-id"
        multipart.upload.assert_awaited_once_with(job.parts, "tree-hash")

    @pytest.mark.asyncio
    async def test_upload_without_strategy(self, selector, parts):
        """Test upload before select raises NO_STRATEGY_SELECTED."""
        job = UploadJob(UploadKind.SINGLE, "tree-hash", tuple(parts([2])))

        with pytest.raises(UploadError) as exc_info:
            await selector.upload(job)

        assert exc_info.value.kind == UploadErrorKind.NO_STRATEGY_SELECTED
