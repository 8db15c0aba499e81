"""Unit tests for VerificationPipeline's double failure absorption."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from harvester.pipeline.verification import VERIFICATION_STEP, VerificationPipeline
from harvester.utils.errors import ReachabilityError


class TestVerificationPipeline:
    @pytest.mark.asyncio
    async def test_records_outcome_per_item(self, item_factory, checker_factory, progress) -> None:
        items = [item_factory("a"), item_factory("b")]
        checker = checker_factory({"https://example.com/b": "unreachable"})
        pipeline = VerificationPipeline(progress, url_checker=checker)

        result = await pipeline.verify(items)

        assert result is items
        assert items[0].validity == {"url": "reachable"}
        assert items[1].validity == {"url": "unreachable"}
        assert sorted(checker.checked) == ["https://example.com/a", "https://example.com/b"]

    @pytest.mark.asyncio
    async def test_failed_check_recorded_as_error(self, item_factory, checker_factory, progress) -> None:
        items = [
            item_factory("a"),
            item_factory("bad", url="https://bad.invalid/"),
            item_factory("c"),
        ]
        checker = checker_factory(
            {"https://bad.invalid/": ReachabilityError("Cannot reach https://bad.invalid/")}
        )

        await VerificationPipeline(progress, url_checker=checker).verify(items)

        assert items[0].validity == {"url": "reachable"}
        assert items[2].validity == {"url": "reachable"}
        outcome = items[1].validity["url"]
        assert outcome["error_type"] == "ReachabilityError"
        assert "bad.invalid" in outcome["error"]

    @pytest.mark.asyncio
    async def test_synchronous_raise_is_absorbed(self, item_factory, checker_factory, progress) -> None:
        items = [item_factory("a", url="https://sync.invalid/")]
        checker = checker_factory({"https://sync.invalid/": ValueError("rejected")}, raise_sync=True)

        await VerificationPipeline(progress, url_checker=checker).verify(items)

        assert items[0].validity == {"url": {"error": "rejected", "error_type": "ValueError"}}

    @pytest.mark.asyncio
    async def test_every_check_failing_still_returns_all_items(
        self, item_factory, checker_factory, progress
    ) -> None:
        items = [item_factory(name) for name in "abcd"]
        checker = checker_factory({item.url: RuntimeError("down") for item in items})

        result = await VerificationPipeline(progress, url_checker=checker).verify(items)

        assert [item.id for item in result] == ["a", "b", "c", "d"]
        assert all(item.validity["url"]["error_type"] == "RuntimeError" for item in result)

    @pytest.mark.asyncio
    async def test_order_preserved_when_checks_finish_out_of_order(
        self, item_factory, checker_factory, progress
    ) -> None:
        items = [item_factory(name) for name in "abc"]
        checker = checker_factory(delays={"https://example.com/a": 0.05, "https://example.com/b": 0.02})

        result = await VerificationPipeline(progress, url_checker=checker).verify(items)

        assert [item.id for item in result] == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_checks_run_concurrently(self, item_factory, checker_factory, progress) -> None:
        items = [item_factory(str(n)) for n in range(10)]
        checker = checker_factory(delays={item.url: 0.1 for item in items})
        loop = asyncio.get_running_loop()

        started = loop.time()
        await VerificationPipeline(progress, url_checker=checker).verify(items)

        assert loop.time() - started < 0.5

    @pytest.mark.asyncio
    async def test_slow_check_times_out(self, item_factory, checker_factory, progress) -> None:
        items = [item_factory("slow"), item_factory("fast")]
        checker = checker_factory(delays={"https://example.com/slow": 1.0})
        pipeline = VerificationPipeline(progress, url_checker=checker, check_timeout=0.05)

        await pipeline.verify(items)

        assert items[0].validity["url"]["error_type"] == "TimeoutError"
        assert items[1].validity == {"url": "reachable"}

    @pytest.mark.asyncio
    async def test_disabled_check_writes_nothing(self, item_factory, progress) -> None:
        items = [item_factory("a")]
        pipeline = VerificationPipeline(progress)

        result = await pipeline.verify(items)

        assert pipeline.enabled_checks == []
        assert result[0].validity is None
        assert progress.count("tick") == 1

    @pytest.mark.asyncio
    async def test_escaping_unit_failure_is_absorbed(
        self, item_factory, checker_factory, progress
    ) -> None:
        items = [item_factory("a"), item_factory("b")]
        pipeline = VerificationPipeline(progress, url_checker=checker_factory())

        with patch.object(pipeline, "_verify_url", AsyncMock(side_effect=RuntimeError("write failed"))):
            result = await pipeline.verify(items)

        assert [item.id for item in result] == ["a", "b"]
        assert all(item.validity is None for item in result)
        assert progress.count("tick") == 2

    @pytest.mark.asyncio
    async def test_progress_sequence(self, item_factory, checker_factory, progress) -> None:
        items = [item_factory("a"), item_factory("b"), item_factory("c")]

        await VerificationPipeline(progress, url_checker=checker_factory()).verify(items)

        assert progress.calls[0] == ("begin_step", VERIFICATION_STEP)
        assert progress.calls[1] == ("set_total", 3)
        assert progress.calls[2:5] == [("tick",)] * 3
        assert progress.calls[5] == ("finish",)

    @pytest.mark.asyncio
    async def test_empty_item_list(self, checker_factory, progress) -> None:
        result = await VerificationPipeline(progress, url_checker=checker_factory()).verify([])
        assert result == []
        assert progress.calls == [("begin_step", VERIFICATION_STEP), ("set_total", 0), ("finish",)]
