"""Unit tests for PaginationTraversal."""

from __future__ import annotations

import asyncio

import pytest

from harvester.interfaces.page_provider import IPageContentProvider
from harvester.models.bookmark import CombinedResult, PageId
from harvester.pipeline.page_fetcher import PageFetcher
from harvester.pipeline.traversal import PaginationTraversal
from harvester.utils.errors import (
    PageFetchError,
    PageLimitExceededError,
    PageParseError,
    PaginationCycleError,
)


class InFlightCountingProvider(IPageContentProvider):
    """Delegates to another provider and records how many loads overlap."""

    def __init__(self, inner: IPageContentProvider, delay: float = 0.02) -> None:
        self._inner = inner
        self._delay = delay
        self.active = 0
        self.peak = 0

    async def load_page(self, page_id: PageId) -> str:
        self.active += 1
        self.peak = max(self.peak, self.active)
        try:
            await asyncio.sleep(self._delay)
            return await self._inner.load_page(page_id)
        finally:
            self.active -= 1

    def describe_source(self) -> str:
        return self._inner.describe_source()

    def get_provider_name(self) -> str:
        return "in-flight"


class TestPaginationTraversal:
    @pytest.mark.asyncio
    async def test_collects_pages_in_order(self, chain_builder, collection, progress) -> None:
        provider, parser = chain_builder(collection)
        traversal = PaginationTraversal(PageFetcher(provider, parser), progress)

        result = await traversal.collect(collection[0])

        assert [item.id for item in result.items] == ["a", "b", "c", "d", "e"]
        assert result.pages == 3
        assert result.total_elements == 5
        # The first page is passed in, never re-fetched.
        assert provider.calls == [2, 3]
        assert progress.count("tick") == 3

    @pytest.mark.asyncio
    async def test_single_page_fetches_nothing(self, chain_builder, page_factory, progress) -> None:
        only = page_factory(1, ["a"], total=1, total_elements=1)
        provider, parser = chain_builder([only])
        traversal = PaginationTraversal(PageFetcher(provider, parser), progress)

        result = await traversal.collect(only)

        assert [item.id for item in result.items] == ["a"]
        assert provider.calls == []
        assert progress.calls == [("tick",)]

    @pytest.mark.asyncio
    async def test_empty_collection(self, chain_builder, page_factory, progress) -> None:
        empty = page_factory(1, [], total=1, total_elements=0)
        provider, parser = chain_builder([empty])

        result = await PaginationTraversal(PageFetcher(provider, parser), progress).collect(empty)

        assert result.items == []
        assert result.pages == 1

    @pytest.mark.asyncio
    async def test_appends_to_given_accumulator(self, chain_builder, collection, progress) -> None:
        provider, parser = chain_builder(collection)
        combined = CombinedResult.seed(collection[0])

        result = await PaginationTraversal(PageFetcher(provider, parser), progress).collect(
            collection[0], combined
        )

        assert result is combined
        assert len(combined.items) == 5

    @pytest.mark.asyncio
    async def test_follows_next_not_announced_total(self, chain_builder, page_factory, progress) -> None:
        # The first page under-reports the page count; next pointers win.
        pages = [
            page_factory(1, ["a"], total=1, next_page=2, total_elements=3),
            page_factory(2, ["b"], total=1, next_page=3, total_elements=3),
            page_factory(3, ["c"], total=1, total_elements=3),
        ]
        provider, parser = chain_builder(pages)

        result = await PaginationTraversal(PageFetcher(provider, parser), progress).collect(pages[0])

        assert [item.id for item in result.items] == ["a", "b", "c"]
        assert result.pages == 1

    @pytest.mark.asyncio
    async def test_fetch_failure_propagates(self, chain_builder, collection, progress) -> None:
        provider, parser = chain_builder(
            collection, failures={"3": PageFetchError("HTTP 500 for page 3")}
        )
        traversal = PaginationTraversal(PageFetcher(provider, parser), progress)

        with pytest.raises(PageFetchError, match="page 3"):
            await traversal.collect(collection[0])
        assert provider.calls == [2, 3]

    @pytest.mark.asyncio
    async def test_parse_failure_propagates(self, chain_builder, collection, progress) -> None:
        provider, parser = chain_builder(collection, failures={"2": PageParseError("garbled")})

        with pytest.raises(PageParseError):
            await PaginationTraversal(PageFetcher(provider, parser), progress).collect(collection[0])

    @pytest.mark.asyncio
    async def test_cycle_is_detected(self, chain_builder, page_factory, progress) -> None:
        pages = [
            page_factory(1, ["a"], total=2, next_page=2),
            page_factory(2, ["b"], total=2, next_page=1),
        ]
        provider, parser = chain_builder(pages)
        traversal = PaginationTraversal(PageFetcher(provider, parser), progress)

        with pytest.raises(PaginationCycleError):
            await traversal.collect(pages[0])
        assert provider.calls == [2]

    @pytest.mark.asyncio
    async def test_self_reference_is_a_cycle(self, chain_builder, page_factory, progress) -> None:
        looping = page_factory(1, ["a"], total=1, next_page=1)
        provider, parser = chain_builder([looping])

        with pytest.raises(PaginationCycleError):
            await PaginationTraversal(PageFetcher(provider, parser), progress).collect(looping)
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_max_pages_bound(self, chain_builder, collection, progress) -> None:
        provider, parser = chain_builder(collection)
        traversal = PaginationTraversal(PageFetcher(provider, parser), progress, max_pages=2)

        with pytest.raises(PageLimitExceededError):
            await traversal.collect(collection[0])
        assert provider.calls == [2]

    @pytest.mark.asyncio
    async def test_max_pages_equal_to_chain_length(self, chain_builder, collection, progress) -> None:
        provider, parser = chain_builder(collection)
        traversal = PaginationTraversal(PageFetcher(provider, parser), progress, max_pages=3)

        result = await traversal.collect(collection[0])
        assert len(result.items) == 5

    @pytest.mark.asyncio
    async def test_one_fetch_in_flight_while_archives_lag(
        self, chain_builder, page_factory, archiver_factory, progress
    ) -> None:
        pages = [
            page_factory(
                n, [f"item-{n}"], total=5, next_page=n + 1 if n < 5 else None, total_elements=5
            )
            for n in range(1, 6)
        ]
        inner, parser = chain_builder(pages)
        provider = InFlightCountingProvider(inner)
        archiver = archiver_factory(delay=0.05)
        fetcher = PageFetcher(provider, parser, archiver=archiver)

        result = await PaginationTraversal(fetcher, progress).collect(pages[0])

        assert provider.peak == 1
        assert inner.calls == [2, 3, 4, 5]
        assert [item.id for item in result.items] == [f"item-{n}" for n in range(1, 6)]
        # Archive writes are still outstanding; traversal never waited on them.
        assert fetcher.pending_archives > 0
        await fetcher.drain_archives()
        assert sorted(archiver.saved) == ["2", "3", "4", "5"]
