"""Shared pytest fixtures for the delicious-harvester test suite."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable

import pytest

from harvester.interfaces.page_archiver import IPageContentArchiver
from harvester.interfaces.page_parser import IPageParser
from harvester.interfaces.page_provider import IPageContentProvider
from harvester.interfaces.progress_sink import IProgressSink
from harvester.interfaces.reachability_checker import IReachabilityChecker
from harvester.models.bookmark import Bookmark, PageId, PageMeta, PageResponse
from harvester.utils.errors import PageFetchError

# ---------------------------------------------------------------------------
# Page builders
# ---------------------------------------------------------------------------


def make_item(item_id: str, url: str | None = None, **fields: Any) -> Bookmark:
    """Build a :class:`Bookmark` with a predictable URL."""
    return Bookmark(id=item_id, url=url or f"https://example.com/{item_id}", **fields)


def make_page(
    number: int,
    item_ids: list[str],
    total: int = 1,
    next_page: PageId | None = None,
    total_elements: int = 0,
    title: str = "alice's links",
) -> PageResponse:
    """Build a parsed page holding one bookmark per id in *item_ids*."""
    return PageResponse(
        title=title,
        page=PageMeta(
            number=number,
            total=total,
            total_elements=total_elements,
            next=next_page,
        ),
        items=[make_item(item_id) for item_id in item_ids],
    )


def raw_for(page_id: PageId) -> str:
    return f"<raw page {page_id}>"


# ---------------------------------------------------------------------------
# Fake collaborators
# ---------------------------------------------------------------------------


class FakePageProvider(IPageContentProvider):
    """Serves ``raw_for(page_id)`` for known pages and records every request."""

    def __init__(self, page_ids: list[PageId], failures: dict[str, Exception] | None = None) -> None:
        self._known = {str(page_id) for page_id in page_ids}
        self._failures = failures or {}
        self.calls: list[PageId] = []

    async def load_page(self, page_id: PageId) -> str:
        self.calls.append(page_id)
        if str(page_id) in self._failures:
            raise self._failures[str(page_id)]
        if str(page_id) not in self._known:
            raise PageFetchError(message=f"No page {page_id}", provider_name="fake")
        return raw_for(page_id)

    def describe_source(self) -> str:
        return "<fake>"

    def get_provider_name(self) -> str:
        return "fake"


class StubPageParser(IPageParser):
    """Maps raw content produced by :class:`FakePageProvider` back to pages."""

    def __init__(self, pages: dict[str, PageResponse]) -> None:
        self._pages = pages

    def parse(self, raw_content: str) -> PageResponse:
        return self._pages[raw_content]

    def get_provider_name(self) -> str:
        return "stub"


class RecordingArchiver(IPageContentArchiver):
    """Keeps archived pages in memory; can fail async, fail sync, or stall."""

    def __init__(
        self,
        error: Exception | None = None,
        raise_sync: bool = False,
        delay: float = 0.0,
    ) -> None:
        self._error = error
        self._raise_sync = raise_sync
        self._delay = delay
        self.saved: dict[str, str] = {}

    def save_page(self, page_id: PageId, raw_content: str):  # type: ignore[override]
        if self._error is not None and self._raise_sync:
            raise self._error
        return self._save(page_id, raw_content)

    async def _save(self, page_id: PageId, raw_content: str) -> None:
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        self.saved[str(page_id)] = raw_content

    def describe_destination(self) -> str:
        return "<memory>"

    def get_provider_name(self) -> str:
        return "recording"


class FakeReachabilityChecker(IReachabilityChecker):
    """Returns canned outcomes per URL; exceptions in the map are raised.

    URLs missing from *outcomes* report ``"reachable"``.  With
    ``raise_sync`` set, exceptions are raised before a coroutine is created.
    """

    def __init__(
        self,
        outcomes: dict[str, Any] | None = None,
        delays: dict[str, float] | None = None,
        raise_sync: bool = False,
    ) -> None:
        self._outcomes = outcomes or {}
        self._delays = delays or {}
        self._raise_sync = raise_sync
        self.checked: list[str] = []

    def verify(self, url: str):  # type: ignore[override]
        self.checked.append(url)
        outcome = self._outcomes.get(url, "reachable")
        if self._raise_sync and isinstance(outcome, Exception):
            raise outcome
        return self._check(url, outcome)

    async def _check(self, url: str, outcome: Any) -> Any:
        if url in self._delays:
            await asyncio.sleep(self._delays[url])
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def get_provider_name(self) -> str:
        return "fake_reachability"


class RecordingProgress(IProgressSink):
    """Records every progress call as a tuple, in call order."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    def begin_step(self, label: str) -> None:
        self.calls.append(("begin_step", label))

    def set_total(self, total: int) -> None:
        self.calls.append(("set_total", total))

    def tick(self) -> None:
        self.calls.append(("tick",))

    def finish(self) -> None:
        self.calls.append(("finish",))

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)


ChainBuilder = Callable[..., tuple[FakePageProvider, StubPageParser]]


def build_chain(
    pages: list[PageResponse],
    failures: dict[str, Exception] | None = None,
) -> tuple[FakePageProvider, StubPageParser]:
    """Return a provider/parser pair serving *pages* keyed by page number."""
    page_ids = [page.page.number for page in pages]
    provider = FakePageProvider(page_ids, failures=failures)
    parser = StubPageParser({raw_for(page.page.number): page for page in pages})
    return provider, parser


def three_page_collection() -> list[PageResponse]:
    """The reference collection: five bookmarks over three linked pages."""
    return [
        make_page(1, ["a", "b"], total=3, next_page=2, total_elements=5),
        make_page(2, ["c", "d"], total=3, next_page=3, total_elements=5),
        make_page(3, ["e"], total=3, next_page=None, total_elements=5),
    ]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def pages_dir(project_root: Path) -> Path:
    """Return the directory holding the saved profile page fixtures."""
    return project_root / "tests" / "fixtures" / "pages"


@pytest.fixture
def progress() -> RecordingProgress:
    return RecordingProgress()


@pytest.fixture
def page_factory() -> Callable[..., PageResponse]:
    return make_page


@pytest.fixture
def item_factory() -> Callable[..., Bookmark]:
    return make_item


@pytest.fixture
def chain_builder() -> ChainBuilder:
    return build_chain


@pytest.fixture
def collection() -> list[PageResponse]:
    return three_page_collection()


@pytest.fixture
def archiver_factory() -> type[RecordingArchiver]:
    return RecordingArchiver


@pytest.fixture
def checker_factory() -> type[FakeReachabilityChecker]:
    return FakeReachabilityChecker
