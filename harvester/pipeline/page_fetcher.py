"""Single-page fetch step: load → archive (detached) → parse.

Loading and parsing are awaited in order, so the caller gets a
:class:`PageResponse` only once both finished.  Archiving is scheduled as a
detached task between the two and is never awaited here: a slow or failing
archive write cannot delay or break the page chain.
"""

from __future__ import annotations

import asyncio

import structlog

from harvester.interfaces.page_archiver import IPageContentArchiver
from harvester.interfaces.page_parser import IPageParser
from harvester.interfaces.page_provider import IPageContentProvider
from harvester.models.bookmark import FIRST_PAGE, PageId, PageResponse
from harvester.utils.concurrency import DetachedTasks
from harvester.utils.errors import HarvesterError, PageParseError
from harvester.utils.logging import get_logger


class PageFetcher:
    """Fetches and parses one page, optionally archiving the raw content.

    Parameters
    ----------
    provider:
        Where raw pages come from (network or replay directory).
    parser:
        Turns raw content into a :class:`PageResponse`.
    archiver:
        Optional best-effort sink for raw pages.
    verbose:
        Log every fetched page at INFO instead of DEBUG.
    """

    def __init__(
        self,
        provider: IPageContentProvider,
        parser: IPageParser,
        archiver: IPageContentArchiver | None = None,
        verbose: bool = False,
    ) -> None:
        self._provider = provider
        self._parser = parser
        self._archiver = archiver
        self._verbose = verbose
        self._logger: structlog.BoundLogger = get_logger(__name__)
        self._archive_tasks = DetachedTasks(self._logger)

    async def fetch_page(self, page_id: PageId = FIRST_PAGE) -> PageResponse:
        """Return the parsed page *page_id*.

        Raises
        ------
        PageFetchError
            If the provider cannot load the page.
        PageParseError
            If the content cannot be parsed.
        """
        raw = await self._provider.load_page(page_id)

        if self._archiver is not None:
            self._archive_tasks.spawn(
                self._archive(self._archiver, page_id, raw),
                error_event="page_archive_failed",
                page=page_id,
                archiver=self._archiver.get_provider_name(),
            )

        try:
            response = await asyncio.to_thread(self._parser.parse, raw)
        except HarvesterError:
            raise
        except Exception as exc:
            raise PageParseError(
                message=f"Unexpected error parsing page {page_id}: {exc}",
                provider_name=self._parser.get_provider_name(),
            ) from exc

        log = self._logger.info if self._verbose else self._logger.debug
        log(
            "page_fetched",
            page=page_id,
            number=response.page.number,
            total=response.page.total,
            items=len(response.items),
            next=response.page.next,
        )
        return response

    @staticmethod
    async def _archive(archiver: IPageContentArchiver, page_id: PageId, raw: str) -> None:
        # Wrapped so even a synchronous raise from save_page lands in the task.
        await archiver.save_page(page_id, raw)

    @property
    def pending_archives(self) -> int:
        """Number of archive writes still in flight."""
        return len(self._archive_tasks)

    async def drain_archives(self) -> None:
        """Wait for in-flight archive writes; their failures were already logged."""
        await self._archive_tasks.drain()
