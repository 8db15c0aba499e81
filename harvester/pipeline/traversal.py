"""Sequential traversal of the page chain.

Each page names its successor through ``page.next``; the identifier of page
N+1 is only known once page N has been parsed, so pages are fetched strictly
one at a time.  The walk ends when a page has no ``next`` -- the announced
page total is never used as a loop bound.

Two guards turn malformed chains into errors instead of endless loops:
revisiting an identifier raises :class:`PaginationCycleError`, and an
optional ``max_pages`` bound raises :class:`PageLimitExceededError`.
"""

from __future__ import annotations

import structlog

from harvester.interfaces.progress_sink import IProgressSink
from harvester.models.bookmark import CombinedResult, PageResponse
from harvester.pipeline.page_fetcher import PageFetcher
from harvester.utils.errors import PageLimitExceededError, PaginationCycleError
from harvester.utils.logging import get_logger


class PaginationTraversal:
    """Walks the page chain and accumulates every item in order.

    Parameters
    ----------
    fetcher:
        Fetch step used for every page after the first.
    progress:
        Receives one ``tick`` per page, in fetch order.
    max_pages:
        Upper bound on the number of pages walked; ``None`` trusts ``next``.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        progress: IProgressSink,
        max_pages: int | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._progress = progress
        self._max_pages = max_pages
        self._logger: structlog.BoundLogger = get_logger(__name__)

    async def collect(
        self,
        initial: PageResponse,
        combined: CombinedResult | None = None,
    ) -> CombinedResult:
        """Collect *initial* and every page reachable from it.

        Parameters
        ----------
        initial:
            The already-fetched first page of the chain.
        combined:
            Accumulator to append to; seeded from *initial* when omitted.

        Returns
        -------
        CombinedResult
            The accumulator, with all items in page-then-source order.

        Raises
        ------
        PageFetchError, PageParseError
            Propagated unchanged from the failing page; nothing is salvaged.
        PaginationCycleError, PageLimitExceededError
            If the chain revisits a page or exceeds ``max_pages``.
        """
        result = combined if combined is not None else CombinedResult.seed(initial)
        visited: set[str] = {str(initial.page.number)}
        pages_walked = 0
        response = initial

        while True:
            pages_walked += 1
            self._progress.tick()
            result.items.extend(response.items)

            next_page = response.page.next
            if next_page is None:
                break

            if str(next_page) in visited:
                raise PaginationCycleError(
                    message=(
                        f"Page {response.page.number} points back to already visited page {next_page}"
                    )
                )
            if self._max_pages is not None and pages_walked >= self._max_pages:
                raise PageLimitExceededError(
                    message=f"Page chain continues past the limit of {self._max_pages} pages"
                )

            visited.add(str(next_page))
            response = await self._fetcher.fetch_page(next_page)

        if len(result.items) != result.total_elements:
            self._logger.warning(
                "item_count_mismatch",
                collected=len(result.items),
                announced=result.total_elements,
            )

        self._logger.info(
            "traversal_complete",
            pages=pages_walked,
            items=len(result.items),
        )
        return result
