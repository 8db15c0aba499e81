"""End-to-end harvest: first page → traversal → verification → result.

# ─── HARVEST FLOW ─────────────────────────────────────────────────────
#
#   fetch_page(1) ──→ CombinedResult.seed() ──→ progress "page fetching"
#        │                                        total = page.total
#        ▼
#   PaginationTraversal.collect()   (one page in flight at a time)
#        │
#        ▼
#   drain detached archive writes   (also on failure)
#        │
#        ▼
#   VerificationPipeline.verify()   (optional; never fails the harvest)
#        │
#        ▼
#   CombinedResult
# ──────────────────────────────────────────────────────────────────────

Fatal failures (page fetch/parse, malformed chain) propagate out of
:meth:`CollectionHarvester.fetch` with the originating exception.  Everything
else is absorbed: archive failures in the fetch step, check failures in
the verification pipeline, and any verification-stage error at this
boundary.
"""

from __future__ import annotations

import structlog

from harvester.interfaces.progress_sink import IProgressSink
from harvester.models.bookmark import FIRST_PAGE, CombinedResult
from harvester.pipeline.page_fetcher import PageFetcher
from harvester.pipeline.traversal import PaginationTraversal
from harvester.pipeline.verification import VerificationPipeline
from harvester.utils.logging import get_logger

FETCH_STEP = "page fetching"


class CollectionHarvester:
    """Harvests a whole collection into one :class:`CombinedResult`.

    All collaborators are composed once, at construction; ``fetch`` never
    branches on where pages come from or which checks are enabled.

    Parameters
    ----------
    fetcher:
        Fetch step (provider + parser + optional archiver).
    progress:
        Progress sink shared by traversal and verification.
    verifier:
        Optional verification pipeline; ``None`` returns results unchecked.
    max_pages:
        Optional traversal bound, see :class:`PaginationTraversal`.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        progress: IProgressSink,
        verifier: VerificationPipeline | None = None,
        max_pages: int | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._progress = progress
        self._verifier = verifier
        self._traversal = PaginationTraversal(fetcher, progress, max_pages=max_pages)
        self._logger: structlog.BoundLogger = get_logger(__name__)

    async def fetch(self) -> CombinedResult:
        """Harvest every page, verify the items, and return the result.

        Raises
        ------
        PageFetchError, PageParseError, TraversalError
            If any page of the chain cannot be fetched or the chain is
            malformed.  No partial result is returned.
        """
        try:
            result = await self._harvest_pages()
        finally:
            # Archive writes may still be in flight; let them land (or log
            # their failure) before the caller tears the event loop down.
            await self._fetcher.drain_archives()

        if self._verifier is not None:
            self._logger.info("verification_start", items=len(result.items))
            try:
                await self._verifier.verify(result.items)
            except Exception as exc:
                self._logger.error("verification_stage_failed", error=str(exc))

        return result

    async def _harvest_pages(self) -> CombinedResult:
        first = await self._fetcher.fetch_page(FIRST_PAGE)
        combined = CombinedResult.seed(first)
        self._logger.info(
            "initial_page_fetched",
            pages=first.page.total,
            total_elements=first.page.total_elements,
        )

        self._progress.begin_step(FETCH_STEP)
        self._progress.set_total(first.page.total)
        result = await self._traversal.collect(first, combined)
        self._progress.finish()
        return result
