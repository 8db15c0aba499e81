"""Concurrent per-item verification of harvested bookmarks.

Every item gets one verification unit and all units start at once; each
unit runs its sub-checks concurrently and writes each outcome into
``item.validity[<check>]``.  Failures are absorbed twice:

1. inside a sub-check -- an exception (raised synchronously or from the
   awaited coroutine, including a timeout) becomes the recorded outcome;
2. around the whole unit -- anything that still escapes is logged and the
   unit completes normally.

So :meth:`VerificationPipeline.verify` always returns the full, unreordered
item list.  A sub-check whose collaborator is not configured writes
nothing, which lets further checks be added next to ``url`` without
touching the existing ones.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

import structlog

from harvester.interfaces.progress_sink import IProgressSink
from harvester.interfaces.reachability_checker import IReachabilityChecker
from harvester.models.bookmark import Bookmark
from harvester.models.verification import URL_CHECK, describe_failure
from harvester.utils.concurrency import gather_isolated
from harvester.utils.logging import get_logger

VERIFICATION_STEP = "item validation"


class VerificationPipeline:
    """Runs every configured sub-check for every item, concurrently.

    Parameters
    ----------
    progress:
        Receives ``begin_step``/``set_total``/one ``tick`` per item/``finish``.
    url_checker:
        Reachability checker for the ``url`` sub-check; ``None`` disables it.
    check_timeout:
        Seconds before a single sub-check is abandoned and recorded as a
        failure; ``None`` waits indefinitely.
    verbose:
        Log the start and completion of every item's checks.
    """

    def __init__(
        self,
        progress: IProgressSink,
        url_checker: IReachabilityChecker | None = None,
        check_timeout: float | None = None,
        verbose: bool = False,
    ) -> None:
        self._progress = progress
        self._url_checker = url_checker
        self._check_timeout = check_timeout
        self._verbose = verbose
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def enabled_checks(self) -> list[str]:
        """Names of the sub-checks that will write an outcome."""
        checks: list[str] = []
        if self._url_checker is not None:
            checks.append(URL_CHECK)
        return checks

    async def verify(self, items: list[Bookmark]) -> list[Bookmark]:
        """Annotate *items* in place and return the same list."""
        self._progress.begin_step(VERIFICATION_STEP)
        self._progress.set_total(len(items))

        await gather_isolated(
            [self._verify_item(item) for item in items],
            logger=self._logger,
            error_msg="item_verification_failed",
        )

        self._progress.finish()
        self._logger.info(
            "verification_complete",
            items=len(items),
            checks=self.enabled_checks,
        )
        return items

    # ------------------------------------------------------------------
    # Per-item unit
    # ------------------------------------------------------------------

    async def _verify_item(self, item: Bookmark) -> Bookmark:
        if self._verbose:
            self._logger.info("item_verify_start", item_id=item.id, title=item.title, url=item.url)
        try:
            await asyncio.gather(self._verify_url(item))
        except Exception as exc:
            self._logger.warning("item_verify_unit_failed", item_id=item.id, error=str(exc))
        finally:
            self._progress.tick()
        if self._verbose:
            self._logger.info("item_verify_completed", item_id=item.id, validity=item.validity)
        return item

    # ------------------------------------------------------------------
    # Sub-checks
    # ------------------------------------------------------------------

    async def _verify_url(self, item: Bookmark) -> None:
        checker = self._url_checker
        if checker is None:
            return
        outcome = await self._run_check(lambda: checker.verify(item.url))
        item.record_validity(URL_CHECK, outcome)

    async def _run_check(self, check: Callable[[], Awaitable[Any]]) -> Any:
        """Run one sub-check, returning its result or a failure description."""
        try:
            if self._check_timeout is None:
                return await check()
            return await asyncio.wait_for(check(), timeout=self._check_timeout)
        except asyncio.TimeoutError:
            return describe_failure(
                TimeoutError(f"check did not finish within {self._check_timeout}s")
            )
        except Exception as exc:
            return describe_failure(exc)
