"""Shared concurrency primitives for the harvest pipeline.

Two patterns are exposed:

1. **DetachedTasks** -- fire-and-forget side effects.  A coroutine is
   scheduled as its own task and the caller moves on immediately; failures
   are logged from a done-callback and never reach the caller.  The set
   keeps strong references so tasks are not garbage-collected mid-flight,
   and :meth:`DetachedTasks.drain` lets the owner wait for stragglers before
   the event loop shuts down.

2. **gather_isolated** -- the fan-out-then-merge pattern: run every
   awaitable concurrently with no cap, log the ones that failed, and return
   the results in input order with failures left as exception objects.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Coroutine, TypeVar

import structlog

from harvester.utils.logging import get_logger

_T = TypeVar("_T")

_logger: structlog.BoundLogger = get_logger(__name__)


class DetachedTasks:
    """A set of unawaited background tasks whose failures are only logged.

    Parameters
    ----------
    logger:
        Structured logger used to report task failures.
    """

    def __init__(self, logger: structlog.BoundLogger | None = None) -> None:
        self._tasks: set[asyncio.Task[Any]] = set()
        self._logger = logger or _logger

    def spawn(
        self,
        coro: Coroutine[Any, Any, Any],
        error_event: str = "detached_task_failed",
        **context: Any,
    ) -> asyncio.Task[Any]:
        """Schedule *coro* without awaiting it.

        Parameters
        ----------
        coro:
            The coroutine to run in the background.
        error_event:
            Log event name emitted if the task raises.
        **context:
            Extra key/value pairs bound onto the failure log line.

        Returns
        -------
        asyncio.Task
            The scheduled task (callers normally ignore it).
        """
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)

        def _on_done(finished: asyncio.Task[Any]) -> None:
            self._tasks.discard(finished)
            if finished.cancelled():
                self._logger.debug("detached_task_cancelled", **context)
                return
            exc = finished.exception()
            if exc is not None:
                self._logger.error(error_event, error=str(exc), **context)

        task.add_done_callback(_on_done)
        return task

    async def drain(self) -> None:
        """Wait for every pending task to finish.

        Failures were already logged by the done-callback, so they are
        collected here and discarded.
        """
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def __len__(self) -> int:
        return len(self._tasks)


async def gather_isolated(
    coros: list[Awaitable[_T]],
    logger: structlog.BoundLogger | None = None,
    error_msg: str = "concurrent_task_failed",
) -> list[_T | BaseException]:
    """Run awaitables concurrently; one failure never cancels the others.

    Parameters
    ----------
    coros:
        Awaitable objects to execute concurrently.
    logger:
        Optional structured logger for warnings on failures.
    error_msg:
        Log event name for failed awaitables.

    Returns
    -------
    list[_T | BaseException]
        Results in the same order as the input, with exceptions in place of
        the results of awaitables that raised.
    """
    if logger is None:
        logger = _logger

    results = await asyncio.gather(*coros, return_exceptions=True)

    for idx, result in enumerate(results):
        if isinstance(result, BaseException):
            logger.warning(error_msg, index=idx, error=str(result))

    return results
