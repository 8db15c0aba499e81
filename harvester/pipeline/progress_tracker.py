"""Harvest progress tracking with callback-based listener notification.

Records the current step, total and completed count, and broadcasts every
change to registered listener callbacks.  This is the programmatic
counterpart of :class:`TqdmProgressSink`: embed the harvester in another
application, register a listener, and forward the updates wherever needed.

# ─── HOW PROGRESS TRACKING WORKS ──────────────────────────────────────
#
#   Harvester ──tick()──→ ProgressTracker ──callback(snapshot)──→ listener
#                                                            ──→ (any other listener)
#
#   - Every call (begin_step / set_total / tick / finish) produces a new
#     ProgressSnapshot and notifies all listeners in registration order.
#   - Listener errors are caught and logged → one broken listener can't
#     stall the harvest or starve the other listeners.
#   - Finished steps are kept in ``history`` for post-run inspection.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace

import structlog

from harvester.interfaces.progress_sink import IProgressSink
from harvester.utils.logging import get_logger


@dataclass(frozen=True)
class ProgressSnapshot:
    """Immutable view of one step's progress at a point in time."""

    step: str = ""
    total: int | None = None
    completed: int = 0
    finished: bool = False

    @property
    def percent(self) -> float:
        """Completion percentage (0.0 – 100.0); 0.0 while the total is unknown."""
        if self.finished:
            return 100.0
        if not self.total:
            return 0.0
        return max(0.0, min(100.0, 100.0 * self.completed / self.total))


ProgressListener = Callable[[ProgressSnapshot], None]


class ProgressTracker(IProgressSink):
    """Tracks and broadcasts harvest progress via callbacks."""

    def __init__(self) -> None:
        self._current = ProgressSnapshot()
        self._history: list[ProgressSnapshot] = []
        self._listeners: list[ProgressListener] = []
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # IProgressSink implementation
    # ------------------------------------------------------------------

    def begin_step(self, label: str) -> None:
        if self._current.step and not self._current.finished:
            self._history.append(self._current)
        self._update(ProgressSnapshot(step=label))

    def set_total(self, total: int) -> None:
        self._update(replace(self._current, total=total))

    def tick(self) -> None:
        self._update(replace(self._current, completed=self._current.completed + 1))

    def finish(self) -> None:
        finished = replace(self._current, finished=True)
        self._history.append(finished)
        self._update(finished)

    # ------------------------------------------------------------------
    # Listener management
    # ------------------------------------------------------------------

    def register_listener(self, callback: ProgressListener) -> None:
        """Register *callback* to receive every :class:`ProgressSnapshot`."""
        if callback not in self._listeners:
            self._listeners.append(callback)
            self._logger.debug("listener_registered", total_listeners=len(self._listeners))

    def unregister_listener(self, callback: ProgressListener) -> None:
        """Remove a previously registered callback (no-op if absent)."""
        if callback in self._listeners:
            self._listeners.remove(callback)
            self._logger.debug("listener_unregistered", remaining_listeners=len(self._listeners))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def current(self) -> ProgressSnapshot:
        return self._current

    @property
    def history(self) -> list[ProgressSnapshot]:
        """Snapshots of every step that has ended, in order."""
        return list(self._history)

    def get_status(self) -> dict:
        """Return the current step as a plain dict."""
        return {
            "step": self._current.step,
            "total": self._current.total,
            "completed": self._current.completed,
            "finished": self._current.finished,
            "progress": round(self._current.percent, 1),
        }

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _update(self, snapshot: ProgressSnapshot) -> None:
        self._current = snapshot
        self._logger.debug(
            "progress_update",
            step=snapshot.step,
            completed=snapshot.completed,
            total=snapshot.total,
            finished=snapshot.finished,
        )
        for callback in list(self._listeners):
            try:
                callback(snapshot)
            except Exception as exc:
                self._logger.warning(
                    "listener_callback_error",
                    step=snapshot.step,
                    error=str(exc),
                    callback=getattr(callback, "__name__", repr(callback)),
                )
