"""Abstract base class for progress reporting.

The harvester reports two steps in order -- page fetching, then item
validation -- each as ``begin_step`` → ``set_total`` → ``tick``… →
``finish``.  Calls are synchronous; implementations must be cheap and must
not raise.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class IProgressSink(ABC):
    """Contract for step/total/tick progress reporters."""

    @abstractmethod
    def begin_step(self, label: str) -> None:
        """Start a new named step, resetting total and completed counts."""

    @abstractmethod
    def set_total(self, total: int) -> None:
        """Announce how many ticks the current step expects."""

    @abstractmethod
    def tick(self) -> None:
        """Record one completed unit of work in the current step."""

    @abstractmethod
    def finish(self) -> None:
        """Mark the current step as complete."""
