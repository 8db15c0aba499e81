"""Abstract base class for URL reachability checkers.

Used by the verification pipeline's ``url`` sub-check.  Implementations may
send HEAD/GET requests, consult an archive, or anything else -- the
pipeline records whatever outcome is returned and turns a raised exception
into an error-shaped outcome, so implementations are free to raise.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class IReachabilityChecker(ABC):
    """Contract for services that report whether a URL is reachable."""

    @abstractmethod
    async def verify(self, url: str) -> Any:
        """Check *url* and return an outcome value.

        Parameters
        ----------
        url:
            The bookmarked URL to check.

        Returns
        -------
        Any
            An opaque outcome, e.g. ``"reachable"`` or ``"unreachable"``.

        Raises
        ------
        harvester.utils.errors.ReachabilityError
            If the check fails without producing an answer (DNS, timeout).
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this checker."""
