"""Abstract base class for page parsers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from harvester.models.bookmark import PageResponse


class IPageParser(ABC):
    """Contract for turning raw page content into a :class:`PageResponse`.

    Parsing is synchronous and CPU-bound; the fetch step runs it in a worker
    thread so the event loop stays responsive.
    """

    @abstractmethod
    def parse(self, raw_content: str) -> PageResponse:
        """Parse *raw_content* into page metadata plus items in source order.

        Raises
        ------
        harvester.utils.errors.PageParseError
            If the content is not a recognisable collection page.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this parser."""
