"""Abstract base class for page content providers.

Defines the contract for loading the raw content of one collection page.
Two interchangeable implementations exist: one reads from the live
network endpoint, the other replays pages previously archived on disk.
The harvester core only ever sees this interface, so the source is chosen
once at construction time.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from harvester.models.bookmark import PageId


class IPageContentProvider(ABC):
    """Contract for services that return the raw content of a page."""

    @abstractmethod
    async def load_page(self, page_id: PageId) -> str:
        """Load the raw content of page *page_id*.

        Parameters
        ----------
        page_id:
            Identifier of the page, as found in the previous page's ``next``.

        Returns
        -------
        str
            The raw page content (HTML for del.icio.us).

        Raises
        ------
        harvester.utils.errors.PageFetchError
            If the page cannot be loaded.  This is fatal to the harvest.
        """

    @abstractmethod
    def describe_source(self) -> str:
        """Return a short human-readable description of where pages come from.

        Example return values: ``"<remote: https://del.icio.us>"``,
        ``"<local: './pages'>"``.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
