"""Abstract base class for page archivers.

An archiver persists raw page content so a later run can replay it via the
local page provider.  Archiving is best-effort: the harvester schedules
:meth:`IPageContentArchiver.save_page` as a detached task and only logs a
failure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from harvester.models.bookmark import PageId


class IPageContentArchiver(ABC):
    """Contract for services that store raw page content."""

    @abstractmethod
    async def save_page(self, page_id: PageId, raw_content: str) -> None:
        """Persist *raw_content* for page *page_id*.

        Raises
        ------
        harvester.utils.errors.ArchiveError
            If the page cannot be written.  Callers treat this as non-fatal.
        """

    @abstractmethod
    def describe_destination(self) -> str:
        """Return a short human-readable description of the archive location."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this archiver."""
