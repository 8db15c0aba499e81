"""Pydantic v2 models for harvested bookmark pages.

Page-level models (:class:`PageMeta`, :class:`PageResponse`) are frozen:
one is produced per fetched page and never changes afterwards.  The
item and result models are deliberately mutable -- traversal appends to
:attr:`CombinedResult.items` and verification annotates each
:class:`Bookmark` in place through :meth:`Bookmark.record_validity`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

# Page identifiers are page numbers on del.icio.us, but the chain only ever
# hands them back opaquely, so string tokens are accepted too.
PageId = Union[int, str]

FIRST_PAGE: PageId = 1


class PageMeta(BaseModel):
    """Pagination metadata of a single fetched page.

    ``next`` is present iff more pages remain and is the only termination
    signal for traversal.  ``total`` is informational (progress display).
    """

    model_config = ConfigDict(frozen=True)

    number: int = Field(ge=1, description="1-indexed number of this page.")
    total: int = Field(ge=1, description="Total page count announced by the source.")
    total_elements: int = Field(
        default=0, ge=0, description="Total bookmark count announced by the source."
    )
    next: PageId | None = Field(
        default=None, description="Identifier of the following page, if any."
    )


class Bookmark(BaseModel):
    """A single bookmark item in source order.

    ``validity`` stays ``None`` until a verification sub-check records an
    outcome; afterwards it maps check name (e.g. ``"url"``) to outcome.
    """

    id: str = Field(description="Source identifier of the bookmark.")
    title: str = Field(default="", description="Bookmark title.")
    url: str = Field(description="Bookmarked URL.")
    description: str = Field(default="", description="Free-text note, if any.")
    tags: list[str] = Field(default_factory=list, description="Tags in source order.")
    saved_at: datetime | None = Field(
        default=None, description="When the bookmark was saved, if known."
    )
    validity: dict[str, Any] | None = Field(
        default=None, description="Per-check verification outcomes."
    )

    def record_validity(self, check: str, outcome: Any) -> None:
        """Store *outcome* for *check*, creating ``validity`` on first use."""
        if self.validity is None:
            self.validity = {}
        self.validity[check] = outcome


class PageResponse(BaseModel):
    """Structured content of one fetched page: metadata plus its items."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(default="", description="Collection title shown on the page.")
    page: PageMeta
    items: list[Bookmark] = Field(default_factory=list)


class CombinedResult(BaseModel):
    """Every bookmark of the collection, in page-then-source order."""

    title: str = ""
    pages: int = Field(ge=1, description="Total page count from the first page.")
    total_elements: int = Field(
        ge=0, description="Total bookmark count from the first page."
    )
    items: list[Bookmark] = Field(default_factory=list)

    @classmethod
    def seed(cls, first_page: PageResponse) -> CombinedResult:
        """Build an empty result shell from the first page's metadata."""
        return cls(
            title=first_page.title,
            pages=first_page.page.total,
            total_elements=first_page.page.total_elements,
            items=[],
        )
