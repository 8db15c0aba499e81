"""Harvester domain models -- re-exports all public model classes.

    - bookmark.py      - page metadata, page responses, bookmarks, and the
                         combined result built by traversal
    - verification.py  - validity outcome values and the failure shape
"""

from __future__ import annotations

from harvester.models.bookmark import (
    FIRST_PAGE,
    Bookmark,
    CombinedResult,
    PageId,
    PageMeta,
    PageResponse,
)
from harvester.models.verification import (
    URL_CHECK,
    UrlStatus,
    describe_failure,
    is_failure,
)

__all__ = [
    "FIRST_PAGE",
    "URL_CHECK",
    "Bookmark",
    "CombinedResult",
    "PageId",
    "PageMeta",
    "PageResponse",
    "UrlStatus",
    "describe_failure",
    "is_failure",
]
