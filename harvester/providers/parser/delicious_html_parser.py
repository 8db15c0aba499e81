"""del.icio.us profile page parser using BeautifulSoup.

A profile page lists bookmarks as ``div.articleThumbBlockOuter`` blocks and
ends with a ``ul.pagination`` list.  The parser reads:

- the collection title from ``<title>``;
- the bookmark count from ``.linkCount`` (``data-count`` or its digits);
- the current page from ``li.active``, the page total from the list's
  ``data-total-pages`` (or the highest numbered link), and the next page
  from the ``?page=`` query of the ``rel="next"`` link;
- per bookmark: ``md5`` (id), ``date`` (epoch seconds), ``a.title`` text,
  the outbound link in ``.articleInfoPan``, ``.thumbTBriefTxt`` text and
  the ``ul.tagName`` tags.

Blocks without a usable URL are skipped with a warning; a document with no
bookmark blocks, no pagination and no bookmark count is rejected.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any
from urllib.parse import parse_qs, urlparse

import structlog
from bs4 import BeautifulSoup, Tag

from harvester.interfaces.page_parser import IPageParser
from harvester.models.bookmark import Bookmark, PageId, PageMeta, PageResponse
from harvester.utils.errors import PageParseError

logger = structlog.get_logger(logger_name=__name__)

_ITEM_CLASS = "articleThumbBlockOuter"
_DIGITS_RE = re.compile(r"\d[\d,]*")
_TITLE_SUFFIX_RE = re.compile(r"\s*[|\-]\s*Delicious\s*$", re.IGNORECASE)


class DeliciousHtmlParser(IPageParser):
    """Parses one del.icio.us profile page into a :class:`PageResponse`."""

    def __init__(self, features: str = "html.parser") -> None:
        self._features = features

    # ------------------------------------------------------------------
    # IPageParser implementation
    # ------------------------------------------------------------------

    def parse(self, raw_content: str) -> PageResponse:
        if not raw_content or not raw_content.strip():
            raise PageParseError(
                message="Empty page content",
                provider_name=self.get_provider_name(),
            )

        soup = BeautifulSoup(raw_content, self._features)
        blocks = soup.find_all("div", class_=_ITEM_CLASS)
        pagination = soup.find("ul", class_="pagination")
        link_count = soup.find(class_="linkCount")

        if not blocks and pagination is None and link_count is None:
            raise PageParseError(
                message="Content is not a bookmark collection page",
                provider_name=self.get_provider_name(),
            )

        items: list[Bookmark] = []
        for block in blocks:
            item = self._parse_item(block)
            if item is not None:
                items.append(item)

        number, total, next_page = self._parse_pagination(pagination)
        total_elements = self._parse_count(link_count)
        if total_elements is None:
            total_elements = len(items) if total == 1 else 0

        try:
            page = PageMeta(
                number=number,
                total=max(total, number),
                total_elements=total_elements,
                next=next_page,
            )
        except ValueError as exc:
            raise PageParseError(
                message=f"Invalid pagination metadata: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        return PageResponse(title=self._parse_title(soup), page=page, items=items)

    def get_provider_name(self) -> str:
        return "delicious_html"

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_title(soup: BeautifulSoup) -> str:
        if soup.title is None:
            return ""
        return _TITLE_SUFFIX_RE.sub("", soup.title.get_text(strip=True))

    @staticmethod
    def _to_int(text: str | None) -> int | None:
        if not text:
            return None
        match = _DIGITS_RE.search(text)
        if not match:
            return None
        return int(match.group(0).replace(",", ""))

    def _parse_count(self, node: Tag | None) -> int | None:
        if node is None:
            return None
        explicit = node.get("data-count")
        if isinstance(explicit, str):
            value = self._to_int(explicit)
            if value is not None:
                return value
        return self._to_int(node.get_text(" ", strip=True))

    @staticmethod
    def _page_from_href(href: str) -> PageId | None:
        values = parse_qs(urlparse(href).query).get("page")
        if not values or not values[0]:
            return None
        token = values[0]
        return int(token) if token.isdigit() else token

    def _parse_pagination(self, pagination: Tag | None) -> tuple[int, int, PageId | None]:
        """Return ``(number, total, next)`` for the page."""
        if pagination is None:
            return 1, 1, None

        active = pagination.find("li", class_="active")
        number = self._to_int(active.get_text(strip=True)) if active is not None else None
        number = number or 1

        declared = pagination.get("data-total-pages")
        total = self._to_int(declared) if isinstance(declared, str) else None
        if total is None:
            numbered = [
                value
                for value in (self._to_int(li.get_text(strip=True)) for li in pagination.find_all("li"))
                if value is not None
            ]
            total = max(numbered, default=number)

        next_page: PageId | None = None
        next_link = pagination.find("a", rel="next")
        if next_link is not None:
            href = next_link.get("href")
            if isinstance(href, str):
                next_page = self._page_from_href(href)

        return number, total, next_page

    def _parse_item(self, block: Tag) -> Bookmark | None:
        item_id = block.get("md5") or block.get("id") or ""
        title_link = block.find("a", class_="title")
        title = title_link.get_text(strip=True) if title_link is not None else ""

        url = ""
        info = block.find(class_="articleInfoPan")
        outbound = info.find("a", href=True) if info is not None else None
        if outbound is not None:
            url = str(outbound["href"]).strip()
        elif title_link is not None and str(title_link.get("href", "")).startswith(("http://", "https://")):
            url = str(title_link["href"]).strip()

        if not url:
            logger.warning("bookmark_without_url_skipped", item_id=item_id, title=title)
            return None

        description_node = block.find(class_="thumbTBriefTxt")
        description = description_node.get_text(" ", strip=True) if description_node is not None else ""

        tags: list[str] = []
        tag_list = block.find("ul", class_="tagName")
        if tag_list is not None:
            tags = [a.get_text(strip=True) for a in tag_list.find_all("a") if a.get_text(strip=True)]

        data: dict[str, Any] = {
            "id": str(item_id) or url,
            "title": title,
            "url": url,
            "description": description,
            "tags": tags,
            "saved_at": self._parse_timestamp(block.get("date")),
        }
        return Bookmark(**data)

    @staticmethod
    def _parse_timestamp(raw: Any) -> datetime | None:
        if not isinstance(raw, str) or not raw.strip().isdigit():
            return None
        try:
            return datetime.fromtimestamp(int(raw.strip()), tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
