"""Output formatting for harvested collections.

Two export formats are supported:

- **JSON** - the full :class:`CombinedResult`, including per-item validity.
- **Netscape bookmark file** - the de-facto browser import/export format,
  carrying ``ADD_DATE`` and ``TAGS`` per bookmark.

:meth:`OutputFormatter.summarize` produces the small tally the CLI prints.
"""

from __future__ import annotations

from collections import Counter
from html import escape
from typing import Any

from harvester.models.bookmark import Bookmark, CombinedResult
from harvester.models.verification import URL_CHECK, is_failure
from harvester.utils.logging import get_logger

_NETSCAPE_HEADER = (
    "<!DOCTYPE NETSCAPE-Bookmark-file-1>\n"
    "<!-- This is an automatically generated file. -->\n"
    '<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">\n'
)


class OutputFormatter:
    """Serialises a :class:`CombinedResult` for export."""

    def __init__(self) -> None:
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def to_json(self, result: CombinedResult, indent: int | None = 2) -> str:
        """Return the whole result as a JSON document."""
        return result.model_dump_json(indent=indent)

    def to_netscape_html(self, result: CombinedResult) -> str:
        """Return the result as a Netscape bookmark file."""
        title = escape(result.title or "Bookmarks")
        lines = [
            _NETSCAPE_HEADER.rstrip("\n"),
            f"<TITLE>{title}</TITLE>",
            f"<H1>{title}</H1>",
            "<DL><p>",
        ]
        for item in result.items:
            lines.extend(self._netscape_entry(item))
        lines.append("</DL><p>")

        self._logger.debug("netscape_export_rendered", items=len(result.items))
        return "\n".join(lines) + "\n"

    def summarize(self, result: CombinedResult) -> dict[str, Any]:
        """Return item/page counts plus a tally of URL check outcomes.

        Returns
        -------
        dict
            Keys: ``title``, ``pages``, ``total_elements``, ``items``,
            ``url_outcomes`` (outcome → count; failures under ``"error"``;
            empty when URLs were not verified).
        """
        outcomes: Counter[str] = Counter()
        for item in result.items:
            if not item.validity or URL_CHECK not in item.validity:
                continue
            outcome = item.validity[URL_CHECK]
            outcomes["error" if is_failure(outcome) else str(outcome)] += 1

        return {
            "title": result.title,
            "pages": result.pages,
            "total_elements": result.total_elements,
            "items": len(result.items),
            "url_outcomes": dict(sorted(outcomes.items())),
        }

    def render(self, result: CombinedResult, fmt: str) -> str:
        """Render *result* in format *fmt* (``"json"`` or ``"html"``)."""
        if fmt == "json":
            return self.to_json(result)
        if fmt == "html":
            return self.to_netscape_html(result)
        raise ValueError(f"Unknown output format: {fmt!r}")

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _netscape_entry(item: Bookmark) -> list[str]:
        attrs = [f'HREF="{escape(item.url, quote=True)}"']
        if item.saved_at is not None:
            attrs.append(f'ADD_DATE="{int(item.saved_at.timestamp())}"')
        if item.tags:
            attrs.append(f'TAGS="{escape(",".join(item.tags), quote=True)}"')

        entry = [f"    <DT><A {' '.join(attrs)}>{escape(item.title or item.url)}</A>"]
        if item.description:
            entry.append(f"    <DD>{escape(item.description)}")
        return entry
