"""Replay page provider reading previously archived pages from disk.

Pages are read from ``{directory}/page_{page_id}.html`` -- the same naming
:class:`LocalFilePageArchiver` writes -- so a harvest can be re-run offline
against an earlier capture.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import structlog

from harvester.interfaces.page_provider import IPageContentProvider
from harvester.models.bookmark import PageId
from harvester.utils.errors import PageFetchError

logger = structlog.get_logger(logger_name=__name__)

PAGE_FILE_PREFIX = "page_"
PAGE_FILE_SUFFIX = ".html"


def page_file_name(page_id: PageId) -> str:
    """Return the archive file name used for page *page_id*."""
    return f"{PAGE_FILE_PREFIX}{page_id}{PAGE_FILE_SUFFIX}"


class LocalFilePageProvider(IPageContentProvider):
    """Loads collection pages from a local replay directory."""

    def __init__(self, directory: str | Path, encoding: str = "utf-8") -> None:
        self._directory = Path(directory)
        self._encoding = encoding

    def path_for(self, page_id: PageId) -> Path:
        return self._directory / page_file_name(page_id)

    async def load_page(self, page_id: PageId) -> str:
        """Read the archived page from disk in a worker thread."""
        path = self.path_for(page_id)
        try:
            content = await asyncio.to_thread(path.read_text, encoding=self._encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise PageFetchError(
                message=f"Cannot read page {page_id} from {path}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        logger.debug("local_page_loaded", page=page_id, path=str(path), chars=len(content))
        return content

    def describe_source(self) -> str:
        return f"<local: '{self._directory}'>"

    def get_provider_name(self) -> str:
        return "local_file"
