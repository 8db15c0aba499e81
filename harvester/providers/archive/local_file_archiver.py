"""Archiver writing raw pages to a local directory.

The directory is created once, at construction, if it does not exist.
Writes happen in a worker thread; any ``OSError`` becomes an
:class:`ArchiveError` which the fetch step logs and discards.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import structlog

from harvester.interfaces.page_archiver import IPageContentArchiver
from harvester.models.bookmark import PageId
from harvester.providers.page.local_file_provider import page_file_name
from harvester.utils.errors import ArchiveError, ConfigurationError

logger = structlog.get_logger(logger_name=__name__)


class LocalFilePageArchiver(IPageContentArchiver):
    """Stores each fetched page as ``{directory}/page_{page_id}.html``."""

    def __init__(self, directory: str | Path, encoding: str = "utf-8") -> None:
        self._directory = Path(directory)
        self._encoding = encoding
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigurationError(
                message=f"Cannot create archive directory {self._directory}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    def path_for(self, page_id: PageId) -> Path:
        return self._directory / page_file_name(page_id)

    async def save_page(self, page_id: PageId, raw_content: str) -> None:
        path = self.path_for(page_id)
        try:
            await asyncio.to_thread(path.write_text, raw_content, encoding=self._encoding)
        except OSError as exc:
            raise ArchiveError(
                message=f"Cannot write page {page_id} to {path}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        logger.debug("page_archived", page=page_id, path=str(path))

    def describe_destination(self) -> str:
        return f"<local: {self._directory}>"

    def get_provider_name(self) -> str:
        return "local_file_archive"
