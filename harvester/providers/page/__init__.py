"""Page content providers.

Two implementations of IPageContentProvider:
    1. RemoteHttpPageProvider - fetches pages from the live bookmark service
       with httpx.
    2. LocalFilePageProvider - replays pages saved by LocalFilePageArchiver,
       for offline re-runs and reproducible tests.
"""

from harvester.providers.page.local_file_provider import LocalFilePageProvider, page_file_name
from harvester.providers.page.remote_http_provider import (
    DEFAULT_BASE_ENDPOINT,
    RemoteHttpPageProvider,
)

__all__ = [
    "DEFAULT_BASE_ENDPOINT",
    "LocalFilePageProvider",
    "RemoteHttpPageProvider",
    "page_file_name",
]
