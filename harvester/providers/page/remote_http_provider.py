"""Network page provider backed by httpx.

Requests ``{base_endpoint}/{username}?page={page_id}`` and returns the body
text.  There is no retry: a failed request aborts the whole harvest, which
is the caller's contract for page fetches.
"""

from __future__ import annotations

import httpx
import structlog

from harvester.interfaces.page_provider import IPageContentProvider
from harvester.models.bookmark import PageId
from harvester.utils.errors import PageFetchError

logger = structlog.get_logger(logger_name=__name__)

DEFAULT_BASE_ENDPOINT = "https://del.icio.us"
_DEFAULT_TIMEOUT = 30.0
_DEFAULT_USER_AGENT = "delicious-harvester/0.1 (+https://github.com/delicious-harvester)"


class RemoteHttpPageProvider(IPageContentProvider):
    """Loads collection pages from the live endpoint.

    Parameters
    ----------
    http_client:
        Injected ``httpx.AsyncClient`` for testability and connection pooling.
    username:
        Account whose public bookmarks are harvested.
    base_endpoint:
        Scheme and host of the bookmark service.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        username: str,
        base_endpoint: str = DEFAULT_BASE_ENDPOINT,
        timeout: float = _DEFAULT_TIMEOUT,
        user_agent: str = _DEFAULT_USER_AGENT,
    ) -> None:
        self._http = http_client
        self._username = username
        self._base_endpoint = base_endpoint.rstrip("/")
        self._timeout = timeout
        self._headers = {
            "User-Agent": user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        }

    def page_url(self) -> str:
        """Return the collection URL (the page number goes in the query)."""
        return f"{self._base_endpoint}/{self._username}"

    # ------------------------------------------------------------------
    # IPageContentProvider implementation
    # ------------------------------------------------------------------

    async def load_page(self, page_id: PageId) -> str:
        """GET the page and return its body; any HTTP failure is fatal."""
        url = self.page_url()
        try:
            response = await self._http.get(
                url,
                params={"page": str(page_id)},
                headers=self._headers,
                timeout=self._timeout,
                follow_redirects=True,
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise PageFetchError(
                message=f"Timeout fetching page {page_id} from {url}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise PageFetchError(
                message=f"HTTP {exc.response.status_code} for page {page_id} of {url}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise PageFetchError(
                message=f"HTTP error fetching page {page_id} from {url}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        logger.debug(
            "remote_page_loaded",
            page=page_id,
            url=url,
            bytes=len(response.content),
        )
        return response.text

    def describe_source(self) -> str:
        return f"<remote: {self._base_endpoint}>"

    def get_provider_name(self) -> str:
        return "remote_http"
