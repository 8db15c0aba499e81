"""URL reachability checker using httpx.

Checks a URL with a HEAD request and falls back to a streamed GET when the
server refuses HEAD.  Any final status below 400 counts as reachable;
anything else as unreachable.  Transport-level failures (DNS, refused
connection, timeout, malformed URL) raise :class:`ReachabilityError`, which
the verification pipeline records as an error-shaped outcome.
"""

from __future__ import annotations

import httpx
import structlog

from harvester.interfaces.reachability_checker import IReachabilityChecker
from harvester.models.verification import UrlStatus
from harvester.utils.errors import ReachabilityError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_TIMEOUT = 10.0
# Servers that answer HEAD with one of these usually serve GET fine.
_HEAD_REJECTED = frozenset({403, 405, 501})


class HttpReachabilityChecker(IReachabilityChecker):
    """Reachability check backed by an injected ``httpx.AsyncClient``."""

    def __init__(self, http_client: httpx.AsyncClient, timeout: float = _DEFAULT_TIMEOUT) -> None:
        self._client = http_client
        # Only connect, read and write are bounded; pool waits are not.
        self._timeout = httpx.Timeout(timeout, pool=None)

    async def verify(self, url: str) -> str:
        """Return ``"reachable"`` or ``"unreachable"`` for *url*."""
        try:
            status = await self._fetch_status(url)
        except httpx.TimeoutException as exc:
            raise ReachabilityError(
                message=f"Timeout checking {url}",
                provider_name=self.get_provider_name(),
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise ReachabilityError(
                message=f"Cannot reach {url}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        outcome = UrlStatus.REACHABLE if status < 400 else UrlStatus.UNREACHABLE
        logger.debug("url_checked", url=url, status=status, outcome=outcome.value)
        return outcome.value

    def get_provider_name(self) -> str:
        return "http_reachability"

    async def _fetch_status(self, url: str) -> int:
        response = await self._client.head(url, timeout=self._timeout, follow_redirects=True)
        if response.status_code not in _HEAD_REJECTED:
            return response.status_code

        # Streamed so the body is never downloaded.
        async with self._client.stream(
            "GET", url, timeout=self._timeout, follow_redirects=True
        ) as fallback:
            return fallback.status_code
