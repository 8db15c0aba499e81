"""Composition root: wires providers into a :class:`CollectionHarvester`.

Capabilities are chosen exactly once, here:

- page source: replay directory when ``read_html_from_directory`` is set,
  otherwise the network endpoint for ``username``;
- archiving: only when ``write_html_to_directory`` is set;
- verification: URL reachability only when ``verify_urls`` is set.

:func:`harvest` is the one-call entry point used by the CLI; it owns the
``httpx.AsyncClient`` shared by page fetches and URL checks.
"""

from __future__ import annotations

import httpx

from harvester.config.settings import Settings
from harvester.interfaces.page_archiver import IPageContentArchiver
from harvester.interfaces.page_provider import IPageContentProvider
from harvester.interfaces.progress_sink import IProgressSink
from harvester.models.bookmark import CombinedResult
from harvester.pipeline.orchestrator import CollectionHarvester
from harvester.pipeline.page_fetcher import PageFetcher
from harvester.pipeline.progress_tracker import ProgressTracker
from harvester.pipeline.verification import VerificationPipeline
from harvester.providers.archive.local_file_archiver import LocalFilePageArchiver
from harvester.providers.page.local_file_provider import LocalFilePageProvider
from harvester.providers.page.remote_http_provider import RemoteHttpPageProvider
from harvester.providers.parser.delicious_html_parser import DeliciousHtmlParser
from harvester.providers.reachability.http_reachability_checker import HttpReachabilityChecker
from harvester.utils.errors import ConfigurationError
from harvester.utils.logging import get_logger

logger = get_logger(__name__)


def _build_page_provider(settings: Settings, http_client: httpx.AsyncClient) -> IPageContentProvider:
    if settings.replay_mode:
        return LocalFilePageProvider(settings.read_html_from_directory)
    if not settings.username:
        raise ConfigurationError(message="A username is required unless pages are replayed from a directory")
    return RemoteHttpPageProvider(
        http_client=http_client,
        username=settings.username,
        base_endpoint=settings.base_endpoint,
        timeout=settings.request_timeout,
        user_agent=settings.user_agent,
    )


def _build_archiver(settings: Settings) -> IPageContentArchiver | None:
    if not settings.archive_enabled:
        return None
    return LocalFilePageArchiver(settings.write_html_to_directory)


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create the shared client; per-call timeouts are set by each provider.

    URL checks fan out one request per bookmark, so the pool is unbounded and
    waiting for a pooled connection never counts against a timeout.
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout, pool=None),
        limits=httpx.Limits(max_connections=None, max_keepalive_connections=None),
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
    )


def build_harvester(
    settings: Settings,
    http_client: httpx.AsyncClient,
    progress: IProgressSink | None = None,
) -> CollectionHarvester:
    """Assemble a harvester from *settings*.

    Parameters
    ----------
    settings:
        Resolved configuration.
    http_client:
        Client used for page fetches and URL checks; owned by the caller.
    progress:
        Progress sink; a silent :class:`ProgressTracker` when omitted.

    Raises
    ------
    ConfigurationError
        If neither a username nor a replay directory is configured, or the
        archive directory cannot be created.
    """
    provider = _build_page_provider(settings, http_client)
    archiver = _build_archiver(settings)
    sink = progress if progress is not None else ProgressTracker()

    fetcher = PageFetcher(
        provider=provider,
        parser=DeliciousHtmlParser(),
        archiver=archiver,
        verbose=settings.verbose,
    )

    verifier: VerificationPipeline | None = None
    if settings.verify_urls:
        verifier = VerificationPipeline(
            progress=sink,
            url_checker=HttpReachabilityChecker(http_client, timeout=settings.url_check_timeout),
            # Slack above the HTTP timeout so the checker reports its own timeouts.
            check_timeout=settings.url_check_timeout * 2,
            verbose=settings.verbose,
        )

    logger.info(
        "harvester_configured",
        username=settings.username or None,
        reading_from=provider.describe_source(),
        writing_to=archiver.describe_destination() if archiver is not None else None,
        verify_urls=settings.verify_urls,
        max_pages=settings.page_limit,
    )

    return CollectionHarvester(
        fetcher=fetcher,
        progress=sink,
        verifier=verifier,
        max_pages=settings.page_limit,
    )


async def harvest(settings: Settings, progress: IProgressSink | None = None) -> CombinedResult:
    """Build a harvester for *settings*, run it, and close the HTTP client."""
    async with build_http_client(settings) as client:
        harvester = build_harvester(settings, http_client=client, progress=progress)
        return await harvester.fetch()
