"""Custom exception hierarchy for the harvester.

All application exceptions inherit from :class:`HarvesterError`, which
carries an optional ``provider_name`` so error handlers can identify which
collaborator (e.g. "remote_http", "local_file", "delicious_html") caused the
failure.

The hierarchy is organized by how a failure is treated:

    HarvesterError  (base -- catch-all for any harvester error)
    +-- PageFetchError          (fatal: page could not be loaded)
    +-- PageParseError          (fatal: page content could not be parsed)
    +-- TraversalError          (fatal: the page chain is malformed)
    |   +-- PaginationCycleError    (a ``next`` pointer revisits a page)
    |   +-- PageLimitExceededError  (more pages than ``max_pages`` allows)
    +-- ArchiveError            (non-fatal: page could not be archived)
    +-- ReachabilityError       (non-fatal: URL check failed outright)
    +-- ConfigurationError      (startup / missing config)

Fatal errors abort :meth:`CollectionHarvester.fetch`; non-fatal ones are
absorbed close to where they are raised and only show up in logs or as a
recorded per-item outcome.
"""


class HarvesterError(Exception):
    """Base exception for all harvester errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which collaborator triggered the error.
    The ``__str__`` method prefixes the provider name in brackets for
    structured log output, e.g. ``[remote_http] HTTP 404 for page 3``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Fatal page-chain errors
# ---------------------------------------------------------------------------

class PageFetchError(HarvesterError):
    """Raised when a page cannot be loaded from the network or from disk."""

    def __init__(
        self,
        message: str = "Page fetch failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class PageParseError(HarvesterError):
    """Raised when raw page content cannot be turned into a page response."""

    def __init__(
        self,
        message: str = "Page parse failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class TraversalError(HarvesterError):
    """Raised when the page chain cannot be walked to completion."""

    def __init__(
        self,
        message: str = "Page traversal failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class PaginationCycleError(TraversalError):
    """Raised when a page's ``next`` pointer names a page already visited."""

    def __init__(
        self,
        message: str = "Pagination cycle detected",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class PageLimitExceededError(TraversalError):
    """Raised when the chain is longer than the configured ``max_pages``."""

    def __init__(
        self,
        message: str = "Page limit exceeded",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Non-fatal errors
# ---------------------------------------------------------------------------

class ArchiveError(HarvesterError):
    """Raised when a page cannot be written to the archive directory.

    Never propagates past the detached archive task -- it is logged and
    discarded.
    """

    def __init__(
        self,
        message: str = "Page archive failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ReachabilityError(HarvesterError):
    """Raised when a URL check fails without producing an HTTP status."""

    def __init__(
        self,
        message: str = "URL reachability check failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(HarvesterError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
