"""Utility modules for the harvester.

- **errors** -- Domain-specific exception hierarchy rooted at HarvesterError;
  fatal page-chain errors and non-fatal archive/reachability errors are
  separate subclasses so each boundary catches exactly what it absorbs.
- **concurrency** -- detached fire-and-forget tasks and an isolated
  fan-out helper used by the fetch and verification stages.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output interactively, structured JSON in production.
"""

# -- Async concurrency helpers ---------------------------------------------
from harvester.utils.concurrency import DetachedTasks, gather_isolated

# -- Domain exception hierarchy --------------------------------------------
from harvester.utils.errors import (
    ArchiveError,
    ConfigurationError,
    HarvesterError,
    PageFetchError,
    PageLimitExceededError,
    PageParseError,
    PaginationCycleError,
    ReachabilityError,
    TraversalError,
)

# -- Structured logging setup ----------------------------------------------
from harvester.utils.logging import configure_logging, get_logger

__all__ = [
    "ArchiveError",
    "ConfigurationError",
    "DetachedTasks",
    "HarvesterError",
    "PageFetchError",
    "PageLimitExceededError",
    "PageParseError",
    "PaginationCycleError",
    "ReachabilityError",
    "TraversalError",
    "configure_logging",
    "gather_isolated",
    "get_logger",
]
