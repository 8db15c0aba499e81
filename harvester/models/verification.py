"""Verification outcome vocabulary.

A validity outcome is opaque to the pipeline -- whatever a checker returns
is stored as-is.  This module only names the values the bundled HTTP
checker produces and the shape used when a check fails outright.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

URL_CHECK = "url"


class UrlStatus(str, Enum):  # noqa: UP042 -- kept str-based for plain JSON output
    """Outcome values reported by :class:`HttpReachabilityChecker`."""

    REACHABLE = "reachable"
    UNREACHABLE = "unreachable"


def describe_failure(exc: BaseException) -> dict[str, Any]:
    """Turn a failed check into an error-shaped outcome value."""
    return {
        "error": str(exc) or exc.__class__.__name__,
        "error_type": exc.__class__.__name__,
    }


def is_failure(outcome: Any) -> bool:
    """Return ``True`` if *outcome* was produced by :func:`describe_failure`."""
    return isinstance(outcome, dict) and "error" in outcome and "error_type" in outcome
