"""URL reachability checkers.

HttpReachabilityChecker - HEAD-then-GET check over httpx; statuses below 400
are reachable.
"""

from harvester.providers.reachability.http_reachability_checker import HttpReachabilityChecker

__all__ = ["HttpReachabilityChecker"]
