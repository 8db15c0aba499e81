"""Public interface definitions for all external collaborators.

Every collaborator of the harvest core is accessed exclusively through the
abstract base classes defined in this package.  Concrete adapters implement
these interfaces and are injected by ``harvester.main.build_harvester``,
so swapping the network source for a replay directory, or disabling URL
checks, never touches the traversal or verification code.

CONCRETE PROVIDER MAP:
    Interface                  →  Concrete implementations (in harvester/providers/)
    ─────────────────────────────────────────────────────────────────────
    IPageContentProvider       →  RemoteHttpPageProvider, LocalFilePageProvider
    IPageContentArchiver       →  LocalFilePageArchiver
    IPageParser                →  DeliciousHtmlParser
    IReachabilityChecker       →  HttpReachabilityChecker
    IProgressSink              →  TqdmProgressSink, ProgressTracker
"""

from harvester.interfaces.page_archiver import IPageContentArchiver
from harvester.interfaces.page_parser import IPageParser
from harvester.interfaces.page_provider import IPageContentProvider
from harvester.interfaces.progress_sink import IProgressSink
from harvester.interfaces.reachability_checker import IReachabilityChecker

__all__ = [
    "IPageContentArchiver",
    "IPageContentProvider",
    "IPageParser",
    "IProgressSink",
    "IReachabilityChecker",
]
