"""Harvest pipeline components: fetch step, traversal, verification, orchestration."""

from harvester.pipeline.orchestrator import CollectionHarvester
from harvester.pipeline.page_fetcher import PageFetcher
from harvester.pipeline.progress_tracker import ProgressSnapshot, ProgressTracker
from harvester.pipeline.traversal import PaginationTraversal
from harvester.pipeline.verification import VerificationPipeline

__all__ = [
    "CollectionHarvester",
    "PageFetcher",
    "PaginationTraversal",
    "ProgressSnapshot",
    "ProgressTracker",
    "VerificationPipeline",
]
