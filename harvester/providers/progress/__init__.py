"""Progress sinks.

TqdmProgressSink - one console bar per harvest step.  For programmatic
observers see :class:`harvester.pipeline.progress_tracker.ProgressTracker`.
"""

from harvester.providers.progress.tqdm_progress import TqdmProgressSink

__all__ = ["TqdmProgressSink"]
