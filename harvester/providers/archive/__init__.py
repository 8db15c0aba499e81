"""Page archivers.

LocalFilePageArchiver - writes every fetched page to a directory using the
same file naming LocalFilePageProvider reads, so a capture can be replayed.
"""

from harvester.providers.archive.local_file_archiver import LocalFilePageArchiver

__all__ = ["LocalFilePageArchiver"]
