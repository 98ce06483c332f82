"""
General metrics: object count, total size, folders and elapsed time.
"""

import time
from typing import Callable, Optional, Set

from ..models import ObjectRecord
from ..report import ReportWriter, comma, format_bytes, format_duration
from . import Metric


def root_depth(prefix: Optional[str]) -> int:
    """
    Number of leading key segments that make up the listing root.

    The directory part of the prefix is the root; without one the
    top-level segment is.
    """
    if not prefix:
        return 1
    return max(1, prefix.count('/'))


class General(Metric):
    """Counts, totals and the set of folders implied by object keys."""

    name = "general"

    def __init__(self, prefix: Optional[str] = None, start_time: float = None,
                 clock: Callable[[], float] = time.time):
        self.clock = clock
        self.start_time = clock() if start_time is None else start_time
        self.root_depth = root_depth(prefix)
        self.folder_set: Set[str] = set()
        self.total_keys = 0
        self.total_size = 0

    def folders(self, key: str):
        """Yield every ancestor folder of `key` below the listing root."""
        parts = key.rstrip('/').split('/')[:-1]
        for depth in range(self.root_depth + 1, len(parts) + 1):
            yield '/'.join(parts[:depth])

    def register(self, record: ObjectRecord):
        self.folder_set.update(self.folders(record.key))
        self.total_keys += 1
        self.total_size += record.size

    def elapsed_seconds(self) -> int:
        return max(0, int(self.clock() - self.start_time))

    def report(self, writer: ReportWriter):
        writer.head("general")
        writer.pair("total_time", format_duration(self.elapsed_seconds()))
        writer.pair("total_files", comma(self.total_keys))
        writer.pair("total_folders", comma(len(self.folder_set)))
        writer.pair("total_storage", format_bytes(self.total_size))
        writer.pair("total_bytes", self.total_size)
