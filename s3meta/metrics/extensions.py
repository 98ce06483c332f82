"""
Extension metrics: histogram of file extensions.
"""

from collections import defaultdict
from typing import Dict, Optional, Tuple

from ..models import ObjectRecord
from ..report import ReportWriter
from . import Metric


def get_extension(key: str) -> Optional[str]:
    """
    Return the extension of the final path segment, without the dot.

    Trailing slashes of folder placeholders are ignored, so "dir.d/" has
    the extension "d". Dot-files such as ".bashrc" and names ending in a
    dot have none.
    """
    name = key.rstrip('/').rsplit('/', 1)[-1]
    stem, dot, ext = name.rpartition('.')
    if not dot or not stem or not ext:
        return None
    return ext


class Extensions(Metric):
    name = "extensions"

    def __init__(self):
        self.extensions: Dict[str, int] = defaultdict(int)

    def register(self, record: ObjectRecord):
        ext = get_extension(record.key)
        if ext is not None:
            self.extensions[ext] += 1

    def most_popular(self) -> Optional[Tuple[str, int]]:
        """Most frequent extension; ties go to the smallest name."""
        if not self.extensions:
            return None
        return min(self.extensions.items(), key=lambda item: (-item[1], item[0]))

    def report(self, writer: ReportWriter):
        writer.head("extensions")
        writer.pair("unique_extensions", len(self.extensions))

        popular = self.most_popular()
        if popular:
            writer.pair("most_popular_extension", popular[0])
            writer.pair("most_popular_extension_count", popular[1])
