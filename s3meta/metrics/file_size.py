"""
File size metrics: average, largest and smallest objects.
"""

from ..bounded import Bounded, apply
from ..models import ObjectRecord
from ..report import ReportWriter, format_bytes
from . import Metric


def _size_renderer(writer: ReportWriter, label: str):
    def render(size: int):
        writer.pair(f"{label}_size", format_bytes(size))
        writer.pair(f"{label}_bytes", size)
    return render


class FileSize(Metric):
    name = "file_size"

    def __init__(self):
        self.smallest_file = Bounded()
        self.largest_file = Bounded()
        self.total_keys = 0
        self.total_size = 0

    def register(self, record: ObjectRecord):
        apply(self.smallest_file, self.largest_file, record.key, record.size)
        self.total_keys += 1
        self.total_size += record.size

    def average_size(self) -> int:
        if self.total_keys == 0:
            return 0
        return self.total_size // self.total_keys

    def report(self, writer: ReportWriter):
        writer.head("file_size")
        writer.pair("average_file_size", format_bytes(self.average_size()))

        writer.bound("largest_file", self.largest_file,
                     _size_renderer(writer, "largest_file"))
        writer.bound("smallest_file", self.smallest_file,
                     _size_renderer(writer, "smallest_file"))
