"""
Modification metrics: earliest and latest modified objects.
"""

from ..bounded import Bounded, apply
from ..models import ObjectRecord
from ..report import ReportWriter
from . import Metric


def format_date(value) -> str:
    return value.isoformat() if hasattr(value, 'isoformat') else str(value)


class Modification(Metric):
    name = "modification"

    def __init__(self):
        self.earliest_file = Bounded()
        self.latest_file = Bounded()

    def register(self, record: ObjectRecord):
        apply(self.earliest_file, self.latest_file, record.key, record.last_modified)

    def report(self, writer: ReportWriter):
        writer.head("modification")

        writer.bound("earliest_file", self.earliest_file,
                     lambda date: writer.pair("earliest_file_date", format_date(date)))
        writer.bound("latest_file", self.latest_file,
                     lambda date: writer.pair("latest_file_date", format_date(date)))
