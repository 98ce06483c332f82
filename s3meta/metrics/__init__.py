"""
Metric collectors fed by a single pass over an object listing.

Each metric owns its own state, sees every record exactly once through
`register`, and writes its section of the final report through `report`.
"""

import time
from abc import ABC, abstractmethod
from typing import Callable, Iterator, List, Optional

from ..models import ObjectRecord
from ..report import Report, ReportWriter


class Metric(ABC):
    """A stateful accumulator that produces one report section."""

    name = ""

    @abstractmethod
    def register(self, record: ObjectRecord):
        """Register a single object record."""

    @abstractmethod
    def report(self, writer: ReportWriter):
        """Write this metric's section to the report."""


class MetricsChain:
    """
    Fixed, ordered set of metrics driven by one enumeration pass.

    The order used for registration is also the reporting order.
    """

    def __init__(self, metrics: List[Metric]):
        self._metrics = tuple(metrics)

    def __iter__(self) -> Iterator[Metric]:
        return iter(self._metrics)

    def __len__(self) -> int:
        return len(self._metrics)

    def __getitem__(self, index: int) -> Metric:
        return self._metrics[index]

    def get(self, name: str) -> Optional[Metric]:
        for metric in self._metrics:
            if metric.name == name:
                return metric
        return None

    def register(self, record: ObjectRecord):
        for metric in self._metrics:
            metric.register(record)

    def report(self) -> Report:
        writer = ReportWriter()
        for metric in self._metrics:
            metric.report(writer)
        return writer.report


def chain(prefix: Optional[str] = None,
          clock: Callable[[], float] = time.time) -> MetricsChain:
    """
    Build the metrics chain in its deterministic order.

    The run start time is read from `clock` here and handed to the
    general metric, which uses the same clock for elapsed time.
    """
    from .extensions import Extensions
    from .file_size import FileSize
    from .general import General
    from .modification import Modification

    start_time = clock()

    return MetricsChain([
        General(prefix=prefix, start_time=start_time, clock=clock),
        FileSize(),
        Extensions(),
        Modification(),
    ])


__all__ = ['Metric', 'MetricsChain', 'chain']
