"""
Report model and value formatting helpers.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple

from .bounded import Bounded

BYTE_UNITS = ['B', 'kB', 'MB', 'GB', 'TB', 'PB', 'EB', 'ZB', 'YB']

# Calendar approximations used for duration text
SECONDS_PER_YEAR = 31_557_600
SECONDS_PER_MONTH = 2_630_016
SECONDS_PER_DAY = 86_400


def comma(value: int) -> str:
    """Format an integer with thousands separators."""
    return f"{value:,}"


def format_bytes(b: int) -> str:
    """Format a byte count using decimal units, e.g. 262144 -> 262.14kB."""
    value = float(b)
    sign = '-' if value < 0 else ''
    value = abs(value)

    unit = 0
    while value >= 1000 and unit < len(BYTE_UNITS) - 1:
        value /= 1000
        unit += 1

    text = f"{value:.2f}".rstrip('0').rstrip('.')
    return f"{sign}{text}{BYTE_UNITS[unit]}"


def _plural(n: int, name: str) -> str:
    return f"{n}{name}" if n == 1 else f"{n}{name}s"


def format_duration(seconds: int) -> str:
    """Format whole seconds, e.g. 3725 -> '1h 2m 5s'."""
    seconds = int(seconds)
    if seconds <= 0:
        return "0s"

    years, rem = divmod(seconds, SECONDS_PER_YEAR)
    months, rem = divmod(rem, SECONDS_PER_MONTH)
    days, rem = divmod(rem, SECONDS_PER_DAY)
    hours, rem = divmod(rem, 3600)
    minutes, secs = divmod(rem, 60)

    parts = []
    if years:
        parts.append(_plural(years, 'year'))
    if months:
        parts.append(_plural(months, 'month'))
    if days:
        parts.append(_plural(days, 'day'))
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if secs:
        parts.append(f"{secs}s")
    return " ".join(parts)


@dataclass
class Section:
    """One bracketed report section with ordered label/value pairs."""
    name: str
    pairs: List[Tuple[str, str]] = field(default_factory=list)

    def get(self, label: str) -> Optional[str]:
        for key, value in self.pairs:
            if key == label:
                return value
        return None

    def labels(self) -> List[str]:
        return [key for key, _ in self.pairs]


@dataclass
class Report:
    """Ordered collection of sections produced by a metrics chain."""
    sections: List[Section] = field(default_factory=list)

    def section(self, name: str) -> Optional[Section]:
        for section in self.sections:
            if section.name == name:
                return section
        return None

    def section_names(self) -> List[str]:
        return [s.name for s in self.sections]

    def to_text(self) -> str:
        """Render in the key=value format, sections separated by a blank line."""
        blocks = []
        for section in self.sections:
            lines = [f"[{section.name}]"]
            lines.extend(f"{key}={value}" for key, value in section.pairs)
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks)


class ReportWriter:
    """Collects report output from each metric in order."""

    def __init__(self):
        self.report = Report()
        self._current: Optional[Section] = None

    def head(self, label: str):
        self._current = Section(label)
        self.report.sections.append(self._current)

    def pair(self, label: str, value: Any):
        if self._current is None:
            raise RuntimeError("pair() called before head()")
        self._current.pairs.append((label, str(value)))

    def bound(self, label: str, bounded: Bounded, render: Callable[[Any], None]):
        """
        Write out a bound if it has been set.

        `render` writes the value line(s), followed by the representative
        key and, when other records share the value, the tie count.
        """
        if not bounded.is_set:
            return

        render(bounded.value)
        self.pair(f"{label}_name", bounded.key)

        if bounded.count > 0:
            self.pair(f"{label}_others", bounded.count)
