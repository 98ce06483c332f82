"""
Extremum tracking for "largest/smallest/earliest/latest" style metrics.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class Bounded:
    """
    Tracks a single bound (either a minimum or a maximum) of a value.

    `key` names the first record that reached the current bound and stays
    None until a record is observed. `count` is the number of additional
    records that share the bound value.
    """
    value: Any = None
    key: Optional[str] = None
    count: int = 0

    @property
    def is_set(self) -> bool:
        return self.key is not None

    def reset(self, key: str, value: Any):
        self.key = key
        self.value = value
        self.count = 0


def apply(low: Bounded, high: Bounded, key: str, value: Any):
    """
    Apply a (key, value) candidate to a pair of lower/upper bounds.

    The first candidate seeds both bounds. After that, a strictly better
    value replaces the bound and clears its tie count, while an equal value
    only increments the tie count; the original key is kept.
    """
    if not low.is_set:
        low.reset(key, value)
        high.reset(key, value)
        return

    if value < low.value:
        low.reset(key, value)
    elif value == low.value:
        low.count += 1

    if value > high.value:
        high.reset(key, value)
    elif value == high.value:
        high.count += 1
