from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class Range:
    """start..end"""

    start: Any
    end: Any


@dataclass(frozen=True)
class RangeFrom:
    """start.."""

    start: Any


@dataclass(frozen=True)
class RangeFull:
    """.."""


@dataclass(frozen=True)
class RangeInclusive:
    """start..=end"""

    start: Any
    end: Any


@dataclass(frozen=True)
class RangeTo:
    """..end"""

    end: Any


@dataclass(frozen=True)
class RangeToInclusive:
    """..=end"""

    end: Any


class RangeKind(Enum):
    HALF_OPEN = (Range, 2)
    FROM = (RangeFrom, 1)
    FULL = (RangeFull, 0)
    INCLUSIVE = (RangeInclusive, 2)
    TO = (RangeTo, 1)
    TO_INCLUSIVE = (RangeToInclusive, 1)

    def __init__(self, value_cls: type, n_bounds: int):
        self.value_cls = value_cls
        self.n_bounds = n_bounds

    def build(self, *bounds: Any) -> Any:
        return self.value_cls(*bounds)
