from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class OHLCPoint:
    """One candle. `timestamp` is the ordering dimension."""

    timestamp: float
    open: float
    high: float
    low: float
    close: float

    def as_tuple(self) -> tuple[float, float, float, float, float]:
        return (self.timestamp, self.open, self.high, self.low, self.close)


@dataclass(frozen=True)
class SampledPoint:
    """A value picked from the input data together with its sampling time."""

    timestamp: float
    data: Any


SpectrumRow = List[float]
"""One spectrum sample, values scaled to [0, 2]."""
