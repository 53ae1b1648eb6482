"""Estimates the slope of a noise function by finite differences."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence


@dataclass(frozen=True)
class Steepness:
    """Mean absolute change of ``source`` over one offset step along each axis."""

    DEFAULT_OFFSET = 1.0

    source: Any
    sample_offset: float = 1.0

    def get(self, point: Sequence[float]) -> float:
        x, y = point[0], point[1]
        value_main = self.source.get(point)
        value_offset_x = self.source.get((x + self.sample_offset, y))
        value_offset_y = self.source.get((x, y + self.sample_offset))
        steepness_x = abs(value_main - value_offset_x)
        steepness_y = abs(value_main - value_offset_y)
        return (steepness_x + steepness_y) / 2.0