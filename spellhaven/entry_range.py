"""A linear range of floats used to interpolate tree-growth parameters."""

from __future__ import annotations

import random
from dataclasses import dataclass


@dataclass(frozen=True)
class EntryRange:
    """Values from ``start`` to ``end``; ``end`` may be below ``start``."""

    start: float
    end: float

    def get_value(self, percent: float) -> float:
        return self.start + (self.end - self.start) * percent

    def get_sub_range(self, percent_a: float, percent_b: float) -> "EntryRange":
        return EntryRange(self.get_value(percent_a), self.get_value(percent_b))

    def get_value_with_steps(self, i: int, max_steps: int) -> float:
        return self.get_value(i / max_steps)

    def get_sub_range_with_steps(self, i_a: int, i_b: int, max_steps: int) -> "EntryRange":
        return EntryRange(
            self.get_value_with_steps(i_a, max_steps),
            self.get_value_with_steps(i_b, max_steps),
        )

    def rng(self, rng: random.Random) -> float:
        """A uniform value in the half-open range ``[start, end)``."""
        if not self.start < self.end:
            raise ValueError(f"cannot sample from empty range {self.start}..{self.end}")
        value = self.start + rng.random() * (self.end - self.start)
        return value if value < self.end else self.start

    def as_tuple(self) -> tuple[float, float]:
        return (self.start, self.end)