"""Shifts and then divides the output of a noise function."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence


@dataclass(frozen=True)
class ShiftNScale:
    """Returns ``(source + shift) / scale``; the defaults map [-1, 1] onto [0, 1]."""

    noise: Any
    scale: int = 2
    shift: int = 1

    def __post_init__(self) -> None:
        if self.scale == 0:
            raise ZeroDivisionError("scale must not be zero")

    def get(self, point: Sequence[float]) -> float:
        return (self.noise.get(point) + float(self.shift)) / float(self.scale)