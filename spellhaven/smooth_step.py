"""Quantises noise output into softened terraces."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Sequence


def sigmoid(x: float, factor: float) -> float:
    """Soft step from 0 to 1 centred on zero; smaller ``factor`` is sharper."""
    return x / (factor + abs(x)) * 0.5 + 0.5


def smooth_floor(x: float, factor: float) -> float:
    """A floor function whose steps are blended by ``factor``."""
    sigmoid_value = sigmoid(math.sin(math.pi * x), factor)
    return x + (2.0 * sigmoid_value - 1.0) * (math.asin(math.cos(math.pi * x)) / math.pi) - 0.5


@dataclass(frozen=True)
class SmoothStep:
    """Terraces ``source`` into ``steps`` levels per unit with the given smoothness."""

    DEFAULT_STEPS = 1.0
    DEFAULT_SMOOTHNESS = 0.25

    noise: Any
    steps: float = 1.0
    smoothness: float = 0.25

    def set_steps(self, steps: float) -> "SmoothStep":
        return replace(self, steps=steps)

    def set_smoothness(self, smoothness: float) -> "SmoothStep":
        return replace(self, smoothness=smoothness)

    def get(self, point: Sequence[float]) -> float:
        return smooth_floor(self.noise.get(point) * self.steps + 0.5, self.smoothness) / self.steps