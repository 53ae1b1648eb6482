"""Fractal noise whose higher octaves are damped on steep slopes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Sequence


def _scale_factor(persistence: float, octaves: int) -> float:
    denom = sum(persistence**i for i in range(1, octaves + 1))
    return 1.0 / denom


@dataclass(frozen=True)
class GFT:
    """Gradient-damped fractal sum of ``source`` over several octaves."""

    DEFAULT_OCTAVE_COUNT = 6
    DEFAULT_FREQUENCY = 1.0
    DEFAULT_LACUNARITY = 2.0
    DEFAULT_PERSISTENCE = 0.5
    DEFAULT_GRADIENT = 1.0
    DEFAULT_AMPLITUDE = 1.0

    source: Any
    octaves: int = 6
    frequency: float = 1.0
    lacunarity: float = 2.0
    persistence: float = 0.5
    gradient: float = 1.0
    amplitude: float = 1.0
    scale_factor: float = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "scale_factor", _scale_factor(self.persistence, self.octaves))

    def set_octaves(self, octaves: int) -> "GFT":
        if self.octaves == octaves:
            return self
        return replace(self, octaves=octaves)

    def set_frequency(self, frequency: float) -> "GFT":
        return replace(self, frequency=frequency)

    def set_lacunarity(self, lacunarity: float) -> "GFT":
        return replace(self, lacunarity=lacunarity)

    def set_persistence(self, persistence: float) -> "GFT":
        return replace(self, persistence=persistence)

    def set_amplitude(self, amplitude: float) -> "GFT":
        return replace(self, amplitude=amplitude)

    def set_gradient(self, gradient: float) -> "GFT":
        return replace(self, gradient=gradient)

    def _gradient_influence(self, flatness: float) -> float:
        return (math.e * 0.375) ** (-((flatness * self.gradient) ** 2))

    def get(self, point: Sequence[float]) -> float:
        px, py = float(point[0]), float(point[1])
        offset = 0.001
        result = 0.0
        total_flatness = 0.0

        for octave in range(self.octaves):
            frequency = self.frequency * self.lacunarity**octave
            amplitude = self.amplitude * self.persistence**octave

            sx, sy = px * frequency, py * frequency
            value = self.source.get((sx, sy))
            value_x = self.source.get((sx + offset, sy))
            value_y = self.source.get((sx, sy + offset))

            dx = (value_x - value) / offset
            dy = (value_y - value) / offset
            total_flatness += math.hypot(dx, dy) * (1.0 / (octave + 1))

            result += value * self._gradient_influence(total_flatness) * amplitude

        return result * self.scale_factor