"""Memoising wrapper around a two-dimensional noise function."""

from __future__ import annotations

import math
from typing import Any, Sequence

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


def _as_i64(value: float) -> int:
    """Saturating float-to-integer conversion that truncates toward zero."""
    if math.isnan(value):
        return 0
    if value >= _I64_MAX:
        return _I64_MAX
    if value <= _I64_MIN:
        return _I64_MIN
    return int(value)


class FullCache:
    """Caches every sample of ``source``, keyed by the truncated integer point."""

    def __init__(self, source: Any) -> None:
        self.source = source
        self._cache: dict[tuple[int, int], float] = {}

    def get(self, point: Sequence[float]) -> float:
        key = (_as_i64(point[0]), _as_i64(point[1]))
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        value = self.source.get(point)
        self._cache[key] = value
        return value

    def __len__(self) -> int:
        return len(self._cache)