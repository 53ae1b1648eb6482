"""Scales terrain heights down to the voxel size of a level of detail."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Sequence

from .voxel_world import ChunkLod


@dataclass(frozen=True)
class LodHeightAdjuster:
    """Divides the source height by the LOD multiplier and lifts it by a margin."""

    DEFAULT_LOD = ChunkLod.FULL

    noise: Any
    lod: ChunkLod = ChunkLod.FULL

    def set_lod(self, lod: ChunkLod) -> "LodHeightAdjuster":
        return replace(self, lod=lod)

    def get(self, point: Sequence[float]) -> float:
        multiplier = float(self.lod.multiplier())
        return self.noise.get(point) * (1.0 / multiplier) + 1.0 + 10.0 / multiplier