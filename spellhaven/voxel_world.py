"""Level-of-detail levels and the per-position registry of chunk quad trees."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional


class ChunkLod(IntEnum):
    """Level of detail of a chunk; each step doubles the voxel size."""

    FULL = 1
    HALF = 2
    QUARTER = 3
    EIGHTH = 4
    SIXTEENTH = 5
    THIRTYTWOTH = 6
    SIXTYFOURTH = 7
    ONE_TWENTY_EIGHT = 8
    TWO_FIFTY_SIX = 9

    def multiplier(self) -> int:
        """Number of full-detail voxels covered by one voxel at this level."""
        return 2 ** (self.value - 1)

    def inverse_multiplier(self) -> int:
        """How many chunks of this level span one chunk of the maximum level."""
        return 2 ** (MAX_LOD.value - self.value)

    def previous(self) -> "ChunkLod":
        """The next finer level of detail."""
        try:
            return ChunkLod(self.value - 1)
        except ValueError:
            raise ValueError("Mapping doesn't exist!") from None


MAX_LOD = ChunkLod.ONE_TWENTY_EIGHT


@dataclass
class _ChunkSlot:
    """Mutable holder for the quad tree of one chunk position (may be empty)."""

    node: Optional[Any] = None


class QuadTreeVoxelWorld:
    """Keeps one quad tree slot for every loaded top-level chunk position."""

    def __init__(self) -> None:
        self._chunk_trees: dict[tuple[int, int], _ChunkSlot] = {}

    @staticmethod
    def _key(chunk_position) -> tuple[int, int]:
        x, z = chunk_position
        return (int(x), int(z))

    def has_chunk(self, chunk_position) -> bool:
        return self._key(chunk_position) in self._chunk_trees

    def add_chunk(self, chunk_position, chunk) -> bool:
        """Register a chunk; returns False if the position is already taken."""
        key = self._key(chunk_position)
        if key in self._chunk_trees:
            return False
        self._chunk_trees[key] = _ChunkSlot(chunk)
        return True

    def remove_chunk(self, chunk_position) -> bool:
        """Forget a chunk; returns whether it was present."""
        return self._chunk_trees.pop(self._key(chunk_position), None) is not None

    def get_chunk(self, chunk_position) -> Optional[_ChunkSlot]:
        """The slot for a position, whose ``node`` may be replaced, or None."""
        return self._chunk_trees.get(self._key(chunk_position))

    def __len__(self) -> int:
        return len(self._chunk_trees)