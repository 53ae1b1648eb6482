"""Voxel world generation pieces: LOD levels, quad trees, ranges, caches, noise modifiers and roads."""

__version__ = "0.1.0"