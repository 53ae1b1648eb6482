# spellhaven

Building blocks for generating a procedural voxel world. The package has no dependencies outside the standard library and is not tied to a game engine.

## What is in it

- `spellhaven.voxel_world`
  - `ChunkLod` is an `IntEnum` with the detail levels from `FULL` (1) to `TWO_FIFTY_SIX` (9).
    - `multiplier()` returns `2 ** (level - 1)`.
    - `inverse_multiplier()` returns how many chunks of this level span one chunk of `MAX_LOD`, which is `ONE_TWENTY_EIGHT`.
    - `previous()` returns the next finer level. It raises `ValueError` on `FULL`.
  - `QuadTreeVoxelWorld` keeps one slot per loaded top-level chunk position.
    - `has_chunk`, `add_chunk` and `remove_chunk` each return a bool. `add_chunk` refuses a position that is already taken.
    - `get_chunk` returns the slot, or `None`. The slot's `node` attribute can be replaced.
- `spellhaven.quad_tree`
  - `QuadTreeNode` is either a leaf (`QuadTreeNode.leaf(data, entities)`) or a branch with four children (`QuadTreeNode.branch(children, entities)`). The child indices are named by `QuadTreeDistinction`.
  - `run_on_data(func)` visits every leaf's data in order.
  - `get_node(depth, position)` and `get_parent_node(depth, position)` walk down the tree.
  - `add_to_parent(depth, position, despawn)` counts a finished child. When all four children of a node are done, it calls `despawn` on that node's entities and moves up one level.
- `spellhaven.entry_range`
  - `EntryRange(start, end)` interpolates linearly between two floats with `get_value` and `get_value_with_steps`.
  - It builds sub-ranges with `get_sub_range` and `get_sub_range_with_steps`.
  - `rng(random.Random)` draws a sample from `[start, end)`. It raises `ValueError` on an empty range.
- `spellhaven.generation_cache`
  - `GenerationCache(factory)` is a thread-safe map. It calls `factory(key, options)` at most once per key, from `get_cache_entry`.
  - `try_get_entry_no_lock` returns a value only if it is ready and no lock is held.
- Noise modifiers wrap any object that has a `get(point)` method returning a float, so they can be stacked:
  - `spellhaven.full_cache.FullCache` memoises its source per truncated integer point.
  - `spellhaven.lod_height_adjuster.LodHeightAdjuster` divides heights by a `ChunkLod` multiplier and lifts them by a margin.
  - `spellhaven.shift_n_scale.ShiftNScale` computes `(source + shift) / scale`. The defaults are 1 and 2, which map [-1, 1] onto [0, 1].
  - `spellhaven.smooth_step.SmoothStep` terraces its source into softened steps. It uses the functions `smooth_floor` and `sigmoid`.
  - `spellhaven.steepness.Steepness` gives the mean absolute finite difference along both axes.
  - `spellhaven.gradient_fractal_noise.GFT` is a fractal sum over octaves whose later octaves are damped where the accumulated slope is large. It has the setters `set_octaves`, `set_frequency`, `set_lacunarity`, `set_persistence`, `set_amplitude` and `set_gradient`.
- `spellhaven.country_cache`
  - `GenerationOptions` holds the seed, the `generate_paths` flag and the shared `structure_cache` and `path_cache`.
  - `StructureCache.generate` places one city per country deterministically from the seed. A country is `COUNTRY_SIZE` = 2**15 units wide.
  - `PathCache.generate` finds roads from a country's city to the cities of its two neighbours. It uses A* on a coarse grid, avoiding steep steps, and smooths the result into `PathLine` Bezier segments grouped into a `Path`.
  - `CountryCache.generate` gathers a country's structure cache and the three path caches a chunk needs.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Example

```python
from spellhaven.voxel_world import ChunkLod
from spellhaven.entry_range import EntryRange
from spellhaven.smooth_step import SmoothStep
from spellhaven.full_cache import FullCache
from spellhaven.country_cache import CountryCache, GenerationOptions

print(ChunkLod.QUARTER.multiplier())              # 4
print(EntryRange(0.0, 10.0).get_value(0.25))      # 2.5


class Ramp:
    def get(self, point):
        return point[0] * 0.01


terraced = FullCache(SmoothStep(Ramp()).set_steps(6.0).set_smoothness(0.5))
print(terraced.get((42.0, 0.0)))

options = GenerationOptions(seed=3)               # generate_paths is off by default
country = CountryCache.generate((0, 0), options)
print(country.structure_cache.city_location)
print(country.this_path_cache.paths)              # [] while paths are disabled
```

## Road generation needs a terrain

The package does not contain a terrain height function of its own. To generate roads, set `generate_paths=True` and pass `terrain_noise`. This is a callable that takes the `GenerationOptions` and returns an object with `get(point)`. Without it, `GenerationOptions.build_terrain_noise` raises `ValueError`.

## What it does not do

The package produces no voxels, meshes or colliders. It has no renderer, game loop, chunk loader or command-line program. It supplies the data structures, caches, noise modifiers and road layout that such a program would build on.

## Running the tests

```
pytest
```