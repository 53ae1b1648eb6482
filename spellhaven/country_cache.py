"""Per-country caches of city locations and the roads that connect them."""

from __future__ import annotations

import heapq
import itertools
import logging
import math
import random
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from .full_cache import FullCache
from .generation_cache import GenerationCache
from .lod_height_adjuster import LodHeightAdjuster
from .voxel_world import ChunkLod

logger = logging.getLogger(__name__)

COUNTRY_SIZE = 2**15

_U64_MASK = (1 << 64) - 1

IVec2 = tuple[int, int]
Vec2 = tuple[float, float]


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _as_int(value: float) -> int:
    """Float-to-integer conversion truncating toward zero, NaN becoming zero."""
    if math.isnan(value):
        return 0
    return int(value)


def _normalize(x: float, y: float) -> Vec2:
    length = math.hypot(x, y)
    if length == 0.0:
        return (math.nan, math.nan)
    return (x / length, y / length)


def _lerp(p1: Vec2, p2: Vec2, t: float) -> Vec2:
    return ((1.0 - t) * p1[0] + t * p2[0], (1.0 - t) * p1[1] + t * p2[1])


def _distance_squared(a: IVec2, b: IVec2) -> int:
    return (a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2


def _in_box(point: IVec2, box_start: IVec2, box_end: IVec2, margin: IVec2) -> bool:
    return not (
        point[0] < box_start[0] - margin[0]
        or point[0] > box_end[0] + margin[0]
        or point[1] < box_start[1] - margin[1]
        or point[1] > box_end[1] + margin[1]
    )


@dataclass
class GenerationOptions:
    """World generation settings and the caches shared by all chunk tasks.

    ``terrain_noise`` builds the terrain height function for these options;
    it is needed only when ``generate_paths`` is set.
    """

    seed: int = 3
    generate_paths: bool = False
    terrain_noise: Optional[Callable[["GenerationOptions"], Any]] = None
    structure_generators: list = field(default_factory=list)
    structure_assets: list = field(default_factory=list)
    path_cache: GenerationCache = field(init=False, repr=False)
    structure_cache: GenerationCache = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.path_cache = GenerationCache(PathCache.generate)
        self.structure_cache = GenerationCache(StructureCache.generate)

    def build_terrain_noise(self) -> Any:
        if self.terrain_noise is None:
            raise ValueError("path generation needs a terrain noise provider")
        return self.terrain_noise(self)


@dataclass
class PathLine:
    """One spline segment of a road, with sampled points and a bounding box."""

    start: IVec2
    end: IVec2
    spline_one: Vec2
    spline_two: Vec2
    box_pos_start: IVec2
    box_pos_end: IVec2
    estimated_length: float
    sample_points: list[IVec2]

    @classmethod
    def from_points(cls, start, end, before, after) -> "PathLine":
        start = (int(start[0]), int(start[1]))
        end = (int(end[0]), int(end[1]))
        sx, sy = float(start[0]), float(start[1])
        ex, ey = float(end[0]), float(end[1])

        one = (sx + (end[0] - before[0]) / 2.0 / 3.0, sy + (end[1] - before[1]) / 2.0 / 3.0)
        two = (ex - (after[0] - start[0]) / 2.0 / 3.0, ey - (after[1] - start[1]) / 2.0 / 3.0)

        estimated_length = math.hypot(ex - sx, ey - sy)
        half = estimated_length / 2.0

        nx, ny = _normalize(one[0] - sx, one[1] - sy)
        spline_one = (sx + nx * half, sy + ny * half)
        nx, ny = _normalize(two[0] - ex, two[1] - ey)
        spline_two = (ex + nx * half, ey + ny * half)

        line = cls(
            start=start,
            end=end,
            spline_one=spline_one,
            spline_two=spline_two,
            box_pos_start=(min(start[0], end[0]), min(start[1], end[1])),
            box_pos_end=(max(start[0], end[0]), max(start[1], end[1])),
            estimated_length=estimated_length,
            sample_points=[start],
        )

        num_points = max(estimated_length / 20.0, 2.0)
        last_point = (0, 0)
        for i in range(1, int(num_points)):
            px, py = line.lerp_on_spline(i / num_points)
            current = (_as_int(px), _as_int(py))
            if current != last_point:
                line.sample_points.append(current)
                line.box_pos_start = (
                    min(line.box_pos_start[0], current[0]),
                    min(line.box_pos_start[1], current[1]),
                )
                line.box_pos_end = (
                    max(line.box_pos_end[0], current[0]),
                    max(line.box_pos_end[1], current[1]),
                )
                last_point = current

        line.sample_points.append(end)
        return line

    def is_in_box(self, point, margin) -> bool:
        return _in_box(point, self.box_pos_start, self.box_pos_end, margin)

    def get_progress_on_line(self, point) -> float:
        """How far ``point`` lies from start toward end, judged by squared distances."""
        to_start = float(_distance_squared(self.start, point))
        to_end = float(_distance_squared(self.end, point))
        total = to_start + to_end
        if total == 0.0:
            return math.nan
        return to_start / total

    def closest_point_on_path(self, point, margin) -> Optional[tuple[Vec2, Vec2]]:
        """Closest point on the sampled polyline and the segment direction there."""
        best: Optional[tuple[int, Vec2, IVec2, IVec2]] = None

        for start, end in zip(self.sample_points, self.sample_points[1:]):
            box_start = (min(start[0], end[0]), min(start[1], end[1]))
            box_end = (max(start[0], end[0]), max(start[1], end[1]))
            if not (
                box_start[0] - margin[0] <= point[0] < box_end[0] + margin[0]
                and box_start[1] - margin[1] <= point[1] < box_end[1] + margin[1]
            ):
                continue
            closest = self._closest_point_to_line(start, end, point)
            dist_squared = _distance_squared(
                point, (_as_int(closest[0]), _as_int(closest[1]))
            )
            if best is None or dist_squared < best[0]:
                best = (dist_squared, closest, start, end)

        if best is None:
            return None
        _, closest, start, end = best
        return closest, _normalize(end[0] - start[0], end[1] - start[1])

    @staticmethod
    def _closest_point_to_line(line_start: IVec2, line_end: IVec2, point: IVec2) -> Vec2:
        dx, dy = line_end[0] - line_start[0], line_end[1] - line_start[1]
        length_squared = dx * dx + dy * dy
        if length_squared == 0:
            return (float(line_start[0]), float(line_start[1]))
        dot = (point[0] - line_start[0]) * dx + (point[1] - line_start[1]) * dy
        t = min(max(dot / length_squared, 0.0), 1.0)
        return (line_start[0] + t * dx, line_start[1] + t * dy)

    def lerp_on_spline(self, t: float) -> Vec2:
        """Point at ``t`` on the cubic Bezier curve through the two control points."""
        start = (float(self.start[0]), float(self.start[1]))
        end = (float(self.end[0]), float(self.end[1]))
        a = _lerp(start, self.spline_one, t)
        b = _lerp(self.spline_one, self.spline_two, t)
        c = _lerp(self.spline_two, end, t)
        return _lerp(_lerp(a, b, t), _lerp(b, c, t), t)


@dataclass
class Path:
    """A road made of spline lines, with a coarse bounding box."""

    lines: list[PathLine] = field(default_factory=list)
    box_pos_start: IVec2 = (0, 0)
    box_pos_end: IVec2 = (0, 0)

    def is_in_box(self, point, margin) -> bool:
        return _in_box(point, self.box_pos_start, self.box_pos_end, margin)


@dataclass(frozen=True)
class StructureCache:
    """Where the city of a country stands."""

    city_location: IVec2

    @classmethod
    def generate(cls, key, generation_options) -> "StructureCache":
        kx, ky = key
        seed = generation_options.seed
        if kx < 0:
            first = (seed - abs(kx)) & _U64_MASK
        else:
            first = (seed + abs(kx)) & _U64_MASK
        drawn = random.Random(first).getrandbits(64)
        if kx < 0:
            second = (drawn - abs(ky)) & _U64_MASK
        else:
            second = (drawn + abs(ky)) & _U64_MASK
        rng = random.Random(second)

        min_offset = 100
        city_x = rng.randrange(min_offset, COUNTRY_SIZE - min_offset)
        city_z = rng.randrange(min_offset, COUNTRY_SIZE - min_offset)
        return cls((city_x + kx * COUNTRY_SIZE, city_z + ky * COUNTRY_SIZE))


_NEIGHBOURS = (
    ((1, 0), 10),
    ((0, 1), 10),
    ((-1, 0), 10),
    ((0, -1), 10),
    ((1, 1), 14),
    ((-1, 1), 14),
    ((-1, -1), 14),
    ((1, -1), 14),
)


@dataclass
class PathCache:
    """Roads leading from a country's city to the neighbouring cities."""

    paths: list[Path] = field(default_factory=list)

    @classmethod
    def generate(cls, key, generation_options) -> "PathCache":
        if not generation_options.generate_paths:
            return cls([])

        key = (key[0], key[1])
        top = (key[0] + 1, key[1])
        right = (key[0], key[1] + 1)
        structures = generation_options.structure_cache
        current = structures.get_cache_entry(key, generation_options)
        top_city = structures.get_cache_entry(top, generation_options)
        right_city = structures.get_cache_entry(right, generation_options)

        lod = ChunkLod.SIXTEENTH
        return cls(
            [
                cls.generate_path(
                    current.city_location, top_city.city_location, [key, top], lod,
                    generation_options,
                ),
                cls.generate_path(
                    current.city_location, right_city.city_location, [key, right], lod,
                    generation_options,
                ),
            ]
        )

    @classmethod
    def generate_path(
        cls, start_pos, end_pos, country_positions, path_finding_lod, generation_options
    ) -> Path:
        """Find a gentle road between two points with A* on a coarse grid."""
        m = path_finding_lod.multiplier()
        start_pos = (_tdiv(start_pos[0], m), _tdiv(start_pos[1], m))
        end_pos = (_tdiv(end_pos[0], m), _tdiv(end_pos[1], m))

        terrain_noise = FullCache(
            LodHeightAdjuster(generation_options.build_terrain_noise(), path_finding_lod)
        )

        def terrain_height(pos: IVec2) -> float:
            return terrain_noise.get((float(pos[0] * m), float(pos[1] * m))) * m

        def distance_to_end(pos: IVec2) -> int:
            dx, dy = abs(end_pos[0] - pos[0]), abs(end_pos[1] - pos[1])
            return max(dx, dy) * 10 + min(dx, dy) * 4

        def outside_country(pos: IVec2, country: IVec2) -> bool:
            return (
                pos[0] < country[0] * COUNTRY_SIZE
                or pos[0] >= (country[0] + 1) * COUNTRY_SIZE
                or pos[1] < country[1] * COUNTRY_SIZE
                or pos[1] >= (country[1] + 1) * COUNTRY_SIZE
            )

        def outside_countries(pos: IVec2) -> bool:
            scaled = (pos[0] * m, pos[1] * m)
            return all(outside_country(scaled, country) for country in country_positions)

        counter = itertools.count()
        queue = [(distance_to_end(start_pos), next(counter), 0, start_pos, (0, 0))]
        previous: dict[IVec2, IVec2] = {}
        weights: dict[IVec2, int] = {start_pos: 0}

        logger.info("start_pos: %s, end_pos: %s", start_pos, end_pos)
        started = time.perf_counter()

        while queue:
            _, _, real_weight, current, current_direction = heapq.heappop(queue)
            if current == end_pos:
                break

            current_height = terrain_height(current)

            for (ox, oy), step_weight in _NEIGHBOURS:
                nxt = (current[0] + ox, current[1] + oy)
                if outside_countries(nxt):
                    continue

                direction = (ox, oy)
                direction_cost = abs(ox - current_direction[0]) + abs(oy - current_direction[1])
                if direction_cost > 1:
                    continue

                next_height = terrain_height(nxt)
                height_difference = abs(current_height - next_height) / m
                if height_difference > 0.65:
                    continue

                side = (nxt[0] - oy, nxt[1] + ox)
                steepness = abs(next_height - terrain_height(side)) / m

                new_weight = (
                    real_weight
                    + step_weight
                    + int(height_difference * 30.0)
                    + int(steepness * 20.0)
                )
                known = weights.get(nxt)
                if known is None or new_weight < known:
                    weights[nxt] = new_weight
                    heapq.heappush(
                        queue,
                        (new_weight + distance_to_end(nxt), next(counter), new_weight, nxt,
                         direction),
                    )
                    previous[nxt] = current

        logger.info("DONE: %ss", time.perf_counter() - started)

        if end_pos not in previous:
            logger.info("NO PATH COULD BE CREATED!")
            return Path()

        min_x = min_y = max_x = max_y = 0
        current = end_pos
        parent = previous[current]
        points: list[IVec2] = [
            ((2 * current[0] - parent[0]) * m, (2 * current[1] - parent[1]) * m)
        ]

        while current != start_pos:
            prev = previous.get(current)
            if prev is None:
                raise RuntimeError(
                    "We reached the target, but are unable to reconstitute the path"
                )
            dx, dy = prev[0] - current[0], prev[1] - current[1]
            point = (current[0] * m + _tdiv(dx * m, 2), current[1] * m + _tdiv(dy * m, 2))
            points.append(point)
            min_x, min_y = min(min_x, point[0]), min(min_y, point[1])
            max_x, max_y = max(max_x, point[0]), max(max_y, point[1])
            current = prev

        last = (current[0] * m, current[1] * m)
        lines: list[PathLine] = []
        if len(points) >= 4:
            before_last = points[-2]
            points.append((2 * last[0] - before_last[0], 2 * last[1] - before_last[1]))
            for i in range(1, len(points) - 2):
                lines.append(
                    PathLine.from_points(points[i], points[i + 1], points[i - 1], points[i + 2])
                )

        return Path(lines, (min_x, min_y), (max_x, max_y))


@dataclass(frozen=True)
class CountryCache:
    """Everything a chunk needs to know about the country it lies in."""

    country_pos: IVec2
    structure_cache: StructureCache
    this_path_cache: PathCache
    bottom_path_cache: PathCache
    left_path_cache: PathCache

    @classmethod
    def generate(cls, key, generation_options) -> "CountryCache":
        key = (key[0], key[1])
        paths = generation_options.path_cache
        return cls(
            country_pos=key,
            structure_cache=generation_options.structure_cache.get_cache_entry(
                key, generation_options
            ),
            this_path_cache=paths.get_cache_entry(key, generation_options),
            bottom_path_cache=paths.get_cache_entry((key[0] - 1, key[1]), generation_options),
            left_path_cache=paths.get_cache_entry((key[0], key[1] - 1), generation_options),
        )