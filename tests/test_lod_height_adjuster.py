import pytest

from spellhaven.lod_height_adjuster import LodHeightAdjuster
from spellhaven.voxel_world import ChunkLod


class _Fn:
    def __init__(self, func):
        self.func = func

    def get(self, point):
        return self.func(point[0], point[1])


def test_default_lod_is_full():
    adjuster = LodHeightAdjuster(_Fn(lambda x, y: 0.0))
    assert adjuster.lod is ChunkLod.FULL


def test_full_lod_zero_source():
    adjuster = LodHeightAdjuster(_Fn(lambda x, y: 0.0))
    assert adjuster.get((0.0, 0.0)) == pytest.approx(11.0)


@pytest.mark.parametrize("lod", list(ChunkLod))
def test_height_differences_scale_with_multiplier(lod):
    adjuster = LodHeightAdjuster(_Fn(lambda x, y: x), lod)
    diff = adjuster.get((100.0, 0.0)) - adjuster.get((20.0, 0.0))
    assert diff == pytest.approx(80.0 / lod.multiplier())


def test_set_lod_returns_new_adjuster():
    original = LodHeightAdjuster(_Fn(lambda x, y: 64.0))
    changed = original.set_lod(ChunkLod.QUARTER)
    assert original.lod is ChunkLod.FULL
    assert changed.lod is ChunkLod.QUARTER
    assert changed.get((0.0, 0.0)) < original.get((0.0, 0.0))


def test_coarser_lod_shrinks_margin():
    source = _Fn(lambda x, y: 0.0)
    full = LodHeightAdjuster(source, ChunkLod.FULL).get((0.0, 0.0))
    half = LodHeightAdjuster(source, ChunkLod.HALF).get((0.0, 0.0))
    assert half < full
    assert half > 1.0