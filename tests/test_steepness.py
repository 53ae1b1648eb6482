import pytest

from spellhaven.steepness import Steepness


class _Fn:
    def __init__(self, func):
        self.func = func

    def get(self, point):
        return self.func(point[0], point[1])


def test_flat_source_has_zero_steepness():
    assert Steepness(_Fn(lambda x, y: 42.0)).get((3.0, -7.0)) == 0.0


@pytest.mark.parametrize("a,b", [(1.0, 1.0), (2.0, -3.0), (-0.5, 0.0)])
def test_linear_source(a, b):
    steep = Steepness(_Fn(lambda x, y: a * x + b * y))
    assert steep.get((10.0, 20.0)) == pytest.approx((abs(a) + abs(b)) / 2)


def test_default_offset():
    assert Steepness(_Fn(lambda x, y: 0.0)).sample_offset == Steepness.DEFAULT_OFFSET


def test_offset_changes_sampling():
    source = _Fn(lambda x, y: x * x)
    small = Steepness(source).get((0.0, 0.0))
    large = Steepness(source, sample_offset=2.0).get((0.0, 0.0))
    assert large > small
    assert small == pytest.approx(0.5)


def test_steepness_is_non_negative():
    steep = Steepness(_Fn(lambda x, y: -(x**3) + y))
    for p in [(-2.0, 1.0), (0.0, 0.0), (3.0, -4.0)]:
        assert steep.get(p) >= 0.0