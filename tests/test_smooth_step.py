import pytest

from spellhaven.smooth_step import SmoothStep, sigmoid, smooth_floor


class _Const:
    def __init__(self, value):
        self.value = value

    def get(self, point):
        return self.value


def test_sigmoid_at_zero_is_half():
    assert sigmoid(0.0, 0.25) == pytest.approx(0.5)


@pytest.mark.parametrize("x", [0.1, 0.5, 1.0, 3.0])
def test_sigmoid_is_symmetric(x):
    assert sigmoid(x, 0.3) + sigmoid(-x, 0.3) == pytest.approx(1.0)


@pytest.mark.parametrize("n", [-2, -1, 0, 1, 4])
def test_smooth_floor_at_integers(n):
    assert smooth_floor(float(n), 0.25) == pytest.approx(n - 0.5, abs=1e-9)


@pytest.mark.parametrize("n", [-2, 0, 1, 3])
def test_smooth_floor_at_half_integers(n):
    assert smooth_floor(n + 0.5, 0.25) == pytest.approx(float(n), abs=1e-9)


def test_smooth_floor_is_monotonic():
    xs = [i / 50 for i in range(-100, 101)]
    values = [smooth_floor(x, 0.5) for x in xs]
    assert all(b >= a - 1e-9 for a, b in zip(values, values[1:]))


def test_defaults():
    step = SmoothStep(_Const(0.0))
    assert step.steps == SmoothStep.DEFAULT_STEPS
    assert step.smoothness == SmoothStep.DEFAULT_SMOOTHNESS


@pytest.mark.parametrize("steps", [1.0, 4.0, 6.0])
def test_step_levels_are_fixed_points(steps):
    for k in range(int(steps) + 1):
        level = k / steps
        step = SmoothStep(_Const(level)).set_steps(steps).set_smoothness(0.5)
        assert step.get((0.0, 0.0)) == pytest.approx(level, abs=1e-9)


def test_setters_return_new_objects():
    original = SmoothStep(_Const(0.3))
    changed = original.set_steps(6.0).set_smoothness(0.5)
    assert original.steps == SmoothStep.DEFAULT_STEPS
    assert changed.steps == 6.0
    assert changed.smoothness == 0.5