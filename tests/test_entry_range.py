import random

import pytest

from spellhaven.entry_range import EntryRange


def test_get_value_endpoints():
    r = EntryRange(2.0, 0.8)
    assert r.get_value(0.0) == 2.0
    assert r.get_value(1.0) == pytest.approx(0.8)


def test_get_value_midpoint():
    assert EntryRange(0.0, 360.0).get_value(0.5) == 180.0


def test_sub_range_endpoints_come_from_parent():
    r = EntryRange(1.0, 0.3)
    sub = r.get_sub_range(0.25, 0.75)
    assert sub.start == r.get_value(0.25)
    assert sub.end == r.get_value(0.75)


def test_steps_match_percentages():
    r = EntryRange(-10.0, 10.0)
    assert r.get_value_with_steps(1, 4) == r.get_value(0.25)
    sub = r.get_sub_range_with_steps(1, 3, 4)
    assert sub == r.get_sub_range(0.25, 0.75)


def test_full_step_range_is_whole_range():
    r = EntryRange(2.0, 0.8)
    assert r.get_sub_range_with_steps(0, 9, 9) == r


def test_rng_stays_in_range_and_is_seeded():
    r = EntryRange(-10.0, 10.0)
    a = [r.rng(random.Random(7)) for _ in range(3)]
    b = [r.rng(random.Random(7)) for _ in range(3)]
    assert a == b
    gen = random.Random(1)
    for _ in range(200):
        assert -10.0 <= r.rng(gen) < 10.0


def test_rng_empty_range_raises():
    with pytest.raises(ValueError):
        EntryRange(2.0, 0.8).rng(random.Random(0))
    with pytest.raises(ValueError):
        EntryRange(1.0, 1.0).rng(random.Random(0))


def test_as_tuple_round_trip():
    r = EntryRange(0.4, 0.35)
    assert EntryRange(*r.as_tuple()) == r