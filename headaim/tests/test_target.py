import random

import pytest

from headaim.core.geometry import Vector3
from headaim.core.target import TargetController


def test_clamps_at_room_edge():
    t = TargetController(upper=(10, 10, 10), home=(9, 0, 0), speed=1.0)
    assert t.integrate((1, 0, 0)) == Vector3(10, 0, 0)
    assert t.integrate((1, 0, 0)) == Vector3(10, 0, 0)
    assert t.snapshot() == Vector3(10, 0, 0)


def test_zero_sample_is_noop():
    t = TargetController(upper=(10, 10, 10), home=(1.25, 3.5, 7.75), speed=2.5)
    before = t.snapshot()
    for _ in range(100):
        t.integrate((0, 0, 0))
    assert t.snapshot() == before


def test_speed_scales_sample():
    t = TargetController(upper=(10, 10, 10), home=(5, 5, 5), speed=2.0)
    assert t.integrate((0.5, -1.0, 0.25)) == Vector3(6.0, 3.0, 5.5)


def test_position_always_in_bounds():
    rng = random.Random(1234)
    t = TargetController(upper=(4, 6, 3), home=(2, 3, 1), speed=1.5, lower=(-1, 0, 0.5))
    for _ in range(2000):
        pos = t.integrate((rng.uniform(-1, 1), rng.uniform(-1, 1), rng.uniform(-1, 1)))
        assert -1 <= pos.x <= 4
        assert 0 <= pos.y <= 6
        assert 0.5 <= pos.z <= 3
        assert t.contains(pos)


def test_home_is_clamped_into_room():
    t = TargetController(upper=(10, 10, 10), home=(20, -5, 5))
    assert t.snapshot() == Vector3(10, 0, 5)
    t.integrate((-1, 1, 0))
    assert t.home() == Vector3(10, 0, 5)


def test_move_to_clamps():
    t = TargetController(upper=(10, 10, 10), home=(0, 0, 0))
    assert t.move_to((11, 5, -3)) == Vector3(10, 5, 0)


def test_non_finite_sample_rejected():
    t = TargetController(upper=(10, 10, 10), home=(5, 5, 5))
    with pytest.raises(ValueError):
        t.integrate((float("nan"), 0, 0))
    assert t.snapshot() == Vector3(5, 5, 5)


def test_invalid_construction():
    with pytest.raises(ValueError):
        TargetController(upper=(10, 10, 10), speed=-1)
    with pytest.raises(ValueError):
        TargetController(upper=(1, 1, 1), lower=(2, 0, 0))
