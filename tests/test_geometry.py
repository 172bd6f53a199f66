import math
import pytest
from src.fingerspell.config import ClassifierConfig
from src.fingerspell.geometry import (
    distance, distance_2d, hand_size, hand_shape, is_extended, is_extended_from_wrist, is_valid,
)


def test_distance_2d_ignores_depth():
    assert distance_2d((0.0, 0.0, 5.0), (0.3, 0.4, -5.0)) == pytest.approx(0.5)


def test_distance_depth_weighted():
    points = [(0.0, 0.0, 0.0), (0.0, 0.0, 0.1)]
    assert distance(points, 0, 1) == 0.0
    assert distance(points, 0, 1, use_depth=True) == pytest.approx(0.2)
    assert distance(points, 0, 1, use_depth=True, depth_weight=1.0) == pytest.approx(0.1)


def test_distance_depth_missing_z_counts_as_zero():
    points = [(0.0, 0.0), (0.3, 0.4)]
    assert distance(points, 0, 1, use_depth=True) == pytest.approx(0.5)


def test_hand_size(make_hand):
    assert hand_size(make_hand()) == pytest.approx(0.2)


def test_is_extended(make_hand):
    points = make_hand("1000")
    size = hand_size(points)
    assert is_extended(points, 8, 5, size, 0.6)
    assert not is_extended(points, 12, 9, size, 0.6)
    # Tip is 0.7 hand sizes out, so a 0.75 ratio rejects it
    assert not is_extended(points, 8, 5, size, 0.75)


def test_is_extended_from_wrist(make_hand):
    points = make_hand("1000")
    assert is_extended_from_wrist(points, 8, 5)
    assert not is_extended_from_wrist(points, 12, 9)


@pytest.mark.parametrize("pattern", ["0000", "1000", "1100", "1110", "1111", "0111", "0001", "1010"])
def test_hand_shape_pattern(make_hand, pattern):
    shape = hand_shape(make_hand(pattern))
    assert shape.pattern == pattern
    assert shape.all_extended == (pattern == "1111")
    assert shape.hand_size == pytest.approx(0.2)


@pytest.mark.parametrize("pattern", ["0000", "1010", "1111"])
def test_hand_shape_wrist_mode(make_hand, pattern):
    cfg = ClassifierConfig(extension_mode="wrist")
    assert hand_shape(make_hand(pattern), cfg).pattern == pattern


def test_per_finger_ratio(make_hand):
    cfg = ClassifierConfig(pinky_extension=0.8)
    assert hand_shape(make_hand("1111"), cfg).pattern == "1110"


def test_hand_shape_invalid():
    assert hand_shape([(0.1, 0.2)] * 5) is None
    assert hand_shape([(0.5, 0.5)] * 21) is None  # zero hand size


def test_is_valid():
    assert is_valid([(0.1, 0.2)] * 21)
    assert is_valid([(0.1, 0.2, 0.3)] * 25)
    assert not is_valid([(0.1, 0.2)] * 20)
    assert not is_valid([(0.1, math.inf)] * 21)
    assert not is_valid([(0.1, 0.2, float("nan"))] * 21)
    assert not is_valid(None)


def test_missing_depth_is_valid():
    assert is_valid([(0.1, 0.2, None)] * 21)
    assert not is_valid([(None, 0.2, 0.0)] * 21)


def test_distance_depth_none_counts_as_zero():
    points = [(0.0, 0.0, None), (0.3, 0.4, 0.0)]
    assert distance(points, 0, 1, use_depth=True) == pytest.approx(0.5)
