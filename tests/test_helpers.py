"""Tests for the geometry helpers."""

import math

import pytest

from arena_server.utils.helpers import (
    angular_delta,
    bearing,
    calculate_distance,
    coerce_number,
    normalize_angle,
)

ANGLES = [
    -3 * math.pi,
    -2 * math.pi,
    -math.pi,
    -math.pi / 2,
    -0.1,
    0.0,
    0.1,
    math.pi / 3,
    math.pi,
    1.5 * math.pi,
    2 * math.pi,
    7.25,
    -9.5,
]


@pytest.mark.parametrize("a", ANGLES)
@pytest.mark.parametrize("b", ANGLES)
def test_angular_delta_is_in_half_open_range_and_congruent(a, b):
    delta = angular_delta(a, b)
    assert -math.pi < delta <= math.pi
    assert math.isclose(math.sin(delta), math.sin(a - b), abs_tol=1e-9)
    assert math.isclose(math.cos(delta), math.cos(a - b), abs_tol=1e-9)


def test_normalize_angle_maps_minus_pi_to_pi():
    assert normalize_angle(-math.pi) == pytest.approx(math.pi)


def test_normalize_angle_leaves_in_range_values_untouched():
    assert normalize_angle(math.pi / 2) == math.pi / 2
    assert normalize_angle(math.pi) == math.pi


def test_wraparound_across_pi_boundary_is_small():
    # Facing just under +π, target just over -π: they are almost aligned.
    delta = angular_delta(-math.pi + 0.05, math.pi - 0.05)
    assert delta == pytest.approx(0.1)


def test_distance_and_bearing():
    assert calculate_distance(0, 0, 3, 4) == 5
    assert bearing(0, 0, 0, 10) == math.pi / 2
    assert bearing(0, 0, -10, 0) == math.pi


@pytest.mark.parametrize(
    "value, expected",
    [
        (1, 1.0),
        (2.5, 2.5),
        (-3, -3.0),
        (True, None),
        ("12", None),
        (None, None),
        (float("nan"), None),
        (float("inf"), None),
        ([1], None),
        (10**400, None),
        (-(10**400), None),
    ],
)
def test_coerce_number(value, expected):
    assert coerce_number(value) == expected
