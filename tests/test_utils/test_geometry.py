"""Tests for geometry helpers."""

import math

import numpy as np
import pytest

from grille.utils.geometry import (
    ORIGIN,
    Point,
    annulus_filter,
    count_overlaps,
    distance_sq,
    from_array,
    hex_lattice,
    min_pairwise_distance,
    radii,
    random_in_disk,
    to_array,
    within_radius,
)
from grille.utils.math_helpers import clamp, hex_capacity, hex_cell_area


def test_point_basics():
    p = Point(3, 4)
    assert p.magnitude == 5
    assert p.distance_to(ORIGIN) == 5
    assert distance_sq(p, Point(0, 4)) == 9
    assert {p, Point(3, 4)} == {p}


def test_within_radius_is_closed():
    assert within_radius(Point(3, 4), 5)
    assert not within_radius(Point(3, 4.001), 5)


def test_array_conversion():
    assert to_array([]).shape == (0, 2)
    points = [Point(1, 2), Point(-3, 0.5)]
    assert from_array(to_array(points)) == points
    assert radii(points)[0] == pytest.approx(math.sqrt(5))


def test_annulus_filter_inclusive():
    points = [Point(1, 0), Point(2, 0), Point(0, 3), Point(4, 0)]
    assert annulus_filter(points, 2, 3) == [Point(2, 0), Point(0, 3)]


def test_min_pairwise_distance():
    assert min_pairwise_distance([ORIGIN]) == float("inf")
    assert min_pairwise_distance([ORIGIN, Point(0, 2), Point(5, 0)]) == pytest.approx(2.0)


def test_count_overlaps():
    points = [ORIGIN, Point(1, 0), Point(2, 0)]
    # Pairs exactly at the limit are not overlaps
    assert count_overlaps(points, 1.0) == 0
    assert count_overlaps(points, 1.5) == 2
    assert count_overlaps(points, 1.5, obstacles=[Point(3, 1)]) == 3
    assert count_overlaps([], 1.5) == 0


def test_hex_lattice():
    lattice = hex_lattice(2.0, 10.0)
    points = from_array(lattice)
    assert ORIGIN in points
    assert min_pairwise_distance(points) == pytest.approx(2.0)
    assert np.abs(lattice).max(axis=0)[0] >= 10
    assert hex_lattice(0, 10).shape == (0, 2)


def test_random_in_disk_bounds():
    rng = np.random.default_rng(0)
    samples = random_in_disk(rng, 500, 10.0, 4.0)
    r = np.hypot(samples[:, 0], samples[:, 1])
    assert samples.shape == (500, 2)
    assert r.min() >= 4.0 - 1e-9
    assert r.max() <= 10.0 + 1e-9
    # Uniform by area: about (100 - 49) / 84 of the annulus lies beyond r=7
    assert 0.5 < np.mean(r > 7) < 0.72


def test_math_helpers():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert hex_cell_area(2) == pytest.approx(2 * math.sqrt(3))
    assert hex_capacity(100, 0) == 0
    assert hex_capacity(2 * math.sqrt(3) * 10.5, 2) == 10
