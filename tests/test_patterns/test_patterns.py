"""Tests for the outer pattern generators."""

import math

import pytest

from grille.engine.config import PatternConfig
from grille.engine.patterns.concentric import concentric, optimal_ring_spacing
from grille.engine.patterns.fermat import fermat
from grille.engine.patterns.hex import hex_grid
from grille.engine.patterns.phyllotaxis import phyllotaxis, suggested_divergence_angles
from grille.utils.geometry import ORIGIN, min_pairwise_distance, radii
from tests.conftest import EPS, OUTER_PATTERNS, make_pattern_config

GENERATORS = {
    "phyllotaxis": phyllotaxis,
    "fermat": fermat,
    "concentric": concentric,
    "hex": hex_grid,
}


@pytest.mark.parametrize("name", OUTER_PATTERNS)
def test_inside_radius(name):
    config = make_pattern_config(radius=40, hole_radius=1.5, spacing=5)
    points = GENERATORS[name](config)
    assert points
    assert all(p.magnitude <= 40 + EPS for p in points)


@pytest.mark.parametrize("name", OUTER_PATTERNS)
def test_center_hole_first_and_clear(name):
    config = make_pattern_config(radius=40, hole_radius=1.5, min_clearance=1, spacing=5, center_hole=True)
    points = GENERATORS[name](config)
    assert points[0] == ORIGIN
    assert all(p.magnitude >= config.min_hole_distance - EPS for p in points[1:])


@pytest.mark.parametrize("name", OUTER_PATTERNS)
def test_inner_radius_respected(name):
    config = make_pattern_config(radius=50, hole_radius=1.5, spacing=5, center_exclusion=15)
    points = GENERATORS[name](config)
    assert points
    assert all(p.magnitude >= 15 - EPS for p in points)


@pytest.mark.parametrize("name", ["phyllotaxis", "concentric", "hex"])
def test_deterministic(name):
    config = make_pattern_config()
    assert GENERATORS[name](config) == GENERATORS[name](config)


# --- phyllotaxis ---


def test_phyllotaxis_sunflower():
    config = PatternConfig(radius=100, hole_radius=4, spacing=10, divergence_angle=137.5, num_points=50)
    points = phyllotaxis(config)

    assert len(points) == 50
    assert points[0] == ORIGIN
    r = radii(points)
    assert all(r[i] <= r[i + 1] for i in range(len(r) - 1))
    assert r[9] == pytest.approx(30.0)
    assert min_pairwise_distance(points) >= 2 * config.hole_radius - EPS


def test_phyllotaxis_stops_at_radius():
    config = PatternConfig(radius=30, hole_radius=2, spacing=10, num_points=2000)
    points = phyllotaxis(config)
    # r = 10 * sqrt(i) <= 30 for i = 0..9
    assert len(points) == 10


def test_phyllotaxis_angle():
    config = PatternConfig(radius=100, hole_radius=1, spacing=10, divergence_angle=90, num_points=3)
    points = phyllotaxis(config)
    assert points[1].x == pytest.approx(0.0, abs=1e-9)
    assert points[1].y == pytest.approx(10.0)
    assert points[2].x == pytest.approx(-10 * math.sqrt(2))


def test_phyllotaxis_spacing_callback():
    base = PatternConfig(radius=100, hole_radius=1, spacing=10, num_points=20)
    tight = PatternConfig(radius=100, hole_radius=1, spacing=10, num_points=20, get_spacing=lambda x, y, s: s * 0.5)
    loose = PatternConfig(radius=100, hole_radius=1, spacing=10, num_points=20, get_spacing=lambda x, y, s: s * 2)
    r_base = radii(phyllotaxis(base))
    # Tightening applies in full, loosening is damped to a fifth
    assert radii(phyllotaxis(tight))[4] == pytest.approx(r_base[4] * 0.5)
    assert radii(phyllotaxis(loose))[4] == pytest.approx(r_base[4] * 1.2)


def test_suggested_angles():
    angles = suggested_divergence_angles()
    assert angles[0] == 137.5
    angles.append(1.0)
    assert 1.0 not in suggested_divergence_angles()


# --- fermat ---


def test_fermat_local_spacing():
    config = PatternConfig(radius=100, hole_radius=3, spacing=10, num_points=2000)
    points = fermat(config)
    assert len(points) > 20
    # Each point clears the eight points emitted just before it
    for k, p in enumerate(points):
        for q in points[max(0, k - 8) : k]:
            assert p.distance_to(q) >= 8 - EPS


def test_fermat_point_cap():
    config = PatternConfig(radius=100, hole_radius=3, spacing=10, num_points=25)
    assert len(fermat(config)) == 25


def test_fermat_spacing_callback_ratio_clamped():
    def config(factor):
        return PatternConfig(radius=1000, hole_radius=3, spacing=10, num_points=40, get_spacing=lambda x, y, s: s * factor)

    assert fermat(config(100)) == fermat(config(3))
    assert fermat(config(0.01)) == fermat(config(0.6))
    assert fermat(config(3)) != fermat(config(1))


# --- concentric ---


def test_concentric_rings():
    config = PatternConfig(radius=50, hole_radius=2, min_clearance=1)
    points = concentric(config)
    # Base spacing 6: a single point at r=0, then floor(2 pi k) points on ring k=1..8
    assert len(points) == 1 + sum(math.floor(2 * math.pi * k) for k in range(1, 9))
    assert points[0] == ORIGIN
    assert sorted({round(p.magnitude, 6) for p in points}) == [6.0 * k for k in range(9)]
    assert min_pairwise_distance(points) >= 2 * config.hole_radius - EPS


def test_concentric_center_hole_offsets_rings():
    config = PatternConfig(radius=50, hole_radius=2, min_clearance=1, center_hole=True)
    points = concentric(config)
    ring_radii = sorted({round(p.magnitude, 6) for p in points})
    assert ring_radii == [0.0, 8.0, 14.0, 20.0, 26.0, 32.0, 38.0, 44.0, 50.0]


def test_concentric_ring_factor():
    config = PatternConfig(radius=50, hole_radius=2, ring_spacing_factor=1.0)
    ring_radii = sorted({round(p.magnitude, 6) for p in concentric(config)})
    assert ring_radii == [0.0, 18.0, 36.0]


def test_concentric_explicit_spacing():
    config = PatternConfig(radius=50, hole_radius=2, concentric_spacing=12.5)
    ring_radii = sorted({round(p.magnitude, 6) for p in concentric(config)})
    assert ring_radii == [0.0, 12.5, 25.0, 37.5, 50.0]


def test_concentric_spacing_callback():
    config = PatternConfig(radius=50, hole_radius=2, get_spacing=lambda x, y, s: 10.0)
    ring_radii = sorted({round(p.magnitude, 6) for p in concentric(config)})
    assert ring_radii == [0.0, 10.0, 20.0, 30.0, 40.0, 50.0]


def test_negative_point_factor_packs_tighter():
    loose = concentric(PatternConfig(radius=50, hole_radius=2))
    dense = concentric(PatternConfig(radius=50, hole_radius=2, point_spacing_factor=-1.0))
    assert len(dense) > len(loose)


def test_optimal_ring_spacing():
    assert optimal_ring_spacing(2, 1) == pytest.approx(5.5)


# --- hex ---


def test_hex_lattice_spacing():
    config = PatternConfig(radius=50, hole_radius=2, spacing=4)
    points = hex_grid(config)
    assert ORIGIN not in points
    assert all(p.magnitude <= 48 + EPS for p in points)
    assert min_pairwise_distance(points) == pytest.approx(8.0)


def test_hex_center_hole_single_origin():
    config = PatternConfig(radius=50, hole_radius=2, min_clearance=1, spacing=4, center_hole=True)
    points = hex_grid(config)
    assert points[0] == ORIGIN
    assert points.count(ORIGIN) == 1
    assert min_pairwise_distance(points) == pytest.approx(8.0)
