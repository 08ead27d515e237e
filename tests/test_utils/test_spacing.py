"""Tests for spacing and density adapters."""

import math

import pytest

from grille.utils.spacing import (
    concentric_density_warp,
    density_scale_exponential,
    density_scale_linear,
    hex_density_multiplier,
    hole_size,
    radial_multiplier,
    radial_spacing,
    ring_multiplier,
)


def test_radial_multiplier_neutral_at_half_radius():
    for scale_type in ("linear", "exponential"):
        assert radial_multiplier(0.5, 0.8, scale_type) == pytest.approx(1.0)
    assert radial_multiplier(0.9, 0.0) == 1.0


def test_radial_multiplier_linear():
    assert radial_multiplier(0.0, 0.5) == pytest.approx(1.5)
    assert radial_multiplier(1.0, 0.5) == pytest.approx(0.5)
    assert radial_multiplier(0.0, -0.5) == pytest.approx(0.5)
    # Floored so holes never vanish
    assert radial_multiplier(1.0, 1.0) == pytest.approx(0.1)


def test_radial_multiplier_exponential():
    assert radial_multiplier(0.0, 0.5, "exponential") == pytest.approx(math.exp(0.5))
    assert radial_multiplier(1.0, 1.0, "exponential") == pytest.approx(math.exp(-1))


def test_hole_size():
    assert hole_size(0, 0, 2.0, 50, 0.5) == pytest.approx(3.0)
    assert hole_size(50, 0, 2.0, 50, 0.5) == pytest.approx(1.0)
    assert hole_size(10, 10, 2.0, 50, 0.0) == 2.0
    assert hole_size(10, 10, 2.0, 0, 0.5) == 2.0


def test_radial_spacing_callback():
    fn = radial_spacing(100, -0.5)
    assert fn(0, 0, 10) == pytest.approx(5.0)
    assert fn(0, 100, 10) == pytest.approx(15.0)


def test_ring_multiplier():
    assert ring_multiplier(0) == 1
    assert ring_multiplier(1) == 3
    assert ring_multiplier(-2) == pytest.approx(0.5)


def test_hex_density_multiplier():
    assert hex_density_multiplier(0) == pytest.approx(1.6)
    assert hex_density_multiplier(-1) == pytest.approx(3.0)
    assert hex_density_multiplier(1) == pytest.approx(1.001)
    values = [hex_density_multiplier(d / 10) for d in range(-10, 11)]
    assert values == sorted(values, reverse=True)
    assert min(values) > 1


def test_concentric_density_warp():
    assert concentric_density_warp(0) == 0
    assert concentric_density_warp(-1) == pytest.approx(-(0.5**0.7))
    assert concentric_density_warp(1) == pytest.approx(0.5**1.5)


def test_density_scales():
    assert density_scale_linear(-0.5) == 0.5
    assert density_scale_exponential(1) == 2
    assert density_scale_exponential(-1) == 0.5
