"""Shared test fixtures."""

from __future__ import annotations

import math

import pytest

from grille.engine.config import CenterFillConfig, PatternConfig
from grille.main import register_generators
from grille.utils.geometry import Point

# Tolerance for floating-point distance comparisons
EPS = 1e-9

OUTER_PATTERNS = ["phyllotaxis", "fermat", "concentric", "hex"]
CENTER_ALGORITHMS = ["force", "adaptiveForce", "poisson", "hex", "concentric"]
DENSITY_AWARE = ["force", "poisson", "hex", "concentric"]

register_generators()


def ring_points(radius: float, count: int) -> list[Point]:
    """Evenly spaced points on a circle, used as obstacle rings."""
    return [
        Point(radius * math.cos(2 * math.pi * i / count), radius * math.sin(2 * math.pi * i / count))
        for i in range(count)
    ]


def make_pattern_config(**overrides) -> PatternConfig:
    params = dict(radius=50.0, hole_radius=2.0, min_clearance=1.0, spacing=6.0, num_points=2000)
    params.update(overrides)
    return PatternConfig(**params)


def make_fill_config(**overrides) -> CenterFillConfig:
    # base spacing = 2 * 1 + 2 = 4
    params = dict(center_radius=30.0, min_distance=2.0, hole_radius=1.0, seed=1234)
    params.update(overrides)
    return CenterFillConfig(**params)


@pytest.fixture
def pattern_config() -> PatternConfig:
    return make_pattern_config()


@pytest.fixture
def fill_config() -> CenterFillConfig:
    return make_fill_config()


@pytest.fixture
def obstacle_ring() -> list[Point]:
    """Outer holes sitting just outside a 30-unit center disk."""
    return ring_points(31.0, 48)
