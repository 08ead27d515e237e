"""Concentric fill — rings outward from the center, filtered against obstacles.

No force correction: every ring point that lands within one base spacing of
an obstacle is simply dropped.

Spacing is never tighter than touching holes, so only the negative half of
the density factor has an effect here; any positive value lays out exactly
like zero.
"""

from __future__ import annotations

import math

import numpy as np
from scipy.spatial import cKDTree

from grille.engine.center_fill.relaxation import finish
from grille.engine.config import CenterFillConfig
from grille.engine.registry import GeneratorKind, generator
from grille.utils.geometry import ORIGIN, Point, to_array
from grille.utils.spacing import DENSITY_COLLAPSE, concentric_density_warp


def ring_spacing(config: CenterFillConfig) -> float:
    """Radial (and along-ring) spacing; never tighter than touching holes."""
    base = config.base_spacing
    return max(base * (1 - concentric_density_warp(config.density_factor)), base)


def _ring_count(r: float, spacing: float) -> int:
    """Most points that fit on a ring of radius r with chords of at least `spacing`."""
    if r <= 0:
        return 0
    if spacing >= 2 * r:
        return 1
    return int(math.floor(math.pi / math.asin(spacing / (2 * r))))


@generator(
    name="concentric",
    kind=GeneratorKind.CENTER,
    description="Concentric rings with power-law density warp",
)
def concentric_fill(config: CenterFillConfig) -> list[Point]:
    radius = config.center_radius
    if radius <= 0:
        return []
    if config.density_factor <= DENSITY_COLLAPSE:
        return [ORIGIN] if config.center_hole else []

    base = config.base_spacing
    spacing = ring_spacing(config)
    obstacles = config.obstacles
    tree = cKDTree(to_array(obstacles)) if obstacles else None

    def clear(x: float, y: float) -> bool:
        return tree is None or tree.query((x, y))[0] >= base

    accepted: list[tuple[float, float]] = []
    if config.center_hole and clear(0.0, 0.0):
        accepted.append((0.0, 0.0))

    r = spacing if config.center_hole else config.hole_radius + 2 * config.min_distance
    while r <= radius:
        count = _ring_count(r, spacing)
        if count > 0:
            step = 2 * math.pi / count
            for i in range(count):
                x = r * math.cos(i * step)
                y = r * math.sin(i * step)
                if clear(x, y):
                    accepted.append((x, y))
        r += spacing

    return finish("concentric", np.array(accepted, dtype=np.float64).reshape(-1, 2), config, obstacles)
