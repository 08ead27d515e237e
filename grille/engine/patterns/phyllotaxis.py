"""Phyllotaxis — sunflower-seed spiral.

Point i sits at angle i * divergence and radius spacing * sqrt(i), which keeps
the area per point constant across the disk.
"""

from __future__ import annotations

import math

from grille.engine.config import PatternConfig
from grille.engine.registry import GeneratorKind, generator
from grille.utils.geometry import ORIGIN, Point

# Loosening near the edge is damped so the spiral doesn't visibly uncurl.
_TIGHTEN_FACTOR = 1.0
_LOOSEN_FACTOR = 0.2

SUGGESTED_ANGLES = [
    137.5,  # golden angle
    137.3,
    137.6,
    99.5,
    77.96,
]


def suggested_divergence_angles() -> list[float]:
    """Divergence angles that tend to give pleasing spirals."""
    return list(SUGGESTED_ANGLES)


@generator(
    name="phyllotaxis",
    kind=GeneratorKind.OUTER,
    description="Golden-angle spiral with constant area per hole",
)
def phyllotaxis(config: PatternConfig) -> list[Point]:
    if config.radius <= 0:
        return []

    spacing = config.base_spacing
    step = math.radians(config.divergence_angle)
    inner = config.effective_inner_radius
    keep_out = config.min_hole_distance if config.center_hole else 0.0
    min_r = max(inner, keep_out)

    points: list[Point] = []
    if config.center_hole:
        points.append(ORIGIN)

    for i in range(1 if config.center_hole else 0, config.num_points):
        angle = i * step
        r = spacing * math.sqrt(i)

        if config.get_spacing is not None and r > 0:
            local = config.get_spacing(r * math.cos(angle), r * math.sin(angle), spacing)
            ratio = local / spacing - 1
            factor = _TIGHTEN_FACTOR if ratio < 0 else _LOOSEN_FACTOR
            r *= 1 + factor * ratio

        if r > config.radius:
            break
        if r < min_r:
            continue
        points.append(Point(r * math.cos(angle), r * math.sin(angle)))

    return points
