"""Concentric rings — evenly spaced holes on rings of growing radius."""

from __future__ import annotations

import math

from grille.engine.config import PatternConfig
from grille.engine.registry import GeneratorKind, generator
from grille.utils.geometry import ORIGIN, Point
from grille.utils.spacing import ring_multiplier

# Base spacing = hole_radius * (_BASE_OFFSET + spacing_factor)
_BASE_OFFSET = 3.0


def optimal_ring_spacing(hole_radius: float, min_clearance: float) -> float:
    """Slightly more than one hole diameter plus clearance between rings."""
    return (2 * hole_radius + min_clearance) * 1.1


@generator(
    name="concentric",
    kind=GeneratorKind.OUTER,
    description="Concentric rings of evenly spaced holes",
)
def concentric(config: PatternConfig) -> list[Point]:
    if config.radius <= 0:
        return []

    base = config.hole_radius * (_BASE_OFFSET + config.spacing_factor)
    if config.concentric_spacing is not None and config.concentric_spacing > 0:
        ring_spacing = config.concentric_spacing
    else:
        ring_spacing = base * ring_multiplier(config.ring_spacing_factor)
    point_spacing = base * ring_multiplier(config.point_spacing_factor)
    if ring_spacing <= 0 or point_spacing <= 0:
        return [ORIGIN] if config.center_hole else []

    points: list[Point] = []
    r = max(config.effective_inner_radius, config.hole_radius if config.center_hole else 0.0)
    if config.center_hole:
        points.append(ORIGIN)
        r += ring_spacing

    while r <= config.radius:
        ring_step = config.spacing_at(r, 0.0, ring_spacing)
        arc_step = config.spacing_at(r, 0.0, point_spacing)
        if ring_step <= 0 or arc_step <= 0:
            break

        count = max(1, int(math.floor(2 * math.pi * r / arc_step)))
        angle_step = 2 * math.pi / count
        for i in range(count):
            angle = i * angle_step
            points.append(Point(r * math.cos(angle), r * math.sin(angle)))

        r += ring_step

    return points
