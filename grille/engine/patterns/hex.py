"""Hex grid — offset-row lattice clipped to the grille disk.

Cell width is twice the (possibly position-dependent) spacing; spacing is
re-evaluated at each candidate's approximate position before placement.
"""

from __future__ import annotations

import math

from grille.engine.config import PatternConfig
from grille.engine.registry import GeneratorKind, generator
from grille.utils.geometry import ORIGIN, SQRT3, Point

# Lattice is built over a square this much larger than the disk.
_COVERAGE = 1.5
# Candidates within this fraction of a cell of the origin count as "the center".
_CENTER_SNAP = 0.1


@generator(
    name="hex",
    kind=GeneratorKind.OUTER,
    description="Hexagonal lattice clipped to the disk",
)
def hex_grid(config: PatternConfig) -> list[Point]:
    if config.radius <= 0:
        return []

    spacing = config.base_spacing

    def cell(x: float, y: float) -> tuple[float, float]:
        width = 2 * config.spacing_at(x, y, spacing)
        return width, width * SQRT3 / 2

    width0, height0 = cell(0.0, 0.0)
    if width0 <= 0:
        return [ORIGIN] if config.center_hole else []

    span = config.radius * _COVERAGE * 2
    half_rows = int(math.ceil(span / height0)) // 2
    half_cols = int(math.ceil(span / width0)) // 2
    inner = config.effective_inner_radius
    outer = config.radius - config.hole_radius

    points: list[Point] = []
    if config.center_hole:
        points.append(ORIGIN)

    for row in range(-half_rows, half_rows + 1):
        for col in range(-half_cols, half_cols + 1):
            width, height = cell(col * width0, row * height0)
            x = col * width + (row % 2) * width / 2
            y = row * height

            d = math.hypot(x, y)
            if d < inner or d > outer:
                continue
            # The origin is either the explicit center hole or left empty
            if abs(x) < width * _CENTER_SNAP and abs(y) < height * _CENTER_SNAP:
                continue
            points.append(Point(x, y))

    return points
