"""Hex fill — density-scaled hex lattice, filtered against obstacles."""

from __future__ import annotations

import numpy as np
from scipy.spatial import cKDTree

from grille.engine.center_fill.relaxation import finish
from grille.engine.config import CenterFillConfig
from grille.engine.registry import GeneratorKind, generator
from grille.utils.geometry import ORIGIN, SQRT3, Point, hex_lattice, to_array
from grille.utils.spacing import DENSITY_COLLAPSE, hex_density_multiplier

# Candidates must sit inside this fraction of the fill radius.
_SAFE_RADIUS = 0.98
_CENTER_SNAP = 0.1


@generator(
    name="hex",
    kind=GeneratorKind.CENTER,
    description="Hex lattice with density-driven pitch",
)
def hex_fill(config: CenterFillConfig) -> list[Point]:
    radius = config.center_radius
    if radius <= 0:
        return []
    if config.density_factor <= DENSITY_COLLAPSE:
        return [ORIGIN] if config.center_hole else []

    base = config.base_spacing
    base_sq = base * base
    pitch = base * hex_density_multiplier(config.density_factor)
    row_height = pitch * SQRT3 / 2
    safe = radius * _SAFE_RADIUS
    obstacles = config.obstacles
    tree = cKDTree(to_array(obstacles)) if obstacles else None

    accepted: list[tuple[float, float]] = []
    if config.center_hole and (tree is None or tree.query((0.0, 0.0))[0] >= base):
        accepted.append((0.0, 0.0))

    for x, y in hex_lattice(pitch, safe):
        if x * x + y * y > safe * safe:
            continue
        if abs(x) < pitch * _CENTER_SNAP and abs(y) < row_height * _CENTER_SNAP:
            continue
        if any((x - ax) ** 2 + (y - ay) ** 2 < base_sq for ax, ay in accepted):
            continue
        if tree is not None and tree.query((x, y))[0] < base:
            continue
        accepted.append((float(x), float(y)))

    return finish("hex", np.array(accepted, dtype=np.float64).reshape(-1, 2), config, obstacles)
