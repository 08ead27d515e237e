"""Poisson-disc fill — blue-noise dart throwing with a uniform grid.

Classic active-list sampling: pick a random active point, throw candidates in
an annulus around it, keep the first one that clears every existing point
(5x5 grid-cell scan) and every obstacle. Density-aware: negative density
widens the spacing, positive density throws more darts per active point.

A requested center hole seeds the sampling at the origin unless an obstacle
sits within one spacing of it; then a random seed is used instead.
"""

from __future__ import annotations

import logging
import math

import numpy as np
from scipy.spatial import cKDTree

from grille.config import settings
from grille.engine.center_fill.relaxation import finish, make_rng
from grille.engine.config import CenterFillConfig
from grille.engine.registry import GeneratorKind, generator
from grille.utils.geometry import ORIGIN, Point, to_array
from grille.utils.spacing import DENSITY_COLLAPSE

logger = logging.getLogger(__name__)

# Candidate distance from the parent, in target spacings.
_RING = (1.001, 1.25)
# Candidates this far past the rim are clamped onto it instead of rejected.
_RIM_TOLERANCE = 0.02
# Without a center hole the seed lands in the outer band when obstacles exist
# (to match the outer pattern at the seam), otherwise near the middle.
_SEAM_BAND = (0.8, 1.0)
_CORE_BAND = (0.0, 0.5)
_SPARSE_STRETCH = 0.5


class _Grid:
    """Uniform grid over [-radius, radius]², each cell holding point indices.

    The side is capped; past the cap the cells grow instead so the grid still
    covers the disk and the 5x5 scan stays exact.
    """

    def __init__(self, radius: float, cell_size: float, max_side: int) -> None:
        self.radius = radius
        side = max(1, int(math.ceil(2 * radius / cell_size)))
        if side > max_side:
            side = max_side
            cell_size = 2 * radius / max_side
            logger.debug("poisson grid capped at %dx%d, cell size %.4f", side, side, cell_size)
        self.side = side
        self.cell_size = cell_size
        self.cells: list[list[int]] = [[] for _ in range(side * side)]

    def _coords(self, x: float, y: float) -> tuple[int, int]:
        gx = int((x + self.radius) // self.cell_size)
        gy = int((y + self.radius) // self.cell_size)
        return min(max(gx, 0), self.side - 1), min(max(gy, 0), self.side - 1)

    def insert(self, index: int, x: float, y: float) -> None:
        gx, gy = self._coords(x, y)
        self.cells[gy * self.side + gx].append(index)

    def is_clear(self, x: float, y: float, spacing: float, points: list[tuple[float, float]]) -> bool:
        gx, gy = self._coords(x, y)
        spacing_sq = spacing * spacing
        for cy in range(max(gy - 2, 0), min(gy + 3, self.side)):
            for cx in range(max(gx - 2, 0), min(gx + 3, self.side)):
                for idx in self.cells[cy * self.side + cx]:
                    px, py = points[idx]
                    if (x - px) ** 2 + (y - py) ** 2 < spacing_sq:
                        return False
        return True


def _clear_of_obstacles(tree: cKDTree | None, x: float, y: float, spacing: float) -> bool:
    if tree is None:
        return True
    dist, _ = tree.query((x, y))
    return dist >= spacing


def _initial_point(
    rng: np.random.Generator,
    radius: float,
    spacing: float,
    tree: cKDTree | None,
    attempts: int,
) -> tuple[float, float] | None:
    bands = [_SEAM_BAND, (0.0, 1.0)] if tree is not None else [_CORE_BAND]
    for lo, hi in bands:
        for _ in range(attempts):
            r = radius * (lo + (hi - lo) * rng.random())
            angle = rng.random() * 2 * math.pi
            x, y = r * math.cos(angle), r * math.sin(angle)
            if _clear_of_obstacles(tree, x, y, spacing):
                return x, y
    return None


@generator(
    name="poisson",
    kind=GeneratorKind.CENTER,
    description="Poisson-disc blue-noise sampling with grid acceleration",
)
def poisson_fill(config: CenterFillConfig) -> list[Point]:
    radius = config.center_radius
    if radius <= 0:
        return []
    density = config.density_factor
    if density <= DENSITY_COLLAPSE:
        return [ORIGIN] if config.center_hole else []

    target = config.base_spacing * (1 + _SPARSE_STRETCH * max(0.0, -density))
    attempts = max(1, int(round(config.poisson_attempts * (1 + max(0.0, density)))))
    rng = make_rng(config.seed)
    obstacles = config.obstacles
    tree = cKDTree(to_array(obstacles)) if obstacles else None
    grid = _Grid(radius, target / math.sqrt(2), settings.poisson_max_grid)

    points: list[tuple[float, float]] = []
    active: list[int] = []

    def add(x: float, y: float) -> None:
        points.append((x, y))
        grid.insert(len(points) - 1, x, y)
        active.append(len(points) - 1)

    if config.center_hole and _clear_of_obstacles(tree, 0.0, 0.0, target):
        add(0.0, 0.0)
    else:
        first = _initial_point(rng, radius, target, tree, attempts)
        if first is None:
            logger.debug("poisson: no obstacle-free seed inside r=%.3f", radius)
            return []
        add(*first)

    rim = radius * (1 + _RIM_TOLERANCE)
    failures = 0
    while active and failures < settings.poisson_failure_budget:
        slot = int(rng.integers(len(active)))
        px, py = points[active[slot]]
        angles = rng.random(attempts) * 2 * math.pi
        dists = target * rng.uniform(_RING[0], _RING[1], attempts)

        placed = False
        for angle, dist in zip(angles, dists):
            x = px + dist * math.cos(angle)
            y = py + dist * math.sin(angle)
            r = math.hypot(x, y)
            if r > rim:
                continue
            if r > radius:
                x *= radius / r
                y *= radius / r
            if not grid.is_clear(x, y, target, points):
                continue
            if not _clear_of_obstacles(tree, x, y, target):
                continue
            add(x, y)
            placed = True
            break

        if placed:
            failures = 0
        else:
            active[slot] = active[-1]
            active.pop()
            failures += 1

    return finish("poisson", np.array(points, dtype=np.float64).reshape(-1, 2), config, obstacles)
