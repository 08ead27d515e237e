"""Force fill — lattice seed relaxed by inverse-cube repulsion.

Target count comes from the outer pattern's density in the buffer annulus
just outside the fill disk, scaled exponentially by the density factor.
Excess seed points are removed by greedy declustering (most crowded point
first); missing ones are added by max-min-distance sampling.

Spacing is best effort: when the iteration budget runs out before the
layout settles, some pairs can remain closer than the base spacing.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from grille.engine.center_fill.relaxation import (
    MAX_STEP,
    RelaxationStats,
    add_farthest,
    buffer_area_per_point,
    cap_steps,
    decluster,
    finish,
    lattice_seed,
    make_rng,
    norms,
    packing_ceiling,
    repulsion,
)
from grille.engine.config import CenterFillConfig
from grille.engine.registry import GeneratorKind, generator
from grille.utils.geometry import ORIGIN, Point, to_array
from grille.utils.math_helpers import clamp, disk_area, hex_cell_area
from grille.utils.spacing import DENSITY_COLLAPSE, density_scale_exponential

_EXPONENT = 3.0
_DAMPING = 0.05
_DECAY = 0.95
# Converged once no point moves more than this fraction of the base spacing.
_TOLERANCE = 0.01
# Hard clamp: points stay inside this fraction of the fill radius.
_CLAMP = 0.99
_TARGET_HEADROOM = 1.1
# Containment: strong inward push past 95% of the radius, mild outward drift from 70%.
_EDGE_PUSH_START = 0.95
_EDGE_PUSH_RATE = 10.0
_EDGE_DRIFT_START = 0.7
_EDGE_DRIFT_RATE = 0.2

_ADD_CANDIDATES = 64
_ADD_MIN_GAP = 0.5
_ADD_PATIENCE = 20


def available_area(config: CenterFillConfig) -> float:
    area = disk_area(config.center_radius)
    if config.center_hole:
        area -= disk_area(config.base_spacing)
    return max(area, 0.0)


def force_target(config: CenterFillConfig, obstacles: list[Point]) -> int:
    """Number of non-center points the force fill aims for."""
    raw = available_area(config) / buffer_area_per_point(config, obstacles) * _TARGET_HEADROOM
    scaled = math.floor(raw * density_scale_exponential(config.density_factor))
    ceiling = packing_ceiling(config.center_radius, config.base_spacing, config.center_hole)
    return int(clamp(scaled, 1, ceiling))


def _containment(positions: NDArray[np.float64], radius: float, base: float) -> NDArray[np.float64]:
    d = norms(positions)
    ratio = d / radius
    unit = positions / np.where(d > 0, d, 1.0)[:, None]
    push = np.zeros_like(d)
    edge = ratio > _EDGE_PUSH_START
    push[edge] = -np.exp(_EDGE_PUSH_RATE * (ratio[edge] - _EDGE_PUSH_START))
    drift = (ratio > _EDGE_DRIFT_START) & ~edge
    push[drift] = (ratio[drift] - _EDGE_DRIFT_START) * _EDGE_DRIFT_RATE
    return unit * (push * base)[:, None]


def _relax(
    positions: NDArray[np.float64],
    obstacles: NDArray[np.float64],
    config: CenterFillConfig,
    pinned: int,
) -> RelaxationStats:
    """Relax `positions` in place."""
    stats = RelaxationStats()
    if len(positions) <= pinned or config.force_strength <= 0:
        return stats

    base = config.base_spacing
    limit = config.center_radius * _CLAMP
    keep_out = base if pinned else 0.0
    movable = np.arange(len(positions)) >= pinned

    for iteration in range(config.max_iterations):
        forces = repulsion(positions, positions, base, _EXPONENT)
        forces += repulsion(positions, obstacles, base, _EXPONENT)
        forces *= config.force_strength
        forces += _containment(positions, config.center_radius, base)

        damping = _DAMPING * _DECAY**iteration
        moves = cap_steps(forces * damping, base * MAX_STEP)
        moves[~movable] = 0.0
        updated = positions + moves

        if keep_out > 0:
            d = norms(updated)
            too_close = movable & (d > 0) & (d < keep_out)
            updated[too_close] *= (keep_out / d[too_close])[:, None]
        d = norms(updated)
        outside = d > limit
        updated[outside] *= (limit / d[outside])[:, None]

        step = float(norms(updated - positions).max())
        positions[:] = updated
        stats.iterations = iteration + 1
        stats.max_move = step
        if step < base * _TOLERANCE:
            stats.converged = True
            break

    return stats


@generator(
    name="force",
    kind=GeneratorKind.CENTER,
    description="Lattice seed relaxed by inverse-cube repulsion",
)
def force_fill(config: CenterFillConfig) -> list[Point]:
    if config.center_radius <= 0:
        return []
    if config.density_factor <= DENSITY_COLLAPSE:
        return [ORIGIN] if config.center_hole else []

    base = config.base_spacing
    obstacles = config.obstacles
    obstacle_xy = to_array(obstacles)
    rng = make_rng(config.seed)
    target = force_target(config, obstacles)
    limit = config.center_radius * _CLAMP
    keep_out = base if config.center_hole else 0.0

    pitch = max(base, math.sqrt(max(available_area(config), hex_cell_area(base)) / (target * hex_cell_area(1.0))))
    seed = lattice_seed(pitch, limit, keep_out=keep_out, obstacles=obstacle_xy, clearance=base)
    if len(seed) > target:
        seed = decluster(seed, target, base)
    elif len(seed) < target:
        seed = add_farthest(
            seed,
            target,
            limit,
            rng,
            obstacles=obstacle_xy,
            candidates=_ADD_CANDIDATES,
            min_gap=base * _ADD_MIN_GAP,
            patience=_ADD_PATIENCE,
            r_min=min(keep_out, limit),
        )

    pinned = 1 if config.center_hole else 0
    if pinned:
        positions = np.vstack([np.zeros((1, 2)), seed])
    else:
        positions = seed.copy()

    stats = _relax(positions, obstacle_xy, config, pinned)
    return finish("force", positions, config, obstacles, stats, target + pinned)
