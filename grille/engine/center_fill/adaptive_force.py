"""Adaptive force fill — local perturbation of an existing center layout.

Starts from the caller's `seed_points` (or a base-spacing lattice when none
are given), scales the count linearly by the density factor relative to that
seed, then relaxes with inverse-square repulsion that fades toward the rim.
Moves that would leave the disk or land on an obstacle are rejected rather
than damped, and so are moves into the pinned center hole.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray
from scipy.spatial import cKDTree

from grille.engine.center_fill.relaxation import (
    MAX_STEP,
    RelaxationStats,
    add_farthest,
    cap_steps,
    decluster,
    finish,
    lattice_seed,
    make_rng,
    norms,
    repulsion,
)
from grille.engine.config import CenterFillConfig
from grille.engine.registry import GeneratorKind, generator
from grille.utils.geometry import Point, to_array
from grille.utils.spacing import density_scale_linear

logger = logging.getLogger(__name__)

_EXPONENT = 2.0
_DAMPING = 0.1
_DECAY = 0.95
_TOLERANCE = 0.001
_ADD_CANDIDATES = 50


def _initial_positions(config: CenterFillConfig, obstacles: NDArray[np.float64]) -> NDArray[np.float64]:
    base = config.base_spacing
    radius = config.center_radius
    keep_out = base if config.center_hole else 0.0

    if config.seed_points:
        seed = to_array(config.seed_points)
        d = norms(seed)
        # Drops a center hole the caller's layout may already carry; it is re-pinned later
        seed = seed[(d <= radius) & (d >= keep_out)]
        if len(seed) > 0:
            return seed
        logger.debug("adaptiveForce: no seed points inside r=%.3f, falling back to lattice", radius)

    return lattice_seed(base, radius, keep_out=keep_out, obstacles=obstacles, clearance=base)


def _relax(
    positions: NDArray[np.float64],
    obstacles: NDArray[np.float64],
    config: CenterFillConfig,
    pinned: int,
) -> RelaxationStats:
    """Relax `positions` in place, rejecting moves that break containment or hit obstacles."""
    stats = RelaxationStats()
    if len(positions) <= pinned or config.force_strength <= 0:
        return stats

    base = config.base_spacing
    radius = config.center_radius
    keep_out = base if pinned else 0.0
    movable = np.arange(len(positions)) >= pinned
    obstacle_tree = cKDTree(obstacles) if len(obstacles) > 0 else None

    for iteration in range(config.max_iterations):
        ratio = np.minimum(1.0, norms(positions) / radius)
        scale = config.force_strength * (1 - ratio**2)

        forces = repulsion(positions, positions, base, _EXPONENT)
        forces += repulsion(positions, obstacles, base, _EXPONENT)
        forces *= scale[:, None]

        damping = _DAMPING * _DECAY**iteration
        moves = cap_steps(forces * damping, base * MAX_STEP)
        moves[~movable] = 0.0
        updated = positions + moves

        d_after = norms(updated)
        accept = movable & (d_after <= radius)
        if keep_out > 0:
            # Points never step into the pinned center hole
            accept &= ~((d_after < keep_out) & (norms(positions) >= keep_out))
        if obstacle_tree is not None:
            before, _ = obstacle_tree.query(positions)
            after, _ = obstacle_tree.query(updated)
            accept &= ~((after < base) & (before >= base))

        step = float(norms(moves[accept]).max()) if np.any(accept) else 0.0
        positions[accept] = updated[accept]
        stats.iterations = iteration + 1
        stats.max_move = step
        if step < base * _TOLERANCE:
            stats.converged = True
            break

    return stats


@generator(
    name="adaptiveForce",
    kind=GeneratorKind.CENTER,
    description="Perturb an existing layout with center-weighted inverse-square repulsion",
)
def adaptive_force_fill(config: CenterFillConfig) -> list[Point]:
    if config.center_radius <= 0:
        return []

    base = config.base_spacing
    obstacles = config.obstacles
    obstacle_xy = to_array(obstacles)
    rng = make_rng(config.seed)

    pinned = 1 if config.center_hole else 0
    seed = _initial_positions(config, obstacle_xy)
    if pinned:
        positions = np.vstack([np.zeros((1, 2)), seed])
    else:
        positions = seed

    target = None
    if config.density_factor != 0:
        target = max(1, int(round(len(positions) * density_scale_linear(config.density_factor))))
        if target < len(positions):
            positions = decluster(positions, max(target, pinned), base, pinned=pinned)
        elif target > len(positions):
            positions = add_farthest(
                positions,
                target,
                config.center_radius,
                rng,
                obstacles=obstacle_xy,
                candidates=_ADD_CANDIDATES,
                min_gap=base,
                patience=1,
            )

    positions = np.array(positions, dtype=np.float64)
    stats = _relax(positions, obstacle_xy, config, pinned)
    return finish("adaptiveForce", positions, config, obstacles, stats, target)
