"""Shared center-fill machinery: seeding, target sizing, count correction, repulsion.

Positions are Nx2 float arrays throughout; generators convert to Point lists
only when returning. Index 0 is reserved for the pinned center hole when one
is requested.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from scipy.spatial.distance import cdist

from grille.config import settings
from grille.engine.config import CenterFillConfig
from grille.utils.geometry import Point, count_overlaps, from_array, hex_lattice, random_in_disk, within_radius
from grille.utils.math_helpers import disk_area, hex_capacity

logger = logging.getLogger(__name__)

# Repulsion only acts between points closer than this many base spacings.
REPULSION_REACH = 2.0
# A single relaxation step never moves a point farther than this many base spacings.
MAX_STEP = 0.5


@dataclass
class RelaxationStats:
    iterations: int = 0
    converged: bool = False
    max_move: float = 0.0


def make_rng(seed: int | None) -> np.random.Generator:
    return np.random.default_rng(seed if seed is not None else settings.grille_seed)


def norms(positions: NDArray[np.float64]) -> NDArray[np.float64]:
    return np.sqrt(np.sum(positions**2, axis=1))


def lattice_seed(
    pitch: float,
    radius: float,
    *,
    keep_out: float = 0.0,
    obstacles: NDArray[np.float64] | None = None,
    clearance: float = 0.0,
) -> NDArray[np.float64]:
    """Hex lattice clipped to the disk, minus points near the origin or obstacles."""
    lattice = hex_lattice(pitch, radius)
    if len(lattice) == 0:
        return lattice
    d = norms(lattice)
    keep = (d <= radius) & (d >= keep_out)
    lattice = lattice[keep]
    if obstacles is not None and len(obstacles) > 0 and len(lattice) > 0 and clearance > 0:
        lattice = lattice[cdist(lattice, obstacles).min(axis=1) >= clearance]
    return lattice


def buffer_area_per_point(config: CenterFillConfig, obstacles: Sequence[Point]) -> float:
    """Area each outer hole occupies in the buffer annulus just outside the fill disk.

    Falls back to a disk of one base spacing when the annulus holds no points.
    """
    base = config.base_spacing
    outer = config.effective_buffer_radius
    in_buffer = sum(1 for p in obstacles if within_radius(p, outer))
    annulus = math.pi * (outer * outer - config.center_radius**2)
    if in_buffer > 0 and annulus > 0:
        return annulus / in_buffer
    return disk_area(base)


def packing_ceiling(radius: float, base: float, center_hole: bool) -> int:
    """Conservative upper bound on how many points the disk can hold at `base` spacing."""
    usable = max(radius - base / 2, 0.0)
    area = disk_area(usable)
    if center_hole:
        area -= disk_area(base / 2)
    return max(1, hex_capacity(area, base))


def repulsion(
    positions: NDArray[np.float64],
    sources: NDArray[np.float64],
    base: float,
    exponent: float,
) -> NDArray[np.float64]:
    """Sum of repulsive pushes on each position from every source within reach.

    Magnitude is (base / d) ** exponent * base along the separating vector.
    Coincident pairs (d == 0, which includes a point and itself) contribute
    nothing.
    """
    if len(positions) == 0 or len(sources) == 0:
        return np.zeros_like(positions)
    diff = positions[:, None, :] - sources[None, :, :]
    dist = cdist(positions, sources)
    mask = (dist > 0) & (dist < base * REPULSION_REACH)
    safe = np.where(mask, dist, 1.0)
    magnitude = np.where(mask, (base / safe) ** exponent * base, 0.0)
    return np.sum(diff / safe[..., None] * magnitude[..., None], axis=1)


def cap_steps(moves: NDArray[np.float64], limit: float) -> NDArray[np.float64]:
    lengths = norms(moves)
    too_long = lengths > limit
    if np.any(too_long):
        moves = moves.copy()
        moves[too_long] *= (limit / lengths[too_long])[:, None]
    return moves


def decluster(positions: NDArray[np.float64], target: int, base: float, pinned: int = 0) -> NDArray[np.float64]:
    """Greedily drop the point with the most neighbors within 2*base until `target` remain.

    Ties go to the lowest index. The first `pinned` points are never removed.
    """
    n = len(positions)
    if n <= target:
        return positions
    adjacency = cdist(positions, positions) < base * REPULSION_REACH
    np.fill_diagonal(adjacency, False)
    counts = adjacency.sum(axis=1).astype(np.int64)
    alive = np.ones(n, dtype=bool)
    remaining = n
    while remaining > target:
        scores = np.where(alive, counts, -1)
        scores[:pinned] = -1
        idx = int(np.argmax(scores))
        if scores[idx] < 0:
            break
        alive[idx] = False
        counts -= adjacency[:, idx]
        remaining -= 1
    return positions[alive]


def add_farthest(
    positions: NDArray[np.float64],
    target: int,
    radius: float,
    rng: np.random.Generator,
    *,
    obstacles: NDArray[np.float64] | None = None,
    candidates: int = 64,
    min_gap: float = 0.0,
    patience: int = 20,
    r_min: float = 0.0,
) -> NDArray[np.float64]:
    """Add points by max-min-distance rejection sampling.

    Each round samples `candidates` points uniformly in the disk and keeps the
    one farthest from every existing point and obstacle, provided that gap
    exceeds `min_gap`. Stops at `target` or after `patience` consecutive
    rounds without an acceptable candidate.
    """
    placed = [row for row in positions]
    fixed = obstacles if obstacles is not None else np.empty((0, 2))
    failures = 0
    while len(placed) < target and failures < patience:
        pool = random_in_disk(rng, candidates, radius, r_min)
        reference = np.vstack([np.array(placed).reshape(-1, 2), fixed])
        if len(reference) == 0:
            placed.append(pool[0])
            continue
        gaps = cdist(pool, reference).min(axis=1)
        best = int(np.argmax(gaps))
        if gaps[best] > min_gap:
            placed.append(pool[best])
            failures = 0
        else:
            failures += 1
    return np.array(placed, dtype=np.float64).reshape(-1, 2)


def finish(
    label: str,
    positions: NDArray[np.float64],
    config: CenterFillConfig,
    obstacles: Sequence[Point],
    stats: RelaxationStats | None = None,
    target: int | None = None,
) -> list[Point]:
    """Convert to points and emit the per-run diagnostic event."""
    points = from_array(positions)
    if logger.isEnabledFor(logging.DEBUG):
        overlaps = count_overlaps(points, config.base_spacing, obstacles)
        if stats is not None:
            logger.debug(
                "%s fill: %d points (target %s), %d iterations, converged=%s, max move %.4g, %d overlaps",
                label,
                len(points),
                target,
                stats.iterations,
                stats.converged,
                stats.max_move,
                overlaps,
            )
        else:
            logger.debug("%s fill: %d points, %d overlaps", label, len(points), overlaps)
        if target is not None and len(points) < target:
            logger.debug("%s fill under target: %d of %d placed", label, len(points), target)
    return points
