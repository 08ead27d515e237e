"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from scipy.spatial import cKDTree

SQRT3 = math.sqrt(3.0)


@dataclass(frozen=True)
class Point:
    """A hole center in pattern coordinates (origin = grille center)."""

    x: float
    y: float

    @property
    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def distance_to(self, other: Point) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


ORIGIN = Point(0.0, 0.0)


def distance_sq(a: Point, b: Point) -> float:
    dx = a.x - b.x
    dy = a.y - b.y
    return dx * dx + dy * dy


def within_radius(p: Point, radius: float) -> bool:
    """Closed-disk containment test."""
    return p.x * p.x + p.y * p.y <= radius * radius


def to_array(points: Iterable[Point]) -> NDArray[np.float64]:
    """Pack points into an Nx2 float array (always 2-D, even when empty)."""
    arr = np.array([(p.x, p.y) for p in points], dtype=np.float64)
    return arr.reshape(-1, 2)


def from_array(arr: NDArray[np.float64]) -> list[Point]:
    return [Point(float(x), float(y)) for x, y in arr]


def radii(points: Sequence[Point]) -> NDArray[np.float64]:
    """Distance from origin for each point."""
    arr = to_array(points)
    return np.sqrt(np.sum(arr**2, axis=1))


def annulus_filter(points: Iterable[Point], inner: float, outer: float) -> list[Point]:
    """Points with inner <= |p| <= outer."""
    inner_sq = inner * inner
    outer_sq = outer * outer
    out = []
    for p in points:
        d_sq = p.x * p.x + p.y * p.y
        if inner_sq <= d_sq <= outer_sq:
            out.append(p)
    return out


def min_pairwise_distance(points: Sequence[Point]) -> float:
    """Smallest distance between any two points. inf for fewer than two."""
    if len(points) < 2:
        return float("inf")
    tree = cKDTree(to_array(points))
    dists, _ = tree.query(tree.data, k=2)
    return float(np.min(dists[:, 1]))


def count_overlaps(
    points: Sequence[Point],
    min_distance: float,
    obstacles: Sequence[Point] = (),
) -> int:
    """Number of point pairs (internal + point/obstacle) closer than min_distance."""
    if not points or min_distance <= 0:
        return 0
    # Shrink slightly so pairs sitting exactly at min_distance don't count
    r = min_distance * (1.0 - 1e-9)
    tree = cKDTree(to_array(points))
    total = len(tree.query_pairs(r))
    if obstacles:
        obstacle_tree = cKDTree(to_array(obstacles))
        total += sum(len(hits) for hits in tree.query_ball_tree(obstacle_tree, r))
    return total


def hex_lattice(pitch: float, extent: float) -> NDArray[np.float64]:
    """Hex lattice with nearest-neighbor distance `pitch`, covering [-extent, extent]².

    Rows are pitch*sqrt(3)/2 apart; odd rows are offset by pitch/2. The
    lattice always contains the origin.
    """
    if pitch <= 0 or extent <= 0:
        return np.empty((0, 2))
    row_height = pitch * SQRT3 / 2
    n_rows = int(math.ceil(extent / row_height))
    n_cols = int(math.ceil(extent / pitch)) + 1
    rows = np.arange(-n_rows, n_rows + 1)
    cols = np.arange(-n_cols, n_cols + 1)
    col_grid, row_grid = np.meshgrid(cols, rows)
    x = col_grid * pitch + (row_grid % 2) * (pitch / 2)
    y = row_grid * row_height
    return np.column_stack([x.ravel(), y.ravel()]).astype(np.float64)


def random_in_disk(
    rng: np.random.Generator,
    n: int,
    r_max: float,
    r_min: float = 0.0,
) -> NDArray[np.float64]:
    """Uniform-by-area samples from the annulus r_min <= r <= r_max."""
    if n <= 0:
        return np.empty((0, 2))
    r = np.sqrt(r_min * r_min + rng.random(n) * (r_max * r_max - r_min * r_min))
    theta = rng.random(n) * 2 * np.pi
    return np.column_stack([r * np.cos(theta), r * np.sin(theta)])
