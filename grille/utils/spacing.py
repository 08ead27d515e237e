"""Density and spacing adapters.

Pure functions that turn a knob (radial position, density factor, spacing
factor) into a multiplier. Generators call these many times per point, so
everything here must stay side-effect free.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Literal

SpacingFn = Callable[[float, float, float], float]
ScaleType = Literal["linear", "exponential"]

# At or below this density factor the density-aware center fills produce nothing.
DENSITY_COLLAPSE = -0.95

# Linear radial scaling reaches zero at the extremes; keep holes/spacing positive.
_MIN_RADIAL_MULTIPLIER = 0.1

# Center hex fill: spacing multiple at density 0, at density -1, and the floor
# just above touching so lattice neighbors never sit exactly at base spacing.
_HEX_DEFAULT_MULTIPLE = 1.6
_HEX_SPARSE_MULTIPLE = 3.0
_HEX_TOUCHING_MULTIPLE = 1.001


def radial_multiplier(distance_ratio: float, scaling: float, scale_type: ScaleType = "linear") -> float:
    """Multiplier for a point at `distance_ratio` = |p| / radius.

    Positive scaling grows the center and shrinks the edge; negative does the
    opposite. Both curves pass through 1.0 at half the radius.
    """
    if scaling == 0:
        return 1.0
    t = 1 - 2 * distance_ratio
    if scale_type == "exponential":
        return math.exp(scaling * t)
    return max(_MIN_RADIAL_MULTIPLIER, 1 + scaling * t)


def hole_size(
    x: float,
    y: float,
    base_size: float,
    radius: float,
    scaling: float,
    scale_type: ScaleType = "linear",
) -> float:
    """Hole radius at (x, y) under radial size scaling."""
    if scaling == 0 or radius <= 0:
        return base_size
    ratio = math.hypot(x, y) / radius
    return base_size * radial_multiplier(ratio, scaling, scale_type)


def radial_spacing(radius: float, scaling: float, scale_type: ScaleType = "linear") -> SpacingFn:
    """Build a get_spacing callback that tracks radial hole-size scaling.

    Larger holes get proportionally more room, so clearance stays roughly
    constant across the grille.
    """

    def _spacing(x: float, y: float, base_spacing: float) -> float:
        if radius <= 0:
            return base_spacing
        ratio = math.hypot(x, y) / radius
        return base_spacing * radial_multiplier(ratio, scaling, scale_type)

    return _spacing


def ring_multiplier(factor: float) -> float:
    """Concentric ring/point spacing multiplier: 1+2f above zero, 1/(1+0.5|f|) below."""
    if factor >= 0:
        return 1 + 2 * factor
    return 1 / (1 + 0.5 * abs(factor))


def hex_density_multiplier(density_factor: float) -> float:
    """Lattice pitch multiple for the center hex fill.

    Two linear ramps meet at the default multiple: density -1 gives the
    sparse multiple, density +1 approaches (but never reaches) touching.
    """
    if density_factor <= 0:
        return _HEX_DEFAULT_MULTIPLE + (_HEX_SPARSE_MULTIPLE - _HEX_DEFAULT_MULTIPLE) * abs(density_factor)
    return max(
        _HEX_TOUCHING_MULTIPLE,
        _HEX_DEFAULT_MULTIPLE - (_HEX_DEFAULT_MULTIPLE - _HEX_TOUCHING_MULTIPLE) * density_factor,
    )


def concentric_density_warp(density_factor: float) -> float:
    """Power-law warp of the density factor: halve, then x^0.7 below zero, x^1.5 above."""
    scaled = density_factor * 0.5
    if scaled < 0:
        return -((-scaled) ** 0.7)
    return scaled**1.5


def density_scale_linear(density_factor: float) -> float:
    return 1 + density_factor


def density_scale_exponential(density_factor: float) -> float:
    return 2.0**density_factor
