"""Math helpers — clamping, packing capacity. No engine imports."""

from __future__ import annotations

import math


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def disk_area(radius: float) -> float:
    return math.pi * radius * radius


def hex_cell_area(spacing: float) -> float:
    """Area owned by one point of a hex packing with nearest-neighbor `spacing`."""
    return math.sqrt(3.0) / 2 * spacing * spacing


def hex_capacity(area: float, spacing: float) -> int:
    """Upper bound on points with pairwise distance >= spacing inside `area`.

    Hex packing is the densest arrangement; boundary effects make the real
    count lower, so this is only used as a ceiling.
    """
    if spacing <= 0 or area <= 0:
        return 0
    return int(area / hex_cell_area(spacing))
