"""Fermat spiral — a denser, multi-arm spiral.

Radius grows linearly with the winding angle, with an extra spacing boost near
the origin (1 + 8 * exp(-theta / 4pi)) that offsets the spiral's natural
radial compression there.

Overlap rejection only looks at the last few emitted points. Where the spiral
loops back close to an earlier arm a close pair can slip through; this is an
accepted approximation, not a hard guarantee.
"""

from __future__ import annotations

import math
from collections import deque

from grille.engine.config import PatternConfig
from grille.engine.registry import GeneratorKind, generator
from grille.utils.geometry import ORIGIN, Point, distance_sq
from grille.utils.math_helpers import clamp

_SPACING_SCALE = 0.80
_GROWTH = 8 * math.pi
_STEP_DIVISOR = 0.2
_CENTER_BOOST = 8.0
_CENTER_DECAY = 4 * math.pi
_MIN_DIST_FACTOR = 0.8
_LOOKBACK = 8
_SPACING_RATIO_RANGE = (0.6, 3.0)


@generator(
    name="fermat",
    kind=GeneratorKind.OUTER,
    description="Dense Fermat-style spiral with local overlap rejection",
)
def fermat(config: PatternConfig) -> list[Point]:
    if config.radius <= 0:
        return []

    spacing = config.base_spacing
    c = spacing * _SPACING_SCALE
    step = math.radians(config.divergence_angle)
    if c <= 0 or step <= 0:
        return [ORIGIN] if config.center_hole else []

    n_steps = int(math.ceil(config.radius * _GROWTH / (c * _STEP_DIVISOR)))
    inner = config.effective_inner_radius
    keep_out = config.min_hole_distance if config.center_hole else 0.0
    min_r = max(inner, keep_out)
    min_dist_sq = (spacing * _MIN_DIST_FACTOR) ** 2

    points: list[Point] = []
    if config.center_hole:
        points.append(ORIGIN)
    recent: deque[Point] = deque(points, maxlen=_LOOKBACK)

    for i in range(n_steps):
        if len(points) >= config.num_points:
            break
        theta = i * step
        boost = 1 + _CENTER_BOOST * math.exp(-theta / _CENTER_DECAY)
        r = (c * theta / _GROWTH) * boost

        if config.get_spacing is not None:
            local = config.get_spacing(r * math.cos(theta), r * math.sin(theta), spacing)
            r *= clamp(local / spacing, *_SPACING_RATIO_RANGE)

        if r > config.radius or r < min_r:
            continue

        p = Point(r * math.cos(theta), r * math.sin(theta))
        if any(distance_sq(p, q) < min_dist_sq for q in recent):
            continue

        points.append(p)
        recent.append(p)

    return points
