"""Pattern / algorithm selection facade and layout composition.

Two dispatch entry points (outer pattern, center fill) plus `generate_layout`,
which runs the whole flow: outer pattern → buffer-annulus obstacles → center
fill → optional hole-size scaling and edge clipping.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Iterable

from grille.engine.config import CenterFillConfig, PatternConfig
from grille.engine.patterns.concentric import optimal_ring_spacing
from grille.engine.registry import GeneratorKind, get_registry
from grille.models.layout import Layout
from grille.models.requests import LayoutRequest
from grille.utils.geometry import Point, annulus_filter
from grille.utils.spacing import hole_size, radial_spacing

logger = logging.getLogger(__name__)

_DEFAULT_POINT_CAP = 2000

_registered = False


def _ensure_registered() -> None:
    global _registered
    if not _registered:
        from grille.main import register_generators

        register_generators()
        _registered = True


def outer_pattern_names() -> list[str]:
    _ensure_registered()
    return get_registry().names(GeneratorKind.OUTER)


def center_fill_names() -> list[str]:
    _ensure_registered()
    return get_registry().names(GeneratorKind.CENTER)


def generate_outer_pattern(pattern_name: str, config: PatternConfig) -> list[Point]:
    """Dispatch to a registered outer pattern generator."""
    _ensure_registered()
    spec = get_registry().get(GeneratorKind.OUTER, pattern_name)
    t0 = time.perf_counter()
    points = spec.fn(config)
    logger.debug(
        "outer pattern %s: %d points in %.1fms",
        pattern_name,
        len(points),
        (time.perf_counter() - t0) * 1000,
    )
    return points


def generate_center_fill(algorithm_name: str, config: CenterFillConfig) -> list[Point]:
    """Dispatch to a registered center-fill generator."""
    _ensure_registered()
    spec = get_registry().get(GeneratorKind.CENTER, algorithm_name)
    t0 = time.perf_counter()
    points = spec.fn(config)
    logger.debug(
        "center fill %s: %d points in %.1fms",
        algorithm_name,
        len(points),
        (time.perf_counter() - t0) * 1000,
    )
    return points


def default_point_cap(radius: float, center_exclusion: float) -> int:
    """Spiral point cap, reduced by the share of the disk the exclusion takes."""
    if center_exclusion <= 0 or radius <= 0:
        return _DEFAULT_POINT_CAP
    free = 1 - (center_exclusion / radius) ** 2
    return max(0, int(math.floor(_DEFAULT_POINT_CAP * free)))


def buffer_radius(center_exclusion: float, hole_radius: float, min_clearance: float) -> float:
    return center_exclusion + 2 * hole_radius + min_clearance


def buffer_obstacles(
    points: Iterable[Point],
    center_exclusion: float,
    hole_radius: float,
    min_clearance: float,
) -> list[Point]:
    """Outer points in the annulus just outside the center disk."""
    return annulus_filter(points, center_exclusion, buffer_radius(center_exclusion, hole_radius, min_clearance))


def build_pattern_config(request: LayoutRequest) -> PatternConfig:
    get_spacing = None
    if request.size_scaling != 0:
        get_spacing = radial_spacing(request.radius, request.size_scaling, request.scale_type)

    concentric_spacing = request.concentric_spacing
    if concentric_spacing is None and request.optimal_ring_spacing:
        concentric_spacing = optimal_ring_spacing(request.hole_radius, request.min_clearance)

    return PatternConfig(
        radius=request.radius,
        hole_radius=request.hole_radius,
        min_clearance=request.min_clearance,
        center_exclusion=request.center_exclusion,
        inner_radius=request.center_exclusion,
        # With a center disk the fill owns the center hole
        center_hole=request.center_hole and request.center_exclusion <= 0,
        divergence_angle=request.divergence_angle,
        spacing=request.spacing or request.hole_radius * 2,
        num_points=request.num_points or default_point_cap(request.radius, request.center_exclusion),
        concentric_spacing=concentric_spacing,
        spacing_factor=request.spacing_factor,
        ring_spacing_factor=request.ring_spacing_factor,
        point_spacing_factor=request.point_spacing_factor,
        get_spacing=get_spacing,
    )


def build_center_fill_config(request: LayoutRequest, outer_points: list[Point]) -> CenterFillConfig:
    return CenterFillConfig(
        center_radius=request.center_exclusion,
        min_distance=request.min_clearance,
        hole_radius=request.hole_radius,
        outer_points=buffer_obstacles(
            outer_points, request.center_exclusion, request.hole_radius, request.min_clearance
        ),
        pattern_points=list(outer_points),
        center_hole=request.center_hole,
        density_factor=request.density_factor,
        force_strength=request.force_strength,
        max_iterations=request.max_iterations,
        buffer_radius=buffer_radius(request.center_exclusion, request.hole_radius, request.min_clearance),
        seed=request.seed,
    )


def generate_layout(request: LayoutRequest) -> Layout:
    """Outer pattern plus center fill, scaled and clipped for rendering."""
    pattern_config = build_pattern_config(request)
    outer = generate_outer_pattern(request.pattern, pattern_config)

    center: list[Point] = []
    if request.center_exclusion > 0:
        fill_config = build_center_fill_config(request, outer)
        center = generate_center_fill(request.center_algorithm, fill_config)

    def size(p: Point) -> float:
        return hole_size(p.x, p.y, request.hole_radius, request.radius, request.size_scaling, request.scale_type)

    if not request.allow_partial_holes:
        outer = [p for p in outer if p.magnitude + size(p) <= request.radius]
        center = [p for p in center if p.magnitude + size(p) <= request.radius]

    layout = Layout(
        outer_points=outer,
        center_points=center,
        hole_radii=[size(p) for p in [*outer, *center]],
    )
    logger.debug(
        "layout %s + %s: %d outer, %d center",
        request.pattern,
        request.center_algorithm,
        len(outer),
        len(center),
    )
    return layout
