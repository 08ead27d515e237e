"""Speaker-grille hole layouts: spiral, ring and hex patterns with center fills."""

from grille.engine import (
    CenterFillConfig,
    PatternConfig,
    UnknownGeneratorError,
    generate_center_fill,
    generate_layout,
    generate_outer_pattern,
)
from grille.engine.patterns.phyllotaxis import suggested_divergence_angles
from grille.models.layout import Layout
from grille.models.requests import LayoutRequest
from grille.utils.geometry import ORIGIN, Point

__all__ = [
    "CenterFillConfig",
    "PatternConfig",
    "UnknownGeneratorError",
    "generate_center_fill",
    "generate_layout",
    "generate_outer_pattern",
    "suggested_divergence_angles",
    "Layout",
    "LayoutRequest",
    "ORIGIN",
    "Point",
]
