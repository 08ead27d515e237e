"""grille generator engine."""

from grille.engine.config import CenterFillConfig, PatternConfig
from grille.engine.facade import (
    build_center_fill_config,
    build_pattern_config,
    buffer_obstacles,
    generate_center_fill,
    generate_layout,
    generate_outer_pattern,
)
from grille.engine.registry import GeneratorKind, UnknownGeneratorError, generator, get_registry

__all__ = [
    "CenterFillConfig",
    "PatternConfig",
    "GeneratorKind",
    "UnknownGeneratorError",
    "generator",
    "get_registry",
    "build_center_fill_config",
    "build_pattern_config",
    "buffer_obstacles",
    "generate_center_fill",
    "generate_layout",
    "generate_outer_pattern",
]
