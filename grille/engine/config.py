"""Generator configuration — one fresh struct per generation request."""

from __future__ import annotations

from dataclasses import dataclass, field

from grille.utils.geometry import Point, annulus_filter
from grille.utils.spacing import SpacingFn


@dataclass
class PatternConfig:
    """Inputs for the outer pattern generators."""

    # Overall grille radius
    radius: float
    # Radius of each hole
    hole_radius: float
    # Minimum material left between two holes
    min_clearance: float = 0.0
    # Disk left empty for a center fill
    center_exclusion: float = 0.0
    # Where the pattern starts; None = center_exclusion
    inner_radius: float | None = None
    # Force a hole at the exact origin
    center_hole: bool = False

    # Spirals
    divergence_angle: float = 137.5  # degrees
    spacing: float = 0.0  # 0 = 2 * hole_radius
    num_points: int = 2000

    # Concentric rings
    concentric_spacing: float | None = None
    spacing_factor: float = 0.0
    ring_spacing_factor: float = 0.0
    point_spacing_factor: float = 0.0

    # Position-dependent spacing override: (x, y, base_spacing) -> spacing
    get_spacing: SpacingFn | None = None

    @property
    def min_hole_distance(self) -> float:
        """Center-to-center distance at which two holes just keep their clearance."""
        return 2 * self.hole_radius + self.min_clearance

    @property
    def effective_inner_radius(self) -> float:
        if self.inner_radius is not None:
            return self.inner_radius
        return self.center_exclusion

    @property
    def base_spacing(self) -> float:
        return self.spacing if self.spacing > 0 else 2 * self.hole_radius

    def spacing_at(self, x: float, y: float, base: float) -> float:
        if self.get_spacing is None:
            return base
        return self.get_spacing(x, y, base)


@dataclass
class CenterFillConfig:
    """Inputs for the center-fill generators."""

    # Disk to fill
    center_radius: float
    # Clearance between holes
    min_distance: float
    hole_radius: float
    # Obstacles: outer points the fill must not overlap (usually the buffer annulus)
    outer_points: list[Point] = field(default_factory=list)
    # Full outer pattern; obstacles are derived from it when outer_points is empty
    pattern_points: list[Point] = field(default_factory=list)
    # Existing center layout to perturb (adaptive force only)
    seed_points: list[Point] = field(default_factory=list)
    center_hole: bool = False
    # ~[-1, 1]: negative = sparser, positive = denser, 0 = natural density
    density_factor: float = 0.0
    force_strength: float = 1.0
    max_iterations: int = 150
    # Outer edge of the annulus used for density sampling; None = center_radius + base_spacing
    buffer_radius: float | None = None
    poisson_attempts: int = 30
    # RNG seed; None = settings.grille_seed
    seed: int | None = None

    @property
    def base_spacing(self) -> float:
        return 2 * self.hole_radius + self.min_distance

    @property
    def effective_buffer_radius(self) -> float:
        if self.buffer_radius is not None:
            return self.buffer_radius
        return self.center_radius + self.base_spacing

    @property
    def obstacles(self) -> list[Point]:
        if self.outer_points:
            return list(self.outer_points)
        if self.pattern_points:
            return annulus_filter(self.pattern_points, self.center_radius, self.effective_buffer_radius)
        return []
