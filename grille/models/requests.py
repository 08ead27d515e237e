"""Parameter-bag request models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

PatternName = Literal["phyllotaxis", "fermat", "concentric", "hex"]
CenterAlgorithmName = Literal["force", "adaptiveForce", "poisson", "hex", "concentric"]


class LayoutRequest(BaseModel):
    pattern: PatternName = Field(default="phyllotaxis", description="Outer pattern generator")
    radius: float = Field(..., ge=0, description="Overall grille radius")
    hole_radius: float = Field(..., gt=0, description="Radius of each hole")
    min_clearance: float = Field(default=0.0, ge=0, description="Material left between holes")
    center_exclusion: float = Field(default=0.0, ge=0, description="Radius of the center-fill disk (0 = none)")
    center_hole: bool = Field(default=False, description="Force a hole at the exact center")

    # Spirals
    divergence_angle: float = Field(default=137.5, description="Angle between successive points, degrees")
    spacing: float | None = Field(default=None, gt=0, description="Spiral/hex base spacing (default 2 * hole_radius)")
    num_points: int | None = Field(default=None, gt=0, description="Spiral point cap (default scales with free area)")

    # Concentric rings
    concentric_spacing: float | None = Field(default=None, gt=0, description="Explicit ring spacing")
    optimal_ring_spacing: bool = Field(default=False, description="Rings (2 * hole_radius + min_clearance) * 1.1 apart")
    spacing_factor: float = Field(default=0.0, gt=-3, description="Ring base spacing = hole_radius * (3 + factor)")
    ring_spacing_factor: float = Field(default=0.0, description="Ring-to-ring spacing knob")
    point_spacing_factor: float = Field(default=0.0, description="Along-ring spacing knob")

    # Radial hole-size scaling
    size_scaling: float = Field(default=0.0, ge=-1, le=1, description="Positive = bigger holes at the center")
    scale_type: Literal["linear", "exponential"] = Field(default="linear")
    allow_partial_holes: bool = Field(default=False, description="Keep holes that cross the outer edge")

    # Center fill
    center_algorithm: CenterAlgorithmName = Field(default="force", description="Center-fill generator")
    density_factor: float = Field(default=0.0, ge=-1, le=1, description="Negative = sparser, positive = denser")
    force_strength: float = Field(default=1.0, ge=0, description="Relaxation intensity")
    max_iterations: int = Field(default=150, gt=0, description="Relaxation iteration cap")
    seed: int | None = Field(default=None, description="RNG seed for randomized center fills")
