"""Layout result model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from grille.utils.geometry import Point


class Layout(BaseModel):
    outer_points: list[Point] = Field(default_factory=list)
    center_points: list[Point] = Field(default_factory=list)
    # Hole radius per point, outer points first, matching all_points
    hole_radii: list[float] = Field(default_factory=list)

    @property
    def all_points(self) -> list[Point]:
        return [*self.outer_points, *self.center_points]

    @property
    def count(self) -> int:
        return len(self.outer_points) + len(self.center_points)
