"""FootprintFeature: a 2.5D extrudable outline."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from elementifc.models.element import Point3D, Ring


class FootprintFeature(BaseModel):
    """A polygon (outer ring + holes) with a scalar height."""

    rings: list[Ring] = Field(default_factory=list)
    height: float | None = None
    properties: dict[str, Any] = Field(default_factory=dict)

    @property
    def outer_ring(self) -> list[Point3D]:
        return self.rings[0] if self.rings else []

    @property
    def holes(self) -> list[Ring]:
        return self.rings[1:]

    def is_extrudable(self) -> bool:
        """True when the feature has an outer ring and a positive height."""
        return bool(self.outer_ring) and self.height is not None and self.height > 0.0
