"""BuildingElement: the source-agnostic description of one building.

An element carries at most three kinds of geometry input:
  details.geometry   ordered levels with floor and roof loops
  representations    named payloads, e.g. a 2.5D footprint collection
  volume_mesh_ref    a reference into a binary GLB blob

Input JSON may use either camelCase (``floorLoops``) or snake_case keys.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _InputModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Point3D(_InputModel):
    """A 3D coordinate."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


Ring = list[Point3D]


class Loop(_InputModel):
    """One or more closed rings; the first ring is the outer boundary."""

    ground_multi_loop_polygon: list[Ring] = Field(default_factory=list)

    @property
    def outer_ring(self) -> Ring:
        if not self.ground_multi_loop_polygon:
            return []
        return self.ground_multi_loop_polygon[0]


class Level(_InputModel):
    """A building level at a given elevation."""

    elevation: float
    floor_loops: list[Loop] | None = None
    roof_loops: list[Loop] | None = None

    @property
    def has_floor(self) -> bool:
        return bool(self.floor_loops)

    @property
    def has_roof(self) -> bool:
        return bool(self.roof_loops)


class BuildingGeometry(_InputModel):
    levels: list[Level] = Field(default_factory=list)


class BuildingDetails(_InputModel):
    geometry: BuildingGeometry | None = None


class VolumeMeshRef(_InputModel):
    """Points at the node(s) of a GLB blob that belong to the element."""

    blob_id: str
    selection: str | None = None
    selection_is_exact: bool = False


class BuildingElement(_InputModel):
    """The conversion input for one building."""

    urn: str
    details: BuildingDetails | None = None
    representations: dict[str, Any] | None = None
    volume_mesh_ref: VolumeMeshRef | None = None
