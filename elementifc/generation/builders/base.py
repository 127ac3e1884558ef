"""Abstract GeometryBuilder interface.

Every builder turns one kind of element input into IFC shape
representations attached to a building (or to storeys and roofs created
under it), and reports the outcome as a BuildResult.
"""

from __future__ import annotations

import abc
from typing import Any, Sequence

from elementifc.config import BODY_IDENTIFIER
from elementifc.generation.context import ConversionContext
from elementifc.generation.result import BuildResult
from elementifc.models.element import BuildingElement, Point3D

UP = (0.0, 0.0, 1.0)


class GeometryBuilder(abc.ABC):
    """Base class for the three geometry derivation paths."""

    def __init__(self, context: ConversionContext) -> None:
        self.context = context

    @property
    def model(self) -> Any:
        return self.context.model

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Short identifier used in log messages."""

    @abc.abstractmethod
    def build(self, element: BuildingElement, building: Any) -> BuildResult:
        """Derive geometry for *element* and attach it under *building*."""

    # Helpers shared by all builders

    @staticmethod
    def _closed_2d(ring: Sequence[Point3D]) -> list[tuple[float, float]]:
        """Project a ring to XY and close it if the last point differs."""
        points = [(p.x, p.y) for p in ring]
        if points and points[0] != points[-1]:
            points.append(points[0])
        return points

    def _polyline_2d(self, ring: Sequence[Point3D]) -> Any:
        pts = [self.model.createIfcCartesianPoint([x, y]) for x, y in self._closed_2d(ring)]
        return self.model.createIfcPolyline(pts)

    def _origin_axis(self, z: float = 0.0) -> Any:
        return self.model.createIfcAxis2Placement3D(
            self.model.createIfcCartesianPoint([0.0, 0.0, float(z)]),
            None,
            None,
        )

    def _extruded_solid(self, ring: Sequence[Point3D], depth: float, profile_name: str) -> Any:
        """IfcExtrudedAreaSolid of the closed *ring* along +Z by *depth*."""
        profile = self.model.createIfcArbitraryClosedProfileDef(
            "AREA", profile_name, self._polyline_2d(ring)
        )
        return self.model.createIfcExtrudedAreaSolid(
            profile,
            self._origin_axis(),
            self.model.createIfcDirection(list(UP)),
            float(depth),
        )

    def _product_shape(self, item: Any, representation_type: str) -> Any:
        """Wrap one geometric item into an IfcProductDefinitionShape."""
        rep = self.model.createIfcShapeRepresentation(
            self.context.body_context, BODY_IDENTIFIER, representation_type, [item]
        )
        return self.model.createIfcProductDefinitionShape(None, None, [rep])
