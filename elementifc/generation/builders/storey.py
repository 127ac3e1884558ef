"""StoreyRoofBuilder: storeys and roofs from an ordered list of levels."""

from __future__ import annotations

import logging
from typing import Any, Sequence

import ifcopenshell.api

from elementifc.config import (
    FLOOR_PROFILE_NAME,
    STOREY_NAME_TEMPLATE,
    SURFACE_TYPE,
    SWEPT_SOLID_TYPE,
)
from elementifc.generation.builders.base import GeometryBuilder
from elementifc.generation.ifc_writer import create_placement
from elementifc.generation.result import BuildResult, ErrorKind
from elementifc.models.element import BuildingElement, Level

logger = logging.getLogger(__name__)

# Fewest points that bound an area
_MIN_RING_POINTS = 3


class StoreyRoofBuilder(GeometryBuilder):
    """Walk the levels once, in order.

    A level with floor loops becomes an IfcBuildingStorey whose body is the
    first floor loop's outer ring extruded up to the next level.  A level
    with only roof loops becomes an IfcRoof whose body is a curve-bounded
    plane, placed relative to the most recent storey.
    """

    @property
    def name(self) -> str:
        return "storeys"

    def build(self, element: BuildingElement, building: Any) -> BuildResult:
        geometry = element.details.geometry if element.details else None
        if geometry is None:
            logger.error("Geometry is null for the building details of %s", element.urn)
            return BuildResult.failure(ErrorKind.MISSING_INPUT, "Building details have no geometry")
        return self.build_levels(geometry.levels, building)

    def build_levels(self, levels: Sequence[Level], building: Any) -> BuildResult:
        """Create storeys and roofs for *levels* under *building*.

        Stops at the first failing level; entities created before it remain
        in the model and are listed on the returned result.
        """
        created: list[Any] = []
        last_storey: Any | None = None

        for i, level in enumerate(levels):
            logger.debug("Processing level %d at elevation %s", i, level.elevation)

            if level.has_floor:
                if i + 1 >= len(levels):
                    msg = f"Level {i} has floor loops but no following level to derive its height"
                    logger.error(msg)
                    return BuildResult.failure(ErrorKind.SEQUENCE_BOUNDARY, msg, created)
                height = levels[i + 1].elevation - level.elevation
                if height <= 0.0:
                    msg = f"Level {i} is not below the following level (height {height})"
                    logger.error(msg)
                    return BuildResult.failure(ErrorKind.SEQUENCE_BOUNDARY, msg, created)
                if len(level.floor_loops[0].outer_ring) < _MIN_RING_POINTS:
                    msg = f"Level {i} floor loop has fewer than {_MIN_RING_POINTS} points"
                    logger.error(msg)
                    return BuildResult.failure(ErrorKind.MISSING_INPUT, msg, created)
                last_storey = self._create_storey(i, level, height, building)
                created.append(last_storey)

            elif level.has_roof:
                if last_storey is None:
                    msg = f"Level {i} has roof loops but no storey precedes it"
                    logger.error(msg)
                    return BuildResult.failure(ErrorKind.MISSING_PRECEDING_STOREY, msg, created)
                if len(level.roof_loops[0].outer_ring) < _MIN_RING_POINTS:
                    msg = f"Level {i} roof loop has fewer than {_MIN_RING_POINTS} points"
                    logger.error(msg)
                    return BuildResult.failure(ErrorKind.MISSING_INPUT, msg, created)
                created.append(self._create_roof(level, last_storey, building))
                logger.info("Roof created at elevation %s", level.elevation)

        return BuildResult.ok(created)

    def _create_storey(self, index: int, level: Level, height: float, building: Any) -> Any:
        model = self.model
        with self.context.model_lock:
            storey = ifcopenshell.api.run(
                "root.create_entity",
                model,
                ifc_class="IfcBuildingStorey",
                name=STOREY_NAME_TEMPLATE.format(index=index),
            )
            storey.Elevation = float(level.elevation)
            ifcopenshell.api.run(
                "aggregate.assign_object", model, products=[storey], relating_object=building
            )
            storey.ObjectPlacement = create_placement(
                model, (0.0, 0.0, level.elevation), relative_to=building.ObjectPlacement
            )

            ring = level.floor_loops[0].outer_ring
            solid = self._extruded_solid(ring, height, FLOOR_PROFILE_NAME)
            storey.Representation = self._product_shape(solid, SWEPT_SOLID_TYPE)

        logger.info("Created storey %s (elevation %s, height %s)", storey.Name, level.elevation, height)
        return storey

    def _create_roof(self, level: Level, last_storey: Any, building: Any) -> Any:
        model = self.model
        with self.context.model_lock:
            roof = ifcopenshell.api.run("root.create_entity", model, ifc_class="IfcRoof", name="Roof")
            ifcopenshell.api.run(
                "spatial.assign_container", model, products=[roof], relating_structure=building
            )
            offset = level.elevation - (last_storey.Elevation or 0.0)
            roof.ObjectPlacement = create_placement(
                model, (0.0, 0.0, offset), relative_to=last_storey.ObjectPlacement
            )

            ring = level.roof_loops[0].outer_ring
            plane = model.createIfcPlane(self._origin_axis())
            surface = model.createIfcCurveBoundedPlane(plane, self._polyline_2d(ring), [])
            roof.Representation = self._product_shape(surface, SURFACE_TYPE)

        return roof
