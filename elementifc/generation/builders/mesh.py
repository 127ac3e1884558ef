"""MeshTriangulationBuilder: IfcTriangulatedFaceSet from a GLB volume mesh."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from elementifc.config import TESSELLATION_TYPE
from elementifc.generation.builders.base import GeometryBuilder
from elementifc.generation.result import BuildResult, ErrorKind
from elementifc.geometry.triangulation import (
    IndexedTriangulation,
    Triangle,
    build_indexed_triangulation,
    flatten_mesh_groups,
)
from elementifc.models.element import BuildingElement
from elementifc.readers.glb import DecodeFailure

logger = logging.getLogger(__name__)


class MeshTriangulationBuilder(GeometryBuilder):
    """Decode the referenced blob, select the element's nodes, index them."""

    @property
    def name(self) -> str:
        return "volume_mesh"

    def build(self, element: BuildingElement, building: Any) -> BuildResult:
        ref = element.volume_mesh_ref
        if ref is None:
            return BuildResult.failure(ErrorKind.MISSING_INPUT, "Element has no volume mesh reference")
        if ref.selection is None:
            msg = f"Volume mesh reference of {element.urn} has no selection"
            logger.error(msg)
            return BuildResult.failure(ErrorKind.MISSING_INPUT, msg)

        data = self.context.blob_data(ref.blob_id)
        if data is None:
            msg = f"No binary data for blob {ref.blob_id}"
            logger.error(msg)
            return BuildResult.failure(ErrorKind.MISSING_INPUT, msg)

        try:
            self.context.reader.parse_and_cache(ref.blob_id, data)
        except DecodeFailure as exc:
            logger.error("Could not decode blob %s: %s", ref.blob_id, exc)
            return BuildResult.failure(ErrorKind.DECODE_FAILURE, str(exc))

        groups = self.context.reader.meshes_for_selection(
            ref.blob_id, ref.selection, ref.selection_is_exact
        )
        if not groups:
            msg = f"No meshes found for the element. Element Urn: {element.urn}"
            logger.error(msg)
            return BuildResult.failure(ErrorKind.MISSING_INPUT, msg)

        logger.info("Meshes obtained for %s: %d nodes", element.urn, len(groups))
        return self.build_triangles(flatten_mesh_groups(groups), building)

    def build_triangles(self, triangles: Sequence[Triangle], building: Any) -> BuildResult:
        """Index *triangles* and attach the face set to *building*."""
        triangulation = build_indexed_triangulation(triangles)
        with self.context.model_lock:
            face_set = self._face_set(triangulation)
            building.Representation = self._product_shape(face_set, TESSELLATION_TYPE)

        logger.info(
            "Volume mesh representation created: %d points, %d triangles",
            triangulation.point_count,
            triangulation.triangle_count,
        )
        return BuildResult.ok([face_set])

    def _face_set(self, triangulation: IndexedTriangulation) -> Any:
        point_list = self.model.create_entity(
            "IfcCartesianPointList3D",
            CoordList=[list(p) for p in triangulation.points],
        )
        return self.model.create_entity(
            "IfcTriangulatedFaceSet",
            Coordinates=point_list,
            CoordIndex=[list(t) for t in triangulation.one_based()],
        )
