"""Geometry builders: one per input representation."""

from elementifc.generation.builders.base import GeometryBuilder
from elementifc.generation.builders.footprint import FootprintExtrusionBuilder
from elementifc.generation.builders.mesh import MeshTriangulationBuilder
from elementifc.generation.builders.storey import StoreyRoofBuilder

__all__ = [
    "FootprintExtrusionBuilder",
    "GeometryBuilder",
    "MeshTriangulationBuilder",
    "StoreyRoofBuilder",
]
