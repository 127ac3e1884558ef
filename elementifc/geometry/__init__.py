"""Pure-Python geometry helpers (no IFC dependency)."""

from elementifc.geometry.point_index import IndexedPoint, PointIndex
from elementifc.geometry.triangulation import (
    IndexedTriangulation,
    build_indexed_triangulation,
    flatten_mesh_groups,
)

__all__ = [
    "IndexedPoint",
    "IndexedTriangulation",
    "PointIndex",
    "build_indexed_triangulation",
    "flatten_mesh_groups",
]
