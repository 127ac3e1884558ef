"""Indexed triangulation of triangle soups.

Turns a list of triangles (each three explicit coordinates) into the
compact form used by IfcTriangulatedFaceSet: one shared point list and a
list of index triples into it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from elementifc.geometry.point_index import PointIndex, Vec3

Triangle = tuple[Vec3, Vec3, Vec3]


@dataclass
class IndexedTriangulation:
    """Shared point list plus 0-based triangle index triples."""

    points: list[Vec3] = field(default_factory=list)
    triangles: list[tuple[int, int, int]] = field(default_factory=list)

    @property
    def point_count(self) -> int:
        return len(self.points)

    @property
    def triangle_count(self) -> int:
        return len(self.triangles)

    def one_based(self) -> list[tuple[int, int, int]]:
        """Index triples shifted to the 1-based convention of IFC CoordIndex."""
        return [(a + 1, b + 1, c + 1) for a, b, c in self.triangles]

    def resolve(self) -> list[Triangle]:
        """Rebuild explicit triangles from the index list."""
        return [(self.points[a], self.points[b], self.points[c]) for a, b, c in self.triangles]


def flatten_mesh_groups(groups: Iterable[Sequence[Triangle]]) -> list[Triangle]:
    """Concatenate per-node triangle lists, keeping encounter order."""
    triangles: list[Triangle] = []
    for group in groups:
        triangles.extend(group)
    return triangles


def build_indexed_triangulation(triangles: Sequence[Sequence[Vec3]]) -> IndexedTriangulation:
    """Deduplicate vertices of *triangles* and return the indexed form.

    Raises ValueError if a face does not have exactly three vertices.
    """
    index = PointIndex()
    for tri in triangles:
        if len(tri) != 3:
            raise ValueError(f"Expected a triangle, got a face with {len(tri)} vertices")
        for vertex in tri:
            index.add(vertex)

    # Second pass: every vertex is registered, so lookups cannot miss
    faces = [
        (index.index_of(tri[0]), index.index_of(tri[1]), index.index_of(tri[2]))
        for tri in triangles
    ]
    return IndexedTriangulation(points=index.points(), triangles=faces)
