"""PointIndex: assigns stable integer indices to distinct 3D coordinates."""

from __future__ import annotations

from dataclasses import dataclass

Vec3 = tuple[float, float, float]


@dataclass(frozen=True)
class IndexedPoint:
    """A coordinate together with the index it was first seen at."""

    point: Vec3
    index: int


class PointIndex:
    """Deduplicate coordinates by exact equality of their three components.

    Indices are handed out in first-seen order, starting at 0.  No tolerance
    is applied: two coordinates that differ in any component are distinct.
    """

    def __init__(self) -> None:
        self._points: dict[Vec3, IndexedPoint] = {}

    def __len__(self) -> int:
        return len(self._points)

    def __contains__(self, point: object) -> bool:
        return point in self._points

    def add(self, point: Vec3) -> int:
        """Register *point* if unseen and return its index."""
        key = (float(point[0]), float(point[1]), float(point[2]))
        entry = self._points.get(key)
        if entry is None:
            entry = IndexedPoint(point=key, index=len(self._points))
            self._points[key] = entry
        return entry.index

    def index_of(self, point: Vec3) -> int:
        """Return the index of a registered point; KeyError if unknown."""
        return self._points[(float(point[0]), float(point[1]), float(point[2]))].index

    def points(self) -> list[Vec3]:
        """Coordinates ordered by assigned index."""
        ordered = sorted(self._points.values(), key=lambda ip: ip.index)
        return [ip.point for ip in ordered]
