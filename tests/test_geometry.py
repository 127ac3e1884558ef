"""Tests for the point index and indexed triangulation."""

from __future__ import annotations

import pytest

from elementifc.geometry.point_index import PointIndex
from elementifc.geometry.triangulation import build_indexed_triangulation, flatten_mesh_groups
from tests.helpers import A, B, C, D


# ---------------------------------------------------------------------------
# PointIndex
# ---------------------------------------------------------------------------

class TestPointIndex:
    def test_first_seen_order(self):
        index = PointIndex()
        assert index.add((5.0, 5.0, 5.0)) == 0
        assert index.add((1.0, 2.0, 3.0)) == 1
        assert index.add((5.0, 5.0, 5.0)) == 0
        assert len(index) == 2

    def test_points_sorted_by_index(self):
        index = PointIndex()
        for p in [(3.0, 0.0, 0.0), (1.0, 0.0, 0.0), (2.0, 0.0, 0.0), (1.0, 0.0, 0.0)]:
            index.add(p)
        assert index.points() == [(3.0, 0.0, 0.0), (1.0, 0.0, 0.0), (2.0, 0.0, 0.0)]

    def test_tiny_difference_is_distinct(self):
        index = PointIndex()
        index.add((1.0, 1.0, 1.0))
        index.add((1.0, 1.0, 1.0 + 1e-12))
        assert len(index) == 2

    def test_int_and_float_coordinates_share_key(self):
        index = PointIndex()
        assert index.add((1, 2, 3)) == index.add((1.0, 2.0, 3.0))

    def test_index_of_unknown_point(self):
        with pytest.raises(KeyError):
            PointIndex().index_of((0.0, 0.0, 0.0))

    def test_contains(self):
        index = PointIndex()
        index.add((1.0, 0.0, 0.0))
        assert (1.0, 0.0, 0.0) in index
        assert (0.0, 1.0, 0.0) not in index


# ---------------------------------------------------------------------------
# Indexed triangulation
# ---------------------------------------------------------------------------

class TestIndexedTriangulation:
    def test_shared_edge_dedup(self):
        result = build_indexed_triangulation([(A, B, C), (B, C, D)])
        assert result.point_count == 4
        assert result.triangles == [(0, 1, 2), (1, 2, 3)]
        assert all(0 <= i < 4 for tri in result.triangles for i in tri)

    def test_round_trip_to_input_vertices(self):
        triangles = [(A, B, C), (B, C, D)]
        result = build_indexed_triangulation(triangles)
        assert result.resolve() == triangles

    def test_triangle_count_preserved(self):
        triangles = [(A, B, C)] * 5
        result = build_indexed_triangulation(triangles)
        assert result.triangle_count == 5
        assert result.point_count == 3

    def test_one_based_indices(self):
        result = build_indexed_triangulation([(A, B, C)])
        assert result.one_based() == [(1, 2, 3)]

    def test_vertex_order_preserved_per_triangle(self):
        result = build_indexed_triangulation([(C, B, A), (A, B, C)])
        assert result.triangles == [(0, 1, 2), (2, 1, 0)]

    def test_rejects_non_triangles(self):
        with pytest.raises(ValueError, match="triangle"):
            build_indexed_triangulation([(A, B, C, D)])

    def test_empty_input(self):
        result = build_indexed_triangulation([])
        assert result.points == []
        assert result.triangles == []

    def test_deterministic(self):
        triangles = [(A, B, C), (B, C, D), (D, C, A)]
        first = build_indexed_triangulation(triangles)
        second = build_indexed_triangulation(triangles)
        assert first == second

    def test_flatten_keeps_group_order(self):
        groups = [[(A, B, C)], [], [(B, C, D), (D, C, B)]]
        assert flatten_mesh_groups(groups) == [(A, B, C), (B, C, D), (D, C, B)]
