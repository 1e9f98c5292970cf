"""Tests for the low-level polygon helpers."""

import numpy as np
import pytest

from insolepreview.model.geometry_utils import (
    clamp,
    cubic_bezier_points,
    polygon_signed_area,
    split_self_intersections,
    triangulate_loop,
)


SQUARE = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])
# Figure-eight: crosses itself at (0.5, 0.5)
BOWTIE = np.array([[0.0, 0.0], [1.0, 1.0], [1.0, 0.0], [0.0, 1.0]])


class TestScalars:
    def test_clamp(self):
        assert clamp(-1.0, 0.0, 1.0) == 0.0
        assert clamp(2.0, 0.0, 1.0) == 1.0
        assert clamp(0.3, 0.0, 1.0) == 0.3


class TestCubicBezier:
    def test_endpoints_exact(self):
        p = [np.array(v, dtype=float) for v in ([0.1, 0.2], [0.5, 3.0], [-2.0, 1.0], [0.7, 0.9])]
        pts = cubic_bezier_points(*p, np.array([0.0, 1.0]))
        assert np.array_equal(pts[0], p[0])
        assert np.array_equal(pts[1], p[3])

    def test_straight_line_midpoint(self):
        p0, p3 = np.array([0.0, 0.0]), np.array([3.0, 0.0])
        p1, p2 = np.array([1.0, 0.0]), np.array([2.0, 0.0])
        mid = cubic_bezier_points(p0, p1, p2, p3, np.array([0.5]))[0]
        np.testing.assert_allclose(mid, [1.5, 0.0])


class TestSignedArea:
    def test_ccw_square_positive(self):
        assert polygon_signed_area(SQUARE) == pytest.approx(1.0)

    def test_cw_square_negative(self):
        assert polygon_signed_area(SQUARE[::-1]) == pytest.approx(-1.0)

    def test_closed_ring_same_area(self):
        closed = np.vstack([SQUARE, SQUARE[:1]])
        assert polygon_signed_area(closed) == pytest.approx(1.0)

    def test_too_few_points(self):
        assert polygon_signed_area(SQUARE[:2]) == 0.0


class TestSplitSelfIntersections:
    def test_simple_ring_untouched(self):
        vertices, loops = split_self_intersections(SQUARE)
        assert len(vertices) == 4
        assert loops == [[0, 1, 2, 3]]

    def test_bowtie_splits_into_two_lobes(self):
        vertices, loops = split_self_intersections(BOWTIE)
        assert len(loops) == 2
        # One crossing vertex appended after the original points
        assert len(vertices) == 5
        np.testing.assert_allclose(vertices[4], [0.5, 0.5])
        np.testing.assert_array_equal(vertices[:4], BOWTIE)
        for loop in loops:
            assert 4 in loop
            assert len(loop) == 3

    def test_lobe_areas_sum_to_enclosed_area(self):
        vertices, loops = split_self_intersections(BOWTIE)
        total = sum(abs(polygon_signed_area(vertices[loop])) for loop in loops)
        assert total == pytest.approx(0.5)

    def test_repeated_points_are_dropped(self):
        ring = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])
        _, loops = split_self_intersections(ring)
        assert loops == [[0, 1, 3, 4]]


class TestTriangulateLoop:
    def test_square_two_ccw_triangles(self):
        tris = triangulate_loop(SQUARE, [0, 1, 2, 3])
        assert tris.shape == (2, 3)
        for a, b, c in tris:
            assert polygon_signed_area(SQUARE[[a, b, c]]) > 0.0

    def test_clockwise_input_still_ccw_output(self):
        tris = triangulate_loop(SQUARE, [3, 2, 1, 0])
        for a, b, c in tris:
            assert polygon_signed_area(SQUARE[[a, b, c]]) > 0.0

    def test_concave_polygon_covers_area(self):
        # L-shape, area 3
        poly = np.array([[0, 0], [2, 0], [2, 1], [1, 1], [1, 2], [0, 2]], dtype=float)
        tris = triangulate_loop(poly, list(range(6)))
        assert len(tris) == 4
        area = sum(polygon_signed_area(poly[t]) for t in tris)
        assert area == pytest.approx(3.0)

    def test_degenerate_loop(self):
        assert triangulate_loop(SQUARE, [0, 1]).shape == (0, 3)
