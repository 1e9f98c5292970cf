"""Tests for the extruded (flat) insole solid."""

import numpy as np
import pytest

from conftest import REF_THICKNESS
from insolepreview.controller.contour import build_outline
from insolepreview.controller.extruder import extrude
from insolepreview.model.errors import DegenerateOutlineError, InvalidDimensionError
from insolepreview.model.geometry_primitives import Outline
from insolepreview.model.geometry_utils import polygon_signed_area, split_self_intersections
from insolepreview.model.profiles import InsoleAnchors


def signed_volume(mesh):
    v0, v1, v2 = (mesh.positions[mesh.faces[:, k]] for k in range(3))
    return float(np.einsum("ij,ij->i", v0, np.cross(v1, v2)).sum() / 6.0)


def face_normals(mesh):
    v0, v1, v2 = (mesh.positions[mesh.faces[:, k]] for k in range(3))
    return np.cross(v1 - v0, v2 - v0)


class TestFlatExtrudeInvariant:
    @pytest.mark.parametrize("width,length,thickness", [(1.0, 2.0, 0.4), (0.75, 1.0, 0.2), (90.0, 270.0, 6.0)])
    def test_heights_within_thickness(self, width, length, thickness):
        mesh = extrude(build_outline(width, length), thickness)
        y = mesh.positions[:, 1]
        assert y.min() >= 0.0
        assert y.max() <= thickness

    def test_top_cap_exactly_at_thickness(self, flat_mesh):
        top = flat_mesh.positions[flat_mesh.groups.top]
        assert np.all(top[:, 1] == REF_THICKNESS)

    def test_bottom_cap_exactly_at_zero(self, flat_mesh):
        bottom = flat_mesh.positions[flat_mesh.groups.bottom]
        assert np.all(bottom[:, 1] == 0.0)

    def test_walls_span_both_heights(self, flat_mesh):
        g = flat_mesh.groups
        assert np.all(flat_mesh.positions[g.wall_bottom, 1] == 0.0)
        assert np.all(flat_mesh.positions[g.wall_top, 1] == REF_THICKNESS)


class TestVertexGroups:
    def test_groups_share_xz_by_index(self, flat_mesh):
        g = flat_mesh.groups
        xz = flat_mesh.positions[:, [0, 2]]
        for group in (g.top, g.wall_bottom, g.wall_top):
            np.testing.assert_array_equal(xz[group], xz[g.bottom])

    def test_ring_samples_come_first(self, ref_outline, flat_mesh):
        ring = ref_outline.ring
        bottom = flat_mesh.positions[flat_mesh.groups.bottom]
        np.testing.assert_array_equal(bottom[: len(ring)][:, [0, 2]], ring)

    def test_vertex_count(self, ref_outline, flat_mesh):
        m = flat_mesh.groups.ring_size
        assert flat_mesh.n_vertices == 4 * m
        # The mirrored arch/ball segments cross once on the centerline
        assert m == len(ref_outline.ring) + 1

    def test_crossing_vertex_on_centerline(self, ref_outline, flat_mesh):
        extra = flat_mesh.positions[len(ref_outline.ring):flat_mesh.groups.ring_size]
        np.testing.assert_allclose(extra[:, 0], 0.0, atol=1e-12)

    def test_index_list_read_only(self, flat_mesh):
        with pytest.raises(ValueError):
            flat_mesh.faces[0, 0] = 1


class TestWinding:
    def test_top_faces_point_up(self, flat_mesh):
        m = flat_mesh.groups.ring_size
        fn = face_normals(flat_mesh)
        on_top = np.all((flat_mesh.faces >= m) & (flat_mesh.faces < 2 * m), axis=1)
        on_top &= np.linalg.norm(fn, axis=1) > 1e-12
        assert on_top.any()
        assert np.all(fn[on_top, 1] > 0.0)

    def test_bottom_faces_point_down(self, flat_mesh):
        m = flat_mesh.groups.ring_size
        fn = face_normals(flat_mesh)
        on_bottom = np.all(flat_mesh.faces < m, axis=1)
        on_bottom &= np.linalg.norm(fn, axis=1) > 1e-12
        assert on_bottom.any()
        assert np.all(fn[on_bottom, 1] < 0.0)

    def test_wall_faces_are_vertical(self, flat_mesh):
        m = flat_mesh.groups.ring_size
        fn = face_normals(flat_mesh)
        on_wall = np.all(flat_mesh.faces >= 2 * m, axis=1)
        np.testing.assert_allclose(fn[on_wall, 1], 0.0, atol=1e-12)

    def test_outward_winding_gives_positive_volume(self, ref_outline, flat_mesh):
        vertices, loops = split_self_intersections(ref_outline.ring)
        area = sum(abs(polygon_signed_area(vertices[loop])) for loop in loops)
        assert signed_volume(flat_mesh) == pytest.approx(area * REF_THICKNESS, rel=1e-9)

    def test_cap_triangles_cover_enclosed_area(self, ref_outline, flat_mesh):
        m = flat_mesh.groups.ring_size
        on_bottom = np.all(flat_mesh.faces < m, axis=1)
        cap_area = 0.5 * np.linalg.norm(face_normals(flat_mesh)[on_bottom], axis=1).sum()
        vertices, loops = split_self_intersections(ref_outline.ring)
        area = sum(abs(polygon_signed_area(vertices[loop])) for loop in loops)
        assert cap_area == pytest.approx(area, rel=1e-9)


class TestInitialNormals:
    def test_unit_length(self, flat_mesh):
        np.testing.assert_allclose(np.linalg.norm(flat_mesh.normals, axis=1), 1.0)

    def test_caps_flat(self, flat_mesh):
        g = flat_mesh.groups
        np.testing.assert_allclose(flat_mesh.normals[g.top], [[0.0, 1.0, 0.0]] * g.ring_size, atol=1e-12)
        np.testing.assert_allclose(flat_mesh.normals[g.bottom], [[0.0, -1.0, 0.0]] * g.ring_size, atol=1e-12)


class TestGates:
    @pytest.mark.parametrize("thickness", [0.0, -0.1, float("nan")])
    def test_rejects_invalid_thickness(self, ref_outline, thickness):
        with pytest.raises(InvalidDimensionError):
            extrude(ref_outline, thickness)

    def test_zero_width_outline_is_degenerate(self):
        # Bypasses the width check in build_outline to reach the area gate
        anchors = InsoleAnchors(half_width=0.0, length=2.0)
        outline = Outline(segments=anchors.segments(), samples_per_segment=8)
        with pytest.raises(DegenerateOutlineError):
            extrude(outline, 0.4)
