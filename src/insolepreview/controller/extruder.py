"""
Extrusion
=========
Sweeps a sampled outline along +Y into a capped solid.

Layout of the produced vertex buffer (m = distinct ring vertices):
    [0, m)      bottom cap, y = 0
    [m, 2m)     top cap, y = thickness
    [2m, 3m)    wall ring at y = 0
    [3m, 4m)    wall ring at y = thickness
"""
from __future__ import annotations

import logging
from typing import List, TYPE_CHECKING

import numpy as np

from insolepreview.config import DEGENERATE_AREA_EPS
from insolepreview.model.errors import DegenerateOutlineError
from insolepreview.model.geometry_primitives import Outline
from insolepreview.model.geometry_utils import polygon_signed_area, split_self_intersections, triangulate_loop
from insolepreview.model.mesh import InsoleMesh, VertexGroups
from insolepreview.model.state import require_positive

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


def flat_face_normals(
    positions: npt.NDArray[np.float64],
    faces: npt.NDArray[np.int64],
) -> npt.NDArray[np.float64]:
    """
    Per-vertex normals taken from the faces, without averaging.
    Each face writes its unit normal to its three vertices in face order.
    """
    v0, v1, v2 = (positions[faces[:, k]] for k in range(3))
    fn = np.cross(v1 - v0, v2 - v0)
    lengths = np.linalg.norm(fn, axis=1, keepdims=True)
    fn = np.divide(fn, lengths, out=np.zeros_like(fn), where=lengths > 0.0)

    normals = np.zeros_like(positions)
    normals[:, 1] = 1.0
    usable = lengths[:, 0] > 0.0
    for k in range(3):
        normals[faces[usable, k]] = fn[usable]
    return normals


def _check_enclosed_area(vertices: npt.NDArray[np.float64], loops: List[List[int]]) -> float:
    """The extrusion gate: the outline must enclose a non-zero area."""
    area = sum(abs(polygon_signed_area(vertices[loop])) for loop in loops)
    extent = np.ptp(vertices, axis=0) if len(vertices) else np.zeros(2)
    bbox_area = float(extent[0] * extent[1])

    if not loops or bbox_area <= 0.0 or area <= DEGENERATE_AREA_EPS * bbox_area:
        raise DegenerateOutlineError(area)
    return area


def extrude(outline: Outline, thickness: float) -> InsoleMesh:
    """
    Build the flat-topped solid: bottom cap, top cap and side walls.

    Self-crossings of the sampled ring are split into simple lobes first; each
    lobe is oriented counter-clockwise in (x, z) and ear-clipped, so caps and
    walls are wound outward on every lobe.

    Raises:
        InvalidDimensionError: If thickness is not a finite number > 0.
        DegenerateOutlineError: If the outline encloses no area.
    """
    thickness = require_positive("thickness", thickness)

    vertices, loops = split_self_intersections(outline.ring)
    area = _check_enclosed_area(vertices, loops)

    loops = [loop if polygon_signed_area(vertices[loop]) > 0.0 else loop[::-1] for loop in loops]

    m = len(vertices)
    groups = VertexGroups(ring_size=m)

    positions = np.zeros((groups.vertex_count, 3), dtype=np.float64)
    for group, y in (
        (groups.bottom, 0.0),
        (groups.top, thickness),
        (groups.wall_bottom, 0.0),
        (groups.wall_top, thickness),
    ):
        positions[group, 0] = vertices[:, 0]
        positions[group, 1] = y
        positions[group, 2] = vertices[:, 1]

    cap = np.vstack([triangulate_loop(vertices, loop) for loop in loops])
    # Counter-clockwise in (x, z) faces -Y; the top cap is flipped to face +Y
    bottom_faces = cap
    top_faces = cap[:, ::-1] + m

    wall_faces = []
    for loop in loops:
        a = np.asarray(loop, dtype=np.int64)
        b = np.roll(a, -1)
        b0, b1 = a + 2 * m, b + 2 * m
        t0, t1 = a + 3 * m, b + 3 * m
        wall_faces.append(np.column_stack([b0, t1, b1]))
        wall_faces.append(np.column_stack([b0, t0, t1]))

    faces = np.vstack([bottom_faces, top_faces, *wall_faces]).astype(np.int64)
    normals = flat_face_normals(positions, faces)

    logger.debug(
        f"Extruded outline: {len(loops)} lobe(s), area={area:.4g}, "
        f"{groups.vertex_count} vertices, {len(faces)} faces."
    )
    return InsoleMesh(positions=positions, faces=faces, normals=normals, groups=groups)
