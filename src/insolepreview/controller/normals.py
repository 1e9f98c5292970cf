"""Per-vertex lighting normals from the current triangle geometry."""
from __future__ import annotations

import logging
from typing import Tuple, TYPE_CHECKING

import numpy as np

from insolepreview.model.mesh import InsoleMesh

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

FALLBACK_NORMAL = np.array([0.0, 1.0, 0.0])


def face_normals(
    positions: npt.NDArray[np.float64],
    faces: npt.NDArray[np.int64],
) -> Tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Compute ``n = (v1 - v0) x (v2 - v0)`` for every face.

    Returns:
        (cross, length) where `cross` is the unnormalized (area-weighted)
        normal and `length` its magnitude (twice the triangle area).
    """
    v0, v1, v2 = (positions[faces[:, k]] for k in range(3))
    cross = np.cross(v1 - v0, v2 - v0)
    return cross, np.linalg.norm(cross, axis=1)


def recompute_normals(mesh: InsoleMesh) -> InsoleMesh:
    """
    Replace the normal buffer with area-weighted vertex normals, in place.

    Degenerate (zero-area or non-finite) triangles are skipped. A vertex with
    no usable contribution keeps its previous normal if that is a unit
    vector, otherwise it gets +Y.
    """
    cross, lengths = face_normals(mesh.positions, mesh.faces)
    usable = np.isfinite(lengths) & (lengths > 0.0)

    accumulated = np.zeros_like(mesh.positions)
    for k in range(3):
        np.add.at(accumulated, mesh.faces[usable, k], cross[usable])

    norms = np.linalg.norm(accumulated, axis=1)
    ok = np.isfinite(norms) & (norms > 0.0)

    normals = mesh.normals.copy()
    normals[ok] = accumulated[ok] / norms[ok, None]

    missing = ~ok
    if missing.any():
        previous = np.linalg.norm(normals[missing], axis=1)
        keep = np.isfinite(previous) & (np.abs(previous - 1.0) < 1e-6)
        fallback = np.nonzero(missing)[0][~keep]
        normals[fallback] = FALLBACK_NORMAL

    skipped = int((~usable).sum())
    if skipped:
        logger.debug(f"Skipped {skipped} degenerate triangle(s) while computing normals.")

    mesh.normals = normals
    return mesh
