"""
Relief Sculpting
================
Remaps the height of the top cap to an anatomical thickness profile
(heel -> arch -> forefoot -> toe) and carves a heel cup.

Only the top-cap vertex group is touched, and only vertices that still sit at
the nominal thickness. Bottom cap, walls and the index list are unchanged.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from insolepreview.config import TOP_FACE_TOLERANCE
from insolepreview.model.mesh import InsoleMesh
from insolepreview.model.profiles import DEFAULT_RELIEF_PROFILE, ReliefProfile

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


def relief_height(
    x: npt.ArrayLike,
    z: npt.ArrayLike,
    length: float,
    thickness: float,
    half_width: float,
    profile: ReliefProfile = DEFAULT_RELIEF_PROFILE,
) -> npt.NDArray[np.float64]:
    """
    Sculpted top-face height at lateral position x and length position z.

    t = clamp(z / length, 0, 1); height = h(t) - heel cup(x, t).
    """
    x = np.asarray(x, dtype=np.float64)
    t = np.clip(np.asarray(z, dtype=np.float64) / length, 0.0, 1.0)
    return profile.height(t, thickness) - profile.heel_cup(x, t, half_width, thickness)


def sculpt_relief(
    mesh: InsoleMesh,
    length: float,
    thickness: float,
    half_width: float,
    profile: ReliefProfile = DEFAULT_RELIEF_PROFILE,
    tolerance: float = TOP_FACE_TOLERANCE,
) -> InsoleMesh:
    """
    Return a sculpted copy of a flat mesh. The input mesh is not modified.

    Args:
        mesh: Flat mesh from the extruder.
        length: Insole length used to normalize z.
        thickness: Nominal thickness; selects the top-face vertices.
        half_width: Half of the insole width; sets the heel-cup falloff.
        profile: Thickness profile and heel-cup shape.
        tolerance: How close to `thickness` a vertex must be to be sculpted.

    Returns:
        A new InsoleMesh with rewritten top-cap heights. Normals are carried
        over unchanged and must be recomputed by the caller.
    """
    sculpted = mesh.copy()
    positions = sculpted.positions

    top = sculpted.top_cap_indices()
    on_top = np.abs(positions[top, 1] - thickness) < tolerance
    idx = top[on_top]

    positions[idx, 1] = relief_height(
        positions[idx, 0],
        positions[idx, 2],
        length=length,
        thickness=thickness,
        half_width=half_width,
        profile=profile,
    )

    logger.debug(f"Sculpted {idx.size} of {top.size} top-cap vertices.")
    return sculpted
