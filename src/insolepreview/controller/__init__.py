"""
The CONTROLLER layer turns InsoleParameters into an InsoleMesh.

Stages (each a pure function over its inputs):
    contour  -> Outline from (width, length)
    extruder -> flat InsoleMesh from (Outline, thickness)
    relief   -> sculpted copy of the top cap
    normals  -> per-vertex normals from the current triangles
"""
from insolepreview.controller.contour import build_outline
from insolepreview.controller.extruder import extrude
from insolepreview.controller.normals import recompute_normals
from insolepreview.controller.pipeline import InsoleGenerator, MeshCache, MeshResult, build_insole_mesh
from insolepreview.controller.relief import relief_height, sculpt_relief

__all__ = [
    "InsoleGenerator",
    "MeshCache",
    "MeshResult",
    "build_insole_mesh",
    "build_outline",
    "extrude",
    "recompute_normals",
    "relief_height",
    "sculpt_relief",
]
