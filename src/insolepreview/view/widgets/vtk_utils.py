"""
VTK and Geometry Utilities
Conversion of the engine-agnostic buffers into PyVista data sets.
"""
import logging

import numpy as np
import numpy.typing as npt
import pyvista as pv

from insolepreview.model.mesh import InsoleMesh

logger = logging.getLogger(__name__)


class VtkUtils:
    @staticmethod
    def faces_to_cells(faces: npt.NDArray[np.int64]) -> npt.NDArray[np.int_]:
        """(M, 3) triangles -> VTK cell array [3, a, b, c, 3, ...]."""
        faces = np.asarray(faces, dtype=np.int_).reshape(-1, 3)
        sizes = np.full((faces.shape[0], 1), 3, dtype=np.int_)
        return np.hstack([sizes, faces]).ravel()

    @staticmethod
    def mesh_to_polydata(mesh: InsoleMesh) -> pv.PolyData:
        """
        Copy an InsoleMesh into a new PolyData, normals included.

        The PolyData owns its own buffers, so the caller may keep drawing it
        while another mesh is being built.
        """
        pd = pv.PolyData(
            np.array(mesh.positions, dtype=np.float64),
            VtkUtils.faces_to_cells(mesh.faces),
        )
        pd.point_data.active_normals = np.array(mesh.normals, dtype=np.float64)
        logger.debug(f"Converted mesh to PolyData: {pd.n_points} points, {pd.n_cells} cells.")
        return pd

