from __future__ import annotations

import logging
import math
from typing import Optional, Tuple

from PySide6.QtWidgets import QVBoxLayout, QWidget
from PySide6.QtGui import QCloseEvent
from pyvistaqt import QtInteractor
import pyvista as pv

from insolepreview.config import DEFAULT_COLOR, ROTATION_SPEED_RAD_PER_S
from insolepreview.model.mesh import InsoleMesh
from insolepreview.view.widgets.vtk_utils import VtkUtils

logger = logging.getLogger(__name__)

INSOLE_ACTOR_NAME = "insole"


class InsolePreviewWidget(QWidget):
    """
    PyVista/Qt preview of one insole mesh.

    The widget never mutates a mesh it is drawing: `set_mesh` converts the new
    mesh into a fresh PolyData and replaces the actor in one call. Rotation is
    driven from outside through `advance(delta_seconds)`.
    """
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.layout_box.addWidget(self.plotter)

        self._init_plotter()

        # --- Actors state ---
        self._actor: Optional[pv.Actor] = None
        self._color: str = DEFAULT_COLOR
        self._angle_rad: float = 0.0
        self.rotation_speed: float = ROTATION_SPEED_RAD_PER_S

        # Signature of the mesh on screen, to skip redundant swaps
        self._shown_mesh_id: Optional[int] = None

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def set_mesh(self, mesh: Optional[InsoleMesh], reset_camera: bool = False) -> None:
        """Replace the displayed mesh (None clears the view)."""
        if mesh is None:
            self.clear()
            return
        if id(mesh) == self._shown_mesh_id:
            return

        first = self._actor is None
        polydata = VtkUtils.mesh_to_polydata(mesh)
        self._actor = self.plotter.add_mesh(
            polydata,
            name=INSOLE_ACTOR_NAME,
            color=self._color,
            smooth_shading=True,
            specular=0.3,
            reset_camera=False,
        )
        self._shown_mesh_id = id(mesh)

        # Spin about the vertical axis through the middle of the footprint
        x_min, x_max, _, _, z_min, z_max = mesh.bounds()
        self._actor.origin = (0.5 * (x_min + x_max), 0.0, 0.5 * (z_min + z_max))
        self._apply_rotation()

        if first or reset_camera:
            self._place_camera(mesh.bounds())
        self.plotter.render()

    def set_color(self, color: str) -> None:
        self._color = color
        if self._actor is not None:
            self._actor.prop.color = color
            self.plotter.render()

    def advance(self, delta_seconds: float) -> None:
        """Turn the insole about its vertical axis by `rotation_speed * delta`."""
        self._angle_rad = (self._angle_rad + self.rotation_speed * delta_seconds) % (2.0 * math.pi)
        if self._actor is not None:
            self._apply_rotation()
            self.plotter.render()

    def clear(self) -> None:
        self.plotter.remove_actor(INSOLE_ACTOR_NAME, render=False)
        self._actor = None
        self._shown_mesh_id = None
        self.plotter.render()

    # ------------------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------------------

    def _init_plotter(self) -> None:
        self.plotter.set_background("white")
        self.plotter.add_axes()

    def _apply_rotation(self) -> None:
        if self._actor is not None:
            self._actor.orientation = (0.0, math.degrees(self._angle_rad), 0.0)

    def _place_camera(self, bounds: Tuple[float, float, float, float, float, float]) -> None:
        x_min, x_max, y_min, y_max, z_min, z_max = bounds
        length = z_max - z_min
        height = y_max - y_min
        self.plotter.camera_position = [
            (0.0, height * 2.5 + length * 0.6, z_max + length * 1.3),
            (0.5 * (x_min + x_max), 0.5 * (y_min + y_max), 0.5 * (z_min + z_max)),
            (0.0, 1.0, 0.0),
        ]

    def closeEvent(self, event: QCloseEvent) -> None:
        self.plotter.close()
        event.accept()
