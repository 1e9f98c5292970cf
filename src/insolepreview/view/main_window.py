"""
Main Application Window
=======================
The primary GUI container: parameter panel on the left, 3D preview on the right.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It debounces parameter edits, dispatches mesh builds to a
   background worker and swaps the finished mesh into the preview.
3. Animation: It owns the ticker that feeds elapsed time to the preview;
   the geometry itself holds no animation state.
"""
import logging
from typing import List, Optional

from PySide6.QtCore import Qt, QTimer, QElapsedTimer
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QMainWindow, QSplitter, QStatusBar

from insolepreview.config import RECOMPUTE_DEBOUNCE_MS
from insolepreview.controller.pipeline import InsoleGenerator, MeshResult
from insolepreview.controller.workers import MeshWorker
from insolepreview.model.state import InsoleParameters, PreviewState
from insolepreview.view.tabs.tab_parameters import ParametersControlPanel
from insolepreview.view.widgets.plot_3d import InsolePreviewWidget

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "Insole Preview"
ANIMATION_INTERVAL_MS = 33


class MainWindow(QMainWindow):
    def __init__(self, state: PreviewState, generator: Optional[InsoleGenerator] = None) -> None:
        super().__init__()
        self.state: PreviewState = state
        self.generator: InsoleGenerator = generator or InsoleGenerator()
        self._workers: List[MeshWorker] = []

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1200, 800)

        # --- SPLITTER (CONTENT AREA) ---
        splitter = QSplitter(Qt.Horizontal)
        self.setCentralWidget(splitter)

        self.params_panel = ParametersControlPanel(self.state.parameters)
        splitter.addWidget(self.params_panel)

        self.preview = InsolePreviewWidget()
        self.preview.set_color(self.state.color)
        splitter.addWidget(self.preview)
        splitter.setSizes([300, 900])

        self.setStatusBar(QStatusBar())

        # --- Debounce timer for parameter edits ---
        self._recompute_timer = QTimer(self)
        self._recompute_timer.setSingleShot(True)
        self._recompute_timer.setInterval(RECOMPUTE_DEBOUNCE_MS)
        self._recompute_timer.timeout.connect(self.request_recompute)

        # --- Animation ticker ---
        self._clock = QElapsedTimer()
        self._anim_timer = QTimer(self)
        self._anim_timer.setInterval(ANIMATION_INTERVAL_MS)
        self._anim_timer.timeout.connect(self._on_tick)

        # --- SIGNAL CONNECTIONS ---
        self.params_panel.parameters_changed.connect(self.on_parameters_changed)

        self._create_actions()

        # Initial Render
        self.request_recompute()
        self.set_rotation_enabled(True)

    def _create_actions(self) -> None:
        view_menu = self.menuBar().addMenu("View")

        self.act_rotate = QAction("Rotate", self)
        self.act_rotate.setCheckable(True)
        self.act_rotate.setChecked(True)
        self.act_rotate.toggled.connect(self.set_rotation_enabled)
        view_menu.addAction(self.act_rotate)

        self.act_reset = QAction("Reset", self)
        self.act_reset.triggered.connect(self.on_reset)
        view_menu.addAction(self.act_reset)

    # ------------------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------------------

    def on_parameters_changed(self, parameters: InsoleParameters) -> None:
        self.state.parameters = parameters
        # Coalesce rapid edits (slider drags) into a single rebuild
        self._recompute_timer.start()

    def request_recompute(self) -> None:
        parameters = self.state.parameters
        worker = MeshWorker(self.generator, parameters)
        worker.result_ready.connect(self.on_result_ready)
        worker.error_occurred.connect(self.on_worker_error)
        worker.finished.connect(lambda w=worker: self._forget_worker(w))
        self._workers.append(worker)
        self.statusBar().showMessage("Building mesh...")
        worker.start()

    def on_result_ready(self, result: MeshResult) -> None:
        if result.parameters != self.state.parameters:
            logger.debug("Discarding stale mesh result.")
            return

        if self.state.apply_result(result):
            self.preview.set_mesh(self.state.mesh)
            self.params_panel.set_error("")
            self.statusBar().showMessage(
                f"{self.state.mesh.n_vertices} vertices, {self.state.mesh.n_faces} faces", 3000
            )
        else:
            self.params_panel.set_error(str(result.error))
            self.statusBar().showMessage("Invalid parameters - showing last valid insole.", 3000)

    def on_worker_error(self, msg: str) -> None:
        self.params_panel.set_error(f"Mesh build failed: {msg}")
        self.statusBar().showMessage("Mesh build failed - showing last valid insole.", 5000)

    def set_rotation_enabled(self, enabled: bool) -> None:
        if enabled:
            self._clock.start()
            self._anim_timer.start()
        else:
            self._anim_timer.stop()

    def on_reset(self) -> None:
        self.state.reset()
        self.preview.set_color(self.state.color)
        self.params_panel.set_parameters(self.state.parameters)
        self.request_recompute()

    def _on_tick(self) -> None:
        delta = self._clock.restart() / 1000.0
        self.preview.advance(delta)

    def _forget_worker(self, worker: MeshWorker) -> None:
        if worker in self._workers:
            self._workers.remove(worker)
        worker.deleteLater()

    def closeEvent(self, event) -> None:
        self._anim_timer.stop()
        for worker in list(self._workers):
            worker.wait()
        self.preview.close()
        super().closeEvent(event)
