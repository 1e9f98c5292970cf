"""
Background Workers (Threading)
==============================
This module contains QThread subclasses for building meshes off the GUI thread.

Why is this file needed?
------------------------
1. Responsiveness: Dragging a slider fires many parameter changes; building
   meshes on the main thread would stutter the preview.
2. Signals: They provide a safe way to hand the finished mesh (or the error)
   back to the GUI thread using Qt Signals.

Classes:
    MeshWorker: Runs the insole pipeline for one parameter set. Rejected
        parameters arrive as a failed MeshResult on `result_ready`; only an
        unexpected exception is reported on `error_occurred`.
"""
import logging

from PySide6.QtCore import QThread, Signal

from insolepreview.controller.pipeline import InsoleGenerator, MeshResult
from insolepreview.model.state import InsoleParameters

logger = logging.getLogger(__name__)


class MeshWorker(QThread):
    # Signals to update the UI from the background
    result_ready = Signal(object)  # MeshResult
    error_occurred = Signal(str)

    def __init__(self, generator: InsoleGenerator, parameters: InsoleParameters):
        super().__init__()
        self.generator = generator
        self.parameters = parameters

    def run(self):
        logger.debug(f"Building mesh in background thread for {self.parameters}.")
        try:
            result: MeshResult = self.generator.try_generate(self.parameters)
        except Exception as e:
            logger.exception("Unexpected error in MeshWorker")
            self.error_occurred.emit(str(e))
            return

        # Domain failures travel inside the result; error_occurred is for crashes
        self.result_ready.emit(result)
