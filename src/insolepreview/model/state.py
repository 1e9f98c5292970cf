"""
Preview State (Data Model)
==========================
This module defines the value objects that describe one insole and the
central state of the running preview.

Why is this file needed?
------------------------
1. Validation: `Dimensions` refuses non-positive or non-finite sizes before
   any geometry work begins.
2. State Management: `PreviewState` holds the current parameters and the
   mesh that is on screen. A failed recompute never replaces the last valid
   mesh.

Classes:
    Dimensions: Validated (width, length, thickness).
    InsoleParameters: The full input of one recompute request.
    PreviewState: The main container class.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from typing import Optional, TYPE_CHECKING

from insolepreview.config import DEFAULT_COLOR, DEFAULT_LENGTH, DEFAULT_THICKNESS, DEFAULT_WIDTH
from insolepreview.model.errors import InsoleGeometryError, InvalidDimensionError

if TYPE_CHECKING:
    from insolepreview.controller.pipeline import MeshResult
    from insolepreview.model.mesh import InsoleMesh

logger = logging.getLogger(__name__)


def require_positive(name: str, value: float) -> float:
    """Return `value` as float, or raise InvalidDimensionError."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidDimensionError(name, value) from None
    if not math.isfinite(number) or number <= 0.0:
        raise InvalidDimensionError(name, value)
    return number


@dataclass(frozen=True)
class Dimensions:
    width: float
    length: float
    thickness: float

    def __post_init__(self) -> None:
        for name in ("width", "length", "thickness"):
            object.__setattr__(self, name, require_positive(name, getattr(self, name)))

    @property
    def half_width(self) -> float:
        return self.width / 2.0


@dataclass(frozen=True)
class InsoleParameters:
    """
    One recompute request. Hashable, so it doubles as a cache key.
    Values are not validated here; call `dimensions()` to validate.
    """
    width: float = DEFAULT_WIDTH
    length: float = DEFAULT_LENGTH
    thickness: float = DEFAULT_THICKNESS
    detailed_relief: bool = False

    def dimensions(self) -> Dimensions:
        return Dimensions(self.width, self.length, self.thickness)


@dataclass
class PreviewState:
    """
    Holds everything the preview window shows.
    Pass this instance to the controllers and views.
    """
    parameters: InsoleParameters = field(default_factory=InsoleParameters)
    color: str = DEFAULT_COLOR

    mesh: Optional[InsoleMesh] = None
    mesh_parameters: Optional[InsoleParameters] = None
    last_error: Optional[InsoleGeometryError] = None

    @property
    def has_mesh(self) -> bool:
        return self.mesh is not None

    def apply_result(self, result: MeshResult) -> bool:
        """
        Swap in the mesh of a successful result.

        On failure the previous mesh stays in place and the error is kept
        for display. Returns True if the displayed mesh changed.
        """
        if result.ok:
            self.mesh = result.mesh
            self.mesh_parameters = result.parameters
            self.last_error = None
            return True

        self.last_error = result.error
        logger.warning(f"Keeping previous mesh: {result.error}")
        return False

    def reset(self) -> None:
        """Return to default parameters and drop the current mesh."""
        self.parameters = InsoleParameters()
        self.color = DEFAULT_COLOR
        self.mesh = None
        self.mesh_parameters = None
        self.last_error = None
        logger.info("Preview state has been reset.")
