"""Domain errors raised before any geometry work is done."""
from __future__ import annotations


class InsoleGeometryError(ValueError):
    """Base class for all recoverable insole geometry errors."""


class InvalidDimensionError(InsoleGeometryError):
    """A dimension is not a finite, strictly positive number."""

    def __init__(self, name: str, value: float) -> None:
        self.name = name
        self.value = value
        super().__init__(f"Invalid {name}: {value!r} (must be a finite number > 0).")


class DegenerateOutlineError(InsoleGeometryError):
    """The sampled outline encloses no area and cannot be extruded."""

    def __init__(self, area: float, message: str | None = None) -> None:
        self.area = area
        super().__init__(message or f"Outline encloses zero area (area={area:.3e}).")
