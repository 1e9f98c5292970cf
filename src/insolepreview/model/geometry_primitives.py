"""
Geometric Primitives for the insole outline.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Optional, Tuple, TYPE_CHECKING

import numpy as np

from insolepreview.model.errors import InvalidDimensionError
from insolepreview.model.geometry_utils import cubic_bezier_points

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class AnchorPoint:
    """A point on the contour plane. `x` is lateral, `z` runs heel -> toe."""
    x: float
    z: float

    def mirrored(self) -> AnchorPoint:
        """Reflect across the centerline x = 0."""
        return AnchorPoint(-self.x, self.z)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.z], dtype=np.float64)


@dataclass(frozen=True)
class CubicBezier:
    """A cubic Bezier segment between two anchors with two control points."""
    start: AnchorPoint
    control_1: AnchorPoint
    control_2: AnchorPoint
    end: AnchorPoint
    label: Optional[str] = None

    def reverse(self) -> CubicBezier:
        return CubicBezier(self.end, self.control_2, self.control_1, self.start, label=self.label)

    def mirrored(self) -> CubicBezier:
        """Mirror image across x = 0, keeping the direction of travel."""
        return CubicBezier(
            self.start.mirrored(),
            self.control_1.mirrored(),
            self.control_2.mirrored(),
            self.end.mirrored(),
            label=self.label,
        )

    def discretize(self, num_samples: int) -> npt.NDArray[np.float64]:
        """
        Sample the curve at `num_samples + 1` uniform parameter values.

        Args:
            num_samples: Number of line samples (straight pieces) along the curve.

        Returns:
            (num_samples + 1, 2) array of (x, z) points, starting exactly at
            `start` and ending exactly at `end`.
        """
        if num_samples < 1:
            raise InvalidDimensionError("samples_per_segment", num_samples)

        t = np.linspace(0.0, 1.0, num_samples + 1)
        return cubic_bezier_points(*self._control_polygon(), t)

    def _control_polygon(self) -> Tuple[npt.NDArray[np.float64], ...]:
        return (
            self.start.to_array(),
            self.control_1.to_array(),
            self.control_2.to_array(),
            self.end.to_array(),
        )


@dataclass(frozen=True)
class Outline:
    """
    A closed loop of Bezier segments sampled at a fixed density.

    Every segment uses the same number of samples, so the sampled ring has
    `len(segments) * samples_per_segment + 1` points, the last one being an
    exact copy of the first.
    """
    segments: Tuple[CubicBezier, ...]
    samples_per_segment: int

    def __post_init__(self) -> None:
        if self.samples_per_segment < 1:
            raise InvalidDimensionError("samples_per_segment", self.samples_per_segment)
        if not self.segments:
            raise ValueError("An outline needs at least one segment.")

        for prev, nxt in zip(self.segments, self.segments[1:] + self.segments[:1]):
            if prev.end != nxt.start:
                raise ValueError(
                    f"Outline is not continuous between '{prev.label}' and '{nxt.label}'."
                )

    @cached_property
    def points(self) -> npt.NDArray[np.float64]:
        """Closed (N, 2) polyline of (x, z) samples."""
        # The shared end point of consecutive segments is emitted once
        body = np.vstack([seg.discretize(self.samples_per_segment)[:-1] for seg in self.segments])
        pts = np.vstack([body, body[:1]])
        pts.setflags(write=False)
        return pts

    @property
    def ring(self) -> npt.NDArray[np.float64]:
        """The samples without the closing duplicate."""
        return self.points[:-1]

    @property
    def num_points(self) -> int:
        return int(self.points.shape[0])

