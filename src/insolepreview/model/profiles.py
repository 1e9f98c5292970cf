"""Insole outline anchors, relief profile and order presets."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Dict, Tuple, TYPE_CHECKING

import numpy as np

from insolepreview.model.geometry_primitives import AnchorPoint, CubicBezier
from insolepreview.model.geometry_utils import clamp
from insolepreview.model.state import InsoleParameters

if TYPE_CHECKING:
    import numpy.typing as npt


# ------------------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------------------
class WidthOption(StrEnum):
    NARROW = "Narrow"
    MEDIUM = "Medium"
    WIDE = "Wide"

class ThicknessOption(StrEnum):
    THIN = "Thin"
    THICK = "Thick"

class SegmentLabel(StrEnum):
    """Names of the six outline segments, in traversal order."""
    HEEL_ARCH = "heel-arch"
    ARCH_BALL = "arch-ball"
    BALL_TOE = "ball-toe"
    TOE_BALL = "toe-ball (mirrored)"
    BALL_ARCH = "ball-arch (mirrored)"
    ARCH_HEEL = "arch-heel (mirrored)"


# ------------------------------------------------------------------------------
# Outline anchors
# ------------------------------------------------------------------------------
# (x as fraction of half width, z as fraction of length)
ARCH_ANCHOR: Tuple[float, float] = (-0.3, 0.4)
BALL_ANCHOR: Tuple[float, float] = (0.5, 0.7)

# Control points of the three "right-hand" segments; the other three are mirrored
HEEL_ARCH_CONTROLS: Tuple[Tuple[float, float], Tuple[float, float]] = ((-0.1, 0.1), (-0.3, 0.3))
ARCH_BALL_CONTROLS: Tuple[Tuple[float, float], Tuple[float, float]] = ((-0.5, 0.5), (0.5, 0.6))
BALL_TOE_CONTROLS: Tuple[Tuple[float, float], Tuple[float, float]] = ((0.5, 0.8), (0.2, 0.9))


@dataclass(frozen=True)
class InsoleAnchors:
    """
    The four named anchors of the insole footprint for one (width, length).

    heel (0, 0), arch (-0.3 hw, 0.4 L), ball (0.5 hw, 0.7 L), toe (0, L),
    where hw is half the width. The mirrored ball and arch close the loop.
    """
    half_width: float
    length: float

    @classmethod
    def from_dimensions(cls, width: float, length: float) -> InsoleAnchors:
        return cls(half_width=width / 2.0, length=length)

    def scaled(self, fx: float, fz: float) -> AnchorPoint:
        return AnchorPoint(self.half_width * fx, self.length * fz)

    @property
    def heel(self) -> AnchorPoint:
        return AnchorPoint(0.0, 0.0)

    @property
    def arch(self) -> AnchorPoint:
        return self.scaled(*ARCH_ANCHOR)

    @property
    def ball(self) -> AnchorPoint:
        return self.scaled(*BALL_ANCHOR)

    @property
    def toe(self) -> AnchorPoint:
        return AnchorPoint(0.0, self.length)

    def segments(self) -> Tuple[CubicBezier, ...]:
        """heel -> arch -> ball -> toe -> ball' -> arch' -> heel."""
        heel_arch = CubicBezier(
            self.heel, self.scaled(*HEEL_ARCH_CONTROLS[0]), self.scaled(*HEEL_ARCH_CONTROLS[1]), self.arch,
            label=SegmentLabel.HEEL_ARCH,
        )
        arch_ball = CubicBezier(
            self.arch, self.scaled(*ARCH_BALL_CONTROLS[0]), self.scaled(*ARCH_BALL_CONTROLS[1]), self.ball,
            label=SegmentLabel.ARCH_BALL,
        )
        ball_toe = CubicBezier(
            self.ball, self.scaled(*BALL_TOE_CONTROLS[0]), self.scaled(*BALL_TOE_CONTROLS[1]), self.toe,
            label=SegmentLabel.BALL_TOE,
        )

        # Left half: mirror images of the right half, walked back to the heel
        return (
            heel_arch,
            arch_ball,
            ball_toe,
            replace(ball_toe.mirrored().reverse(), label=SegmentLabel.TOE_BALL),
            replace(arch_ball.mirrored().reverse(), label=SegmentLabel.BALL_ARCH),
            replace(heel_arch.mirrored().reverse(), label=SegmentLabel.ARCH_HEEL),
        )


# ------------------------------------------------------------------------------
# Relief profile
# ------------------------------------------------------------------------------
@dataclass(frozen=True)
class ReliefProfile:
    """
    Length-wise thickness profile of the sculpted top face.

    `breakpoints` are normalized length fractions t; `fractions` are the
    matching fractions of the nominal thickness. Between breakpoints the
    height is interpolated linearly (heel -> arch -> forefoot -> toe).
    A heel cup of depth `heel_cup_depth * thickness` is carved for
    t < `heel_cup_extent`, deepest on the centerline and zero at |x| >= hw.
    """
    breakpoints: Tuple[float, ...] = (0.0, 0.3, 0.7, 1.0)
    fractions: Tuple[float, ...] = (0.8, 1.0, 0.6, 0.2)
    heel_cup_extent: float = 0.15
    heel_cup_depth: float = 0.10

    def __post_init__(self) -> None:
        if len(self.breakpoints) != len(self.fractions) or len(self.breakpoints) < 2:
            raise ValueError("ReliefProfile needs matching breakpoints and fractions (at least two).")
        if any(b >= a for a, b in zip(self.breakpoints[1:], self.breakpoints)):
            raise ValueError("ReliefProfile breakpoints must be strictly increasing.")

    def height(self, t: npt.ArrayLike, thickness: float) -> npt.NDArray[np.float64]:
        """Profile height h(t) for normalized length positions t in [0, 1]."""
        t = np.clip(np.asarray(t, dtype=np.float64), 0.0, 1.0)
        return thickness * np.interp(t, self.breakpoints, self.fractions)

    def heel_cup(
        self,
        x: npt.ArrayLike,
        t: npt.ArrayLike,
        half_width: float,
        thickness: float,
    ) -> npt.NDArray[np.float64]:
        """Depth subtracted from h(t) by the heel cup (zero outside the heel region)."""
        x = np.asarray(x, dtype=np.float64)
        t = np.asarray(t, dtype=np.float64)
        factor = 1.0 - np.minimum(np.abs(x) / half_width, 1.0)
        depth = self.heel_cup_depth * thickness * factor
        return np.where(t < self.heel_cup_extent, depth, 0.0)


DEFAULT_RELIEF_PROFILE = ReliefProfile()


# ------------------------------------------------------------------------------
# Order presets
# ------------------------------------------------------------------------------
WIDTH_BY_OPTION: Dict[WidthOption, float] = {
    WidthOption.NARROW: 0.75,
    WidthOption.MEDIUM: 1.0,
    WidthOption.WIDE: 1.25,
}

THICKNESS_BY_OPTION: Dict[ThicknessOption, float] = {
    ThicknessOption.THIN: 0.2,
    ThicknessOption.THICK: 0.4,
}

LENGTH_MIN: float = 1.0
LENGTH_SPAN: float = 1.5


def length_from_slider(value: float) -> float:
    """Map the 0..100 length slider to a preview length of 1.0..2.5."""
    return LENGTH_MIN + clamp(float(value), 0.0, 100.0) / 100.0 * LENGTH_SPAN


@dataclass(frozen=True)
class OrderOptions:
    """Coarse options chosen on an order form."""
    width: WidthOption = WidthOption.MEDIUM
    thickness: ThicknessOption = ThicknessOption.THIN
    length_value: float = 50.0
    detailed_relief: bool = False

    def to_parameters(self) -> InsoleParameters:
        return InsoleParameters(
            width=WIDTH_BY_OPTION[WidthOption(self.width)],
            length=length_from_slider(self.length_value),
            thickness=THICKNESS_BY_OPTION[ThicknessOption(self.thickness)],
            detailed_relief=self.detailed_relief,
        )
