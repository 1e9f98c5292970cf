"""
Outline Construction
====================
Builds the closed, left/right symmetric footprint of the insole from its
width and length.
"""
from __future__ import annotations

import logging

from insolepreview.config import SAMPLES_PER_SEGMENT
from insolepreview.model.geometry_primitives import Outline
from insolepreview.model.profiles import InsoleAnchors
from insolepreview.model.state import require_positive

logger = logging.getLogger(__name__)


def build_outline(
    width: float,
    length: float,
    samples_per_segment: int = SAMPLES_PER_SEGMENT,
) -> Outline:
    """
    Create the six-segment Bezier outline heel -> arch -> ball -> toe and back
    along the mirrored ball and arch.

    Args:
        width: Overall width, > 0.
        length: Overall length (heel at z = 0, toe at z = length), > 0.
        samples_per_segment: Line samples per segment; identical for all six.

    Returns:
        The Outline. Its sampled points are closed and mirror-symmetric.

    Raises:
        InvalidDimensionError: If width or length is not a finite number > 0.
    """
    width = require_positive("width", width)
    length = require_positive("length", length)

    anchors = InsoleAnchors.from_dimensions(width, length)
    outline = Outline(segments=anchors.segments(), samples_per_segment=samples_per_segment)

    logger.debug(
        f"Outline built: width={width:g}, length={length:g}, "
        f"{len(outline.segments)} segments x {samples_per_segment} samples, {outline.num_points} points."
    )
    return outline
