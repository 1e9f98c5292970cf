"""
Configuration & Global Constants
================================
This module serves as the central registry for the tunable numbers of the
insole geometry pipeline and its preview.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (sample counts, tolerances, timer
   intervals) scattered throughout the code.
2. Consistency: The top and bottom caps must be built from the same
   tessellation density, so there is exactly one place that defines it.

Exports:
    SAMPLES_PER_SEGMENT (int): Line samples per Bezier segment of the outline.
    TOP_FACE_TOLERANCE (float): Tolerance for "vertex lies on the top face".
    DEGENERATE_AREA_EPS (float): Smallest enclosed outline area accepted.
    MESH_CACHE_SIZE (int): Number of memoized (parameters -> mesh) results.
    RECOMPUTE_DEBOUNCE_MS (int): Coalescing interval for UI parameter edits.
    ROTATION_SPEED_RAD_PER_S (float): Turntable speed of the preview.
"""

# Geometry
SAMPLES_PER_SEGMENT: int = 24
TOP_FACE_TOLERANCE: float = 1e-6
DEGENERATE_AREA_EPS: float = 1e-12

# Caching / UI
MESH_CACHE_SIZE: int = 16
RECOMPUTE_DEBOUNCE_MS: int = 150
ROTATION_SPEED_RAD_PER_S: float = 0.05

# Preview defaults ("Medium" width, 50 % length, "Thin")
DEFAULT_WIDTH: float = 1.0
DEFAULT_LENGTH: float = 1.75
DEFAULT_THICKNESS: float = 0.2
DEFAULT_COLOR: str = "#000000"
