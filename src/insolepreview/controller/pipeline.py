"""
Insole Mesh Pipeline
====================
Composes the stages: parameters -> outline -> solid -> (sculpted solid)
-> normals -> renderable mesh.

Why is this file needed?
------------------------
1. Orchestration: It validates the parameters once, up front, and runs the
   stages strictly forward.
2. Failure reporting: `try_generate` turns domain errors into a typed
   `MeshResult` instead of raising, so the caller can keep the last valid
   mesh on screen.
3. Memoization: Rendering asks for the same parameters every frame; a small
   thread-safe LRU cache avoids recomputing them.
"""
from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Optional

from insolepreview.config import MESH_CACHE_SIZE, SAMPLES_PER_SEGMENT
from insolepreview.controller.contour import build_outline
from insolepreview.controller.extruder import extrude
from insolepreview.controller.normals import recompute_normals
from insolepreview.controller.relief import sculpt_relief
from insolepreview.model.errors import InsoleGeometryError
from insolepreview.model.mesh import InsoleMesh
from insolepreview.model.profiles import DEFAULT_RELIEF_PROFILE, ReliefProfile
from insolepreview.model.state import InsoleParameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MeshResult:
    """Outcome of one recompute request: a mesh or a typed error, never both."""
    parameters: InsoleParameters
    mesh: Optional[InsoleMesh] = None
    error: Optional[InsoleGeometryError] = None

    @property
    def ok(self) -> bool:
        return self.mesh is not None and self.error is None


class MeshCache:
    """
    Least-recently-used map of InsoleParameters -> published InsoleMesh.
    Safe to share between the GUI thread and background workers.
    """
    def __init__(self, maxsize: int = MESH_CACHE_SIZE) -> None:
        self.maxsize = max(0, int(maxsize))
        self._entries: OrderedDict[InsoleParameters, InsoleMesh] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: InsoleParameters) -> Optional[InsoleMesh]:
        with self._lock:
            mesh = self._entries.get(key)
            if mesh is not None:
                self._entries.move_to_end(key)
            return mesh

    def put(self, key: InsoleParameters, mesh: InsoleMesh) -> None:
        if self.maxsize == 0:
            return
        with self._lock:
            self._entries[key] = mesh
            self._entries.move_to_end(key)
            while len(self._entries) > self.maxsize:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: InsoleParameters) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class InsoleGenerator:
    def __init__(
        self,
        samples_per_segment: int = SAMPLES_PER_SEGMENT,
        cache_size: int = MESH_CACHE_SIZE,
        relief_profile: ReliefProfile = DEFAULT_RELIEF_PROFILE,
    ) -> None:
        self.samples_per_segment = samples_per_segment
        self.relief_profile = relief_profile
        self.cache = MeshCache(cache_size)

    def generate(self, parameters: InsoleParameters) -> InsoleMesh:
        """
        Build (or fetch from cache) the mesh for `parameters`.

        The returned mesh is frozen; it may be shared with the renderer and
        other callers.

        Raises:
            InvalidDimensionError: If a dimension is not a finite number > 0.
            DegenerateOutlineError: If the outline encloses no area.
        """
        cached = self.cache.get(parameters)
        if cached is not None:
            logger.debug(f"Mesh cache hit for {parameters}.")
            return cached

        mesh = self._build(parameters)
        self.cache.put(parameters, mesh)
        return mesh

    def try_generate(self, parameters: InsoleParameters) -> MeshResult:
        """Like `generate`, but reports domain errors as a failed MeshResult."""
        try:
            return MeshResult(parameters=parameters, mesh=self.generate(parameters))
        except InsoleGeometryError as e:
            logger.warning(f"Rejected insole parameters {parameters}: {e}")
            return MeshResult(parameters=parameters, error=e)

    def build_flat(self, parameters: InsoleParameters) -> InsoleMesh:
        """The extruded base mesh (flat normals, writable, not cached)."""
        dims = parameters.dimensions()
        outline = build_outline(dims.width, dims.length, samples_per_segment=self.samples_per_segment)
        return extrude(outline, dims.thickness)

    def _build(self, parameters: InsoleParameters) -> InsoleMesh:
        dims = parameters.dimensions()
        mesh = self.build_flat(parameters)

        if parameters.detailed_relief:
            # Always sculpt from the flat base, never from a sculpted mesh
            mesh = sculpt_relief(
                mesh,
                length=dims.length,
                thickness=dims.thickness,
                half_width=dims.half_width,
                profile=self.relief_profile,
            )

        recompute_normals(mesh)
        logger.info(
            f"Built insole mesh ({mesh.n_vertices} vertices, {mesh.n_faces} faces, "
            f"relief={'on' if parameters.detailed_relief else 'off'})."
        )
        return mesh.freeze()


def build_insole_mesh(
    width: float,
    length: float,
    thickness: float,
    detailed_relief: bool = False,
    *,
    samples_per_segment: int = SAMPLES_PER_SEGMENT,
) -> InsoleMesh:
    """One-shot pipeline without caching."""
    generator = InsoleGenerator(samples_per_segment=samples_per_segment, cache_size=0)
    return generator.generate(
        InsoleParameters(width=width, length=length, thickness=thickness, detailed_relief=detailed_relief)
    )
