"""
Insole Mesh Buffers
===================
Plain structure-of-arrays buffers handed to the rendering collaborator.

The index list is fixed once the extruder creates the mesh; later stages only
rewrite the position and normal buffers, and always on a copy of a mesh that
somebody else may still be drawing.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class VertexGroups:
    """
    Index ranges of the three vertex groups.

    All groups are built from the same ring of `ring_size` (x, z) points, so
    index k of one group and index k of another share their (x, z).
    """
    ring_size: int

    @property
    def bottom(self) -> slice:
        return slice(0, self.ring_size)

    @property
    def top(self) -> slice:
        return slice(self.ring_size, 2 * self.ring_size)

    @property
    def wall_bottom(self) -> slice:
        return slice(2 * self.ring_size, 3 * self.ring_size)

    @property
    def wall_top(self) -> slice:
        return slice(3 * self.ring_size, 4 * self.ring_size)

    @property
    def vertex_count(self) -> int:
        return 4 * self.ring_size

    def indices(self, group: slice) -> npt.NDArray[np.int64]:
        return np.arange(group.start, group.stop, dtype=np.int64)


@dataclass
class InsoleMesh:
    positions: npt.NDArray[np.float64]  # (N, 3) x, y, z
    faces: npt.NDArray[np.int64]        # (M, 3) triangle indices, outward winding
    normals: npt.NDArray[np.float64]    # (N, 3) unit vectors
    groups: VertexGroups

    def __post_init__(self) -> None:
        self.positions = np.asarray(self.positions, dtype=np.float64)
        self.normals = np.asarray(self.normals, dtype=np.float64)
        self.faces = np.asarray(self.faces, dtype=np.int64)

        n = self.positions.shape[0]
        if self.positions.shape != (n, 3) or self.normals.shape != (n, 3):
            raise ValueError(
                f"Expected (N, 3) positions and normals, got {self.positions.shape} and {self.normals.shape}."
            )
        if self.faces.ndim != 2 or self.faces.shape[1] != 3:
            raise ValueError(f"Expected (M, 3) faces, got {self.faces.shape}.")
        if n != self.groups.vertex_count:
            raise ValueError(f"Vertex count {n} does not match groups ({self.groups.vertex_count}).")
        if self.faces.size and (self.faces.min() < 0 or self.faces.max() >= n):
            raise ValueError("Face index out of range.")

        self.faces.setflags(write=False)

    @property
    def n_vertices(self) -> int:
        return int(self.positions.shape[0])

    @property
    def n_faces(self) -> int:
        return int(self.faces.shape[0])

    @property
    def is_frozen(self) -> bool:
        return not (self.positions.flags.writeable or self.normals.flags.writeable)

    def top_cap_indices(self) -> npt.NDArray[np.int64]:
        return self.groups.indices(self.groups.top)

    def copy(self) -> InsoleMesh:
        """Writable copy of the buffers. The index list is shared (read-only)."""
        return InsoleMesh(
            positions=self.positions.copy(),
            faces=self.faces,
            normals=self.normals.copy(),
            groups=self.groups,
        )

    def freeze(self) -> InsoleMesh:
        """Make the buffers read-only before the mesh is published."""
        self.positions.setflags(write=False)
        self.normals.setflags(write=False)
        return self

    def bounds(self) -> tuple[float, float, float, float, float, float]:
        """(x_min, x_max, y_min, y_max, z_min, z_max)."""
        lo = self.positions.min(axis=0)
        hi = self.positions.max(axis=0)
        return (float(lo[0]), float(hi[0]), float(lo[1]), float(hi[1]), float(lo[2]), float(hi[2]))
