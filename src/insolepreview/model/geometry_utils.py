from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Tuple

import mapbox_earcut
import numpy as np

if TYPE_CHECKING:
    from numpy import typing as npt


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def cubic_bezier_points(
    p0: npt.NDArray[np.float64],
    p1: npt.NDArray[np.float64],
    p2: npt.NDArray[np.float64],
    p3: npt.NDArray[np.float64],
    t: npt.NDArray[np.float64],
) -> npt.NDArray[np.float64]:
    """
    Evaluate a cubic Bezier curve in Bernstein form.

    Args:
        p0: Start point, shape (2,).
        p1: First control point, shape (2,).
        p2: Second control point, shape (2,).
        p3: End point, shape (2,).
        t: Parameter values in [0, 1], shape (n,).

    Returns:
        An array of shape (n, 2). At t = 0 and t = 1 the end points are
        reproduced exactly.
    """
    t = np.asarray(t, dtype=np.float64)
    u = 1.0 - t
    return (
        (u ** 3)[:, None] * p0
        + (3.0 * u ** 2 * t)[:, None] * p1
        + (3.0 * u * t ** 2)[:, None] * p2
        + (t ** 3)[:, None] * p3
    )


def polygon_signed_area(points: npt.NDArray[np.float64]) -> float:
    """
    Shoelace area of a ring of (x, z) points (closed or open).

    Positive for counter-clockwise rings in the (x, z) plane.
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    if len(pts) < 3:
        return 0.0
    x, z = pts[:, 0], pts[:, 1]
    return 0.5 * float(np.sum(x * np.roll(z, -1) - np.roll(x, -1) * z))


def _cross2(a: npt.NDArray[np.float64], b: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    return a[..., 0] * b[..., 1] - a[..., 1] * b[..., 0]


def _drop_repeated(loop: List[int], vertices: npt.NDArray[np.float64], tol: float) -> List[int]:
    """Remove consecutive (and wrap-around) vertices that coincide."""
    cleaned: List[int] = []
    for idx in loop:
        if cleaned and np.linalg.norm(vertices[idx] - vertices[cleaned[-1]]) <= tol:
            continue
        cleaned.append(idx)
    while len(cleaned) > 1 and np.linalg.norm(vertices[cleaned[0]] - vertices[cleaned[-1]]) <= tol:
        cleaned.pop()
    return cleaned


def _first_crossing(
    loop: List[int],
    vertices: npt.NDArray[np.float64],
) -> Optional[Tuple[int, int, npt.NDArray[np.float64]]]:
    """
    Find the first pair of non-adjacent edges (i, j), i < j, that cross.

    Edge k runs from loop[k] to loop[k + 1]. Parameters on both edges are taken
    from the half-open interval [0, 1) so that a shared vertex is never
    reported twice.
    """
    pts = vertices[loop]
    n = len(pts)
    starts = pts
    ends = np.roll(pts, -1, axis=0)
    dirs = ends - starts

    for i in range(n - 2):
        # Edge 0 and edge n - 1 share vertex 0
        j_stop = n - 1 if i == 0 else n
        js = np.arange(i + 2, j_stop)
        if js.size == 0:
            continue

        r = dirs[i]
        s = dirs[js]
        denom = _cross2(r, s)
        qp = starts[js] - starts[i]

        scale = np.linalg.norm(r) * np.linalg.norm(s, axis=1)
        ok = np.abs(denom) > 1e-12 * np.where(scale > 0.0, scale, 1.0)
        with np.errstate(divide="ignore", invalid="ignore"):
            t = np.where(ok, _cross2(qp, s) / np.where(ok, denom, 1.0), -1.0)
            u = np.where(ok, _cross2(qp, r) / np.where(ok, denom, 1.0), -1.0)

        hits = np.nonzero(ok & (t >= 0.0) & (t < 1.0) & (u >= 0.0) & (u < 1.0))[0]
        if hits.size:
            k = hits[0]
            return i, int(js[k]), starts[i] + t[k] * r
    return None


def split_self_intersections(
    ring: npt.NDArray[np.float64],
) -> Tuple[npt.NDArray[np.float64], List[List[int]]]:
    """
    Split a ring at its self-crossings into simple sub-loops.

    Args:
        ring: (n, 2) array of (x, z) points without the closing duplicate.

    Returns:
        A tuple (vertices, loops). `vertices` starts with the n input points
        in their original order, followed by one point per crossing. Each
        loop is a list of indices into `vertices` describing a simple polygon.
    """
    ring = np.asarray(ring, dtype=np.float64).reshape(-1, 2)
    vertices = [p for p in ring]
    extent = float(np.ptp(ring, axis=0).max()) if len(ring) else 0.0
    tol = 1e-9 * extent

    pending: List[List[int]] = [list(range(len(ring)))]
    loops: List[List[int]] = []

    while pending:
        arr = np.asarray(vertices)
        loop = _drop_repeated(pending.pop(0), arr, tol)
        if len(loop) < 3:
            continue

        crossing = _first_crossing(loop, arr)
        if crossing is None:
            loops.append(loop)
            continue

        i, j, point = crossing
        # Reuse an existing vertex if the crossing lands on one
        candidates = (loop[i], loop[i + 1], loop[j], loop[(j + 1) % len(loop)])
        idx = next((c for c in candidates if np.linalg.norm(arr[c] - point) <= tol), None)
        if idx is None:
            idx = len(vertices)
            vertices.append(point)

        pending.append(loop[: i + 1] + [idx] + loop[j + 1:])
        pending.append([idx] + loop[i + 1: j + 1])

    return np.asarray(vertices, dtype=np.float64).reshape(-1, 2), loops


def triangulate_loop(
    vertices: npt.NDArray[np.float64],
    loop: List[int],
) -> npt.NDArray[np.int64]:
    """
    Ear-clip a simple polygon.

    Args:
        vertices: (m, 2) array of (x, z) points.
        loop: Indices into `vertices` forming a simple polygon.

    Returns:
        (k, 3) array of indices into `vertices`, every triangle wound
        counter-clockwise in the (x, z) plane.
    """
    if len(loop) < 3:
        return np.empty((0, 3), dtype=np.int64)

    coords = np.ascontiguousarray(vertices[loop], dtype=np.float64)
    rings = np.array([len(loop)], dtype=np.uint32)
    local = np.asarray(mapbox_earcut.triangulate_float64(coords, rings), dtype=np.int64).reshape(-1, 3)

    tris = np.asarray(loop, dtype=np.int64)[local]
    a, b, c = (vertices[tris[:, k]] for k in range(3))
    clockwise = _cross2(b - a, c - a) < 0.0
    tris[clockwise] = tris[clockwise][:, ::-1]
    return tris
