"""Segment kernels: point-to-segment distance, intersection, segment-to-segment distance.

All functions work on plain ``(x, y, z)`` tuples or ``(n, 3)`` float arrays
so they can run without constructing model objects in inner loops.
No tolerance is applied: a zero result needs exact coincidence.
"""

from __future__ import annotations

import math

import numpy as np

Vec = tuple[float, float, float]


def _sub(a: Vec, b: Vec) -> Vec:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _dot(a: Vec, b: Vec) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _cross(a: Vec, b: Vec) -> Vec:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _is_zero(v: Vec) -> bool:
    return v[0] == 0 and v[1] == 0 and v[2] == 0


def _canonical(a: Vec, b: Vec, c: Vec, d: Vec) -> tuple[Vec, Vec, Vec, Vec]:
    """Order both segments and their endpoints lexicographically.

    Either argument order of a segment pair then runs the same
    arithmetic, so results are bit-for-bit symmetric.
    """
    if b < a:
        a, b = b, a
    if d < c:
        c, d = d, c
    if (c, d) < (a, b):
        a, b, c, d = c, d, a, b
    return a, b, c, d


def point_segment_distance(p: Vec, a: Vec, b: Vec) -> float:
    """Distance from ``p`` to the segment ``a``-``b``.

    Perpendicular distance when the foot of the perpendicular falls inside
    the segment, otherwise distance to the nearer endpoint. A zero-length
    segment is treated as a point.
    """
    if a == b:
        return math.dist(p, a)
    v = _sub(b, a)
    c1 = _dot(_sub(p, a), v)
    if c1 <= 0:
        return math.dist(p, a)
    c2 = _dot(v, v)
    if c2 <= c1:
        return math.dist(p, b)
    t = c1 / c2
    return math.dist(p, (a[0] + t * v[0], a[1] + t * v[1], a[2] + t * v[2]))


def point_segments_distance(p: Vec, starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
    """Vectorised :func:`point_segment_distance` over ``n`` segments.

    Args:
        p: The point.
        starts: ``(n, 3)`` array of segment start coordinates.
        ends: ``(n, 3)`` array of segment end coordinates.

    Returns:
        ``(n,)`` array of distances.
    """
    point = np.asarray(p, dtype=float)
    v = ends - starts
    c1 = np.einsum("ij,ij->i", point - starts, v)
    c2 = np.einsum("ij,ij->i", v, v)
    t = np.zeros_like(c1)
    np.divide(c1, c2, out=t, where=c2 > 0)
    t = np.clip(t, 0.0, 1.0)
    # t == 1 snaps to the stored endpoint; start + (end - start) may round away from it
    closest = np.where((t >= 1.0)[:, None], ends, starts + t[:, None] * v)
    return np.sqrt(np.einsum("ij,ij->i", point - closest, point - closest))


def point_on_segment(p: Vec, a: Vec, b: Vec) -> bool:
    """Exact test whether ``p`` lies on the closed segment ``a``-``b``."""
    v = _sub(b, a)
    w = _sub(p, a)
    if _is_zero(v):
        return p == a
    if not _is_zero(_cross(w, v)):
        return False
    t = _dot(w, v)
    return 0 <= t <= _dot(v, v)


def segments_intersect(a: Vec, b: Vec, c: Vec, d: Vec) -> bool:
    """Exact test whether segments ``a``-``b`` and ``c``-``d`` share a point."""
    a, b, c, d = _canonical(tuple(a), tuple(b), tuple(c), tuple(d))
    u = _sub(b, a)
    v = _sub(d, c)
    if _is_zero(u):
        return point_on_segment(a, c, d)
    if _is_zero(v):
        return point_on_segment(c, a, b)

    w = _sub(c, a)
    n = _cross(u, v)
    if _is_zero(n):
        # parallel: only collinear overlap counts
        if not _is_zero(_cross(w, u)):
            return False
        uu = _dot(u, u)
        t0 = _dot(w, u) / uu
        t1 = _dot(_sub(d, a), u) / uu
        return max(min(t0, t1), 0.0) <= min(max(t0, t1), 1.0)

    if _dot(w, n) != 0:
        return False  # skew
    nn = _dot(n, n)
    s = _dot(_cross(w, v), n) / nn
    t = _dot(_cross(w, u), n) / nn
    return 0 <= s <= 1 and 0 <= t <= 1


def segment_distance(a: Vec, b: Vec, c: Vec, d: Vec) -> float:
    """Distance between segments ``a``-``b`` and ``c``-``d``.

    Zero when they intersect. Otherwise the minimum of the four
    endpoint-to-segment distances, and for non-parallel segments also the
    distance between interior closest points (needed for skew segments).
    """
    a, b, c, d = _canonical(tuple(a), tuple(b), tuple(c), tuple(d))
    if segments_intersect(a, b, c, d):
        return 0.0
    best = min(
        point_segment_distance(a, c, d),
        point_segment_distance(b, c, d),
        point_segment_distance(c, a, b),
        point_segment_distance(d, a, b),
    )

    u = _sub(b, a)
    v = _sub(d, c)
    w = _sub(a, c)
    uu, uv, vv = _dot(u, u), _dot(u, v), _dot(v, v)
    uw, vw = _dot(u, w), _dot(v, w)
    den = uu * vv - uv * uv
    if den > 0:
        s = (uv * vw - vv * uw) / den
        t = (uu * vw - uv * uw) / den
        if 0 < s < 1 and 0 < t < 1:
            p = (a[0] + s * u[0], a[1] + s * u[1], a[2] + s * u[2])
            q = (c[0] + t * v[0], c[1] + t * v[1], c[2] + t * v[2])
            best = min(best, math.dist(p, q))
    return best


def segments_min_distance(
    first: list[tuple[Vec, Vec]], second: list[tuple[Vec, Vec]]
) -> float:
    """Minimum :func:`segment_distance` over all segment pairs; stops at zero."""
    best = math.inf
    for a, b in first:
        for c, d in second:
            dist = segment_distance(a, b, c, d)
            if dist < best:
                best = dist
                if best == 0.0:
                    return best
    return best
