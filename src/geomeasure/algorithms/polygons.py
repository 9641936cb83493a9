"""Ring and polygon algorithms: shoelace area, point location, ring planes.

Rings are implicitly closed; a repeated closing vertex is accepted and
ignored. Area and the locate functions work in the XY plane; callers
locate points on tilted rings by flattening them with a fitted Plane.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

import numpy as np

from geomeasure.algorithms.lines import Vec, point_on_segment


class Location(str, Enum):
    """Position of a point relative to a ring or surface."""

    INTERIOR = "interior"
    BOUNDARY = "boundary"
    EXTERIOR = "exterior"


def as_tuples(coordinates: Iterable) -> list[Vec]:
    return [(c.x, c.y, c.z) for c in coordinates]


def open_ring(ring: Sequence[Vec]) -> list[Vec]:
    """Drop a repeated closing vertex, if present."""
    ring = list(ring)
    if len(ring) > 1 and ring[0] == ring[-1]:
        ring.pop()
    return ring


def distinct_count(ring: Sequence[Vec]) -> int:
    return len(set(ring))


def path_segments(path: Sequence[Vec]) -> list[tuple[Vec, Vec]]:
    """Consecutive-vertex segments of an open path.

    A single vertex yields one zero-length segment so that degenerate
    paths still measure like a point.
    """
    if len(path) == 1:
        return [(path[0], path[0])]
    return list(zip(path[:-1], path[1:]))


def ring_segments(ring: Sequence[Vec]) -> list[tuple[Vec, Vec]]:
    """Segments of a ring including the closing segment."""
    vertices = open_ring(ring)
    if len(vertices) <= 1:
        return path_segments(vertices) if vertices else []
    return list(zip(vertices, vertices[1:] + vertices[:1]))


def segment_arrays(segments: list[tuple[Vec, Vec]]) -> tuple[np.ndarray, np.ndarray]:
    """Split segments into ``(n, 3)`` start and end arrays."""
    starts = np.array([s for s, _ in segments], dtype=float).reshape(-1, 3)
    ends = np.array([e for _, e in segments], dtype=float).reshape(-1, 3)
    return starts, ends


def signed_ring_area(ring: Sequence[Vec]) -> float:
    """Shoelace area in the XY plane; positive for counterclockwise rings."""
    vertices = open_ring(ring)
    if len(vertices) < 3:
        return 0.0
    xy = np.asarray(vertices, dtype=float)[:, :2]
    x, y = xy[:, 0], xy[:, 1]
    return float(np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y) / 2.0)


def ring_area(ring: Sequence[Vec]) -> float:
    """Unsigned ring area; 0 for rings with fewer than 3 distinct vertices."""
    if distinct_count(ring) < 3:
        return 0.0
    return abs(signed_ring_area(ring))


def surface_area(shell: Sequence[Vec], holes: Iterable[Sequence[Vec]] = ()) -> float:
    """Shell area minus hole areas, never negative."""
    if distinct_count(shell) < 3:
        return 0.0
    area = ring_area(shell) - sum(ring_area(hole) for hole in holes)
    return max(area, 0.0)


def ring_length(ring: Sequence[Vec]) -> float:
    segments = ring_segments(ring)
    if not segments:
        return 0.0
    starts, ends = segment_arrays(segments)
    return float(np.sum(np.linalg.norm(ends - starts, axis=1)))


def _orientation(o: Vec, a: Vec, b: Vec) -> float:
    """Twice the signed XY area of triangle o-a-b; > 0 counterclockwise."""
    return (a[0] - o[0]) * (b[1] - o[1]) - (b[0] - o[0]) * (a[1] - o[1])


def locate_in_ring(p: Vec, ring: Sequence[Vec]) -> Location:
    """Locate ``p`` against a ring using the winding number (XY plane)."""
    point = (p[0], p[1], 0.0)
    winding = 0
    for a, b in ring_segments(ring):
        if point_on_segment(point, (a[0], a[1], 0.0), (b[0], b[1], 0.0)):
            return Location.BOUNDARY
        if a[1] <= p[1] < b[1]:
            if _orientation(a, b, point) > 0:
                winding += 1
        elif b[1] <= p[1] < a[1]:
            if _orientation(a, b, point) < 0:
                winding -= 1
    if distinct_count(ring) < 3:
        return Location.EXTERIOR
    return Location.INTERIOR if winding != 0 else Location.EXTERIOR


def locate_in_surface(p: Vec, shell: Sequence[Vec], holes: Iterable[Sequence[Vec]] = ()) -> Location:
    """Locate ``p`` against a polygon with holes (XY plane)."""
    location = locate_in_ring(p, shell)
    if location is not Location.INTERIOR:
        return location
    for hole in holes:
        hole_location = locate_in_ring(p, hole)
        if hole_location is Location.INTERIOR:
            return Location.EXTERIOR
        if hole_location is Location.BOUNDARY:
            return Location.BOUNDARY
    return Location.INTERIOR


@dataclass(frozen=True)
class Plane:
    """Plane of a ring: a point on it, its unit normal, and the two axes
    kept when rings and points are flattened for location tests."""

    origin: Vec
    normal: Vec
    axes: tuple[int, int]

    def height(self, p: Vec) -> float:
        """Signed distance of ``p`` from the plane along the normal."""
        o, n = self.origin, self.normal
        return (p[0] - o[0]) * n[0] + (p[1] - o[1]) * n[1] + (p[2] - o[2]) * n[2]

    def foot(self, p: Vec) -> Vec:
        """Orthogonal projection of ``p`` onto the plane."""
        h = self.height(p)
        n = self.normal
        return (p[0] - h * n[0], p[1] - h * n[1], p[2] - h * n[2])

    def flatten(self, p: Vec) -> Vec:
        i, j = self.axes
        return (p[i], p[j], 0.0)


def fit_plane(shell: Sequence[Vec]) -> Plane | None:
    """Plane of a ring from Newell's normal; None when the ring encloses no area.

    Coordinates are taken relative to the first vertex, so horizontal and
    axis-aligned rings get an exact normal. Points are flattened by dropping
    the axis the normal leans on most, which keeps the ring non-degenerate.
    """
    vertices = open_ring(shell)
    if distinct_count(vertices) < 3:
        return None
    v = np.asarray(vertices, dtype=float)
    v = v - v[0]
    w = np.roll(v, -1, axis=0)
    normal = np.array(
        [
            np.sum((v[:, 1] - w[:, 1]) * (v[:, 2] + w[:, 2])),
            np.sum((v[:, 2] - w[:, 2]) * (v[:, 0] + w[:, 0])),
            np.sum((v[:, 0] - w[:, 0]) * (v[:, 1] + w[:, 1])),
        ]
    )
    length = float(np.linalg.norm(normal))
    if length == 0.0:
        return None
    normal = normal / length
    drop = int(np.argmax(np.abs(normal)))
    axes = tuple(k for k in range(3) if k != drop)
    return Plane(origin=tuple(vertices[0]), normal=tuple(normal.tolist()), axes=axes)


def bounds(coordinates: Sequence[Vec]) -> tuple[tuple[float, ...], tuple[float, ...]] | None:
    """Component-wise minimum and maximum, or None when there are no coordinates."""
    if not coordinates:
        return None
    arr = np.asarray(coordinates, dtype=float)
    return tuple(arr.min(axis=0).tolist()), tuple(arr.max(axis=0).tolist())
