"""Distance algorithms for the primitive geometry pairs.

Every function takes its operands in the order the dispatch matrix
registers them (point before curve before surface). Collections are
handled by the resolver, which reduces them to these primitives.

A surface is located in the plane fitted to its shell. A point whose
foot on that plane falls on or inside the surface is measured along the
plane normal; any other point is measured to the nearest ring.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from geomeasure.algorithms.lines import Vec, point_segments_distance, segments_min_distance
from geomeasure.algorithms.polygons import (
    Location,
    Plane,
    as_tuples,
    fit_plane,
    locate_in_surface,
    ring_segments,
    segment_arrays,
)
from geomeasure.models.geometry import Curve, Point, Surface


@dataclass
class _PreparedSurface:
    """Per-call scratch view of a surface as coordinate tuples."""

    shell: list[Vec]
    segments: list[tuple[Vec, Vec]]
    plane: Plane | None
    flat_shell: list[Vec]
    flat_holes: list[list[Vec]]

    @classmethod
    def of(cls, surface: Surface) -> _PreparedSurface:
        shell = as_tuples(surface.shell)
        holes = [as_tuples(hole) for hole in surface.holes]
        segments = ring_segments(shell)
        for hole in holes:
            segments.extend(ring_segments(hole))
        plane = fit_plane(shell)
        flat_shell, flat_holes = [], []
        if plane is not None:
            flat_shell = [plane.flatten(v) for v in shell]
            flat_holes = [[plane.flatten(v) for v in hole] for hole in holes]
        return cls(
            shell=shell,
            segments=segments,
            plane=plane,
            flat_shell=flat_shell,
            flat_holes=flat_holes,
        )

    def contains(self, p: Vec) -> bool:
        """True when ``p``, taken as lying in the surface plane, is on or inside the surface."""
        if self.plane is None:
            return False
        location = locate_in_surface(self.plane.flatten(p), self.flat_shell, self.flat_holes)
        return location is not Location.EXTERIOR


def _to_point_distance(p: Vec, segments: list[tuple[Vec, Vec]]) -> float:
    if not segments:
        return math.inf
    starts, ends = segment_arrays(segments)
    return float(point_segments_distance(p, starts, ends).min())


def _coordinate_surface_distance(p: Vec, surface: _PreparedSurface) -> float:
    plane = surface.plane
    if plane is not None and surface.contains(plane.foot(p)):
        return abs(plane.height(p))
    return _to_point_distance(p, surface.segments)


def point_point(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.dist(a.coordinate.as_tuple(), b.coordinate.as_tuple())


def point_curve(point: Point, curve: Curve) -> float:
    """Minimum point-to-segment distance over the curve's segments."""
    if len(curve.coordinates) == 1:
        return point_point(point, Point(coordinate=curve.coordinates[0]))
    return _to_point_distance(point.coordinate.as_tuple(), curve.segments())


def point_surface(point: Point, surface: Surface) -> float:
    """Zero on or inside the surface, else distance to the nearest ring."""
    return _coordinate_surface_distance(point.coordinate.as_tuple(), _PreparedSurface.of(surface))


def curve_curve(a: Curve, b: Curve) -> float:
    """Minimum segment-to-segment distance over all segment pairs."""
    if len(a.coordinates) == 1:
        return point_curve(Point(coordinate=a.coordinates[0]), b)
    if len(b.coordinates) == 1:
        return point_curve(Point(coordinate=b.coordinates[0]), a)
    return segments_min_distance(a.segments(), b.segments())


def _crosses_inside(a: Vec, b: Vec, surface: _PreparedSurface) -> bool:
    """Whether segment a-b passes through the surface plane on or inside the surface."""
    plane = surface.plane
    if plane is None:
        return False
    ha, hb = plane.height(a), plane.height(b)
    if ha == hb or ha * hb > 0:
        return False
    t = ha / (ha - hb)
    crossing = (a[0] + t * (b[0] - a[0]), a[1] + t * (b[1] - a[1]), a[2] + t * (b[2] - a[2]))
    return surface.contains(crossing)


def curve_surface(curve: Curve, surface: Surface) -> float:
    """Zero if the curve touches, crosses or lies in the surface, else boundary distance."""
    if len(curve.coordinates) == 1:
        return point_surface(Point(coordinate=curve.coordinates[0]), surface)

    prepared = _PreparedSurface.of(surface)
    best = math.inf
    for vertex in as_tuples(curve.coordinates):
        best = min(best, _coordinate_surface_distance(vertex, prepared))
        if best == 0.0:
            return best

    segments = curve.segments()
    if any(_crosses_inside(a, b, prepared) for a, b in segments):
        return 0.0
    return min(best, segments_min_distance(segments, prepared.segments))


def surface_surface(a: Surface, b: Surface) -> float:
    """Zero if either surface overlaps, pierces or contains the other, else boundary distance."""
    first = _PreparedSurface.of(a)
    second = _PreparedSurface.of(b)
    best = math.inf
    for vertex in first.shell:
        best = min(best, _coordinate_surface_distance(vertex, second))
        if best == 0.0:
            return best
    for vertex in second.shell:
        best = min(best, _coordinate_surface_distance(vertex, first))
        if best == 0.0:
            return best

    # a ring can pass through the other surface's interior without touching its boundary
    if any(_crosses_inside(p, q, second) for p, q in first.segments):
        return 0.0
    if any(_crosses_inside(p, q, first) for p, q in second.segments):
        return 0.0
    return min(best, segments_min_distance(first.segments, second.segments))
