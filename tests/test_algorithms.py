"""Tests for the segment and ring kernels."""

import math
import random

import numpy as np

from geomeasure.algorithms.lines import (
    point_on_segment,
    point_segment_distance,
    point_segments_distance,
    segment_distance,
    segments_intersect,
    segments_min_distance,
)
from geomeasure.algorithms.polygons import (
    Location,
    bounds,
    fit_plane,
    locate_in_ring,
    locate_in_surface,
    open_ring,
    path_segments,
    ring_area,
    ring_segments,
    signed_ring_area,
    surface_area,
)

SQUARE = [(0.0, 0.0, 0.0), (2.0, 0.0, 0.0), (2.0, 2.0, 0.0), (0.0, 2.0, 0.0)]
HOLE = [(0.5, 0.5, 0.0), (1.5, 0.5, 0.0), (1.5, 1.5, 0.0), (0.5, 1.5, 0.0)]


class TestPointSegment:
    def test_perpendicular(self):
        assert point_segment_distance((1, 0, 0), (0, -1, 0), (0, 1, 0)) == 1.0

    def test_beyond_end(self):
        assert math.isclose(point_segment_distance((0, 5, 0), (0, -1, 0), (0, 1, 0)), 4.0)

    def test_before_start(self):
        assert math.isclose(point_segment_distance((-3, -4, 0), (0, 0, 0), (5, 0, 0)), 5.0)

    def test_zero_length_segment(self):
        assert math.isclose(point_segment_distance((3, 4, 0), (0, 0, 0), (0, 0, 0)), 5.0)

    def test_vectorised_matches_scalar(self):
        segments = [
            ((0.0, -1.0, 0.0), (0.0, 1.0, 0.0)),
            ((2.0, 2.0, 1.0), (4.0, 3.0, -1.0)),
            ((1.0, 1.0, 1.0), (1.0, 1.0, 1.0)),
        ]
        p = (0.5, 3.0, 0.25)
        starts = np.array([s for s, _ in segments])
        ends = np.array([e for _, e in segments])
        result = point_segments_distance(p, starts, ends)
        for value, (a, b) in zip(result, segments):
            assert math.isclose(value, point_segment_distance(p, a, b))

    def test_on_segment(self):
        assert point_on_segment((1, 1, 0), (0, 0, 0), (2, 2, 0))
        assert point_on_segment((2, 2, 0), (0, 0, 0), (2, 2, 0))
        assert not point_on_segment((3, 3, 0), (0, 0, 0), (2, 2, 0))
        assert not point_on_segment((1, 0, 0), (0, 0, 0), (2, 2, 0))


class TestSegmentSegment:
    def test_crossing(self):
        assert segments_intersect((0, 0, 0), (2, 2, 0), (0, 2, 0), (2, 0, 0))
        assert segment_distance((0, 0, 0), (2, 2, 0), (0, 2, 0), (2, 0, 0)) == 0.0

    def test_touching_endpoint(self):
        assert segments_intersect((0, 0, 0), (1, 0, 0), (1, 0, 0), (1, 5, 0))

    def test_parallel(self):
        assert segment_distance((0, 0, 0), (1, 0, 0), (0, 1, 0), (1, 1, 0)) == 1.0

    def test_collinear_overlap(self):
        assert segments_intersect((0, 0, 0), (2, 0, 0), (1, 0, 0), (3, 0, 0))

    def test_collinear_disjoint(self):
        assert not segments_intersect((0, 0, 0), (1, 0, 0), (3, 0, 0), (4, 0, 0))
        assert segment_distance((0, 0, 0), (1, 0, 0), (3, 0, 0), (4, 0, 0)) == 2.0

    def test_skew_uses_interior_points(self):
        a, b = (-1.0, 0.0, 0.0), (1.0, 0.0, 0.0)
        c, d = (0.0, -1.0, 1.0), (0.0, 1.0, 1.0)
        assert not segments_intersect(a, b, c, d)
        assert math.isclose(segment_distance(a, b, c, d), 1.0)

    def test_zero_length_segment(self):
        assert segment_distance((1, 1, 0), (1, 1, 0), (0, 0, 0), (2, 0, 0)) == 1.0

    def test_scenario_two_segments(self):
        d = segment_distance((0, 0, 0), (1, 0, 0), (5, 4, 0), (5, 6, 0))
        assert math.isclose(d, math.sqrt(32))

    def test_min_distance(self):
        first = [((0, 0, 0), (1, 0, 0)), ((1, 0, 0), (1, 1, 0))]
        second = [((3, 0, 0), (3, 1, 0))]
        assert segments_min_distance(first, second) == 2.0

    def test_min_distance_no_segments(self):
        assert segments_min_distance([], [((0, 0, 0), (1, 0, 0))]) == math.inf

    def test_collinear_segments_are_symmetric(self):
        rng = random.Random(7)
        for _ in range(2000):
            k = rng.choice([0.1, 0.3, 1 / 3, 0.7])
            xs = [rng.uniform(-10, 10) for _ in range(4)]
            a, b, c, d = [(x, k * x, 0.0) for x in xs]
            assert segments_intersect(a, b, c, d) == segments_intersect(c, d, a, b)
            assert segment_distance(a, b, c, d) == segment_distance(c, d, a, b)
            assert segment_distance(a, b, c, d) == segment_distance(b, a, d, c)


class TestRings:
    def test_open_ring(self):
        assert open_ring([*SQUARE, SQUARE[0]]) == SQUARE
        assert open_ring(SQUARE) == SQUARE

    def test_path_segments(self):
        assert path_segments(SQUARE[:3]) == [(SQUARE[0], SQUARE[1]), (SQUARE[1], SQUARE[2])]
        assert path_segments(SQUARE[:1]) == [(SQUARE[0], SQUARE[0])]

    def test_ring_segments_close_the_ring(self):
        segments = ring_segments(SQUARE)
        assert len(segments) == 4
        assert segments[-1] == (SQUARE[3], SQUARE[0])
        assert ring_segments([*SQUARE, SQUARE[0]]) == segments

    def test_signed_area(self):
        assert signed_ring_area(SQUARE) == 4.0
        assert signed_ring_area(list(reversed(SQUARE))) == -4.0
        assert ring_area(list(reversed(SQUARE))) == 4.0

    def test_surface_area(self):
        assert surface_area(SQUARE, [HOLE]) == 3.0

    def test_hole_larger_than_shell_clamps(self):
        assert surface_area(HOLE, [SQUARE]) == 0.0

    def test_horizontal_plane_is_exact(self):
        raised = [(x, y, 3.0) for x, y, _ in SQUARE]
        plane = fit_plane(raised)
        assert plane.normal == (0.0, 0.0, 1.0)
        assert plane.axes == (0, 1)
        assert plane.height((1.0, 1.0, 5.0)) == 2.0
        assert fit_plane(list(reversed(raised))).normal == (0.0, 0.0, -1.0)

    def test_vertical_plane(self):
        wall = [(0.5, 1.0, -1.0), (1.5, 1.0, -1.0), (1.5, 1.0, 1.0), (0.5, 1.0, 1.0)]
        plane = fit_plane(wall)
        assert plane.axes == (0, 2)
        assert abs(plane.height((1.0, 4.0, 0.0))) == 3.0
        assert plane.foot((1.0, 4.0, 0.0)) == (1.0, 1.0, 0.0)
        assert plane.flatten((1.0, 1.0, 0.5)) == (1.0, 0.5, 0.0)

    def test_tilted_plane(self):
        plane = fit_plane([(0, 0, 0), (1, 0, 0), (1, 1, 1), (0, 1, 1)])
        assert math.isclose(abs(plane.height((0.5, 0.0, 1.0))), math.sqrt(0.5))
        foot = plane.foot((0.5, 0.0, 1.0))
        assert all(math.isclose(f, e) for f, e in zip(foot, (0.5, 0.5, 0.5)))

    def test_no_plane_without_area(self):
        assert fit_plane([(0, 0, 0), (1, 1, 1)]) is None
        assert fit_plane([(0, 0, 0), (1, 1, 1), (2, 2, 2)]) is None

    def test_bounds(self):
        assert bounds(SQUARE) == ((0.0, 0.0, 0.0), (2.0, 2.0, 0.0))
        assert bounds([]) is None


class TestLocation:
    def test_interior(self):
        assert locate_in_ring((1, 1, 0), SQUARE) is Location.INTERIOR

    def test_exterior(self):
        assert locate_in_ring((3, 1, 0), SQUARE) is Location.EXTERIOR

    def test_boundary(self):
        assert locate_in_ring((2, 1, 0), SQUARE) is Location.BOUNDARY
        assert locate_in_ring((0, 0, 0), SQUARE) is Location.BOUNDARY

    def test_clockwise_ring(self):
        assert locate_in_ring((1, 1, 0), list(reversed(SQUARE))) is Location.INTERIOR

    def test_z_is_ignored(self):
        assert locate_in_ring((1, 1, 10), SQUARE) is Location.INTERIOR

    def test_concave_ring(self):
        ell = [(0, 0, 0), (2, 0, 0), (2, 1, 0), (1, 1, 0), (1, 2, 0), (0, 2, 0)]
        assert locate_in_ring((0.5, 1.5, 0), ell) is Location.INTERIOR
        assert locate_in_ring((1.5, 1.5, 0), ell) is Location.EXTERIOR

    def test_inside_hole_is_exterior(self):
        assert locate_in_surface((1, 1, 0), SQUARE, [HOLE]) is Location.EXTERIOR

    def test_hole_boundary(self):
        assert locate_in_surface((0.5, 1, 0), SQUARE, [HOLE]) is Location.BOUNDARY

    def test_between_shell_and_hole(self):
        assert locate_in_surface((0.25, 0.25, 0), SQUARE, [HOLE]) is Location.INTERIOR

    def test_degenerate_ring_has_no_interior(self):
        assert locate_in_ring((1, 0, 0), [(0, 0, 0), (2, 0, 0)]) is Location.BOUNDARY
        assert locate_in_ring((1, 1, 0), [(0, 0, 0), (2, 0, 0)]) is Location.EXTERIOR
