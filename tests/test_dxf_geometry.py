import math

from tracewrite.dxf_geometry import bspline_to_lines, point_distance, polyline_length
from tracewrite.shapes import Coord


def test_distance_pythagorean():
    assert point_distance(Coord(0, 0), Coord(3, 4)) == 5.0


def test_distance_axis_aligned_and_symmetric():
    a, b = Coord(2, 5), Coord(2, -7)
    assert point_distance(a, b) == abs(5 - (-7))
    assert point_distance(a, b) == point_distance(b, a)
    c, d = Coord(17, 3), Coord(-1, 9)
    assert math.isclose(point_distance(c, d), math.hypot(18, 6))
    assert point_distance(c, c) == 0.0


def test_polyline_length_sums_segments():
    pts = [Coord(0, 0), Coord(3, 4), Coord(3, 10), Coord(-2, 10)]
    expected = sum(point_distance(a, b) for a, b in zip(pts, pts[1:]))
    assert polyline_length(pts) == expected


def test_polyline_length_degenerate():
    assert polyline_length([]) == 0.0
    assert polyline_length([Coord(4, 4)]) == 0.0


def test_straight_bezier_evenly_spaced():
    pts = [Coord(0, 0), Coord(10000, 0), Coord(20000, 0), Coord(30000, 0)]
    result = bspline_to_lines(pts, 4, 10000)
    assert result == pts


def test_endpoints_preserved():
    pts = [Coord(0, 0), Coord(50000, 80000), Coord(90000, -20000), Coord(120000, 30000)]
    result = bspline_to_lines(pts, 4, 10000)
    assert result[0] == pts[0]
    assert result[-1] == pts[-1]
    assert len(result) > 2


def test_result_within_control_hull_box():
    pts = [Coord(0, 0), Coord(40000, 90000), Coord(80000, 90000), Coord(120000, 0)]
    result = bspline_to_lines(pts, 4, 10000)
    for p in result:
        assert 0 <= p.x <= 120000
        assert 0 <= p.y <= 90000
    xs = [p.x for p in result]
    assert xs == sorted(xs)


def test_zero_resolution_uses_sqrt_of_length():
    pts = [Coord(0, 0), Coord(100, 0), Coord(200, 0), Coord(300, 0)]
    coarse = bspline_to_lines(pts, 4, 100)
    fine = bspline_to_lines(pts, 4, 0)
    assert len(fine) > len(coarse)
    assert all(p.y == 0 for p in fine)


def test_short_curve_yields_only_last_point():
    pts = [Coord(0, 0), Coord(1, 1), Coord(2, 1), Coord(3, 0)]
    assert bspline_to_lines(pts, 4, 10000) == [Coord(3, 0)]


def test_order_larger_than_points():
    pts = [Coord(0, 0), Coord(50000, 0)]
    assert bspline_to_lines(pts, 4, 10) == [Coord(50000, 0)]


def test_empty_input():
    assert bspline_to_lines([], 4, 10000) == []