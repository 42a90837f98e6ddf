"""Integer polyline helpers and B-spline flattening used by the DXF writer."""

from __future__ import annotations

import math
from typing import Sequence

from .shapes import Coord


def _lround(value: float) -> int:
    """Round half away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def point_distance(p1: Coord, p2: Coord) -> float:
    """Euclidean distance between two integer points."""
    dx = p2.x - p1.x
    dy = p2.y - p1.y
    if dx == 0:
        return float(abs(dy))
    if dy == 0:
        return float(abs(dx))
    return math.sqrt(dx * dx + dy * dy)


def polyline_length(points: Sequence[Coord]) -> float:
    """Total length of the segments joining consecutive points."""
    return sum(
        (point_distance(a, b) for a, b in zip(points, points[1:])), 0.0
    )


def bspline_to_lines(points: Sequence[Coord], order: int, resolution: int) -> list[Coord]:
    """Flatten the B-spline with control ``points`` into polyline vertices.

    ``resolution`` is the segment length; 0 means the square root of the
    control polygon's length is used as the segment count.
    """
    count = len(points)
    if count == 0:
        return []

    knots: list[int] = []
    for i in range(count + order):
        if i < order:
            knots.append(0)
        elif i > count:
            knots.append(knots[i - 1])
        else:
            knots.append(knots[i - 1] + 1)

    total = polyline_length(points)
    r = math.sqrt(total) if resolution == 0 else total / resolution
    segments = _lround(r)

    result: list[Coord] = []
    if segments != 0:
        step = knots[count + order - 1] / segments
        rows = [[0.0] * (count + order + 1) for _ in range(max(order, 1))]
        for knot_index in range(order - 1, count):
            for i in range(count + order - 1):
                rows[0][i] = 1.0 if (i == knot_index and knots[i] != knots[i + 1]) else 0.0
            t = float(knots[knot_index])
            while t < knots[knot_index + 1] - step / 2.0:
                sx = 0.0
                sy = 0.0
                for j in range(2, order + 1):
                    below = rows[j - 2]
                    row = rows[j - 1]
                    for i, point in enumerate(points):
                        value = 0.0
                        if below[i]:
                            value += (t - knots[i]) * below[i] / (knots[i + j - 1] - knots[i])
                        if below[i + 1]:
                            value += (knots[i + j] - t) * below[i + 1] / (knots[i + j] - knots[i + 1])
                        row[i] = value
                        if j == order:
                            sx += point.x * value
                            sy += point.y * value
                    row[count] = 0.0
                result.append(Coord(_lround(sx), _lround(sy)))
                t += step

    last = points[-1]
    result.append(Coord(last.x, last.y))
    return result