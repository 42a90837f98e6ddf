import io

import pytest

from tracewrite.er import write_er
from tracewrite.shapes import Color, RealCoord, Spline, SplineList, SplineListArray


def _square(open_=False):
    pts = [RealCoord(0, 0), RealCoord(10, 0), RealCoord(10, 10), RealCoord(0, 10)]
    count = 3 if open_ else 4
    splines = [Spline.line(pts[i], pts[(i + 1) % 4]) for i in range(count)]
    return SplineList(splines, Color(0, 0, 0), open=open_)


def _render(shape, llx=0, lly=0, urx=10, ury=10):
    out = io.StringIO()
    write_er(out, "pic", llx, lly, urx, ury, shape, date="today")
    return out.getvalue()


def _point_rows(text):
    return [line for line in text.splitlines() if line.startswith("\t\t\t(")]


def test_header():
    text = _render(SplineListArray([]), llx=2, lly=3, urx=12, ury=23)
    assert text == (
        "#Elastic Reality Shape File\n\n#Date: today\n\n"
        "ImageSize = {\n\tWidth = 10\n\tHeight = 20\n}\n\n"
    )


def test_closed_shape_points():
    text = _render(SplineListArray([_square()]))
    assert "\t#Shape Number 1\n" in text
    assert "\tClosed = True\n" in text
    assert "\tBPoints = 4\n" in text
    assert "\tCPoints = 4\n" in text
    rows = _point_rows(text)
    assert len(rows) == 4
    assert rows[1] == "\t\t\t(1.000000, 0.000000), (1.000000, 0.000000), (1.000000, 0.000000),"


def test_closed_correspondence():
    text = _render(SplineListArray([_square()]))
    assert "\t\t\t0, 0.5, 1, 1.5\n" in text


def test_open_shape_has_tail_point():
    text = _render(SplineListArray([_square(open_=True)]))
    assert "\tClosed = False\n" in text
    assert "\tBPoints = 4\n" in text
    rows = _point_rows(text)
    assert len(rows) == 4
    assert rows[-1] == "\t\t\t(0.000000, 1.000000), (0.000000, 1.000000), (0.000000, 1.000000),"


def test_cubic_uses_neighbouring_controls():
    a = Spline.cubic(RealCoord(0, 0), RealCoord(2, 0), RealCoord(5, 5), RealCoord(10, 10))
    b = Spline.cubic(RealCoord(10, 10), RealCoord(8, 10), RealCoord(2, 10), RealCoord(0, 0))
    text = _render(SplineListArray([SplineList([a, b], Color(0, 0, 0))]))
    rows = _point_rows(text)
    assert rows[0] == "\t\t\t(0.200000, 1.000000), (0.000000, 0.000000), (0.200000, 0.000000),"
    assert rows[1] == "\t\t\t(0.500000, 0.500000), (1.000000, 1.000000), (0.800000, 1.000000),"


def test_shapes_numbered_in_order():
    text = _render(SplineListArray([_square(), _square(), _square()]))
    assert text.count("Shape = {\n") == 3
    assert text.index("#Shape Number 1") < text.index("#Shape Number 2") < text.index("#Shape Number 3")


def test_weight_key_for_centerline():
    pts = [RealCoord(0, 0, 2), RealCoord(10, 0, 4)]
    shape = SplineListArray(
        [SplineList([Spline.line(pts[0], pts[1])], Color(0, 0, 0), open=True)],
        centerline=True, preserve_width=True, width_weight_factor=2.0,
    )
    text = _render(shape)
    assert "\tWeightKey = {\n" in text
    assert "\t\t\t1, 1, 1,\n" in text
    assert "\t\t\t2, 2, 2,\n" in text


def test_no_weight_key_without_preserve_width():
    text = _render(SplineListArray([_square()], centerline=True))
    assert "WeightKey" not in text


def test_rejects_empty_extent():
    with pytest.raises(ValueError):
        _render(SplineListArray([_square()]), urx=0)


def test_rejects_empty_list():
    with pytest.raises(ValueError):
        _render(SplineListArray([SplineList([], Color(0, 0, 0))]))