import io

from tracewrite.epd import format_real, write_epd
from tracewrite.shapes import Color, RealCoord, Spline, SplineList, SplineListArray


def _render(shape, box=(0, 0, 10, 20)):
    buf = io.StringIO()
    write_epd(buf, "pic", *box, shape, creator="tool", date="today")
    return buf.getvalue().splitlines()


def _line_list(color, open_=False):
    return SplineList(
        [Spline.line(RealCoord(0, 0), RealCoord(3, 0)),
         Spline.line(RealCoord(3, 0), RealCoord(0, 0))],
        color,
        open=open_,
    )


def test_format_real_integral_and_fraction():
    assert format_real(2.0) == "2"
    assert format_real(1.5) == "1.500"
    assert format_real(-3) == "-3"


def test_header_lines():
    lines = _render(SplineListArray(), box=(1, 2, 3, 4))
    assert lines == [
        "%EPD-1.0",
        "% Created by tool",
        "% Title: pic",
        "% CreationDate: today",
        "%BBox(1,2,3,4)",
    ]


def test_single_filled_list():
    lines = _render(SplineListArray([_line_list(Color(255, 0, 0))]))
    body = lines[5:]
    assert body[0] == "1.000 0.000 0.000 rg"
    assert body[1] == "0 0 m"
    assert body[2] == "3 0 l"
    assert body[-1] == "f"


def test_colour_change_closes_path():
    shape = SplineListArray([_line_list(Color(255, 0, 0)), _line_list(Color(0, 0, 255))])
    body = _render(shape)[5:]
    assert body.count("h") == 1
    h = body.index("h")
    assert body[h - 1] == "f"
    assert body[h + 1].endswith(" rg")
    assert body[-1] == "f"


def test_same_colour_shares_path():
    shape = SplineListArray([_line_list(Color(9, 9, 9)), _line_list(Color(9, 9, 9))])
    body = _render(shape)[5:]
    assert "h" not in body
    assert sum(1 for line in body if line.endswith(" m")) == 2
    assert sum(1 for line in body if line.endswith(" rg")) == 1


def test_centerline_strokes():
    shape = SplineListArray([_line_list(Color(0, 0, 0))], centerline=True)
    body = _render(shape)[5:]
    assert body[0].endswith(" RG")
    assert body[-1] == "S"


def test_cubic_command_layout():
    curve = Spline.cubic(RealCoord(0, 0), RealCoord(1, 2), RealCoord(3, 4.25), RealCoord(5, 6))
    shape = SplineListArray([SplineList([curve], Color(0, 0, 0))])
    body = _render(shape)[5:]
    assert "1 2  3 4.250  5 6  c " in body