"""Encapsulated PostScript writer using Illustrator-style operators."""

from __future__ import annotations

import time
from typing import Optional, TextIO

from .epd import format_real
from .shapes import Color, Degree, Spline, SplineListArray

_PROLOG = (
    "%%BeginProlog",
    "/bd { bind def } bind def",
    "/incompound false def",
    "/m { moveto } bd",
    "/l { lineto } bd",
    "/c { curveto } bd",
    "/F { incompound not {fill} if } bd",
    "/f { closepath F } bd",
    "/S { stroke } bd",
    "/*u { /incompound true def } bd",
    "/*U { /incompound false def f} bd",
    "/k { setcmykcolor } bd",
    "/K { k } bd",
    "%%EndProlog",
    "%%BeginSetup",
    "%%EndSetup",
)


def rgb_to_cmyk(color: Color) -> tuple[int, int, int, int]:
    """Convert an RGB colour to CMYK components in the range 0..255."""
    c = 255 - color.r
    m = 255 - color.g
    y = 255 - color.b
    k = min(c, m, y)
    return c - k, m - k, y - k, k


def _segment(spline: Spline) -> str:
    if spline.degree == Degree.LINEAR:
        return f"{format_real(spline.end.x)} {format_real(spline.end.y)} l\n"
    a, b, c, d, e, f = (
        format_real(v)
        for v in (
            spline.control1.x, spline.control1.y,
            spline.control2.x, spline.control2.y,
            spline.end.x, spline.end.y,
        )
    )
    return f"{a} {b}  {c} {d}  {e} {f}  c \n"


def write_eps(stream: TextIO, name: str, llx: int, lly: int, urx: int, ury: int,
              shape: SplineListArray, creator: str = "tracewrite",
              date: Optional[str] = None) -> None:
    """Write ``shape`` to a text stream as an EPS file."""
    if date is None:
        date = time.asctime()
    stream.write("%!PS-Adobe-3.0 EPSF-3.0\n")
    stream.write(f"%%Creator: Adobe Illustrator by {creator}\n")
    stream.write(f"%%Title: {name}\n")
    stream.write(f"%%CreationDate: {date}\n")
    stream.write(f"%%BoundingBox: {llx} {lly} {urx} {ury}\n")
    stream.write("%%DocumentData: Clean7Bit\n")
    stream.write("%%EndComments\n")
    for line in _PROLOG:
        stream.write(line + "\n")
    stream.write("1 setlinecap\n")
    stream.write("1 setlinejoin\n")

    last_color = None
    for index, spline_list in enumerate(shape):
        if not spline_list.splines:
            raise ValueError(f"spline list {index} is empty")
        stroked = shape.centerline or spline_list.open
        if index == 0 or spline_list.color != last_color:
            if index > 0:
                stream.write("*U\n")
            c, m, y, k = rgb_to_cmyk(spline_list.color)
            stream.write(
                f"{c / 255.0:.3f} {m / 255.0:.3f} {y / 255.0:.3f} {k / 255.0:.3f} "
                f"{'K' if stroked else 'k'}\n"
            )
            stream.write("*u\n")
            last_color = spline_list.color
        first = spline_list[0]
        stream.write(f"{format_real(first.start.x)} {format_real(first.start.y)} m\n")
        for spline in spline_list:
            stream.write(_segment(spline))
        stream.write("S\n" if stroked else "f\n")
    if len(shape) > 0:
        stream.write("*U\n")

    stream.write("%%Trailer\n")
    stream.write("%%EOF\n")