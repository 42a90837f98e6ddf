"""Encapsulated PDF (EPD) writer."""

from __future__ import annotations

import time
from typing import Optional, TextIO

from .shapes import Degree, SplineListArray


def format_real(value: float) -> str:
    """Format a coordinate: integral values without decimals, others with three."""
    value = float(value)
    if value.is_integer():
        return f"{value:.0f}"
    return f"{value:.3f}"


def _command2(x: float, y: float, op: str) -> str:
    return f"{format_real(x)} {format_real(y)} {op}\n"


def _command6(values: tuple[float, ...], op: str) -> str:
    a, b, c, d, e, f = (format_real(v) for v in values)
    return f"{a} {b}  {c} {d}  {e} {f}  {op} \n"


def write_epd(stream: TextIO, name: str, llx: int, lly: int, urx: int, ury: int,
              shape: SplineListArray, creator: str = "tracewrite",
              date: Optional[str] = None) -> None:
    """Write ``shape`` to a text stream in EPD format."""
    if date is None:
        date = time.asctime()
    stream.write("%EPD-1.0\n")
    stream.write(f"% Created by {creator}\n")
    stream.write(f"% Title: {name}\n")
    stream.write(f"% CreationDate: {date}\n")
    stream.write(f"%BBox({llx},{lly},{urx},{ury})\n")

    last_color = None
    spline_list = None
    for index, spline_list in enumerate(shape):
        stroked = shape.centerline or spline_list.open
        first = spline_list[0]
        if index == 0 or spline_list.color != last_color:
            if index > 0:
                stream.write("S\n" if stroked else "f\n")
                stream.write("h\n")
            c = spline_list.color
            stream.write(
                f"{c.r / 255.0:.3f} {c.g / 255.0:.3f} {c.b / 255.0:.3f} "
                f"{'RG' if stroked else 'rg'}\n"
            )
            last_color = c
        stream.write(_command2(first.start.x, first.start.y, "m"))
        for spline in spline_list:
            if spline.degree == Degree.LINEAR:
                stream.write(_command2(spline.end.x, spline.end.y, "l"))
            else:
                stream.write(_command6(
                    (spline.control1.x, spline.control1.y,
                     spline.control2.x, spline.control2.y,
                     spline.end.x, spline.end.y),
                    "c",
                ))
    if spline_list is not None:
        stroked = shape.centerline or spline_list.open
        stream.write("S\n" if stroked else "f\n")