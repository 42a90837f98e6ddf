"""Elastic Reality shape file writer."""

from __future__ import annotations

import time
from typing import Iterator, Optional, TextIO

from .shapes import Degree, RealCoord, SplineList, SplineListArray

_CORRESPONDENCE_POINTS = 4


def _key_rows(spline_list: SplineList) -> Iterator[tuple[RealCoord, RealCoord, RealCoord]]:
    """Yield the (incoming, anchor, outgoing) points for every B-point."""
    splines = spline_list.splines
    has_tail = spline_list.open or len(splines) == 1
    prev = None if has_tail else splines[-1]
    for spline in splines:
        if prev is not None and prev.degree == Degree.CUBIC:
            before = prev.control2
        else:
            before = spline.start
        after = spline.control1 if spline.degree == Degree.CUBIC else spline.start
        yield before, spline.start, after
        prev = spline
    if has_tail and prev is not None:
        yield prev.control2, prev.end, prev.end


def _write_shape(stream: TextIO, number: int, spline_list: SplineList,
                 shape: SplineListArray, width: int, height: int) -> None:
    length = len(spline_list)
    out_length = length + 1 if spline_list.open or length == 1 else length

    stream.write("Shape = {\n")
    stream.write(f"\t#Shape Number {number}\n")
    stream.write("\tGroup = Default\n")
    stream.write("\tType = Source\n")
    stream.write("\tRoll = A\n")
    stream.write("\tOpaque = True\n")
    stream.write("\tLocked = False\n")
    stream.write("\tWarp = True\n")
    stream.write("\tCookieCut = True\n")
    stream.write("\tColorCorrect = True\n")
    stream.write("\tPrecision = 10\n")
    stream.write(f"\tClosed = {'False' if spline_list.open else 'True'}\n")
    stream.write("\tTween = Linear\n")
    stream.write(f"\tBPoints = {out_length}\n")
    stream.write(f"\tCPoints = {_CORRESPONDENCE_POINTS}\n")
    stream.write("\tFormKey = {\n")
    stream.write("\t\tFrame = 1\n")
    stream.write("\t\tPointList = {\n")
    for p0, p1, p2 in _key_rows(spline_list):
        stream.write(
            "\t\t\t(%f, %f), (%f, %f), (%f, %f),\n"
            % (p0.x / width, p0.y / height, p1.x / width, p1.y / height,
               p2.x / width, p2.y / height)
        )
    stream.write("\t\t}\n\n\t}\n\n")

    if shape.centerline and shape.preserve_width:
        weight = 1.0 / shape.width_weight_factor
        stream.write("\tWeightKey = {\n")
        stream.write("\t\tFrame = 1\n")
        stream.write("\t\tPointList = {\n")
        for p0, p1, p2 in _key_rows(spline_list):
            stream.write(
                "\t\t\t%g, %g, %g,\n" % (p0.z * weight, p1.z * weight, p2.z * weight)
            )
        stream.write("\t\t}\n\n\t}\n\n")

    stream.write("\tCorrKey = {\n")
    stream.write("\t\tFrame = 1\n")
    stream.write("\t\tPointList = {\n")
    stream.write("\t\t\t0")
    corresp_length = out_length - (1.0 if spline_list.open else 2.0)
    divisor = _CORRESPONDENCE_POINTS - (1.0 if spline_list.open else 0.0)
    for point in range(1, _CORRESPONDENCE_POINTS):
        stream.write(", %g" % (corresp_length * point / divisor))
    stream.write("\n\t\t}\n\n\t}\n\n")
    stream.write("}\n\n")


def write_er(stream: TextIO, name: str, llx: int, lly: int, urx: int, ury: int,
             shape: SplineListArray, date: Optional[str] = None) -> None:
    """Write ``shape`` to a text stream as an Elastic Reality shape file."""
    width = urx - llx
    height = ury - lly
    if width <= 0 or height <= 0:
        raise ValueError(f"image extent must be positive, got {width}x{height}")
    for index, spline_list in enumerate(shape):
        if not spline_list.splines:
            raise ValueError(f"spline list {index} is empty")
    if date is None:
        date = time.asctime()

    stream.write(f"#Elastic Reality Shape File\n\n#Date: {date}\n\n")
    stream.write(f"ImageSize = {{\n\tWidth = {width}\n\tHeight = {height}\n}}\n\n")
    for index, spline_list in enumerate(shape):
        _write_shape(stream, index + 1, spline_list, shape, width, height)