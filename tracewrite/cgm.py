"""Computer Graphics Metafile (binary encoding) writer."""

from __future__ import annotations

from typing import BinaryIO

from .shapes import Degree, SplineListArray

_BEGIN_METAFILE = 0x0020
_BEGIN_PICTURE = 0x0060
_METAFILE_VERSION = 0x1022
_METAFILE_DESCRIPTION = 0x1040


def _u16(value: float) -> bytes:
    return (int(value) & 0xFFFF).to_bytes(2, "big")


def _string_element(code: int, text: str) -> bytes:
    data = text.encode("utf-8")
    length = len(data)
    out = bytearray()
    if length + 1 < 0x001F:
        out += _u16(code + length + 1)
    else:
        out += _u16(code + 0x001F)
        out += _u16(length + 1)
    out.append(length & 0xFF)
    out += data
    if length % 2 == 0:
        out.append(0)
    return bytes(out)


def _encode(name: str, llx: int, lly: int, urx: int, ury: int,
            shape: SplineListArray, creator: str) -> bytes:
    out = bytearray()
    out += _string_element(_BEGIN_METAFILE, name)
    out += _u16(_METAFILE_VERSION) + _u16(0x0002)
    out += _string_element(_METAFILE_DESCRIPTION, "created by " + creator)
    # metafile element list
    out += _u16(0x1166) + _u16(0x0001) + _u16(0xFFFF) + _u16(0x0001)
    out += _string_element(_BEGIN_PICTURE, "pic1")
    # colour selection mode: direct
    out += _u16(0x2042) + _u16(0x0001)
    # VDC extent
    out += _u16(0x20C8) + _u16(llx) + _u16(urx) + _u16(ury) + _u16(lly)
    # begin picture body
    out += _u16(0x0080)

    end_code = _u16(0x0200 if shape.centerline else 0x0120)
    for index, spline_list in enumerate(shape):
        if index > 0:
            out += end_code
        out += _u16(0x5083 if shape.centerline else 0x52E3)
        color = shape.list_color(spline_list)
        out += bytes((color.r, color.g, color.b, 0))
        if shape.centerline:
            out += _u16(0x53C2) + _u16(0x0001)  # edge visibility on
            out += _u16(0x01E0)  # begin compound line
        else:
            out += _u16(0x52C2) + _u16(0x0001)  # interior style solid
            out += _u16(0x0100)  # begin figure
        for spline in spline_list:
            if spline.degree == Degree.LINEAR:
                points = (spline.start, spline.end)
                out += _u16(0x4028)
            else:
                points = (spline.start, spline.control1, spline.control2, spline.end)
                out += _u16(0x4352) + _u16(0x0002)
            for point in points:
                out += _u16(point.x) + _u16(ury - point.y)
    if len(shape) > 0:
        out += end_code

    out += _u16(0x00A0)  # end picture
    out += _u16(0x0040)  # end metafile
    return bytes(out)


def write_cgm(stream: BinaryIO, name: str, llx: int, lly: int, urx: int, ury: int,
              shape: SplineListArray, creator: str = "tracewrite") -> None:
    """Write ``shape`` to a binary stream as a CGM file."""
    stream.write(_encode(name, llx, lly, urx, ury, shape, creator))