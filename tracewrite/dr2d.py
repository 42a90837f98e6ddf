"""IFF DR2D (structured drawing) writer."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO, Optional

from .shapes import Color, Degree, RealCoord, SplineList, SplineListArray, OutputOptions

_FIXOFFS = 10

_LF_ACTIVE = 0x01
_LF_DISPLAYED = 0x02

_FT_NONE = 0
_FT_COLOR = 1

_JT_ROUND = 3

_INDICATOR = 0xFFFFFFFF
_IND_SPLINE = 0x00000001

_A4_LONG_SIDE = 11.6930
_A4_SHORT_SIDE = 8.2681


def _f32(value: float) -> float:
    """Round a value to single precision."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _u32(value: int) -> bytes:
    return (int(value) & 0xFFFFFFFF).to_bytes(4, "big")


def _u16(value: int) -> bytes:
    return (int(value) & 0xFFFF).to_bytes(2, "big")


def fixed_to_ieee(value: float) -> bytes:
    """Encode a fixed-point value (10 fractional bits) as a big-endian IEEE float.

    The value is truncated to an integer first; the mantissa is truncated,
    not rounded, when it has more than 24 significant bits.
    """
    mantissa = int(value)
    if mantissa == 0:
        return bytes(4)
    sign = 0
    if mantissa < 0:
        sign = 0x80
        mantissa = -mantissa
    exponent = 0
    for bit in range(30, -1, -1):
        if mantissa & (1 << bit):
            exponent = bit + 1
            break
    if exponent > 24:
        mantissa >>= exponent - 24
    else:
        mantissa <<= 24 - exponent
    exponent += 126 - _FIXOFFS
    moved = exponent << 23
    return bytes((
        sign | ((moved >> 24) & 0x7F),
        ((moved >> 16) & 0x80) | ((mantissa >> 16) & 0x7F),
        (mantissa >> 8) & 0xFF,
        mantissa & 0xFF,
    ))


@dataclass(frozen=True)
class Chunk:
    """One IFF chunk: a four-character identifier and its payload."""

    id: str
    data: bytes

    def __post_init__(self) -> None:
        if len(self.id.encode("ascii")) != 4:
            raise ValueError(f"chunk id must be four ASCII characters: {self.id!r}")

    def padded_size(self) -> int:
        """Payload size rounded up to an even number of bytes."""
        size = len(self.data)
        return size + (size & 1)

    def to_bytes(self) -> bytes:
        """Encode the chunk with its size header and pad byte."""
        out = self.id.encode("ascii") + _u32(len(self.data)) + self.data
        if len(self.data) & 1:
            out += b"\x00"
        return out


@dataclass(frozen=True)
class _Scale:
    x_factor: float
    y_factor: float
    height: int

    def value_x(self, x: float) -> bytes:
        return fixed_to_ieee(_f32(_f32(x) * self.x_factor))

    def value_y(self, y: float) -> bytes:
        return fixed_to_ieee(_f32(_f32(y) * self.y_factor))

    def flipped(self, point: RealCoord) -> bytes:
        """Encode a point with y measured from the top edge."""
        return self.value_x(point.x) + self.value_y(_f32(self.height - _f32(point.y)))


def _drhd(scale: _Scale, llx: int, lly: int, urx: int, ury: int) -> Chunk:
    return Chunk("DRHD", scale.value_x(llx) + scale.value_y(lly)
                 + scale.value_x(urx) + scale.value_y(ury))


def _pprf(units: str, portrait: bool, page_type: str, grid_size: float) -> Chunk:
    entries = (
        f"Units={units}",
        f"Portrait={'True' if portrait else 'False'}",
        f"PageType={page_type}",
        f"GridSize={grid_size:f}",
    )
    return Chunk("PPRF", b"".join(e.encode("ascii") + b"\x00" for e in entries))


def _layr() -> Chunk:
    name = b"Default layer".ljust(16, b"\x00")
    return Chunk("LAYR", _u16(0) + name + bytes((_LF_ACTIVE | _LF_DISPLAYED, 0)))


def _dash() -> Chunk:
    return Chunk("DASH", _u16(1) + _u16(0))


def _colour_table(shape: SplineListArray) -> list[Color]:
    table: list[Color] = []
    for spline_list in shape:
        color = shape.list_color(spline_list)
        if color not in table:
            table.append(color)
    return table


def _cmap(table: list[Color]) -> Chunk:
    return Chunk("CMAP", b"".join(bytes((c.r, c.g, c.b)) for c in table))


def _bbox(spline_list: SplineList, scale: _Scale) -> Chunk:
    start = spline_list[0].start
    # The initial corner uses the unflipped start point.
    min_x = max_x = _f32(start.x)
    min_y = max_y = _f32(start.y)
    for spline in spline_list:
        ex = _f32(spline.end.x)
        ey = _f32(scale.height - _f32(spline.end.y))
        min_x = min(min_x, ex)
        min_y = min(min_y, ey)
        max_x = max(max_x, ex)
        max_y = max(max_y, ey)
    return Chunk("BBOX", scale.value_x(min_x) + scale.value_y(min_y)
                 + scale.value_x(max_x) + scale.value_y(max_y))


def _attr(colour_index: int, stroked: bool, line_thickness: float) -> Chunk:
    data = bytes((_FT_NONE if stroked else _FT_COLOR, _JT_ROUND, 1, 0))
    data += _u16(colour_index) + _u16(colour_index) + _u16(0)
    data += fixed_to_ieee(line_thickness)
    return Chunk("ATTR", data)


def _point_count(spline_list: SplineList) -> int:
    total = 1 if spline_list[0].degree == Degree.LINEAR else 0
    for spline in spline_list:
        total += 1 if spline.degree == Degree.LINEAR else 5
    return total


def _poly(spline_list: SplineList, stroked: bool, scale: _Scale) -> Chunk:
    body = bytearray(_u16(_point_count(spline_list)))
    first = spline_list[0]
    if first.degree == Degree.LINEAR:
        body += scale.flipped(first.start)
    for spline in spline_list:
        if spline.degree == Degree.LINEAR:
            body += scale.flipped(spline.end)
        else:
            body += _u32(_INDICATOR) + _u32(_IND_SPLINE)
            for point in (spline.start, spline.control1, spline.control2, spline.end):
                body += scale.flipped(point)
    return Chunk("OPLY" if stroked else "CPLY", bytes(body))


def write_dr2d(stream: BinaryIO, name: str, llx: int, lly: int, urx: int, ury: int,
               shape: SplineListArray, options: Optional[OutputOptions] = None) -> None:
    """Write ``shape`` to a binary stream as an IFF DR2D drawing."""
    if options is None:
        options = OutputOptions()
    width = urx - llx
    height = ury - lly
    if width <= 0 or height <= 0:
        raise ValueError(f"image extent must be positive, got {width}x{height}")
    if options.dpi <= 0:
        raise ValueError(f"dpi must be positive, got {options.dpi}")
    for index, spline_list in enumerate(shape):
        if not spline_list.splines:
            raise ValueError(f"spline list {index} is empty")

    portrait = width < height
    if portrait:
        factor = _f32(_f32(_f32(_A4_LONG_SIDE) / _f32(width)) * (1 << _FIXOFFS))
    else:
        factor = _f32(_f32(_f32(_A4_SHORT_SIDE) / _f32(height)) * (1 << _FIXOFFS))
    scale = _Scale(factor, factor, height)
    line_thickness = _f32(1.0 / options.dpi)

    table = _colour_table(shape)
    chunks = [
        _drhd(scale, llx, lly, urx, ury),
        _pprf("Inch", portrait, "A4", 1.0),
        _layr(),
        _dash(),
        _cmap(table),
    ]
    for spline_list in shape:
        stroked = shape.centerline or spline_list.open
        colour_index = table.index(shape.list_color(spline_list))
        chunks.append(_bbox(spline_list, scale))
        chunks.append(_attr(colour_index, stroked, line_thickness))
        chunks.append(_poly(spline_list, stroked, scale))

    form_size = 4 + sum(chunk.padded_size() + 8 for chunk in chunks)
    out = bytearray(b"FORM" + _u32(form_size) + b"DR2D")
    for chunk in chunks:
        out += chunk.to_bytes()
    stream.write(bytes(out))