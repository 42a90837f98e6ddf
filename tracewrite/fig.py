"""XFig 3.2 writer."""

from __future__ import annotations

from typing import Optional, TextIO

from .shapes import Color, Degree, SplineList, SplineListArray

_HEADER = "#FIG 3.2\nLandscape\nCenter\nInches\nLetter\n100.00\nSingle\n-2\n1200 2\n"

FIG_BLACK = 0
FIG_BLUE = 1
FIG_GREEN = 2
FIG_CYAN = 3
FIG_RED = 4
FIG_MAGENTA = 5
FIG_YELLOW = 6
FIG_WHITE = 7

_FIRST_USER_COLOUR = 32
_MAX_FIG_COLOUR = 543
_MAX_DEPTH = 999
_BEZIER_STEPS = (0.2, 0.4, 0.6, 0.8)


class FigColourError(ValueError):
    """Raised when a drawing needs more colours than the FIG format allows."""


def _colour_hash(color: Color) -> int:
    return (color.r & 255) + (color.g & 161) + (color.b & 127)


class FigPalette:
    """Maps RGB colours to FIG colour numbers, creating user colours on demand."""

    def __init__(self) -> None:
        self._colours: dict[int, Color] = {
            FIG_BLACK: Color(0, 0, 0),
            FIG_BLUE: Color(0, 0, 255),
            FIG_GREEN: Color(0, 255, 0),
            FIG_CYAN: Color(0, 255, 255),
            FIG_RED: Color(255, 0, 0),
            FIG_MAGENTA: Color(255, 0, 255),
            FIG_YELLOW: Color(255, 255, 0),
            FIG_WHITE: Color(255, 255, 255),
        }
        self._heads: dict[int, int] = {
            0: FIG_BLACK,
            543: FIG_WHITE,
            255: FIG_RED,
            161: FIG_GREEN,
            127: FIG_BLUE,
            198: FIG_CYAN,
            382: FIG_MAGENTA,
            416: FIG_YELLOW,
        }
        self._alternates: dict[int, int] = {}
        self._next = _FIRST_USER_COLOUR

    def _allocate(self, color: Color) -> int:
        index = self._next
        self._colours[index] = color
        self._next += 1
        if self._next >= _MAX_FIG_COLOUR:
            raise FigColourError(f"too many colours: {self._next}")
        return index

    def colour_index(self, color: Color) -> int:
        """Return the FIG colour number for ``color``, adding it if unknown."""
        key = _colour_hash(color)
        if key == 0 and self._colours[FIG_BLACK] == color:
            return FIG_BLACK

        head = self._heads.get(key, 0)
        if head == 0:
            index = self._allocate(color)
            self._heads[key] = index
            return index

        index = head
        steps = 0
        while True:
            if self._colours.get(index) == color:
                return index
            alternate = self._alternates.get(index, 0)
            if alternate == 0:
                new_index = self._allocate(color)
                self._alternates[index] = new_index
                return new_index
            index = alternate
            if steps > _MAX_FIG_COLOUR:
                raise FigColourError(f"too many colours (loop): {steps}")
            steps += 1

    def extra_colours(self) -> list[tuple[int, Color]]:
        """User-defined colours in the order they were created."""
        return [
            (index, self._colours[index])
            for index in range(_FIRST_USER_COLOUR, self._next)
        ]


def bezier_point(t: float, z1: float, z2: float, z3: float, z4: float) -> float:
    """Coordinate of a cubic Bezier at parameter ``t`` (clamped to 0..1)."""
    t = min(max(t, 0.0), 1.0)
    t1 = 1.0 - t
    return (t1 * t1 * t1 * z1 + 3.0 * t * t1 * t1 * z2
            + 3.0 * t * t * t1 * z3 + t * t * t * z4)


class _DepthTracker:
    """Lowers the drawing depth when an object overlaps the ones before it."""

    def __init__(self, depth: int) -> None:
        self.depth = depth
        self._global: Optional[list[float]] = None  # min_x, max_x, min_y, max_y
        self._local: Optional[list[float]] = None

    def add(self, x: float, y: float) -> None:
        if self._local is None:
            self._local = [x, x, y, y]
            return
        box = self._local
        box[0] = min(box[0], x)
        box[1] = max(box[1], x)
        box[2] = min(box[2], y)
        box[3] = max(box[3], y)

    def next_depth(self) -> int:
        local = self._local if self._local is not None else [0.0, 0.0, 0.0, 0.0]
        lmin_x, lmax_x, lmin_y, lmax_y = local
        if self._global is None:
            self._global = list(local)
        else:
            gmin_x, gmax_x, gmin_y, gmax_y = self._global
            outside = (lmax_y <= gmin_y or lmin_y >= gmax_y
                       or lmax_x <= gmin_x or lmin_x >= gmax_x)
            if outside:
                self._global = [min(gmin_x, lmin_x), max(gmax_x, lmax_x),
                                min(gmin_y, lmin_y), max(gmax_y, lmax_y)]
            else:
                self._global = list(local)
                if self.depth:
                    self.depth -= 1
        self._local = None
        return self.depth


def _rows(items: list[str]) -> str:
    """Lay out items eight to a tab-indented line."""
    return "".join(
        "\t" + "".join(items[start:start + 8]) + "\n"
        for start in range(0, len(items), 8)
    )


def _list_object(spline_list: SplineList, colour: int, shape: SplineListArray,
                 ury: int, tracker: _DepthTracker) -> str:
    def fig_x(x: float) -> int:
        return int(x * 15.0 + 300.0)

    def fig_y(y: float) -> int:
        return int((ury - y) * 15.0 + 300.0)

    xs: list[int] = []
    ys: list[int] = []
    weights: list[float] = []
    is_spline = False

    for spline in spline_list:
        if not xs:
            xs.append(fig_x(spline.start.x))
            ys.append(fig_y(spline.start.y))
            weights.append(0.0)
            tracker.add(spline.start.x, spline.start.y)
        if spline.degree == Degree.LINEAR:
            xs.append(fig_x(spline.end.x))
            ys.append(fig_y(spline.end.y))
            weights.append(0.0)
            tracker.add(spline.start.x, spline.start.y)
        else:
            for t in _BEZIER_STEPS:
                xs.append(fig_x(bezier_point(t, spline.start.x, spline.control1.x,
                                             spline.control2.x, spline.end.x)))
                ys.append(fig_y(bezier_point(t, spline.start.y, spline.control1.y,
                                             spline.control2.y, spline.end.y)))
                weights.append(-1.0)
            xs.append(fig_x(spline.end.x))
            ys.append(fig_y(spline.end.y))
            weights.append(0.0)
            for point in (spline.start, spline.control1, spline.control2, spline.end):
                tracker.add(point.x, point.y)
            is_spline = True

    if shape.centerline:
        fill, width, close = -1, 1, 4
    else:
        fill, width, close = 20, 0, 5

    count = len(xs)
    if is_spline:
        depth = tracker.next_depth()
        return (
            f"3 {close} 0 {width} {colour} {colour} {depth} 0 {fill} 0.00 0 0 0 {count}\n"
            + _rows([f"{x} {y} " for x, y in zip(xs, ys)])
            + _rows([f"{w:f} " for w in weights])
        )

    if count == 2 or (count == 3 and xs[0] == xs[2] and ys[0] == ys[2]):
        depth = tracker.next_depth()
        if count == 2 and xs[0] == xs[1] and ys[0] == ys[1]:
            return (
                f"2 1 0 1 {colour} {colour} {depth} 0 -1 0.000 0 0 -1 0 0 1\n"
                f"\t{xs[0]} {ys[0]}\n"
            )
        return (
            f"2 1 0 1 {colour} {colour} {depth} 0 -1 0.000 0 0 -1 0 0 2\n"
            f"\t{xs[0]} {ys[0]} {xs[1]} {ys[1]}\n"
        )

    subtype = 3
    if xs[0] != xs[-1] or ys[0] != ys[-1]:
        if shape.centerline:
            subtype = 1
        else:
            xs.append(xs[0])
            ys.append(ys[0])
    depth = tracker.next_depth()
    return (
        f"2 {subtype} 0 {width} {colour} {colour} {depth} 0 {fill} "
        f"0.00 0 0 0 0 0 {len(xs)}\n"
        + _rows([f"{x} {y} " for x, y in zip(xs, ys)])
    )


def write_fig(stream: TextIO, name: str, llx: int, lly: int, urx: int, ury: int,
              shape: SplineListArray) -> None:
    """Write ``shape`` to a text stream as an XFig 3.2 file."""
    for index, spline_list in enumerate(shape):
        if not spline_list.splines:
            raise ValueError(f"spline list {index} is empty")

    palette = FigPalette()
    colours = [palette.colour_index(shape.list_color(sl)) for sl in shape]

    stream.write(_HEADER)
    for index, color in palette.extra_colours():
        stream.write(f"0 {index} #{color.r:02x}{color.g:02x}{color.b:02x}\n")

    tracker = _DepthTracker(min(len(shape) + 20, _MAX_DEPTH))
    for spline_list, colour in zip(shape, colours):
        if spline_list.clockwise:
            colour = FIG_WHITE
        stream.write(_list_object(spline_list, colour, shape, ury, tracker))