"""Geometry and colour types shared by the vector writers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, Optional


@dataclass(frozen=True)
class Coord:
    """An integer pixel position."""

    x: int
    y: int


@dataclass(frozen=True)
class RealCoord:
    """A real-valued point; ``z`` carries the stroke width for centerlines."""

    x: float
    y: float
    z: float = 0.0


@dataclass(frozen=True)
class Color:
    """An 8-bit RGB colour."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                raise ValueError(f"colour channel out of range: {channel}")


class Degree(IntEnum):
    """Polynomial degree of a spline segment."""

    LINEAR = 1
    QUADRATIC = 2
    CUBIC = 3


@dataclass(frozen=True)
class Spline:
    """One segment of an outline: a straight line or a cubic Bezier."""

    start: RealCoord
    control1: RealCoord
    control2: RealCoord
    end: RealCoord
    degree: Degree = Degree.CUBIC

    @classmethod
    def line(cls, start: RealCoord, end: RealCoord) -> "Spline":
        """Build a straight segment from ``start`` to ``end``."""
        return cls(start, start, end, end, Degree.LINEAR)

    @classmethod
    def cubic(
        cls,
        start: RealCoord,
        control1: RealCoord,
        control2: RealCoord,
        end: RealCoord,
    ) -> "Spline":
        """Build a cubic Bezier segment."""
        return cls(start, control1, control2, end, Degree.CUBIC)


@dataclass
class SplineList:
    """A connected run of splines sharing one colour."""

    splines: list[Spline] = field(default_factory=list)
    color: Color = Color(0, 0, 0)
    clockwise: bool = False
    open: bool = False

    def __iter__(self) -> Iterator[Spline]:
        return iter(self.splines)

    def __len__(self) -> int:
        return len(self.splines)

    def __getitem__(self, index: int) -> Spline:
        return self.splines[index]


@dataclass
class SplineListArray:
    """All outlines of a traced image."""

    lists: list[SplineList] = field(default_factory=list)
    background_color: Optional[Color] = None
    centerline: bool = False
    preserve_width: bool = False
    width_weight_factor: float = 1.0

    def __iter__(self) -> Iterator[SplineList]:
        return iter(self.lists)

    def __len__(self) -> int:
        return len(self.lists)

    def __getitem__(self, index: int) -> SplineList:
        return self.lists[index]

    def list_color(self, spline_list: SplineList) -> Color:
        """Colour to paint a list with: clockwise lists take the background."""
        if spline_list.clockwise and self.background_color is not None:
            return self.background_color
        return spline_list.color


@dataclass
class OutputOptions:
    """Options passed to writers."""

    dpi: int = 72