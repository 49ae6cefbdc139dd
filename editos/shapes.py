"""Points and rectangles on a 32-bit unsigned pixel grid."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from editos.klog import Loggable, log_obj

_U32 = 0xFFFFFFFF


def _u32(value: int) -> int:
    return value & _U32


@dataclass(frozen=True)
class Point(Loggable):
    """A pixel position; coordinates wrap as 32-bit unsigned values."""

    x: int = 0
    y: int = 0

    FMT: ClassVar[str] = "{x=%u, y=%u}"

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", _u32(self.x))
        object.__setattr__(self, "y", _u32(self.y))

    def __add__(self, other: Point | int) -> Point:
        if isinstance(other, Point):
            return Point(self.x + other.x, self.y + other.y)
        if isinstance(other, int):
            return Point(self.x + other, self.y + other)
        return NotImplemented

    def __sub__(self, other: Point | int) -> Point:
        if isinstance(other, Point):
            return Point(self.x - other.x, self.y - other.y)
        if isinstance(other, int):
            return Point(self.x - other, self.y - other)
        return NotImplemented

    def log_self(self) -> None:
        log_obj(self.FMT, self.x, self.y)


@dataclass(frozen=True)
class Line:
    s: int
    e: int
    w: int


@dataclass(frozen=True)
class Rect(Loggable):
    """An axis-aligned rectangle covering [x, x+w) by [y, y+h)."""

    x: int
    y: int
    w: int
    h: int

    FMT: ClassVar[str] = "{x=%u, y=%u, w=%u, h=%u}"

    def __post_init__(self) -> None:
        for name in ("x", "y", "w", "h"):
            object.__setattr__(self, name, _u32(getattr(self, name)))

    def end_x(self) -> int:
        return _u32(self.x + self.w)

    def end_y(self) -> int:
        return _u32(self.y + self.h)

    def __add__(self, thickness: int) -> Rect:
        """Grow by ``thickness`` on every side."""
        if not isinstance(thickness, int):
            return NotImplemented
        return Rect(
            self.x - thickness,
            self.y - thickness,
            self.w + 2 * thickness,
            self.h + 2 * thickness,
        )

    def __sub__(self, thickness: int) -> Rect:
        """Shrink by ``thickness`` on every side."""
        if not isinstance(thickness, int):
            return NotImplemented
        return self + (-thickness)

    def is_inbounds(self, px: int, py: int) -> bool:
        return self.x <= px < self.end_x() and self.y <= py < self.end_y()

    def contains(self, point: Point) -> bool:
        return self.is_inbounds(point.x, point.y)

    def __contains__(self, point: Point) -> bool:
        return self.contains(point)

    @classmethod
    def empty(cls) -> Rect:
        return cls(0, 0, 0, 0)

    def log_self(self) -> None:
        log_obj(self.FMT, self.x, self.y, self.w, self.h)


@dataclass(frozen=True)
class Sphere:
    x: int
    y: int
    r: int