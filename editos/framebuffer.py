"""Pixel framebuffers: the abstract interface and a linear 32-bpp implementation."""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod

from editos.color import Color
from editos.shapes import Rect

_PIXEL = struct.Struct("<I")
_BYTES_PER_PIXEL = 4


def _argb(color: Color | int) -> int:
    if isinstance(color, Color):
        return color.to_argb()
    return int(color) & 0xFFFFFFFF


class Framebuffer(ABC):
    """A surface that pixels can be written to."""

    @abstractmethod
    def valid(self) -> bool:
        """True if the framebuffer can be drawn on."""

    @abstractmethod
    def clear(self, color: Color | int, area: Rect | None = None) -> None:
        """Fill ``area``, or the whole surface when it is None or empty."""

    @abstractmethod
    def put_pixel(self, x: int, y: int, color: Color | int) -> None:
        """Set one pixel; positions outside the surface are ignored."""

    @property
    @abstractmethod
    def width(self) -> int:
        """Width in pixels."""

    @property
    @abstractmethod
    def height(self) -> int:
        """Height in pixels."""


class LinearFramebuffer(Framebuffer):
    """Pixels stored row by row as little-endian 0xAARRGGBB words."""

    def __init__(self, width: int, height: int, pitch: int | None = None, bpp: int = 32) -> None:
        if pitch is None:
            pitch = width * _BYTES_PER_PIXEL
        if width < 0 or height < 0 or pitch < 0:
            raise ValueError("framebuffer dimensions must not be negative")
        self._width = width
        self._height = height
        self._pitch = pitch
        self._bpp = bpp
        self._buffer = bytearray(pitch * height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def pitch(self) -> int:
        return self._pitch

    @property
    def bpp(self) -> int:
        return self._bpp

    @property
    def buffer(self) -> bytearray:
        """The raw pixel memory."""
        return self._buffer

    def valid(self) -> bool:
        return (
            self._bpp == 32
            and self._width > 0
            and self._height > 0
            and self._pitch >= self._width * _BYTES_PER_PIXEL
        )

    def clear(self, color: Color | int, area: Rect | None = None) -> None:
        if not self.valid():
            return

        if area is None or area == Rect.empty():
            xs, xe, ys, ye = 0, self._width, 0, self._height
        else:
            xs, xe, ys, ye = area.x, area.end_x(), area.y, area.end_y()
        xe = min(xe, self._width)
        ye = min(ye, self._height)
        if xs >= xe or ys >= ye:
            return

        row = _PIXEL.pack(_argb(color)) * (xe - xs)
        for y in range(ys, ye):
            offset = y * self._pitch + xs * _BYTES_PER_PIXEL
            self._buffer[offset : offset + len(row)] = row

    def put_pixel(self, x: int, y: int, color: Color | int) -> None:
        if not self.valid():
            return
        if not (0 <= x < self._width and 0 <= y < self._height):
            return
        _PIXEL.pack_into(self._buffer, self._offset(x, y), _argb(color))

    def get_pixel(self, x: int, y: int) -> Color:
        """The colour stored at ``(x, y)``."""
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"pixel ({x}, {y}) outside {self._width}x{self._height}")
        (value,) = _PIXEL.unpack_from(self._buffer, self._offset(x, y))
        return Color.from_argb(value)

    def _offset(self, x: int, y: int) -> int:
        return y * self._pitch + x * _BYTES_PER_PIXEL