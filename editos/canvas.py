"""Drawing primitives on top of a framebuffer."""

from __future__ import annotations

from editos.color import Color
from editos.framebuffer import Framebuffer
from editos.shapes import Rect


class Canvas:
    """Draws pixels, filled rectangles and borders onto a framebuffer."""

    def __init__(self, fb: Framebuffer) -> None:
        self._fb = fb

    @property
    def width(self) -> int:
        return self._fb.width

    @property
    def height(self) -> int:
        return self._fb.height

    def clear(self, color: Color | int, area: Rect | None = None) -> None:
        """Fill ``area``, or the whole surface when it is None or empty."""
        self._fb.clear(color, area)

    def draw_pixel(self, x: int, y: int, color: Color | int) -> None:
        self._fb.put_pixel(x, y, color)

    def draw_rect(self, rect: Rect, color: Color | int) -> None:
        """Fill every pixel of ``rect``."""
        for y in range(rect.y, rect.end_y()):
            for x in range(rect.x, rect.end_x()):
                self._fb.put_pixel(x, y, color)

    def draw_border(self, outer: Rect, inner: Rect, color: Color | int) -> None:
        """Fill the pixels of ``outer`` that lie outside ``inner``."""
        for y in range(outer.y, outer.end_y()):
            for x in range(outer.x, outer.end_x()):
                if not inner.is_inbounds(x, y):
                    self._fb.put_pixel(x, y, color)

    def draw_frame(self, rect: Rect, thickness: int, color: Color | int) -> None:
        """Draw a border ``thickness`` wide: outside ``rect`` when positive, inside when not."""
        shifted = rect + thickness
        if thickness > 0:
            self.draw_border(shifted, rect, color)
        else:
            self.draw_border(rect, shifted, color)