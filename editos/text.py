"""Rendering text with a bitmap font onto a canvas."""

from __future__ import annotations

from dataclasses import dataclass

from editos.bitmap_font import BitmapFont, builtin_font
from editos.canvas import Canvas
from editos.color import Color

_U32 = 0xFFFFFFFF


@dataclass(frozen=True)
class Style:
    """Colours, scale and spacing used when drawing glyphs."""

    fg: Color
    bg: Color
    draw_bg: bool = False
    scale: int = 1
    gap_x: int = 0
    gap_y: int = 0


class TextRenderer:
    """Draws glyphs one after another, advancing a pen position."""

    def __init__(self, canvas: Canvas, style: Style, font: BitmapFont | None = None) -> None:
        self.font = font if font is not None else builtin_font()
        self._canvas = canvas
        self._style = style
        self._x = 0
        self._y = 0

    @property
    def style(self) -> Style:
        return self._style

    @property
    def position(self) -> tuple[int, int]:
        return self._x, self._y

    def draw_glyph(
        self, c: str, x: int | None = None, y: int | None = None, inverted: bool = False
    ) -> None:
        """Draw ``c`` at the pen, or at ``(x, y)`` when given, then advance the pen."""
        style = self._style
        if style.scale == 0 or not self.font.has_glyph(c):
            return
        if x is not None and y is not None:
            self.set_pos(x, y)

        width = self.font.glyph_width
        scale = style.scale
        for gy, row in enumerate(self.font.glyph(c)):
            for gx in range(width):
                lit = bool(row & (1 << (width - 1 - gx))) != inverted
                if not lit and not style.draw_bg:
                    continue
                color = style.fg if lit or inverted else style.bg
                px = self._x + gx * scale
                py = self._y + gy * scale
                for sy in range(scale):
                    for sx in range(scale):
                        self._canvas.draw_pixel(px + sx, py + sy, color)

        self._x = (self._x + (width + style.gap_x) * scale) & _U32

    def draw_text(
        self, text: str | None, x: int | None = None, y: int | None = None, inverted: bool = False
    ) -> None:
        """Draw each character of ``text`` in turn."""
        if text is None or self._style.scale == 0:
            return
        if x is not None and y is not None:
            self.set_pos(x, y)
        for c in text:
            self.draw_glyph(c, inverted=inverted)

    def set_pos(self, x: int, y: int) -> None:
        self._x = x & _U32
        self._y = y & _U32

    def set_style(self, style: Style) -> None:
        self._style = style