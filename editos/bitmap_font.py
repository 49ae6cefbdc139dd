"""Monochrome bitmap fonts and the built-in 8x8 ASCII font."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class BitmapFont:
    """One byte per glyph row, most significant bit is the leftmost pixel."""

    glyph_width: int
    glyph_height: int
    first_char: str
    last_char: str
    data: bytes

    def has_glyph(self, c: str) -> bool:
        return len(c) == 1 and self.first_char <= c <= self.last_char

    def glyph(self, c: str) -> bytes:
        """The rows of the glyph for ``c``."""
        if not self.has_glyph(c):
            raise ValueError(f"no glyph for {c!r}")
        start = (ord(c) - ord(self.first_char)) * self.glyph_height
        return self.data[start : start + self.glyph_height]


_FONT_DATA = bytes((
    0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00,  # ' '
    0x00, 0x10, 0x10, 0x10, 0x10, 0x10, 0x00, 0x10,  # '!'
    0x00, 0x28, 0x28, 0x28, 0x00, 0x00, 0x00, 0x00,  # '"'
    0x00, 0x28, 0x28, 0x7C, 0x28, 0x7C, 0x28, 0x28,  # '#'
    0x00, 0x10, 0x38, 0x50, 0x38, 0x14, 0x38, 0x10,  # '$'
    0x00, 0x60, 0x64, 0x08, 0x10, 0x20, 0x4C, 0x0C,  # '%'
    0x00, 0x30, 0x48, 0x48, 0x30, 0x48, 0x48, 0x34,  # '&'
    0x00, 0x10, 0x10, 0x20, 0x00, 0x00, 0x00, 0x00,  # '''
    0x00, 0x08, 0x10, 0x20, 0x20, 0x20, 0x10, 0x08,  # '('
    0x00, 0x20, 0x10, 0x08, 0x08, 0x08, 0x10, 0x20,  # ')'
    0x00, 0x00, 0x28, 0x10, 0x7C, 0x10, 0x28, 0x00,  # '*'
    0x00, 0x00, 0x10, 0x10, 0x7C, 0x10, 0x10, 0x00,  # '+'
    0x00, 0x00, 0x00, 0x00, 0x00, 0x18, 0x10, 0x20,  # ','
    0x00, 0x00, 0x00, 0x00, 0x7C, 0x00, 0x00, 0x00,  # '-'
    0x00, 0x00, 0x00, 0x00, 0x00, 0x18, 0x18, 0x00,  # '.'
    0x00, 0x04, 0x04, 0x08, 0x10, 0x20, 0x20, 0x00,  # '/'
    0x00, 0x38, 0x44, 0x44, 0x44, 0x44, 0x44, 0x38,  # '0'
    0x00, 0x10, 0x30, 0x50, 0x10, 0x10, 0x10, 0x7C,  # '1'
    0x00, 0x38, 0x44, 0x04, 0x08, 0x10, 0x20, 0x7C,  # '2'
    0x00, 0x38, 0x44, 0x04, 0x38, 0x04, 0x44, 0x38,  # '3'
    0x00, 0x08, 0x18, 0x28, 0x48, 0x7C, 0x08, 0x08,  # '4'
    0x00, 0x7C, 0x40, 0x40, 0x78, 0x04, 0x44, 0x38,  # '5'
    0x00, 0x38, 0x40, 0x40, 0x78, 0x44, 0x44, 0x38,  # '6'
    0x00, 0x7C, 0x04, 0x08, 0x10, 0x10, 0x10, 0x10,  # '7'
    0x00, 0x38, 0x44, 0x44, 0x38, 0x44, 0x44, 0x38,  # '8'
    0x00, 0x38, 0x44, 0x44, 0x3C, 0x04, 0x08, 0x10,  # '9'
    0x00, 0x00, 0x18, 0x18, 0x00, 0x18, 0x18, 0x00,  # ':'
    0x00, 0x00, 0x18, 0x18, 0x00, 0x18, 0x10, 0x20,  # ';'
    0x00, 0x04, 0x08, 0x10, 0x20, 0x10, 0x08, 0x04,  # '<'
    0x00, 0x00, 0x7C, 0x00, 0x7C, 0x00, 0x00, 0x00,  # '='
    0x00, 0x20, 0x10, 0x08, 0x04, 0x08, 0x10, 0x20,  # '>'
    0x00, 0x38, 0x44, 0x04, 0x18, 0x10, 0x00, 0x10,  # '?'
    0x00, 0x38, 0x44, 0x5C, 0x54, 0x5C, 0x40, 0x38,  # '@'
    0x00, 0x38, 0x44, 0x44, 0x7C, 0x44, 0x44, 0x44,  # 'A'
    0x00, 0x78, 0x44, 0x44, 0x78, 0x44, 0x44, 0x78,  # 'B'
    0x00, 0x38, 0x44, 0x40, 0x40, 0x40, 0x44, 0x38,  # 'C'
    0x00, 0x78, 0x44, 0x44, 0x44, 0x44, 0x44, 0x78,  # 'D'
    0x00, 0x7C, 0x40, 0x40, 0x78, 0x40, 0x40, 0x7C,  # 'E'
    0x00, 0x7C, 0x40, 0x40, 0x78, 0x40, 0x40, 0x40,  # 'F'
    0x00, 0x38, 0x44, 0x40, 0x5C, 0x44, 0x44, 0x38,  # 'G'
    0x00, 0x44, 0x44, 0x44, 0x7C, 0x44, 0x44, 0x44,  # 'H'
    0x00, 0x38, 0x10, 0x10, 0x10, 0x10, 0x10, 0x38,  # 'I'
    0x00, 0x1C, 0x08, 0x08, 0x08, 0x08, 0x48, 0x30,  # 'J'
    0x00, 0x44, 0x48, 0x50, 0x60, 0x50, 0x48, 0x44,  # 'K'
    0x00, 0x40, 0x40, 0x40, 0x40, 0x40, 0x40, 0x7C,  # 'L'
    0x00, 0x44, 0x6C, 0x54, 0x44, 0x44, 0x44, 0x44,  # 'M'
    0x00, 0x44, 0x64, 0x54, 0x4C, 0x44, 0x44, 0x44,  # 'N'
    0x00, 0x38, 0x44, 0x44, 0x44, 0x44, 0x44, 0x38,  # 'O'
    0x00, 0x78, 0x44, 0x44, 0x78, 0x40, 0x40, 0x40,  # 'P'
    0x00, 0x38, 0x44, 0x44, 0x44, 0x54, 0x48, 0x34,  # 'Q'
    0x00, 0x78, 0x44, 0x44, 0x78, 0x50, 0x48, 0x44,  # 'R'
    0x00, 0x3C, 0x40, 0x40, 0x38, 0x04, 0x04, 0x78,  # 'S'
    0x00, 0x7C, 0x10, 0x10, 0x10, 0x10, 0x10, 0x10,  # 'T'
    0x00, 0x44, 0x44, 0x44, 0x44, 0x44, 0x44, 0x38,  # 'U'
    0x00, 0x44, 0x44, 0x44, 0x44, 0x44, 0x28, 0x10,  # 'V'
    0x00, 0x44, 0x44, 0x44, 0x54, 0x54, 0x6C, 0x44,  # 'W'
    0x00, 0x44, 0x44, 0x28, 0x10, 0x28, 0x44, 0x44,  # 'X'
    0x00, 0x44, 0x44, 0x28, 0x10, 0x10, 0x10, 0x10,  # 'Y'
    0x00, 0x7C, 0x04, 0x08, 0x10, 0x20, 0x40, 0x7C,  # 'Z'
    0x00, 0x38, 0x20, 0x20, 0x20, 0x20, 0x20, 0x38,  # '['
    0x00, 0x40, 0x40, 0x20, 0x10, 0x10, 0x08, 0x08,  # '\'
    0x00, 0x38, 0x08, 0x08, 0x08, 0x08, 0x08, 0x38,  # ']'
    0x00, 0x10, 0x28, 0x44, 0x00, 0x00, 0x00, 0x00,  # '^'
    0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x7C,  # '_'
    0x00, 0x30, 0x10, 0x08, 0x00, 0x00, 0x00, 0x00,  # '`'
    0x00, 0x00, 0x00, 0x38, 0x04, 0x3C, 0x44, 0x3C,  # 'a'
    0x00, 0x40, 0x40, 0x78, 0x44, 0x44, 0x44, 0x78,  # 'b'
    0x00, 0x00, 0x00, 0x38, 0x44, 0x40, 0x44, 0x38,  # 'c'
    0x00, 0x04, 0x04, 0x3C, 0x44, 0x44, 0x44, 0x3C,  # 'd'
    0x00, 0x00, 0x00, 0x38, 0x44, 0x7C, 0x40, 0x38,  # 'e'
    0x00, 0x18, 0x24, 0x20, 0x38, 0x20, 0x20, 0x20,  # 'f'
    0x00, 0x00, 0x00, 0x3C, 0x44, 0x44, 0x3C, 0x04,  # 'g'
    0x00, 0x40, 0x40, 0x78, 0x44, 0x44, 0x44, 0x44,  # 'h'
    0x00, 0x10, 0x00, 0x30, 0x10, 0x10, 0x10, 0x38,  # 'i'
    0x00, 0x08, 0x00, 0x18, 0x08, 0x08, 0x48, 0x30,  # 'j'
    0x00, 0x40, 0x40, 0x48, 0x50, 0x60, 0x50, 0x48,  # 'k'
    0x00, 0x30, 0x10, 0x10, 0x10, 0x10, 0x10, 0x38,  # 'l'
    0x00, 0x00, 0x00, 0x68, 0x54, 0x54, 0x54, 0x54,  # 'm'
    0x00, 0x00, 0x00, 0x78, 0x44, 0x44, 0x44, 0x44,  # 'n'
    0x00, 0x00, 0x00, 0x38, 0x44, 0x44, 0x44, 0x38,  # 'o'
    0x00, 0x00, 0x00, 0x78, 0x44, 0x44, 0x44, 0x78,  # 'p'
    0x00, 0x00, 0x00, 0x3C, 0x44, 0x44, 0x44, 0x3C,  # 'q'
    0x00, 0x00, 0x00, 0x38, 0x44, 0x40, 0x40, 0x40,  # 'r'
    0x00, 0x00, 0x00, 0x3C, 0x40, 0x38, 0x04, 0x78,  # 's'
    0x00, 0x20, 0x20, 0x38, 0x20, 0x20, 0x24, 0x18,  # 't'
    0x00, 0x00, 0x00, 0x44, 0x44, 0x44, 0x4C, 0x34,  # 'u'
    0x00, 0x00, 0x00, 0x44, 0x44, 0x44, 0x28, 0x10,  # 'v'
    0x00, 0x00, 0x00, 0x44, 0x44, 0x54, 0x6C, 0x44,  # 'w'
    0x00, 0x00, 0x00, 0x44, 0x28, 0x10, 0x28, 0x44,  # 'x'
    0x00, 0x00, 0x00, 0x44, 0x44, 0x3C, 0x04, 0x38,  # 'y'
    0x00, 0x00, 0x00, 0x7C, 0x08, 0x10, 0x20, 0x7C,  # 'z'
    0x00, 0x0C, 0x08, 0x08, 0x30, 0x08, 0x08, 0x0C,  # '{'
    0x00, 0x10, 0x10, 0x10, 0x10, 0x10, 0x10, 0x10,  # '|'
    0x00, 0x30, 0x10, 0x10, 0x0C, 0x10, 0x10, 0x30,  # '}'
    0x00, 0x00, 0x00, 0x34, 0x58, 0x00, 0x00, 0x00,  # '~'
))


@lru_cache(maxsize=None)
def builtin_font() -> BitmapFont:
    """The built-in 8x8 font covering printable ASCII."""
    return BitmapFont(8, 8, " ", "~", _FONT_DATA)