"""RGBA colours with conversion to and from packed 0xAARRGGBB values."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Color:
    """An 8-bit-per-channel colour; alpha defaults to opaque."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"colour channel {name}={value} outside 0..255")

    @classmethod
    def from_argb(cls, argb: int) -> Color:
        """Build a colour from a packed 0xAARRGGBB integer."""
        return cls(
            (argb >> 16) & 0xFF,
            (argb >> 8) & 0xFF,
            argb & 0xFF,
            (argb >> 24) & 0xFF,
        )

    def to_argb(self) -> int:
        """Pack into a 0xAARRGGBB integer."""
        return (self.a << 24) | (self.r << 16) | (self.g << 8) | self.b

    def __int__(self) -> int:
        return self.to_argb()

    @classmethod
    def black(cls) -> Color:
        return cls(0, 0, 0, 255)

    @classmethod
    def white(cls) -> Color:
        return cls(255, 255, 255, 255)

    @classmethod
    def red(cls) -> Color:
        return cls(255, 0, 0, 255)

    @classmethod
    def green(cls) -> Color:
        return cls(0, 255, 0, 255)

    @classmethod
    def blue(cls) -> Color:
        return cls(0, 0, 255, 255)

    @classmethod
    def yellow(cls) -> Color:
        return cls(255, 255, 0, 255)

    @classmethod
    def magenta(cls) -> Color:
        return cls(255, 0, 255, 255)

    @classmethod
    def cyan(cls) -> Color:
        return cls(0, 255, 255, 255)

    @classmethod
    def transparent(cls) -> Color:
        return cls(0, 0, 0, 0)

    @classmethod
    def gray(cls, v: int = 128) -> Color:
        return cls(v, v, v, 255)