"""Widgets and plain bordered windows."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import replace

from editos.canvas import Canvas
from editos.color import Color
from editos.shapes import Rect


class Widget(ABC):
    """Something with a position that can draw itself onto a canvas."""

    def __init__(self, x: int = 0, y: int = 0) -> None:
        self.x = x
        self.y = y

    @abstractmethod
    def draw(self, canvas: Canvas) -> None:
        """Render onto ``canvas``."""

    def set_position(self, x: int, y: int) -> None:
        self.x = x
        self.y = y


class Window(Widget):
    """A filled rectangle with a border drawn around it."""

    def __init__(
        self,
        rect: Rect,
        bg_color: Color | None = None,
        border_color: Color | None = None,
        border_thickness: int = 5,
    ) -> None:
        super().__init__(rect.x, rect.y)
        self.rect = rect
        self.bg_color = bg_color if bg_color is not None else Color.gray()
        self.border_color = border_color if border_color is not None else Color.black()
        self.border_thickness = border_thickness

    @classmethod
    def of_size(cls, w: int, h: int) -> Window:
        """A window of the given size at the origin."""
        return cls(Rect(0, 0, w, h))

    def draw(self, canvas: Canvas) -> None:
        canvas.draw_rect(self.rect, self.bg_color)
        canvas.draw_frame(self.rect, self.border_thickness, self.border_color)

    def set_position(self, x: int, y: int) -> None:
        super().set_position(x, y)
        self.rect = replace(self.rect, x=x, y=y)