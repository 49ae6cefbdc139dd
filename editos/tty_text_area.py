"""The terminal display interface and its text-area implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod

from editos.shapes import Point
from editos.text_area import TextArea


class Display(ABC):
    """What a terminal needs from the screen it writes to."""

    @abstractmethod
    def put_char(self, c: str) -> None: ...

    @abstractmethod
    def backspace(self) -> None: ...

    @abstractmethod
    def flush(self) -> None: ...

    @abstractmethod
    def scroll_up(self, amount: int) -> None: ...

    @abstractmethod
    def scroll_down(self, amount: int) -> None: ...

    @abstractmethod
    def move_left(self, amount: int) -> None: ...

    @abstractmethod
    def move_right(self, amount: int) -> None: ...

    @abstractmethod
    def move_up(self, amount: int) -> None: ...

    @abstractmethod
    def move_down(self, amount: int) -> None: ...

    @abstractmethod
    def move_line_end(self) -> None: ...

    @abstractmethod
    def move_end(self) -> None: ...

    @abstractmethod
    def cursor(self) -> Point:
        """The cursor position as (column, line)."""


class TtyTextArea(Display):
    """A terminal display backed by a TextArea."""

    def __init__(self, area: TextArea) -> None:
        self._area = area

    def put_char(self, c: str) -> None:
        self._area.put_char(c)

    def backspace(self) -> None:
        self._area.remove_last()

    def flush(self) -> None:
        self._area.redraw()

    def scroll_up(self, amount: int = 1) -> None:
        self._area.scroll_up(amount)

    def scroll_down(self, amount: int = 1) -> None:
        self._area.scroll_down(amount)

    def move_left(self, amount: int = 1) -> None:
        pos = self._area.target_pos
        self._area.move_cursor(Point(pos.x - min(amount, pos.x), pos.y))

    def move_right(self, amount: int = 1) -> None:
        pos = self._area.target_pos
        self._area.move_cursor(Point(pos.x + amount, pos.y))

    def move_up(self, amount: int = 1) -> None:
        pos = self._area.target_pos
        self._area.move_cursor(Point(pos.x, pos.y - min(amount, pos.y)))

    def move_down(self, amount: int = 1) -> None:
        pos = self._area.target_pos
        self._area.move_cursor(Point(pos.x, pos.y + amount))

    def move_line_end(self) -> None:
        pos = self._area.cursor_pos
        self._area.move_cursor(Point(self._area.length_of_line(pos.y), pos.y))

    def move_end(self) -> None:
        y = Point(0, self._area.line_count - 1).y
        self._area.move_cursor(Point(self._area.length_of_line(y), y))

    def cursor(self) -> Point:
        return self._area.cursor_pos