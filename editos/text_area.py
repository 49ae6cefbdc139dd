"""A scrolling, editable text area drawn with a bitmap font."""

from __future__ import annotations

from editos.bitmap_font import BitmapFont
from editos.canvas import Canvas
from editos.gap_buffer import GapBuffer
from editos.shapes import Point, Rect
from editos.text import Style, TextRenderer


class TextArea:
    """Text kept in a gap buffer and rendered line by line inside a rectangle."""

    def __init__(
        self, area: Rect, canvas: Canvas, style: Style, font: BitmapFont | None = None
    ) -> None:
        self._area = area
        self._canvas = canvas
        self._style = style
        self._tr = TextRenderer(canvas, style, font)
        self._real_cursor = Point(0, 0)
        self._target_cursor = Point(0, 0)
        self._buffer: GapBuffer[str] = GapBuffer()
        self._lines = 0
        self._first_visible_line = 0
        self._follow_bottom = True

    @property
    def area(self) -> Rect:
        return self._area

    @property
    def text(self) -> str:
        return "".join(self._buffer)

    @property
    def target_pos(self) -> Point:
        """Where the cursor is meant to be, as (column, line)."""
        return self._target_cursor

    @property
    def cursor_pos(self) -> Point:
        """Where the cursor was drawn on the last redraw."""
        return self._real_cursor

    @property
    def line_count(self) -> int:
        return self._lines

    @property
    def first_visible_line(self) -> int:
        return self._first_visible_line

    @property
    def follow_bottom(self) -> bool:
        return self._follow_bottom

    def put_char(self, c: str) -> None:
        """Insert one character at the cursor."""
        if len(c) != 1:
            raise ValueError(f"expected a single character, got {c!r}")
        self._buffer.insert(c)
        x, y = self._target_cursor.x + 1, self._target_cursor.y
        if c in ("\n", "\r"):
            x, y = 0, y + 1
            self._lines += 1
        self._target_cursor = Point(x, y)

    def put_text(self, text: str | None) -> None:
        if text is None:
            return
        for c in text:
            self.put_char(c)

    def remove_last(self) -> None:
        """Delete the character before the cursor and step the cursor back."""
        self._buffer.delete_left()
        self._target_cursor = Point(self._target_cursor.x - 1, self._target_cursor.y)

    def remove_next(self) -> None:
        """Delete the character before the cursor, leaving the target position alone."""
        self._buffer.delete_left()

    def move_cursor(self, point: Point) -> None:
        """Move the cursor to a column and line, clamped to the text."""
        text = self.text
        y = min(point.y, self._lines)
        start = self._line_start_index(y, text)
        end = self._line_end_index(start, text)
        line_len = (end + 1) - start
        idx = end if point.x > line_len else start + point.x
        self._buffer.move_to(idx)
        self._target_cursor = Point(idx - start, y)

    def redraw(self) -> None:
        """Clear the area and draw the visible lines with the cursor inverted."""
        self._canvas.clear(self._style.bg, self._area)

        cap = self._visible_line_capacity()
        if cap == 0:
            return
        total = self._count_lines()
        if total == 0:
            return

        bottom_start = total - cap if total > cap else 0
        if self._follow_bottom:
            self._first_visible_line = bottom_start
        elif total <= cap:
            self._first_visible_line = 0
            self._follow_bottom = True
        elif self._first_visible_line > bottom_start:
            self._first_visible_line = bottom_start
            self._follow_bottom = True

        text = self.text
        start_index = self._line_start_index(self._first_visible_line, text)
        n = len(text)

        px, py = self._area.x, self._area.y
        self._tr.set_pos(px, py)
        gw = self._eff_glyph_width()
        gh = self._line_height()

        col, row = 0, 0
        current_line = 0
        self._real_cursor = self._target_cursor

        for i in range(start_index, n):
            g = text[i]
            if g == "\n":
                current_line += 1
                if current_line >= cap:
                    break
                col, row = 0, row + 1
                py += gh
                self._tr.set_pos(px, py)
                continue

            # Wrapped lines are not counted, so long lines are cut off here.
            if px + gw * col >= self._area.end_x():
                break

            if (
                i + 1 < n
                and row == self._target_cursor.y
                and text[i + 1] == "\n"
                and col < self._real_cursor.x
            ):
                self._real_cursor = Point(col, self._real_cursor.y)

            self._tr.draw_glyph(g, inverted=Point(col, row) == self._real_cursor)
            col += 1

        if Point(col, row) == self._real_cursor:
            self._tr.draw_glyph(" ", inverted=True)

    def scroll_up(self, amount: int = 1) -> None:
        if amount == 0:
            return
        total = self._count_lines()
        cap = self._visible_line_capacity()
        if cap == 0 or total <= cap:
            return
        self._first_visible_line = max(0, self._first_visible_line - amount)
        self._follow_bottom = False

    def scroll_down(self, amount: int = 1) -> None:
        if amount == 0:
            return
        total = self._count_lines()
        cap = self._visible_line_capacity()
        if cap == 0:
            return
        if total <= cap:
            self._first_visible_line = 0
            self._follow_bottom = True
            return

        bottom_start = total - cap
        new_first = self._first_visible_line + amount
        if new_first >= bottom_start:
            self._first_visible_line = bottom_start
            self._follow_bottom = True
        else:
            self._first_visible_line = new_first
            self._follow_bottom = False

    def length_of_line(self, line: int) -> int:
        """Number of characters on ``line``, not counting its newline."""
        text = self.text
        start = self._line_start_index(line, text)
        return self._line_end_index(start, text) - start

    def _visible_line_capacity(self) -> int:
        if self._area.h == 0:
            return 0
        lh = self._line_height()
        if lh <= 0:
            return 0
        return self._area.h // lh

    def _count_lines(self) -> int:
        self._lines = self.text.count("\n") + 1
        return self._lines

    @staticmethod
    def _line_start_index(line: int, text: str) -> int:
        if line == 0:
            return 0
        pos = -1
        for _ in range(line):
            pos = text.find("\n", pos + 1)
            if pos < 0:
                return len(text)
        return pos + 1

    @staticmethod
    def _line_end_index(start: int, text: str) -> int:
        pos = text.find("\n", start)
        return len(text) if pos < 0 else pos

    def _line_height(self) -> int:
        return (self._tr.font.glyph_height + self._style.gap_y) * self._style.scale

    def _eff_glyph_width(self) -> int:
        return (self._tr.font.glyph_width + self._style.gap_x) * self._style.scale