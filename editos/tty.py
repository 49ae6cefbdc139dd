"""A line-oriented terminal joining a display and a keyboard."""

from __future__ import annotations

import time
from collections.abc import Callable

from editos.keyboard import Key, KeyEvent, KeyEventType, KeyMod, Keyboard
from editos.keymap import key_event_to_char
from editos.tty_text_area import Display


def _short_sleep() -> None:
    time.sleep(0.001)


class Tty:
    """Writes text to a display and reads characters and lines from a keyboard.

    Reads block until input arrives. While no event is pending, ``idle`` is
    called; it may raise to abandon the wait.
    """

    def __init__(
        self,
        display: Display,
        keyboard: Keyboard,
        idle: Callable[[], None] | None = None,
    ) -> None:
        self._display = display
        self._keyboard = keyboard
        self._idle = idle if idle is not None else _short_sleep
        self.raw_mode = False

    @property
    def display(self) -> Display:
        return self._display

    def write_char(self, c: str) -> None:
        self._display.put_char(c)
        self._display.flush()

    def write(self, text: str) -> None:
        for c in text:
            self._display.put_char(c)
        self._display.flush()

    def write_line(self, text: str) -> None:
        self.write(text)
        self.write_char("\n")

    def _next_press(self) -> KeyEvent:
        while True:
            ev = self._keyboard.poll()
            if ev is None:
                self._idle()
                continue
            if ev.type == KeyEventType.RELEASE:
                continue
            return ev

    def read_char_blocking(self) -> str:
        """Wait for a key press that produces a character and return it."""
        while True:
            c = key_event_to_char(self._next_press())
            if c is not None:
                return c

    def _handle_control_key(self, ev: KeyEvent, line: list[str], prompt: str) -> bool:
        """Apply an editing or navigation key; False if the key does nothing."""
        display = self._display
        key = ev.key
        if key == Key.BACKSPACE:
            if line:
                line.pop()
                display.backspace()
        elif key == Key.RIGHT:
            display.move_right(1)
        elif key == Key.LEFT:
            if display.cursor().x > len(prompt) and not self.raw_mode:
                display.move_left(1)
        elif key == Key.UP:
            if self.raw_mode:
                display.move_up(1)
        elif key == Key.DOWN:
            if self.raw_mode:
                display.move_down(1)
        elif key == Key.PAGE_UP:
            display.scroll_up(1)
        elif key == Key.PAGE_DOWN:
            display.scroll_down(1)
        elif key == Key.END:
            if ev.has_mod(KeyMod.CTRL):
                display.move_end()
            else:
                display.move_line_end()
        else:
            return False
        return True

    def readline(self, prompt: str = "") -> str:
        """Show ``prompt`` and read keys until Enter; return the typed line."""
        line: list[str] = []
        self.write(prompt)
        display = self._display

        while True:
            ev = self._next_press()
            c = key_event_to_char(ev)
            if c is None:
                if self._handle_control_key(ev, line, prompt):
                    display.flush()
                continue
            if c in ("\n", "\r"):
                display.move_end()
                display.move_line_end()
                display.put_char("\n")
                display.flush()
                return "".join(line)

            line.append(c)
            display.put_char(c)
            display.flush()