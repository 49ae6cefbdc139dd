"""US keyboard layout: turning key events into characters."""

from __future__ import annotations

from typing import NamedTuple

from editos.keyboard import Key, KeyEvent, KeyEventType, KeyMod


class _Entry(NamedTuple):
    normal: str
    shifted: str
    altgr: str


def _letters() -> dict[Key, _Entry]:
    return {Key[c.upper()]: _Entry(c, c.upper(), "") for c in "abcdefghijklmnopqrstuvwxyz"}


_KEYMAP: dict[Key, _Entry] = {
    **_letters(),
    Key.DIGIT1: _Entry("1", "!", ""),
    Key.DIGIT2: _Entry("2", "@", ""),
    Key.DIGIT3: _Entry("3", "#", ""),
    Key.DIGIT4: _Entry("4", "$", ""),
    Key.DIGIT5: _Entry("5", "%", ""),
    Key.DIGIT6: _Entry("6", "^", ""),
    Key.DIGIT7: _Entry("7", "&", ""),
    Key.DIGIT8: _Entry("8", "*", ""),
    Key.DIGIT9: _Entry("9", "(", ""),
    Key.DIGIT0: _Entry("0", ")", ""),
    Key.MINUS: _Entry("-", "_", ""),
    Key.EQUAL: _Entry("=", "+", ""),
    Key.LEFT_BRACKET: _Entry("[", "{", ""),
    Key.RIGHT_BRACKET: _Entry("]", "}", ""),
    Key.BACKSLASH: _Entry("\\", "|", ""),
    Key.SEMICOLON: _Entry(";", ":", ""),
    Key.APOSTROPHE: _Entry("'", '"', ""),
    Key.GRAVE: _Entry("`", "~", ""),
    Key.COMMA: _Entry(",", "<", ""),
    Key.PERIOD: _Entry(".", ">", ""),
    Key.SLASH: _Entry("/", "?", ""),
    Key.SPACE: _Entry(" ", " ", ""),
    Key.ENTER: _Entry("\n", "\n", ""),
    Key.KEYPAD0: _Entry("0", "0", ""),
    Key.KEYPAD1: _Entry("1", "1", ""),
    Key.KEYPAD2: _Entry("2", "2", ""),
    Key.KEYPAD3: _Entry("3", "3", ""),
    Key.KEYPAD4: _Entry("4", "4", ""),
    Key.KEYPAD5: _Entry("5", "5", ""),
    Key.KEYPAD6: _Entry("6", "6", ""),
    Key.KEYPAD7: _Entry("7", "7", ""),
    Key.KEYPAD8: _Entry("8", "8", ""),
    Key.KEYPAD9: _Entry("9", "9", ""),
    Key.KEYPAD_PLUS: _Entry("+", "+", ""),
    Key.KEYPAD_MINUS: _Entry("-", "-", ""),
    Key.KEYPAD_MULTIPLY: _Entry("*", "*", ""),
    Key.KEYPAD_DIVIDE: _Entry("/", "/", ""),
    Key.KEYPAD_DOT: _Entry(".", ".", ""),
}


def _is_letter(c: str) -> bool:
    return ("a" <= c <= "z") or ("A" <= c <= "Z")


def key_event_to_char(ev: KeyEvent) -> str | None:
    """The character a key press produces, or None if it produces none.

    Releases and presses with Ctrl or Alt held produce nothing.
    """
    if ev.type != KeyEventType.PRESS:
        return None
    if ev.mods & (KeyMod.CTRL | KeyMod.ALT):
        return None

    entry = _KEYMAP.get(ev.key)
    if entry is None:
        return None

    shift = bool(ev.mods & KeyMod.SHIFT)
    caps = bool(ev.mods & KeyMod.CAPS_LOCK)
    altgr = bool(ev.mods & KeyMod.ALTGR)

    if altgr and entry.altgr:
        ch = entry.altgr
    elif _is_letter(entry.normal):
        ch = entry.shifted if (shift ^ caps) and entry.shifted else entry.normal
    else:
        ch = entry.shifted if shift and entry.shifted else entry.normal

    return ch or None