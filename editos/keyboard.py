"""Hardware-independent keyboard events, keys and modifier flags."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import ClassVar

from editos.klog import Loggable, log_obj


class Key(IntEnum):
    """Set-1 scan codes; extended keys carry 0xE0 in the high byte."""

    UNKNOWN = 0x0000

    ESC = 0x0001
    DIGIT1 = 0x0002
    DIGIT2 = 0x0003
    DIGIT3 = 0x0004
    DIGIT4 = 0x0005
    DIGIT5 = 0x0006
    DIGIT6 = 0x0007
    DIGIT7 = 0x0008
    DIGIT8 = 0x0009
    DIGIT9 = 0x000A
    DIGIT0 = 0x000B
    MINUS = 0x000C
    EQUAL = 0x000D
    BACKSPACE = 0x000E
    TAB = 0x000F

    Q = 0x0010
    W = 0x0011
    E = 0x0012
    R = 0x0013
    T = 0x0014
    Y = 0x0015
    U = 0x0016
    I = 0x0017  # noqa: E741
    O = 0x0018  # noqa: E741
    P = 0x0019
    LEFT_BRACKET = 0x001A
    RIGHT_BRACKET = 0x001B
    ENTER = 0x001C
    LEFT_CTRL = 0x001D

    A = 0x001E
    S = 0x001F
    D = 0x0020
    F = 0x0021
    G = 0x0022
    H = 0x0023
    J = 0x0024
    K = 0x0025
    L = 0x0026
    SEMICOLON = 0x0027
    APOSTROPHE = 0x0028
    GRAVE = 0x0029

    LEFT_SHIFT = 0x002A
    BACKSLASH = 0x002B
    Z = 0x002C
    X = 0x002D
    C = 0x002E
    V = 0x002F
    B = 0x0030
    N = 0x0031
    M = 0x0032
    COMMA = 0x0033
    PERIOD = 0x0034
    SLASH = 0x0035
    RIGHT_SHIFT = 0x0036
    KEYPAD_MULTIPLY = 0x0037
    LEFT_ALT = 0x0038
    SPACE = 0x0039

    CAPS_LOCK = 0x003A

    F1 = 0x003B
    F2 = 0x003C
    F3 = 0x003D
    F4 = 0x003E
    F5 = 0x003F
    F6 = 0x0040
    F7 = 0x0041
    F8 = 0x0042
    F9 = 0x0043
    F10 = 0x0044

    NUM_LOCK = 0x0045
    SCROLL_LOCK = 0x0046

    KEYPAD7 = 0x0047
    KEYPAD8 = 0x0048
    KEYPAD9 = 0x0049
    KEYPAD_MINUS = 0x004A
    KEYPAD4 = 0x004B
    KEYPAD5 = 0x004C
    KEYPAD6 = 0x004D
    KEYPAD_PLUS = 0x004E
    KEYPAD1 = 0x004F
    KEYPAD2 = 0x0050
    KEYPAD3 = 0x0051
    KEYPAD0 = 0x0052
    KEYPAD_DOT = 0x0053

    F11 = 0x0057
    F12 = 0x0058

    KEYPAD_ENTER = 0xE01C
    RIGHT_CTRL = 0xE01D
    KEYPAD_DIVIDE = 0xE035
    PRINT_SCREEN = 0xE037
    RIGHT_ALT = 0xE038

    HOME = 0xE047
    UP = 0xE048
    PAGE_UP = 0xE049
    LEFT = 0xE04B
    RIGHT = 0xE04D
    END = 0xE04F
    DOWN = 0xE050
    PAGE_DOWN = 0xE051
    INSERT = 0xE052
    DELETE = 0xE053

    LEFT_GUI = 0xE05B
    RIGHT_GUI = 0xE05C
    MENU = 0xE05D


class KeyEventType(IntEnum):
    PRESS = 0
    RELEASE = 1


class KeyMod(IntFlag):
    NONE = 0
    SHIFT = 1 << 0
    CTRL = 1 << 1
    ALT = 1 << 2
    ALTGR = 1 << 3
    SUPER = 1 << 4
    CAPS_LOCK = 1 << 5
    NUM_LOCK = 1 << 6
    SCROLL_LOCK = 1 << 7


_MODIFIERS = {
    Key.LEFT_SHIFT: KeyMod.SHIFT,
    Key.RIGHT_SHIFT: KeyMod.SHIFT,
    Key.LEFT_CTRL: KeyMod.CTRL,
    Key.RIGHT_CTRL: KeyMod.CTRL,
    Key.LEFT_ALT: KeyMod.ALT,
    Key.RIGHT_ALT: KeyMod.ALTGR,
    Key.LEFT_GUI: KeyMod.SUPER,
    Key.RIGHT_GUI: KeyMod.SUPER,
    Key.CAPS_LOCK: KeyMod.CAPS_LOCK,
    Key.NUM_LOCK: KeyMod.NUM_LOCK,
    Key.SCROLL_LOCK: KeyMod.SCROLL_LOCK,
}

_LOCK_KEYS = frozenset({Key.CAPS_LOCK, Key.NUM_LOCK, Key.SCROLL_LOCK})


def modifier_for_key(key: Key) -> KeyMod:
    """The modifier flag a key controls, or ``KeyMod.NONE``."""
    return _MODIFIERS.get(key, KeyMod.NONE)


def is_lock_key(key: Key) -> bool:
    """True for keys whose modifier toggles on each press."""
    return key in _LOCK_KEYS


@dataclass(frozen=True)
class KeyEvent(Loggable):
    """A decoded key press or release with the modifiers active at the time."""

    key: Key = Key.UNKNOWN
    type: KeyEventType = KeyEventType.PRESS
    mods: KeyMod = KeyMod.NONE
    scan_code: int = 0
    extended: bool = False

    FMT: ClassVar[str] = "{key: %x, type: %u, mods: %x, scan_code: %x, extended: %u}"

    def has_mod(self, mod: KeyMod) -> bool:
        """True if every flag in ``mod`` is active."""
        return (self.mods & mod) == mod

    def has_only_mod(self, mod: KeyMod) -> bool:
        """True if exactly the flags in ``mod`` are active."""
        return (self.mods ^ mod) == KeyMod.NONE

    def log_self(self) -> None:
        log_obj(
            self.FMT,
            int(self.key),
            int(self.type),
            int(self.mods),
            self.scan_code,
            int(self.extended),
        )


class Keyboard(ABC):
    """A source of key events."""

    @abstractmethod
    def poll(self) -> KeyEvent | None:
        """Return the next pending event, or None when nothing is waiting."""