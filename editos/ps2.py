"""PS/2 keyboard decoding from a stream of set-1 scan code bytes."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import IntEnum

from editos.keyboard import (
    Key,
    KeyEvent,
    KeyEventType,
    KeyMod,
    Keyboard,
    is_lock_key,
    modifier_for_key,
)

_EXTENDED_PREFIX = 0xE0
_PAUSE_PREFIX = 0xE1
_RELEASE_BIT = 0x80


class RawEventType(IntEnum):
    PRESS = 0
    RELEASE = 1


@dataclass(frozen=True)
class RawKeyEvent:
    scan_code: int
    extended: bool
    type: RawEventType


def _key_for(code: int) -> Key:
    try:
        return Key(code)
    except ValueError:
        return Key.UNKNOWN


class PS2Keyboard(Keyboard):
    """Decodes scan code bytes fed to it into key events, tracking modifiers."""

    def __init__(self) -> None:
        self._pending: deque[int] = deque()
        self._extended_prefix = False
        self._mods = KeyMod.NONE

    @property
    def mods(self) -> KeyMod:
        return self._mods

    def feed(self, *args: int | bytes | bytearray) -> None:
        """Queue scan code bytes, given as integers or byte strings."""
        for item in args:
            values = item if isinstance(item, (bytes, bytearray)) else (item,)
            for value in values:
                if not 0 <= value <= 0xFF:
                    raise ValueError(f"scan code byte out of range: {value}")
                self._pending.append(value)

    def poll_raw(self) -> RawKeyEvent | None:
        """Consume one byte; return an event, or None for no data or a prefix."""
        if not self._pending:
            return None
        sc = self._pending.popleft()

        if sc == _EXTENDED_PREFIX:
            self._extended_prefix = True
            return None
        if sc == _PAUSE_PREFIX:
            self._extended_prefix = False
            return None

        extended = self._extended_prefix
        self._extended_prefix = False

        if sc & _RELEASE_BIT:
            return RawKeyEvent(sc & 0x7F, extended, RawEventType.RELEASE)
        return RawKeyEvent(sc, extended, RawEventType.PRESS)

    def poll(self) -> KeyEvent | None:
        raw = self.poll_raw()
        if raw is None:
            return None

        combined = (_EXTENDED_PREFIX << 8) | raw.scan_code if raw.extended else raw.scan_code
        key = _key_for(combined)
        pressed = raw.type == RawEventType.PRESS
        event_type = KeyEventType.PRESS if pressed else KeyEventType.RELEASE

        bit = modifier_for_key(key)
        if bit != KeyMod.NONE:
            if is_lock_key(key):
                if pressed:
                    self._mods ^= bit
            elif pressed:
                self._mods |= bit
            else:
                self._mods &= ~bit

        return KeyEvent(key, event_type, self._mods, raw.scan_code, raw.extended)