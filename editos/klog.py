"""Kernel log: a small printf-style formatter writing to a character sink."""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, NoReturn


class LoggingSink(ABC):
    """Receives log output one character at a time."""

    @abstractmethod
    def put_char(self, c: str) -> None:
        """Accept a single character."""


class Loggable(ABC):
    """An object that can render itself into the log via ``%o``."""

    @abstractmethod
    def log_self(self) -> None:
        """Write this object's representation to the log (no newline)."""


class KernelPanic(Exception):
    """Raised when the kernel panics; the system cannot continue."""

    def __init__(self, message: str, file: str, line: int, function: str) -> None:
        super().__init__(message)
        self.message = message
        self.file = file
        self.line = line
        self.function = function


class _LogState:
    """Where log output currently goes."""

    def __init__(self) -> None:
        self.sink: LoggingSink | None = None

    def put(self, text: str) -> None:
        sink = self.sink
        if sink is None:
            return
        for c in text:
            sink.put_char(c)


_state = _LogState()


def set_sink(sink: LoggingSink | None) -> None:
    """Direct all log output to ``sink``; ``None`` discards it."""
    if sink is not None and not isinstance(sink, LoggingSink):
        raise TypeError(f"expected a LoggingSink or None, got {type(sink).__name__}")
    _state.sink = sink


def _put(text: str) -> None:
    _state.put(text)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _emit(fmt: str | None, args: tuple[Any, ...], auto_newline: bool) -> None:
    if fmt is None:
        return

    values = iter(args)

    def next_arg() -> Any:
        try:
            return next(values)
        except StopIteration:
            raise TypeError("not enough arguments for log format") from None

    skip_newline = not auto_newline
    last = len(fmt) - 1
    chars = enumerate(fmt)

    for pos, c in chars:
        if c == "\\":
            if pos == last:
                skip_newline = True
                break
            _put("\\")
            continue
        if c != "%":
            _put(c)
            continue

        item = next(chars, None)
        if item is None:
            _put("%")
            break
        spec = item[1]

        if spec == "%":
            _put("%")
        elif spec == "c":
            value = next_arg()
            if isinstance(value, str):
                _put(value[0] if value else "\0")
            else:
                _put(chr(value & 0xFF))
        elif spec == "s":
            value = next_arg()
            _put("<null>" if value is None else str(value))
        elif spec in ("d", "i"):
            _put(str(_to_int32(next_arg())))
        elif spec == "u":
            _put(str(next_arg() & 0xFFFFFFFF))
        elif spec == "x":
            _put("0x" + format(next_arg() & 0xFFFFFFFF, "X"))
        elif spec == "p":
            value = next_arg()
            if value:
                _put("0x" + format(value & 0xFFFFFFFFFFFFFFFF, "x"))
            else:
                _put("<null>")
        elif spec == "o":
            value = next_arg()
            if value is None:
                _put("<null>")
            else:
                value.log_self()
        else:
            _put("%" + spec)

    if not skip_newline:
        _put("\n")


def log_msg(fmt: str | None, *args: Any) -> None:
    """Log a formatted line; a trailing backslash suppresses the newline.

    Supported: %c %s %d %i %u %x %p %o and %%.
    """
    _emit(fmt, args, True)


def log_obj(fmt: str | None, *args: Any) -> None:
    """Log formatted text without a trailing newline."""
    _emit(fmt, args, False)


class CallbackSink(LoggingSink):
    """Forwards every character to a callable."""

    def __init__(self, callback: Callable[[str], None] | None) -> None:
        self._callback = callback

    def set_callback(self, callback: Callable[[str], None] | None) -> None:
        self._callback = callback

    def put_char(self, c: str) -> None:
        if self._callback is not None:
            self._callback(c)


class BufferedSink(LoggingSink):
    """Keeps recent output and replays it to sub-sinks as they are added.

    The buffer is emptied whenever it reaches its capacity.
    """

    def __init__(self, max_subs: int, capacity: int = 1024) -> None:
        self._max_subs = max_subs
        self._capacity = capacity
        self._subs: list[LoggingSink] = []
        self._buffer: list[str] = []

    def add_sub(self, sub: LoggingSink) -> None:
        """Attach a sink and replay the buffered output to it."""
        if len(self._subs) >= self._max_subs:
            raise ValueError(f"at most {self._max_subs} sub-sinks allowed")
        self._subs.append(sub)
        self._replay(sub)

    def reflush(self) -> None:
        """Replay the buffered output to every attached sink."""
        for sub in self._subs:
            self._replay(sub)

    def put_char(self, c: str) -> None:
        if len(self._buffer) >= self._capacity:
            self._buffer.clear()
        self._buffer.append(c)
        for sub in self._subs:
            sub.put_char(c)

    def _replay(self, sub: LoggingSink) -> None:
        for c in self._buffer:
            sub.put_char(c)


class _Recorder(LoggingSink):
    def __init__(self, inner: LoggingSink | None) -> None:
        self.inner = inner
        self.chars: list[str] = []

    def put_char(self, c: str) -> None:
        self.chars.append(c)
        if self.inner is not None:
            self.inner.put_char(c)


def panic(fmt: str, *args: Any) -> NoReturn:
    """Log a kernel panic with the caller's location and raise KernelPanic."""
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    if caller is not None:
        file, line, function = (
            caller.f_code.co_filename,
            caller.f_lineno,
            caller.f_code.co_name,
        )
    else:
        file, line, function = "<unknown>", 0, "<unknown>"
    del frame, caller

    log_msg("\n[KERNEL PANIC] \\")
    outer = _state.sink
    recorder = _Recorder(outer)
    _state.sink = recorder
    try:
        log_msg(fmt, *args)
    finally:
        _state.sink = outer
    message = "".join(recorder.chars)
    if message.endswith("\n"):
        message = message[:-1]
    log_msg("at %s:%d in `%s`", file, line, function)
    raise KernelPanic(message, file, line, function)