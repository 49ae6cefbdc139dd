"""Serial output: the bus interface, a stream-backed bus and a logging sink."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import TextIO

from editos.klog import LoggingSink

COM1_BASE = 0x3F8
DEFAULT_BAUD = 38400
_HEX_DIGITS = "0123456789ABCDEF"


class SerialPort(IntEnum):
    SYSTEM_RESERVED = 0
    SERIAL_0 = 0


class SerialBus(ABC):
    """A byte-oriented output line."""

    @abstractmethod
    def init(self) -> None:
        """Configure the line for use."""

    @abstractmethod
    def write_char(self, c: str) -> None:
        """Send one character; a newline goes out as carriage return and line feed."""

    @abstractmethod
    def write_string(self, s: str) -> None: ...

    @abstractmethod
    def write_hex32(self, value: int) -> None:
        """Send a 32-bit value as 0x followed by eight upper-case hex digits."""


class StreamSerialBus(SerialBus):
    """A serial line whose output goes to a text stream (standard output by default)."""

    def __init__(self, stream: TextIO | None = None, baud: int = DEFAULT_BAUD) -> None:
        self._stream = stream
        self.baud = baud
        self.initialized = False

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def init(self) -> None:
        self.initialized = True

    def _write_raw(self, c: str) -> None:
        self.stream.write(c)

    def write_char(self, c: str) -> None:
        if c == "\n":
            self._write_raw("\r")
        self._write_raw(c)

    def write_string(self, s: str) -> None:
        for c in s:
            self.write_char(c)
        self.stream.flush()

    def write_hex32(self, value: int) -> None:
        value &= 0xFFFFFFFF
        self.write_string("0x" + "".join(_HEX_DIGITS[(value >> (i * 4)) & 0xF] for i in range(7, -1, -1)))


class SerialSink(LoggingSink):
    """Sends log output to a serial bus."""

    def __init__(self, serial: SerialBus) -> None:
        self._serial = serial

    def put_char(self, c: str) -> None:
        self._serial.write_char(c)


_serial0 = StreamSerialBus()


def get_serial_bus(port: SerialPort | int) -> SerialBus | None:
    """The bus for ``port``, or None if there is no such port."""
    try:
        port = SerialPort(port)
    except ValueError:
        return None
    if port == SerialPort.SYSTEM_RESERVED:
        return _serial0
    return None