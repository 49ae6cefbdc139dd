"""Stopping the machine: halt, reboot and power off.

Each call masks interrupts and ends the running kernel by raising; nothing
returns from them.
"""

from __future__ import annotations

from typing import NoReturn


class SystemStop(BaseException):
    """The machine is stopping; not caught by ``except Exception``."""

    def __init__(self, message: str, interrupts_enabled: bool) -> None:
        super().__init__(message)
        self.interrupts_enabled = interrupts_enabled


class Halted(SystemStop):
    """The processor was halted."""


class Rebooting(SystemStop):
    """A reset was requested."""


class ShuttingDown(SystemStop):
    """Power-off was requested."""


class _Cpu:
    """The little processor state that stopping the machine touches."""

    def __init__(self) -> None:
        self.interrupts_enabled = True

    def stop(self, kind: type[SystemStop], message: str) -> NoReturn:
        self.interrupts_enabled = False
        raise kind(message, self.interrupts_enabled)


_cpu = _Cpu()


def halt() -> NoReturn:
    """Mask interrupts and halt the processor."""
    _cpu.stop(Halted, "system halted")


def reboot() -> NoReturn:
    """Mask interrupts and request a reset."""
    _cpu.stop(Rebooting, "system rebooting")


def shutdown() -> NoReturn:
    """Mask interrupts and request power-off."""
    _cpu.stop(ShuttingDown, "system shutting down")