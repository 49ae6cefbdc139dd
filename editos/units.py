"""Byte unit conversions that round up when converting to a larger unit."""

from __future__ import annotations

KIB = 1024
MIB = 1024 * KIB
GIB = 1024 * MIB


def ceil_div(value: int, unit: int) -> int:
    """Divide rounding up; a zero unit yields zero."""
    if not unit:
        return 0
    quotient, remainder = divmod(value, unit)
    return quotient + 1 if remainder else quotient


def b_to_kib(n: int) -> int:
    return ceil_div(n, KIB)


def b_to_mib(n: int) -> int:
    return ceil_div(n, MIB)


def b_to_gib(n: int) -> int:
    return ceil_div(n, GIB)


def kib_to_b(n: int) -> int:
    return n * KIB


def kib_to_mib(n: int) -> int:
    return ceil_div(n, KIB)


def kib_to_gib(n: int) -> int:
    return ceil_div(n, MIB)


def mib_to_b(n: int) -> int:
    return n * MIB


def mib_to_kib(n: int) -> int:
    return n * KIB


def mib_to_gib(n: int) -> int:
    return ceil_div(n, KIB)


def gib_to_b(n: int) -> int:
    return n * GIB


def gib_to_kib(n: int) -> int:
    return n * MIB


def gib_to_mib(n: int) -> int:
    return n * KIB