"""Power-of-two helpers on fixed-width unsigned integers."""

from __future__ import annotations

_SUPPORTED_WIDTHS = (32, 64)


def _mask_for(width: int) -> int:
    if width not in _SUPPORTED_WIDTHS:
        raise ValueError(f"unsupported integer width: {width}")
    return (1 << width) - 1


def _smear_right(x: int, width: int) -> int:
    """Set every bit below the highest set bit."""
    shift = 1
    while shift < width:
        x |= x >> shift
        shift <<= 1
    return x


def is_pow2(x: int) -> bool:
    """True if ``x`` has at most one bit set (zero counts as a power of two)."""
    return (x & (x - 1)) == 0


def one_if_zero(x: int) -> int:
    """Return ``x``, or 1 when ``x`` is zero."""
    return x if x else 1


def floor_pow2(x: int, width: int = 32) -> int:
    """Largest power of two not above ``x``; zero stays zero."""
    mask = _mask_for(width)
    x = _smear_right(x & mask, width)
    return x - (x >> 1)


def ceil_pow2(x: int, width: int = 32) -> int:
    """Smallest power of two not below ``x``, wrapping to zero on overflow."""
    mask = _mask_for(width)
    x = ((x & mask) - 1) & mask
    x = _smear_right(x, width)
    return (x + 1) & mask