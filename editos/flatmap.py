"""A fixed-capacity open-addressing hash map with linear probing."""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_MASK64 = 0xFFFFFFFFFFFFFFFF
_FNV_OFFSET = 14695981039346656037
_FNV_PRIME = 1099511628211


def _mix64(x: int) -> int:
    h = x & _MASK64
    h ^= h >> 33
    h = (h * 0xFF51AFD7ED558CCD) & _MASK64
    h ^= h >> 33
    h = (h * 0xC4CEB9FE1A85EC53) & _MASK64
    h ^= h >> 33
    return h


def _fnv1a(data: bytes) -> int:
    h = _FNV_OFFSET
    for byte in data:
        h ^= byte
        h = (h * _FNV_PRIME) & _MASK64
    return h


def _hash(key: Hashable) -> int:
    if isinstance(key, int):
        return _mix64(key)
    if isinstance(key, str):
        return _fnv1a(key.encode("utf-8"))
    if isinstance(key, (bytes, bytearray)):
        return _fnv1a(bytes(key))
    return _mix64(hash(key))


@dataclass
class _Entry(Generic[K, V]):
    key: K
    value: V


class FlatMap(Generic[K, V]):
    """A map holding at most ``capacity`` entries in a flat slot array."""

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._slots: list[_Entry[K, V] | None] = [None] * capacity
        self._count = 0

    def _home(self, key: K) -> int:
        return _hash(key) % self._capacity

    def _probe_order(self, key: K) -> Iterator[int]:
        home = self._home(key)
        for step in range(self._capacity):
            yield (home + step) % self._capacity

    def _slot_of(self, key: K) -> int | None:
        if self._count == 0:
            return None
        for i in self._probe_order(key):
            entry = self._slots[i]
            if entry is not None and entry.key == key:
                return i
        return None

    def insert(self, key: K, value: V) -> None:
        """Add or replace ``key``; raises OverflowError when the map is full."""
        if self.full():
            raise OverflowError(f"flat map full at {self._capacity} entries")
        existing = self._slot_of(key)
        if existing is not None:
            self._slots[existing].value = value  # type: ignore[union-attr]
            return
        for i in self._probe_order(key):
            if self._slots[i] is None:
                self._slots[i] = _Entry(key, value)
                self._count += 1
                return

    def find(self, key: K) -> V | None:
        """The value stored for ``key``, or None."""
        slot = self._slot_of(key)
        if slot is None:
            return None
        return self._slots[slot].value  # type: ignore[union-attr]

    def remove(self, key: K) -> None:
        """Drop ``key`` if present."""
        slot = self._slot_of(key)
        if slot is not None:
            self._slots[slot] = None
            self._count -= 1

    def count(self) -> int:
        """Number of stored entries."""
        return self._count

    def size(self) -> int:
        """Number of slots."""
        return self._capacity

    def empty(self) -> bool:
        return self._count == 0

    def full(self) -> bool:
        return self._count == self._capacity

    def __len__(self) -> int:
        return self._count

    def __contains__(self, key: Any) -> bool:
        return self._slot_of(key) is not None

    def __getitem__(self, key: K) -> V:
        slot = self._slot_of(key)
        if slot is None:
            raise KeyError(key)
        return self._slots[slot].value  # type: ignore[union-attr]

    def __iter__(self) -> Iterator[K]:
        return (entry.key for entry in self._slots if entry is not None)

    def items(self) -> Iterator[tuple[K, V]]:
        """Entries in slot order."""
        return ((entry.key, entry.value) for entry in self._slots if entry is not None)