"""Sequential read/write views over item storage with a seekable position."""

from __future__ import annotations

from collections.abc import MutableSequence
from enum import Enum
from typing import Any, Generic, TypeVar

from editos.bits import ceil_pow2, one_if_zero

T = TypeVar("T")


class SeekType(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"
    FROM_START = "from_start"
    FROM_END = "from_end"


class DataView(Generic[T]):
    """A cursor over the first ``length`` items of a mutable sequence."""

    def __init__(self, data: MutableSequence[T], length: int | None = None) -> None:
        self._data = data
        self._length = len(data) if length is None else length
        self._pos = 0

    def __len__(self) -> int:
        return self._length

    @property
    def position(self) -> int:
        return self._pos

    def seek(self, amount: int, seek_type: SeekType) -> None:
        """Move the position; raises ValueError if it would fall before the start."""
        if seek_type is SeekType.FORWARD:
            new_pos = self._pos + amount
        elif seek_type is SeekType.BACKWARD:
            new_pos = self._pos - amount
        elif seek_type is SeekType.FROM_START:
            new_pos = amount
        else:
            if amount >= self._length:
                raise ValueError(f"cannot seek {amount} from the end of {self._length} items")
            new_pos = self._length - amount - 1
        if new_pos < 0:
            raise ValueError(f"seek to negative position {new_pos}")
        self._pos = new_pos

    def read(self) -> T | None:
        """Return the item at the position and advance, or None at the end."""
        if self._pos >= self._length:
            return None
        item = self._data[self._pos]
        self._pos += 1
        return item

    def write(self, item: T) -> None:
        """Store ``item`` at the position and advance; raises OverflowError when full."""
        if self._pos >= self._length and not self._grow_to(self._pos + 1):
            raise OverflowError(f"no room to write at position {self._pos}")
        self._data[self._pos] = item
        self._pos += 1

    def _grow_to(self, length: int) -> bool:
        return False


class StackStorage(DataView[T]):
    """A view that owns a fixed number of slots."""

    def __init__(self, size: int, fill: Any = 0) -> None:
        super().__init__([fill] * size)


class HeapStorage(DataView[T]):
    """A view that owns its slots and doubles its capacity as writes need it."""

    def __init__(self, initial_capacity: int = 64, fill: Any = 0) -> None:
        capacity = one_if_zero(ceil_pow2(initial_capacity, 64))
        super().__init__([fill] * capacity)
        self._capacity = capacity
        self._fill = fill

    @property
    def capacity(self) -> int:
        return self._capacity

    def _grow_to(self, length: int) -> bool:
        if length > self._capacity:
            capacity = self._capacity
            while capacity < length:
                capacity = ceil_pow2(capacity + 1, 64)
                if capacity == 0:
                    return False
            self._data.extend([self._fill] * (capacity - self._capacity))
            self._capacity = capacity
        self._length = length
        return True