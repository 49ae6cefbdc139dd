"""A gap buffer: a sequence with cheap edits at a movable cursor."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class GapBuffer(Generic[T]):
    """Items before the cursor and items after it, kept apart so edits are cheap."""

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._before: list[T] = list(items)
        # Stored reversed: the last element sits right after the cursor.
        self._after: list[T] = []

    def __len__(self) -> int:
        return len(self._before) + len(self._after)

    def __getitem__(self, index: int) -> T:
        if not 0 <= index < len(self):
            raise IndexError(f"gap buffer index {index} out of range for length {len(self)}")
        prefix = len(self._before)
        if index < prefix:
            return self._before[index]
        return self._after[-(index - prefix) - 1]

    def __iter__(self) -> Iterator[T]:
        yield from self._before
        yield from reversed(self._after)

    @property
    def cursor_pos(self) -> int:
        return len(self._before)

    def insert(self, items: Iterable[T]) -> None:
        """Insert ``items`` at the cursor, leaving the cursor after them."""
        self._before.extend(items)

    def move_left(self, count: int = 1) -> None:
        count = min(count, len(self._before))
        if count <= 0:
            return
        moved = self._before[-count:]
        del self._before[-count:]
        self._after.extend(reversed(moved))

    def move_right(self, count: int = 1) -> None:
        count = min(count, len(self._after))
        if count <= 0:
            return
        moved = self._after[-count:]
        del self._after[-count:]
        self._before.extend(reversed(moved))

    def delete_left(self, count: int = 1) -> None:
        """Remove up to ``count`` items before the cursor."""
        count = min(count, len(self._before))
        if count > 0:
            del self._before[-count:]

    def delete_right(self, count: int = 1) -> None:
        """Remove up to ``count`` items after the cursor."""
        count = min(count, len(self._after))
        if count > 0:
            del self._after[-count:]

    def move_to(self, index: int) -> None:
        """Place the cursor before ``index``, clamped to the end."""
        index = min(index, len(self))
        position = self.cursor_pos
        if index < position:
            self.move_left(position - index)
        elif index > position:
            self.move_right(index - position)