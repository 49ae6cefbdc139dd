"""Kernel heaps: a bitmap allocator over address blocks and a bump allocator.

Addresses are plain integers; the allocators do the bookkeeping only and
never touch the memory they hand out.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from editos.bits import is_pow2, one_if_zero
from editos.klog import panic
from editos.units import MIB

MAX_ALIGN = 16
"""Alignment that suits any scalar type."""

BLOCK_HEADER_SIZE = 32
"""Bytes taken by a block header in front of its bitmap."""

DEFAULT_HEAP_SIZE = 32 * MIB
BUMP_HEAP_SIZE = 1 * MIB


def align_to(value: int, align: int) -> int:
    """Round ``value`` up to a multiple of the power of two ``align``."""
    return (value + align - 1) & ~(align - 1)


class Heap(ABC):
    """An allocator handing out address ranges."""

    @abstractmethod
    def init(self, addr: int, size: int = DEFAULT_HEAP_SIZE) -> None:
        """Prepare the heap to manage ``size`` bytes starting at ``addr``."""

    @abstractmethod
    def alloc(self, size: int, align: int = MAX_ALIGN) -> int | None:
        """Reserve ``size`` bytes and return their address.

        Returns None for a zero-sized request; raises MemoryError when no room is left.
        """

    @abstractmethod
    def free(self, addr: int | None) -> None:
        """Release the allocation starting at ``addr``."""


@dataclass
class HeapBlock:
    """A managed region: a header, one bitmap byte per division, then the data."""

    addr: int
    div_count: int
    div_size: int
    remaining: int
    bitmap: bytearray = field(repr=False)

    @property
    def bitmap_base(self) -> int:
        return self.addr + BLOCK_HEADER_SIZE

    @property
    def data_begin(self) -> int:
        return self.bitmap_base + self.div_count

    @property
    def data_end(self) -> int:
        return self.data_begin + self.div_count * self.div_size


class BitmapHeap(Heap):
    """Splits blocks into fixed-size divisions, tagging each used one with an id."""

    def __init__(
        self,
        addr: int | None = None,
        size: int = DEFAULT_HEAP_SIZE,
        default_div_size: int = 16,
    ) -> None:
        self._blocks: list[HeapBlock] = []
        self._last_id = 0
        self.default_div_size = default_div_size
        if addr is not None:
            self.init(addr, size)

    @property
    def blocks(self) -> tuple[HeapBlock, ...]:
        """Managed blocks, most recently added first."""
        return tuple(self._blocks)

    def add_block(self, addr: int, size: int, div_size: int | None = None) -> None:
        """Manage another region; raises ValueError if it cannot hold a division."""
        if div_size is None:
            div_size = self.default_div_size
        if not addr or div_size == 0:
            raise ValueError("block needs a non-zero address and division size")
        if size <= BLOCK_HEADER_SIZE + div_size:
            raise ValueError(f"block of {size} bytes is too small")

        space = size - BLOCK_HEADER_SIZE
        max_divs = space // (div_size + 1)
        if max_divs == 0:
            raise ValueError(f"block of {size} bytes holds no division")

        bitmap_base = addr + BLOCK_HEADER_SIZE
        aligned_data_addr = align_to(bitmap_base + max_divs, MAX_ALIGN)
        if aligned_data_addr <= bitmap_base:
            raise ValueError("block data area would be empty")

        div_count = aligned_data_addr - bitmap_base
        block = HeapBlock(
            addr=addr,
            div_count=div_count,
            div_size=div_size,
            remaining=div_count * div_size,
            bitmap=bytearray(div_count),
        )
        self._blocks.insert(0, block)

    def init(self, addr: int, size: int = DEFAULT_HEAP_SIZE) -> None:
        try:
            self.add_block(addr, size)
        except ValueError:
            panic("Heap initialization failed")

    def alloc(self, size: int, align: int = MAX_ALIGN) -> int | None:
        if not size:
            return None
        if align == 0:
            align = MAX_ALIGN
        if not is_pow2(align):
            panic("Tried to allocate missaligned memory (Not a power of 2).")

        for block in self._blocks:
            if block.remaining < size:
                continue
            address = self._alloc_in(block, size, align)
            if address is not None:
                return address
        raise MemoryError(f"no room for {size} bytes aligned to {align}")

    def _alloc_in(self, block: HeapBlock, size: int, align: int) -> int | None:
        needed = one_if_zero((size + block.div_size - 1) // block.div_size)
        data_addr = block.data_begin
        bitmap = block.bitmap
        run_len = 0
        run_start = 0

        for i, tag in enumerate(bitmap):
            if tag != 0:
                run_len = 0
                continue
            if run_len == 0:
                if (data_addr + i * block.div_size) % align != 0:
                    continue
                run_start = i
                run_len = 1
            else:
                run_len += 1

            if run_len >= needed:
                tag_id = self._next_id()
                bitmap[run_start : run_start + needed] = bytes([tag_id]) * needed
                block.remaining -= needed * block.div_size
                return data_addr + run_start * block.div_size
        return None

    def free(self, addr: int | None) -> None:
        if not addr:
            return
        for block in self._blocks:
            if not block.data_begin <= addr < block.data_end:
                continue
            idx = (addr - block.data_begin) // block.div_size
            bitmap = block.bitmap
            tag_id = bitmap[idx]
            if tag_id == 0:
                panic("Double free")
            freed = 0
            while idx < block.div_count and bitmap[idx] == tag_id:
                bitmap[idx] = 0
                idx += 1
                freed += 1
            block.remaining += freed * block.div_size
            return

    def _next_id(self) -> int:
        if self._last_id == 0xFF:
            self._last_id = 0
        self._last_id += 1
        return self._last_id


class BumpHeap(Heap):
    """Hands out consecutive addresses from a fixed region; freeing does nothing."""

    def __init__(self, base: int = 0x10000, size: int = BUMP_HEAP_SIZE) -> None:
        self.base = align_to(base, MAX_ALIGN)
        self.size = size
        self._offset = 0

    @property
    def used(self) -> int:
        return self._offset

    def init(self, addr: int, size: int = BUMP_HEAP_SIZE) -> None:
        """The region is fixed at construction; nothing to prepare."""

    def alloc(self, size: int, align: int = MAX_ALIGN) -> int | None:
        align = max(align, MAX_ALIGN)
        aligned = align_to(self.base + self._offset, align)
        new_end = aligned + size
        if new_end > self.base + self.size:
            raise MemoryError(f"bump heap cannot fit {size} more bytes")
        self._offset = new_end - self.base
        return aligned

    def free(self, addr: int | None) -> None:
        """Bump allocations are only released all at once by reset()."""

    def reset(self) -> None:
        self._offset = 0


_kernel_heap: Heap | None = None


def set_kernel_heap(heap: Heap | None) -> None:
    """Make ``heap`` the one used by alloc() and free()."""
    global _kernel_heap
    _kernel_heap = heap


def kernel_heap() -> Heap | None:
    return _kernel_heap


def alloc(size: int, align: int = MAX_ALIGN) -> int | None:
    """Allocate from the kernel heap; raises MemoryError if none is set."""
    if _kernel_heap is None:
        raise MemoryError("no kernel heap set")
    return _kernel_heap.alloc(size, align)


def free(addr: int | None) -> None:
    """Release memory to the kernel heap, if one is set."""
    if _kernel_heap is not None:
        _kernel_heap.free(addr)