import pytest

from editos import heap
from editos.heap import (
    BLOCK_HEADER_SIZE,
    MAX_ALIGN,
    BitmapHeap,
    BumpHeap,
    align_to,
)
from editos.klog import KernelPanic

BASE = 0x100000


@pytest.fixture
def bm():
    return BitmapHeap(BASE, 4096)


@pytest.fixture(autouse=True)
def restore_kernel_heap():
    previous = heap.kernel_heap()
    yield
    heap.set_kernel_heap(previous)


def test_align_to_already_aligned():
    assert align_to(64, 16) == 64


def test_align_to_rounds_up_to_multiple():
    for value in range(1, 100):
        result = align_to(value, 8)
        assert result % 8 == 0
        assert value <= result < value + 8


def test_block_layout(bm):
    (block,) = bm.blocks
    assert block.bitmap_base == BASE + BLOCK_HEADER_SIZE
    assert block.data_begin % MAX_ALIGN == 0
    assert block.remaining == block.div_count * block.div_size


def test_alloc_is_aligned_and_inside_block(bm):
    addr = bm.alloc(32)
    (block,) = bm.blocks
    assert addr % MAX_ALIGN == 0
    assert block.data_begin <= addr < block.data_end


def test_allocations_do_not_overlap(bm):
    a = bm.alloc(40)
    b = bm.alloc(40)
    assert a + 40 <= b or b + 40 <= a


def test_remaining_shrinks_and_recovers(bm):
    (block,) = bm.blocks
    before = block.remaining
    addr = bm.alloc(20)
    assert block.remaining == before - 2 * block.div_size
    bm.free(addr)
    assert block.remaining == before


def test_free_makes_space_reusable(bm):
    addr = bm.alloc(64)
    bm.free(addr)
    assert bm.alloc(64) == addr


def test_large_alignment(bm):
    addr = bm.alloc(8, 64)
    assert addr % 64 == 0


def test_zero_size_returns_none(bm):
    assert bm.alloc(0) is None


def test_zero_align_uses_default(bm):
    assert bm.alloc(8, 0) % MAX_ALIGN == 0


def test_non_power_of_two_align_panics(bm):
    with pytest.raises(KernelPanic):
        bm.alloc(8, 24)


def test_too_large_raises_memory_error(bm):
    with pytest.raises(MemoryError):
        bm.alloc(10_000)


def test_double_free_panics(bm):
    addr = bm.alloc(16)
    bm.free(addr)
    with pytest.raises(KernelPanic, match="Double free"):
        bm.free(addr)


def test_free_outside_blocks_is_ignored(bm):
    (block,) = bm.blocks
    before = block.remaining
    bm.alloc(16)
    bm.free(0x10)
    bm.free(None)
    assert block.remaining == before - block.div_size


def test_add_block_rejects_zero_address():
    with pytest.raises(ValueError):
        BitmapHeap().add_block(0, 4096)


def test_add_block_rejects_small_block():
    with pytest.raises(ValueError):
        BitmapHeap().add_block(BASE, BLOCK_HEADER_SIZE + 16)


def test_add_block_puts_new_block_first(bm):
    bm.add_block(0x200000, 2048, 32)
    assert [b.addr for b in bm.blocks] == [0x200000, BASE]
    assert bm.blocks[0].div_size == 32


def test_init_failure_panics():
    with pytest.raises(KernelPanic, match="Heap initialization failed"):
        BitmapHeap(BASE, 8)


def test_bump_heap_sequential_and_aligned():
    bump = BumpHeap(0x4000, 1024)
    a = bump.alloc(10)
    b = bump.alloc(10)
    assert a == 0x4000
    assert b > a and b % MAX_ALIGN == 0


def test_bump_heap_free_does_not_reuse():
    bump = BumpHeap(0x4000, 1024)
    a = bump.alloc(16)
    bump.free(a)
    assert bump.alloc(16) != a


def test_bump_heap_reset():
    bump = BumpHeap(0x4000, 1024)
    first = bump.alloc(100)
    bump.alloc(100)
    bump.reset()
    assert bump.used == 0
    assert bump.alloc(100) == first


def test_bump_heap_exhaustion():
    bump = BumpHeap(0x4000, 64)
    bump.alloc(64)
    with pytest.raises(MemoryError):
        bump.alloc(1)


def test_global_alloc_uses_kernel_heap(bm):
    heap.set_kernel_heap(bm)
    assert heap.kernel_heap() is bm
    (block,) = bm.blocks
    before = block.remaining
    addr = heap.alloc(16)
    assert block.remaining < before
    heap.free(addr)
    assert block.remaining == before


def test_global_alloc_without_heap_raises():
    heap.set_kernel_heap(None)
    with pytest.raises(MemoryError):
        heap.alloc(16)
    heap.free(0x1234)
    assert heap.kernel_heap() is None