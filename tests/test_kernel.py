import io
import struct
from collections import deque

import pytest

from editos.boot import ArchKind, BootLoaderKind, MemoryRegionType
from editos.color import Color
from editos.framebuffer import LinearFramebuffer
from editos.heap import BitmapHeap, kernel_heap, set_kernel_heap
from editos.kernel import build_boot_context, enter_kernel, memory_map_from
from editos.keyboard import Key, KeyEvent, KeyEventType, KeyMod, Keyboard
from editos.klog import KernelPanic, set_sink
from editos.multiboot2 import MultibootInfo
from editos.serial import StreamSerialBus
from editos.system import ShuttingDown


def _tag(tag_type, payload):
    size = 8 + len(payload)
    raw = struct.pack("<II", tag_type, size) + payload
    return raw + b"\0" * ((-len(raw)) % 8)


def boot_info(*tags):
    body = b"".join(tags) + struct.pack("<II", 0, 8)
    return struct.pack("<II", 8 + len(body), 0) + body


def mmap_tag(entries):
    payload = struct.pack("<II", 24, 0) + b"".join(
        struct.pack("<QQII", base, length, kind, 0) for base, length, kind in entries
    )
    return _tag(6, payload)


def fb_tag(width=64, height=48, bpp=32):
    return _tag(8, struct.pack("<QIIIBBH", 0xFD000000, width * 4, width, height, bpp, 1, 0))


ENTRIES = [
    (0x0, 0x9FC00, 1),
    (0x100000, 0x7EE0000, 1),
    (0xF0000, 0x10000, 2),
    (0xFFFC0000, 0x40000, 4),
]


def full_info():
    return boot_info(
        _tag(1, b"quiet\0"),
        _tag(2, b"GRUB 2\0"),
        _tag(4, struct.pack("<II", 639, 130048)),
        mmap_tag(ENTRIES),
        fb_tag(),
    )


class ScriptedKeyboard(Keyboard):
    def __init__(self, events):
        self._events = deque(events)

    def poll(self):
        if not self._events:
            raise EOFError
        return self._events.popleft()


def typed(text):
    keys = {" ": Key.SPACE, "\n": Key.ENTER}
    return [
        KeyEvent(keys.get(c) or Key[c.upper()], KeyEventType.PRESS, KeyMod.NONE) for c in text
    ]


@pytest.fixture(autouse=True)
def reset_globals():
    yield
    set_sink(None)
    set_kernel_heap(None)


def test_memory_map_keeps_known_types_in_order():
    regions = memory_map_from(MultibootInfo(full_info()))
    assert [r.type for r in regions] == [
        MemoryRegionType.USABLE,
        MemoryRegionType.USABLE,
        MemoryRegionType.RESERVED,
    ]
    assert [(r.addr, r.length) for r in regions] == [
        (ENTRIES[0][0], ENTRIES[0][1]),
        (ENTRIES[1][0], ENTRIES[1][1]),
        (ENTRIES[3][0], ENTRIES[3][1]),
    ]


def test_memory_map_capped_at_sixteen():
    entries = [(i * 0x1000, 0x1000, 1) for i in range(20)]
    regions = memory_map_from(MultibootInfo(boot_info(mmap_tag(entries))))
    assert len(regions) == 16
    assert regions[-1].addr == 15 * 0x1000


def test_memory_map_empty_without_tag():
    assert memory_map_from(MultibootInfo(boot_info())) == []


def test_build_boot_context_reads_tags():
    ctx = build_boot_context(MultibootInfo(full_info()), ram_start_addr=0x200000)
    assert ctx.arch == ArchKind.X86
    assert ctx.bootloader == BootLoaderKind.MULTIBOOT2
    assert ctx.cmdline == "quiet"
    assert ctx.bootloader_name == "GRUB 2"
    assert ctx.upper_mem_kb == 130048
    assert ctx.memory_regions == 3
    assert ctx.ram_start_addr == 0x200000
    assert ctx.boot_framebuffer.width == 64
    assert ctx.boot_framebuffer.height == 48
    assert isinstance(kernel_heap(), BitmapHeap)


def test_build_boot_context_accepts_raw_bytes():
    ctx = build_boot_context(full_info())
    assert ctx.cmdline == "quiet"


def test_build_boot_context_defaults_without_strings():
    ctx = build_boot_context(MultibootInfo(boot_info()))
    assert ctx.cmdline == "<none>"
    assert ctx.bootloader_name == "Unknown"
    assert ctx.boot_framebuffer is None
    assert ctx.upper_mem_kb == 0


def test_invalid_framebuffer_tag_is_dropped():
    ctx = build_boot_context(MultibootInfo(boot_info(fb_tag(bpp=24))))
    assert ctx.boot_framebuffer is None


def test_explicit_framebuffer_wins():
    fb = LinearFramebuffer(32, 32)
    ctx = build_boot_context(MultibootInfo(full_info()), framebuffer=fb)
    assert ctx.boot_framebuffer is fb


def _context(out):
    return build_boot_context(full_info(), serial_bus=StreamSerialBus(out))


def test_enter_kernel_logs_and_runs_shell():
    out = io.StringIO()
    ctx = _context(out)
    keyboard = ScriptedKeyboard(typed("echo hi\n"))
    with pytest.raises(EOFError):
        enter_kernel(ctx, keyboard)
    log = out.getvalue()
    assert "editOS kernel entered..." in log
    assert "Booted by GRUB 2" in log
    assert "Bootoptions: quiet" in log
    assert "Found memory map (3 entries):" in log
    assert ctx.boot_framebuffer.get_pixel(0, 0) == Color.from_argb(0xFF202040)


def test_enter_kernel_without_framebuffer_panics():
    ctx = build_boot_context(boot_info(), serial_bus=StreamSerialBus(io.StringIO()))
    with pytest.raises(KernelPanic):
        enter_kernel(ctx, ScriptedKeyboard([]))


def test_enter_kernel_stops_on_shutdown_command():
    ctx = _context(io.StringIO())
    with pytest.raises(ShuttingDown):
        enter_kernel(ctx, ScriptedKeyboard(typed("sys shutdown\n")))