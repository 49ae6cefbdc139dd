"""Bringing the kernel up from boot information to a running shell."""

from __future__ import annotations

from typing import NoReturn

from editos.boot import ArchKind, BootContext, BootLoaderKind, MemoryRegion, MemoryRegionType
from editos.boot import memory_region_type_name
from editos.canvas import Canvas
from editos.color import Color
from editos.framebuffer import Framebuffer, LinearFramebuffer
from editos.heap import BitmapHeap, set_kernel_heap
from editos.keyboard import Keyboard
from editos.klog import log_msg, panic, set_sink
from editos.multiboot2 import MmapEntryType, MultibootInfo
from editos.serial import SerialBus, SerialSink
from editos.shapes import Rect
from editos.shell import Shell
from editos.text import Style
from editos.text_area import TextArea
from editos.tty import Tty
from editos.tty_text_area import TtyTextArea
from editos.units import MIB, b_to_mib, kib_to_mib
from editos.window import Window

MAX_MEMORY_REGIONS = 16
KERNEL_HEAP_MIB = 32
DEFAULT_RAM_START = 0x200000
BACKGROUND = 0xFF202040
TTY_MARGIN = 10

_REGION_TYPES = {
    MmapEntryType.AVAILABLE_RAM: MemoryRegionType.USABLE,
    MmapEntryType.ACPI_INFO: MemoryRegionType.ACPI_RECLAIMABLE,
    MmapEntryType.RESERVED: MemoryRegionType.RESERVED,
    MmapEntryType.DEFECTIVE_RAM: MemoryRegionType.BAD,
}


def memory_map_from(info: MultibootInfo) -> list[MemoryRegion]:
    """Known memory map entries as regions, at most MAX_MEMORY_REGIONS of them."""
    regions: list[MemoryRegion] = []
    for entry in info.mmap_entries() or ():
        region_type = _REGION_TYPES.get(entry.type, MemoryRegionType.UNKNOWN)
        if region_type != MemoryRegionType.UNKNOWN and len(regions) < MAX_MEMORY_REGIONS:
            regions.append(MemoryRegion(region_type, entry.base_addr, entry.length))
    return regions


def _boot_framebuffer(info: MultibootInfo) -> Framebuffer | None:
    tag = info.framebuffer()
    if tag is None:
        return None
    fb = LinearFramebuffer(tag.width, tag.height, tag.pitch, tag.bpp)
    return fb if fb.valid() else None


def build_boot_context(
    info: MultibootInfo | bytes,
    serial_bus: SerialBus | None = None,
    framebuffer: Framebuffer | None = None,
    ram_start_addr: int = DEFAULT_RAM_START,
) -> BootContext:
    """Gather what the loader reported and set up the kernel heap.

    Without an explicit ``framebuffer`` one is made from the loader's
    framebuffer tag, if that describes a usable 32-bpp surface.
    """
    if not isinstance(info, MultibootInfo):
        info = MultibootInfo(info)

    ctx = BootContext(
        arch=ArchKind.X86,
        bootloader=BootLoaderKind.MULTIBOOT2,
        system_serial_bus=serial_bus,
    )
    ctx.boot_framebuffer = framebuffer if framebuffer is not None else _boot_framebuffer(info)

    meminfo = info.basic_meminfo()
    if meminfo is not None:
        ctx.upper_mem_kb = meminfo.mem_upper

    ctx.memory_map = memory_map_from(info)
    ctx.ram_start_addr = ram_start_addr

    heap = BitmapHeap()
    heap.init(ram_start_addr, KERNEL_HEAP_MIB * MIB)
    set_kernel_heap(heap)

    cmdline = info.cmdline()
    ctx.cmdline = cmdline if cmdline is not None else "<none>"
    name = info.bootloader_name()
    ctx.bootloader_name = name if name is not None else "Unknown"
    return ctx


def _log_boot_summary(ctx: BootContext) -> None:
    log_msg("editOS kernel entered...")
    log_msg("Booted by %s", ctx.bootloader_name)
    log_msg("Bootoptions: %s", ctx.cmdline)
    log_msg("%d KiB available in upper memory", ctx.upper_mem_kb)

    kernel_span = ctx.ram_start_addr - ctx.upper_mem_start
    share = (kernel_span * 100) // ctx.upper_mem_kb if ctx.upper_mem_kb else 0
    log_msg("Kernel size %d MiB (~%d%%)", kib_to_mib(kernel_span), share)

    if ctx.memory_map:
        log_msg("Found memory map (%d entries):", ctx.memory_regions)
        for region in ctx.memory_map:
            log_msg(
                "  %d MiB at %x [%s]",
                b_to_mib(region.length),
                region.addr,
                memory_region_type_name(region.type),
            )
        log_msg("Kernel heap (%d MiB) initialized at %p", KERNEL_HEAP_MIB, ctx.ram_start_addr)


def enter_kernel(ctx: BootContext, keyboard: Keyboard) -> NoReturn:
    """Set up logging and the screen, then run the shell until input ends or the system stops."""
    bus = ctx.system_serial_bus
    set_sink(SerialSink(bus) if bus is not None else None)

    _log_boot_summary(ctx)

    fb = ctx.boot_framebuffer
    if fb is None:
        panic("No framebuffer provided by bootloader. Abort!")

    canvas = Canvas(fb)
    canvas.clear(BACKGROUND)

    tty_rect = Rect(0, 0, canvas.width, canvas.height) + -TTY_MARGIN
    Window(tty_rect).draw(canvas)

    style = Style(Color.black(), Color.from_argb(0xFFFFFFFF), False, 1, -2, 1)
    area = TextArea(tty_rect, canvas, style)
    tty = Tty(TtyTextArea(area), keyboard)
    shell = Shell(tty)
    shell.register_builtin_commands()
    shell.run()