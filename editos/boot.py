"""What the boot stage hands to the kernel: architecture, memory and devices."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
from typing import Any

from editos.framebuffer import Framebuffer

UPPER_MEMORY_START = 0x100000
"""Physical address where upper memory begins (1 MiB)."""


class ArchKind(IntEnum):
    UNKNOWN = 0
    X86 = 1
    X86_64 = 2


class Bootflags(IntFlag):
    NONE = 0b00000000
    NO_GUI = 0b00000001


class BootLoaderKind(IntEnum):
    UNKNOWN = 0
    MULTIBOOT2 = 1
    LIMINE = 2
    STIVALE2 = 3
    UEFI_DIRECT = 4


class MemoryRegionType(IntEnum):
    UNKNOWN = 0
    USABLE = 1
    RESERVED = 2
    ACPI_RECLAIMABLE = 3
    ACPI_NVS = 4
    MMIO = 5
    KERNEL = 6
    BOOTLOADER_RECLAIMABLE = 7
    BAD = 8


_ARCH_NAMES = {
    ArchKind.UNKNOWN: "Unknown",
    ArchKind.X86: "X86",
    ArchKind.X86_64: "X86_64",
}

_REGION_NAMES = {
    MemoryRegionType.UNKNOWN: "Unknown",
    MemoryRegionType.USABLE: "Usable",
    MemoryRegionType.RESERVED: "Reserved",
    MemoryRegionType.ACPI_RECLAIMABLE: "AcpiReclaimable",
    MemoryRegionType.ACPI_NVS: "AcpiNvs",
    MemoryRegionType.MMIO: "Mmio",
    MemoryRegionType.KERNEL: "Kernel",
    MemoryRegionType.BOOTLOADER_RECLAIMABLE: "BootloaderReclaimable",
    MemoryRegionType.BAD: "Bad",
}


def arch_name(arch: ArchKind | int) -> str:
    """Display name of an architecture; unrecognised values give "Unknown"."""
    try:
        return _ARCH_NAMES[ArchKind(arch)]
    except ValueError:
        return "Unknown"


def memory_region_type_name(region_type: MemoryRegionType | int) -> str:
    """Display name of a memory region type; unrecognised values give "Unknown"."""
    try:
        return _REGION_NAMES[MemoryRegionType(region_type)]
    except ValueError:
        return "Unknown"


@dataclass(frozen=True)
class MemoryRegion:
    type: MemoryRegionType
    addr: int
    length: int


@dataclass(frozen=True)
class InitModule:
    name: str
    phys_base: int
    length: int


@dataclass
class BootContext:
    """Everything the kernel learns about the machine at boot."""

    arch: ArchKind = ArchKind.UNKNOWN
    bootloader: BootLoaderKind = BootLoaderKind.UNKNOWN
    bootloader_name: str | None = None
    cmdline: str | None = None

    upper_mem_start: int = UPPER_MEMORY_START
    upper_mem_kb: int = 0

    boot_framebuffer: Framebuffer | None = None
    system_serial_bus: Any = None

    memory_map: list[MemoryRegion] = field(default_factory=list)

    ram_start_addr: int = 0

    arch_private: Any = None

    @property
    def memory_regions(self) -> int:
        """Number of entries in the memory map."""
        return len(self.memory_map)