"""Reading the boot information structure a Multiboot2 loader hands over."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum

from editos.klog import log_msg

_HEADER = struct.Struct("<II")
HEADER_SIZE = _HEADER.size
_BASIC_MEMINFO = struct.Struct("<II")
_FRAMEBUFFER = struct.Struct("<QIIIBBH")
_MMAP_HEAD = struct.Struct("<II")
_MMAP_ENTRY = struct.Struct("<QQII")
_TAG_ALIGN = 8


class TagType(IntEnum):
    END = 0
    CMDLINE = 1
    BOOTLOADER_NAME = 2
    MODULE = 3
    BASIC_MEMINFO = 4
    BOOT_DEVICE = 5
    MMAP = 6
    VBE = 7
    FRAMEBUFFER = 8
    ELF_SECTIONS = 9
    APM = 10
    EFI32_SYSTEM_TABLE = 11
    EFI64_SYSTEM_TABLE = 12
    SMBIOS = 13
    ACPI_V1_RSDP = 14
    ACPI_V2_RSDP = 15
    NETWORK = 16
    EFI_MEMORY_MAP = 17
    EFI_BOOT_SERVICES_NOT_TERMINATED = 18
    EFI32_IMAGE_HANDLE = 19
    EFI64_IMAGE_HANDLE = 20
    IMAGE_LOAD_BASE_ADDRESS = 21


TAG_COUNT = 22


@dataclass(frozen=True)
class TagHeader:
    """A tag's type and total size, with the bytes that follow the header."""

    type: TagType
    size: int
    payload: bytes


@dataclass(frozen=True)
class BasicMemInfoTag:
    """Lower memory from address 0 and upper memory from 1 MiB, in KiB."""

    mem_lower: int
    mem_upper: int


class MmapEntryType(IntEnum):
    AVAILABLE_RAM = 1
    ACPI_INFO = 3
    RESERVED = 4
    DEFECTIVE_RAM = 5


@dataclass(frozen=True)
class MmapEntry:
    base_addr: int
    length: int
    type: MmapEntryType | int


@dataclass(frozen=True)
class FramebufferTag:
    addr: int
    pitch: int
    width: int
    height: int
    bpp: int
    type_fb: int


def _align_up(value: int, align: int) -> int:
    return (value + align - 1) & ~(align - 1)


def parse_tags(data: bytes) -> dict[TagType, TagHeader]:
    """Index the tags of a boot information structure by type.

    Tags of unknown type are skipped; a later tag replaces an earlier one of
    the same type. Raises ValueError on malformed or truncated data.
    """
    data = bytes(data)
    if len(data) < HEADER_SIZE:
        raise ValueError("boot information shorter than its header")
    total_size, _reserved = _HEADER.unpack_from(data, 0)
    if total_size < HEADER_SIZE or total_size > len(data):
        raise ValueError(f"boot information total size {total_size} is inconsistent")
    data = data[:total_size]

    tags: dict[TagType, TagHeader] = {}
    offset = HEADER_SIZE
    while True:
        if offset + HEADER_SIZE > len(data):
            raise ValueError("boot information ends without an end tag")
        raw_type, size = _HEADER.unpack_from(data, offset)
        if raw_type == TagType.END:
            return tags
        if size < HEADER_SIZE or offset + size > len(data):
            raise ValueError(f"tag at offset {offset} has invalid size {size}")
        if 0 < raw_type < TAG_COUNT:
            tag_type = TagType(raw_type)
            tags[tag_type] = TagHeader(
                tag_type, size, data[offset + HEADER_SIZE : offset + size]
            )
        offset = _align_up(offset + size, _TAG_ALIGN)


def _unpack(layout: struct.Struct, payload: bytes, what: str) -> tuple:
    if len(payload) < layout.size:
        raise ValueError(f"{what} tag is too short")
    return layout.unpack_from(payload, 0)


def _c_string(payload: bytes) -> str:
    return payload.split(b"\0", 1)[0].decode("utf-8", errors="replace")


class MultibootInfo:
    """Typed access to the tags of a boot information structure."""

    def __init__(self, data: bytes) -> None:
        self._tags = parse_tags(data)

    def tag(self, tag_type: TagType) -> TagHeader | None:
        """The tag of the given type, or None if the loader gave none."""
        return self._tags.get(TagType(tag_type))

    def _string(self, tag_type: TagType) -> str | None:
        tag = self.tag(tag_type)
        if tag is None:
            return None
        text = _c_string(tag.payload)
        log_msg("get_bl: %s", text)
        return text

    def cmdline(self) -> str | None:
        return self._string(TagType.CMDLINE)

    def bootloader_name(self) -> str | None:
        return self._string(TagType.BOOTLOADER_NAME)

    def basic_meminfo(self) -> BasicMemInfoTag | None:
        tag = self.tag(TagType.BASIC_MEMINFO)
        if tag is None:
            return None
        return BasicMemInfoTag(*_unpack(_BASIC_MEMINFO, tag.payload, "basic meminfo"))

    def framebuffer(self) -> FramebufferTag | None:
        tag = self.tag(TagType.FRAMEBUFFER)
        if tag is None:
            return None
        addr, pitch, width, height, bpp, type_fb, _reserved = _unpack(
            _FRAMEBUFFER, tag.payload, "framebuffer"
        )
        return FramebufferTag(addr, pitch, width, height, bpp, type_fb)

    def mmap_entries(self) -> list[MmapEntry] | None:
        """Memory map entries in the order given, or None without a map tag."""
        tag = self.tag(TagType.MMAP)
        if tag is None:
            return None
        entry_size, _version = _unpack(_MMAP_HEAD, tag.payload, "memory map")
        if entry_size == 0:
            raise ValueError("memory map entry size is zero")

        entries = []
        payload = tag.payload
        for offset in range(_MMAP_HEAD.size, len(payload), entry_size):
            if offset + _MMAP_ENTRY.size > len(payload):
                break
            base, length, raw_type, _reserved = _MMAP_ENTRY.unpack_from(payload, offset)
            try:
                entry_type: MmapEntryType | int = MmapEntryType(raw_type)
            except ValueError:
                entry_type = raw_type
            entries.append(MmapEntry(base, length, entry_type))
        return entries