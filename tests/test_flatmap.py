from enum import IntEnum

import pytest

from editos.flatmap import FlatMap


class Tag(IntEnum):
    CMDLINE = 1
    BOOTLOADER_NAME = 2
    MMAP = 6
    FRAMEBUFFER = 8


def test_new_map_is_empty():
    m = FlatMap(8)
    assert m.empty()
    assert not m.full()
    assert m.count() == 0
    assert m.size() == 8


def test_insert_and_find():
    m = FlatMap(8)
    m.insert(3, "c")
    m.insert(7, "g")
    assert m.find(3) == "c"
    assert m.find(7) == "g"
    assert m.count() == 2


def test_find_missing_returns_none():
    m = FlatMap(8)
    assert m.find(1) is None
    m.insert(1, "a")
    assert m.find(2) is None


def test_insert_existing_key_replaces():
    m = FlatMap(4)
    m.insert(5, "x")
    m.insert(5, "y")
    assert m.find(5) == "y"
    assert m.count() == 1


def test_full_map_rejects_insert():
    m = FlatMap(3)
    for k in range(3):
        m.insert(k, k * 10)
    assert m.full()
    with pytest.raises(OverflowError):
        m.insert(99, 0)


def test_full_map_rejects_update_too():
    m = FlatMap(2)
    m.insert(1, "a")
    m.insert(2, "b")
    with pytest.raises(OverflowError):
        m.insert(1, "z")
    assert m.find(1) == "a"


def test_every_key_findable_when_filled():
    m = FlatMap(16)
    for k in range(16):
        m.insert(k * 17, k)
    assert all(m.find(k * 17) == k for k in range(16))


def test_remove_keeps_other_keys_findable():
    m = FlatMap(4)
    for k in range(4):
        m.insert(k, str(k))
    m.remove(1)
    assert m.count() == 3
    assert m.find(1) is None
    assert [m.find(k) for k in (0, 2, 3)] == ["0", "2", "3"]


def test_remove_missing_key_is_noop():
    m = FlatMap(4)
    m.insert(1, "a")
    m.remove(2)
    assert m.count() == 1
    assert m.find(1) == "a"


def test_removed_slot_reusable():
    m = FlatMap(2)
    m.insert(1, "a")
    m.insert(2, "b")
    m.remove(1)
    m.insert(3, "c")
    assert m.full()
    assert m.find(3) == "c"
    assert m.find(2) == "b"


def test_enum_keys():
    m = FlatMap(22)
    m.insert(Tag.MMAP, 0x1000)
    m.insert(Tag.CMDLINE, 0x2000)
    assert m.find(Tag.MMAP) == 0x1000
    assert m.find(Tag.CMDLINE) == 0x2000
    assert m.find(Tag.FRAMEBUFFER) is None


def test_string_keys():
    m = FlatMap(8)
    m.insert("help", 1)
    m.insert("echo", 2)
    assert m["help"] == 1
    assert "echo" in m
    assert "sys" not in m


def test_getitem_missing_raises_key_error():
    m = FlatMap(4)
    m.insert("yes", 1)
    with pytest.raises(KeyError):
        _ = m["nope"]
    assert m["yes"] == 1
    assert m.count() == 1


def test_iteration_covers_all_entries():
    m = FlatMap(8)
    data = {10: "a", 20: "b", 30: "c"}
    for k, v in data.items():
        m.insert(k, v)
    assert set(m) == set(data)
    assert dict(m.items()) == data
    assert len(m) == 3


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        FlatMap(0)