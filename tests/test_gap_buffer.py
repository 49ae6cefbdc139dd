import random

import pytest

from editos.gap_buffer import GapBuffer


def text(buf):
    return "".join(buf)


def test_insert_appends_and_moves_cursor():
    buf = GapBuffer()
    buf.insert("hello")
    assert text(buf) == "hello"
    assert len(buf) == 5
    assert buf.cursor_pos == 5


def test_insert_in_the_middle():
    buf = GapBuffer("abc")
    buf.move_left()
    buf.insert("X")
    assert text(buf) == "abXc"
    assert buf.cursor_pos == 3


def test_indexing_spans_the_gap():
    buf = GapBuffer("abcdef")
    buf.move_to(3)
    assert [buf[i] for i in range(len(buf))] == list("abcdef")


def test_index_out_of_range():
    buf = GapBuffer("ab")
    assert buf[1] == "b"
    with pytest.raises(IndexError):
        _ = buf[2]
    with pytest.raises(IndexError):
        _ = buf[-1]
    assert text(buf) == "ab"


def test_delete_left_and_right():
    buf = GapBuffer("abcdef")
    buf.move_to(3)
    buf.delete_left()
    buf.delete_right(2)
    assert text(buf) == "abf"
    assert buf.cursor_pos == 2


def test_moves_and_deletes_are_clamped():
    buf = GapBuffer("abc")
    buf.move_left(100)
    assert buf.cursor_pos == 0
    buf.delete_left(5)
    assert text(buf) == "abc"
    buf.move_right(100)
    assert buf.cursor_pos == 3
    buf.delete_right(5)
    assert text(buf) == "abc"


def test_zero_counts_are_no_ops():
    buf = GapBuffer("abc")
    buf.move_to(1)
    buf.move_left(0)
    buf.move_right(0)
    buf.delete_left(0)
    buf.delete_right(0)
    assert text(buf) == "abc"
    assert buf.cursor_pos == 1


def test_move_to_clamps_to_length():
    buf = GapBuffer("abcd")
    buf.move_to(0)
    buf.move_to(99)
    assert buf.cursor_pos == len(buf)


def test_random_edits_match_list_model():
    rng = random.Random(1234)
    buf = GapBuffer()
    model = []
    cursor = 0
    for _ in range(500):
        op = rng.choice(["insert", "left", "right", "del_l", "del_r", "to"])
        n = rng.randint(0, 4)
        if op == "insert":
            items = [rng.choice("xyz") for _ in range(n)]
            buf.insert(items)
            model[cursor:cursor] = items
            cursor += n
        elif op == "left":
            buf.move_left(n)
            cursor = max(0, cursor - n)
        elif op == "right":
            buf.move_right(n)
            cursor = min(len(model), cursor + n)
        elif op == "del_l":
            buf.delete_left(n)
            k = min(n, cursor)
            del model[cursor - k : cursor]
            cursor -= k
        elif op == "del_r":
            buf.delete_right(n)
            del model[cursor : cursor + n]
        else:
            target = rng.randint(0, len(model) + 3)
            buf.move_to(target)
            cursor = min(target, len(model))
        assert list(buf) == model
        assert buf.cursor_pos == cursor