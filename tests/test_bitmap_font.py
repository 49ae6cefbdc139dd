import pytest

from editos.bitmap_font import BitmapFont, builtin_font


def test_builtin_font_dimensions():
    font = builtin_font()
    assert (font.glyph_width, font.glyph_height) == (8, 8)
    assert (font.first_char, font.last_char) == (" ", "~")


def test_builtin_font_covers_printable_ascii():
    font = builtin_font()
    count = ord(font.last_char) - ord(font.first_char) + 1
    assert len(font.data) == count * font.glyph_height
    assert all(font.has_glyph(chr(c)) for c in range(32, 127))


def test_builtin_font_is_shared():
    first = builtin_font()
    second = builtin_font()
    assert first is second
    assert second.glyph("0") == bytes([0x00, 0x38, 0x44, 0x44, 0x44, 0x44, 0x44, 0x38])


def test_space_is_blank():
    assert builtin_font().glyph(" ") == bytes(8)


def test_glyph_rows_for_letter_a():
    assert builtin_font().glyph("A") == bytes([0x00, 0x38, 0x44, 0x44, 0x7C, 0x44, 0x44, 0x44])


def test_glyph_rows_for_tilde():
    assert builtin_font().glyph("~") == bytes([0x00, 0x00, 0x00, 0x34, 0x58, 0x00, 0x00, 0x00])


def test_every_glyph_fits_width_and_has_blank_top_row():
    font = builtin_font()
    for code in range(32, 127):
        rows = font.glyph(chr(code))
        assert len(rows) == font.glyph_height
        assert rows[0] == 0
        assert all(row < (1 << font.glyph_width) for row in rows)


@pytest.mark.parametrize("c", ["\x1f", "\x7f", "\n", "é", "ab", ""])
def test_missing_glyphs(c):
    font = builtin_font()
    assert not font.has_glyph(c)
    with pytest.raises(ValueError):
        font.glyph(c)


def test_custom_font_indexing():
    font = BitmapFont(4, 2, "a", "c", bytes([1, 2, 3, 4, 5, 6]))
    assert font.glyph("a") == bytes([1, 2])
    assert font.glyph("c") == bytes([5, 6])
    assert not font.has_glyph("d")