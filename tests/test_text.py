from editos.bitmap_font import builtin_font
from editos.canvas import Canvas
from editos.color import Color
from editos.framebuffer import LinearFramebuffer
from editos.text import Style, TextRenderer

FG = Color.black()
BG = Color.white()


def make(style=None, width=40, height=20):
    fb = LinearFramebuffer(width, height)
    renderer = TextRenderer(Canvas(fb), style or Style(FG, BG))
    return fb, renderer


def region(fb, x0, y0, size=8):
    return [[fb.get_pixel(x0 + x, y0 + y) for x in range(size)] for y in range(size)]


def untouched(fb):
    return all(
        fb.get_pixel(x, y) == Color.transparent()
        for y in range(fb.height)
        for x in range(fb.width)
    )


def bit(rows, gx, gy):
    return bool(rows[gy] & (0x80 >> gx))


def test_glyph_pixels_match_font():
    fb, renderer = make()
    renderer.draw_glyph("A", 0, 0)
    rows = builtin_font().glyph("A")
    for gy in range(8):
        for gx in range(8):
            expected = FG if bit(rows, gx, gy) else Color.transparent()
            assert fb.get_pixel(gx, gy) == expected


def test_background_drawn_when_requested():
    fb, renderer = make(Style(FG, BG, draw_bg=True))
    renderer.draw_glyph("x", 0, 0)
    rows = builtin_font().glyph("x")
    for gy in range(8):
        for gx in range(8):
            assert fb.get_pixel(gx, gy) == (FG if bit(rows, gx, gy) else BG)


def test_scale_repeats_pixels():
    fb, renderer = make(Style(FG, BG, scale=2))
    renderer.draw_glyph("H", 0, 0)
    rows = builtin_font().glyph("H")
    for gy in range(8):
        for gx in range(8):
            expected = FG if bit(rows, gx, gy) else Color.transparent()
            for s in range(2):
                assert fb.get_pixel(2 * gx + s, 2 * gy + s) == expected


def test_text_advances_by_glyph_width():
    fb, renderer = make()
    renderer.draw_text("AB", 0, 0)
    ref_fb, ref = make()
    ref.draw_glyph("B", builtin_font().glyph_width, 0)
    assert region(fb, 8, 0) == region(ref_fb, 8, 0)
    assert renderer.position == (2 * builtin_font().glyph_width, 0)


def test_gap_x_spaces_glyphs():
    fb, renderer = make(Style(FG, BG, gap_x=1))
    renderer.draw_text("MM", 0, 0)
    ref_fb, ref = make()
    ref.draw_glyph("M", 9, 0)
    assert region(fb, 9, 0) == region(ref_fb, 9, 0)


def test_set_pos_used_by_next_glyph():
    fb, renderer = make()
    renderer.set_pos(10, 5)
    renderer.draw_glyph("Z")
    ref_fb, ref = make()
    ref.draw_glyph("Z", 10, 5)
    assert region(fb, 10, 5) == region(ref_fb, 10, 5)


def test_character_without_glyph_draws_nothing_and_keeps_position():
    fb, renderer = make()
    renderer.set_pos(3, 4)
    renderer.draw_glyph("\n", 20, 10)
    assert untouched(fb)
    assert renderer.position == (3, 4)


def test_zero_scale_draws_nothing():
    fb, renderer = make(Style(FG, BG, scale=0))
    renderer.draw_text("ABC", 0, 0)
    assert untouched(fb)


def test_none_text_draws_nothing():
    fb, renderer = make()
    renderer.draw_text(None, 0, 0)
    assert untouched(fb)


def test_inverted_without_background_fills_clear_bits():
    fb, renderer = make()
    renderer.draw_glyph("I", 0, 0, inverted=True)
    rows = builtin_font().glyph("I")
    for gy in range(8):
        for gx in range(8):
            expected = Color.transparent() if bit(rows, gx, gy) else FG
            assert fb.get_pixel(gx, gy) == expected


def test_set_style_changes_colour():
    fb, renderer = make()
    renderer.set_style(Style(Color.red(), BG))
    renderer.draw_glyph("!", 0, 0)
    colours = {fb.get_pixel(x, y) for y in range(8) for x in range(8)}
    assert colours == {Color.red(), Color.transparent()}
    assert renderer.style.fg == Color.red()