import pytest

from ovenctl.ssd1306 import (
    Display,
    FontMode,
    FrameBuffer,
    digit_to_string,
    glyph_columns,
)


def make_display():
    frame = FrameBuffer()
    writes = []

    def write(data):
        writes.append(bytes(data))
        frame.feed(data)

    return Display(write), frame, writes


def lit_pixels(frame):
    return {
        (x, y)
        for x in range(frame.WIDTH)
        for y in range(frame.HEIGHT)
        if frame.pixel(x, y)
    }


def test_digit_to_string_hides_leading_zeros():
    assert digit_to_string(42, False) == "   42"


def test_digit_to_string_visible_zeros():
    assert digit_to_string(42, True) == "00042"


def test_digit_to_string_keeps_inner_zeros():
    assert digit_to_string(1005, False).strip() == "1005"
    assert len(digit_to_string(1005, False)) == 5


def test_digit_to_string_zero_keeps_last_digit():
    assert digit_to_string(0, False).strip() == "0"


def test_digit_to_string_truncates_to_16_bits():
    assert digit_to_string(65536 + 7, False) == digit_to_string(7, False)


def test_glyph_space_is_blank():
    assert glyph_columns(" ", FontMode.K1) == bytes(5)


def test_glyph_a_matches_font_table():
    assert glyph_columns("A", FontMode.K1) == bytes([0xFC, 0x22, 0x22, 0x22, 0xFC])


def test_lowercase_uses_uppercase_glyph():
    assert glyph_columns("a", FontMode.K1) == glyph_columns("A", FontMode.K1)


def test_non_printable_draws_hash():
    assert glyph_columns("\x01", FontMode.K1) == glyph_columns("#", FontMode.K1)


def test_brace_glyph_after_letters():
    assert glyph_columns("{", FontMode.K1) == bytes([0x10, 0x7C, 0x82, 0x82, 0x00])


def test_double_scale_doubles_columns():
    glyph = glyph_columns("A", FontMode.K2)
    assert len(glyph) == 20
    assert glyph[0::2] == glyph[1::2]


def test_display_init_ends_with_display_on():
    display, frame, writes = make_display()
    display.init()
    assert all(w[0] == 0x00 for w in writes)
    assert writes[-1] == bytes([0x00, 0xAF])
    assert frame.display_on is True


def test_standby_switches_display_off_and_on():
    display, frame, writes = make_display()
    display.init()
    display.standby(True)
    assert writes[-1] == bytes([0x00, 0xAE])
    assert frame.display_on is False
    display.standby(False)
    assert frame.display_on is True


def test_clear_sends_33_data_chunks():
    display, frame, writes = make_display()
    display.clear()
    data = [w for w in writes if w[0] == 0x40]
    assert len(data) == 33
    assert all(len(w) == 17 and w[1:] == bytes(16) for w in data)


def test_clear_erases_drawing():
    display, frame, _ = make_display()
    display.print_str("ABC", FontMode.K1, 0, 0)
    assert lit_pixels(frame)
    display.clear()
    assert all(not frame.pixel(x, y) for x in range(128) for y in range(32))


def test_underscore_draws_bottom_row():
    display, frame, _ = make_display()
    display.print_char("_", FontMode.K1, 0, 0)
    assert all(frame.pixel(x, 7) for x in range(5))
    assert not any(frame.pixel(x, y) for x in range(5) for y in range(7))


def test_double_scale_bar_covers_two_pages():
    display, frame, _ = make_display()
    display.print_char("|", FontMode.K2, 0, 0)
    assert all(frame.pixel(x, y) for x in (4, 5) for y in range(16))
    assert not any(frame.pixel(0, y) for y in range(16))


def test_set_image_writes_column():
    display, frame, _ = make_display()
    display.set_image(0xFF, 3, 8)
    assert all(frame.pixel(3, y) for y in range(8, 16))
    assert not frame.pixel(3, 7)
    assert not frame.pixel(4, 8)


def test_print_str_advances_by_glyph_width():
    first, frame_a, _ = make_display()
    first.print_str("AB", FontMode.K1, 0, 0)
    second, frame_b, _ = make_display()
    second.print_char("A", FontMode.K1, 0, 0)
    second.print_char("B", FontMode.K1, 6, 0)
    assert lit_pixels(frame_a) == lit_pixels(frame_b)


def test_print_digit_matches_print_str():
    first, frame_a, _ = make_display()
    first.print_digit(7, 2, True, FontMode.K2, 12, 16)
    second, frame_b, _ = make_display()
    second.print_str(digit_to_string(7, True)[3:], FontMode.K2, 12, 16)
    assert lit_pixels(frame_a) == lit_pixels(frame_b)
    assert lit_pixels(frame_a)


def test_print_digit_rejects_long_width():
    display, _, _ = make_display()
    with pytest.raises(ValueError):
        display.print_digit(1, 6, False, FontMode.K1, 0, 0)


def test_frame_buffer_rejects_unknown_control_byte():
    frame = FrameBuffer()
    with pytest.raises(ValueError):
        frame.feed(bytes([0x80, 0x00]))


def test_pixel_out_of_range():
    frame = FrameBuffer()
    with pytest.raises(IndexError):
        frame.pixel(128, 0)