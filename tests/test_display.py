import numpy as np
import pytest

from fries import Display, Pixel
from fries.constants import COLS, ROWS


def on_pixels(display):
    return {(i // COLS, i % COLS) for i, p in enumerate(display.pixels()) if p.is_on}


def test_new_display_is_blank():
    d = Display()
    pixels = list(d.pixels())
    assert len(pixels) == ROWS * COLS
    assert all(p is Pixel.OFF for p in pixels)


def test_pixels_restart_on_every_call():
    d = Display()
    d.draw([0x80], 0, 0)
    assert next(d.pixels()) is Pixel.ON
    assert next(d.pixels()) is Pixel.ON


def test_full_byte_at_origin():
    d = Display()
    assert d.draw([0xFF], 0, 0) is False
    assert on_pixels(d) == {(0, c) for c in range(8)}
    assert d.rows[0] == 0xFF << 56


def test_xor_twice_restores_and_reports_collision():
    d = Display()
    d.draw([0x3C], 5, 7)
    before = d.rows
    assert d.draw([0x81, 0x42], 10, 3) is False
    assert d.draw([0x81, 0x42], 10, 3) is True
    assert d.rows == before


def test_partial_overlap_collides():
    d = Display()
    d.draw([0xF0], 0, 0)
    assert d.draw([0x18], 0, 0) is True
    assert on_pixels(d) == {(0, 0), (0, 1), (0, 2), (0, 4)}


def test_wraps_horizontally():
    d = Display()
    d.draw([0xFF], COLS - 1, 0)
    assert on_pixels(d) == {(0, COLS - 1)} | {(0, c) for c in range(7)}


def test_x_is_taken_modulo_width():
    a, b = Display(), Display()
    a.draw([0xA5], 3, 2)
    b.draw([0xA5], COLS + 3, ROWS + 2)
    assert a == b


def test_wraps_vertically():
    d = Display()
    d.draw([0x80, 0x80], 0, ROWS - 1)
    assert on_pixels(d) == {(ROWS - 1, 0), (0, 0)}


def test_wrapped_collision():
    d = Display()
    d.draw([0x02], 0, 0)
    assert d.draw([0xFF], COLS - 1, 0) is True
    assert (0, 6) not in on_pixels(d)


def test_clear():
    d = Display()
    d.draw([0xFF] * 15, 20, 10)
    d.clear()
    assert on_pixels(d) == set()


def test_to_array_matches_pixels():
    d = Display()
    d.draw([0xF0, 0x0F], 60, 31)
    arr = d.to_array()
    assert arr.shape == (ROWS, COLS)
    assert arr.dtype == np.bool_
    expected = np.array([p.is_on for p in d.pixels()]).reshape(ROWS, COLS)
    assert np.array_equal(arr, expected)
    assert arr[31, 60] and arr[31, 63] and not arr[31, 0]
    assert arr[0, 0] and arr[0, 3] and not arr[0, 63]


def test_sprite_taller_than_fifteen_rows_is_rejected():
    d = Display()
    with pytest.raises(AssertionError):
        d.draw([0xFF] * 16, 0, 0)
    d.draw([0xFF] * 15, 0, 0)
