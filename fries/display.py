"""64x32 monochrome framebuffer"""

from enum import Enum
from typing import Iterator, Sequence, Tuple

import numpy as np

from .constants import COLS, MAX_SPRITE_HEIGHT, ROW_MASK, ROWS


class Pixel(Enum):
    OFF = 0
    ON = 1

    @classmethod
    def from_bool(cls, on: bool) -> 'Pixel':
        return cls.ON if on else cls.OFF

    @property
    def is_on(self) -> bool:
        return self is Pixel.ON

    @property
    def is_off(self) -> bool:
        return self is Pixel.OFF


class Display:
    """
    Framebuffer stored as one 64-bit word per row.

    Bit 63 of a row is its leftmost pixel. Sprites are XOR-blitted with
    wraparound on both axes, so drawing the same sprite twice at the same
    place restores the previous picture.
    """

    def __init__(self):
        self._rows = np.zeros(ROWS, dtype=np.uint64)

    def clear(self):
        self._rows.fill(0)

    def draw(self, sprite: Sequence[int], x: int, y: int) -> bool:
        """
        XOR ``sprite`` onto the screen with its top-left corner at (x, y).

        Args:
            sprite: one byte per row, MSB is the leftmost pixel
            x, y: origin, wrapped to the screen size

        Returns:
            True if any pixel that was on got turned off
        """
        assert len(sprite) <= MAX_SPRITE_HEIGHT, "sprite too tall"

        x_shift = x % COLS
        collision = False
        for r, byte in enumerate(sprite):
            row_idx = (y + r) % ROWS
            mask = (byte & 0xFF) << (COLS - 8)
            bits = mask >> x_shift
            if x_shift:
                # Overflow past column 63 reappears at column 0
                bits |= (mask << (COLS - x_shift)) & ROW_MASK
            row = int(self._rows[row_idx])
            if row & bits:
                collision = True
            self._rows[row_idx] = row ^ bits
        return collision

    def pixels(self) -> Iterator[Pixel]:
        """Row-major pixels, leftmost first; a fresh iterator on every call"""
        for row in self._rows:
            row = int(row)
            for bit in range(COLS - 1, -1, -1):
                yield Pixel.from_bool((row >> bit) & 1 == 1)

    def to_array(self) -> np.ndarray:
        """(ROWS, COLS) boolean copy of the framebuffer"""
        as_bytes = self._rows.astype('>u8').view(np.uint8).reshape(ROWS, COLS // 8)
        return np.unpackbits(as_bytes, axis=1).astype(bool)

    @property
    def rows(self) -> Tuple[int, ...]:
        return tuple(int(r) for r in self._rows)

    def __eq__(self, other):
        if not isinstance(other, Display):
            return NotImplemented
        return bool(np.array_equal(self._rows, other._rows))

    __hash__ = None

    def __str__(self):
        return "\n".join(f"{r:064b}".replace('0', '.').replace('1', '#') for r in self.rows)
