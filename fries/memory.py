"""Flat 4KB address space holding the font table and the loaded program"""

import logging
from pathlib import Path
from typing import Union

from .constants import (FONT_BASE, FONT_SPRITE_SIZE, FONT_SPRITES, MEMORY_SIZE,
                        PROGRAM_START, ROM_SIZE)
from .errors import MemoryBoundsError, RomError

logger = logging.getLogger(__name__)


class Rom:
    """Immutable program image, always exactly ROM_SIZE bytes"""

    __slots__ = ('_data',)

    def __init__(self, data: bytes):
        if len(data) != ROM_SIZE:
            raise ValueError(f"ROM image must be {ROM_SIZE} bytes, got {len(data)}")
        self._data = bytes(data)

    @classmethod
    def from_bytes(cls, data: bytes) -> 'Rom':
        """Zero-fill or truncate raw program bytes to the ROM capacity"""
        data = bytes(data[:ROM_SIZE])
        return cls(data + bytes(ROM_SIZE - len(data)))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'Rom':
        """Read a ROM file; trailing capacity beyond the program is zero-filled"""
        try:
            with open(path, 'rb') as f:
                data = f.read(ROM_SIZE)
        except OSError as e:
            raise RomError(str(path), e.strerror or str(e)) from e
        logger.info("Loaded %d byte ROM from %s", len(data), path)
        return cls.from_bytes(data)

    @property
    def data(self) -> bytes:
        return self._data

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other):
        if not isinstance(other, Rom):
            return NotImplemented
        return self._data == other._data

    def __hash__(self):
        return hash(self._data)


class Memory:
    """Byte-addressable RAM with bounds-checked access"""

    def __init__(self, size: int = MEMORY_SIZE):
        self.size = size
        self._mem = bytearray(size)

    def load_rom(self, rom: Rom):
        """Copy the program to PROGRAM_START"""
        self.mut_slice(PROGRAM_START, PROGRAM_START + len(rom))[:] = rom.data

    def load_font(self, sprites: bytes):
        """Install the hex digit glyph table at FONT_BASE"""
        expected = FONT_SPRITES * FONT_SPRITE_SIZE
        if len(sprites) != expected:
            raise ValueError(f"font table must be {expected} bytes, got {len(sprites)}")
        self.mut_slice(FONT_BASE, FONT_BASE + expected)[:] = bytes(sprites)

    def _check(self, start: int, end: int):
        if start < 0 or start > end or end > self.size:
            raise MemoryBoundsError(start, end, self.size)

    def read(self, addr: int) -> int:
        self._check(addr, addr + 1)
        return self._mem[addr]

    def slice(self, start: int, end: int) -> bytes:
        """Copy of the bytes in [start, end)"""
        self._check(start, end)
        return bytes(self._mem[start:end])

    def mut_slice(self, start: int, end: int) -> memoryview:
        """Writable view of [start, end); writes land in memory directly"""
        self._check(start, end)
        return memoryview(self._mem)[start:end]

    @staticmethod
    def font_offset(digit: int) -> int:
        """Address of the glyph for the low nibble of ``digit``"""
        return FONT_BASE + (digit & 0xF) * FONT_SPRITE_SIZE
