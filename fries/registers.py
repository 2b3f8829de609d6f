"""V0-VF general purpose registers"""

from .constants import NUM_REGISTERS, VF
from .errors import RegisterIndexError


class Registers:
    """
    Sixteen 8-bit registers.

    VF is an ordinary slot that instructions also overwrite with carry,
    borrow, shifted-out bit or sprite collision.
    """

    __slots__ = ('_regs',)

    def __init__(self):
        self._regs = bytearray(NUM_REGISTERS)

    def _check(self, i: int):
        if not 0 <= i < NUM_REGISTERS:
            raise RegisterIndexError(i)

    def get(self, i: int) -> int:
        self._check(i)
        return self._regs[i]

    def set(self, i: int, value: int):
        """Store ``value`` wrapped to 8 bits"""
        self._check(i)
        self._regs[i] = value & 0xFF

    def set_flag(self, value: int):
        self._regs[VF] = value & 0xFF

    def slice(self, start: int, end: int) -> bytes:
        self._check(start)
        self._check(end - 1)
        return bytes(self._regs[start:end])

    def mut_slice(self, start: int, end: int) -> memoryview:
        self._check(start)
        self._check(end - 1)
        return memoryview(self._regs)[start:end]

    def __getitem__(self, i: int) -> int:
        return self.get(i)

    def __setitem__(self, i: int, value: int):
        self.set(i, value)

    def __len__(self) -> int:
        return NUM_REGISTERS

    def __iter__(self):
        return iter(self._regs)

    def __eq__(self, other):
        if not isinstance(other, Registers):
            return NotImplemented
        return self._regs == other._regs

    __hash__ = None

    def __str__(self):
        return " ".join(f"{v:02x}" for v in self._regs)

    __repr__ = __str__
