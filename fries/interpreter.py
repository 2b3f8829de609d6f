"""CHIP-8 CPU core: fetch, decode and execute"""

import logging
import random
from dataclasses import dataclass
from typing import Iterator, List, Optional, Union

from .constants import FONT, NUM_KEYS, PROGRAM_START, STACK_SIZE
from .display import Display, Pixel
from .errors import ErrorKind, ExecutionError, KeyIndexError
from .memory import Memory, Rom
from .registers import Registers

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# RUN STATE
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Running:
    """Instructions execute normally"""


@dataclass(frozen=True)
class WaitingForKey:
    """FX0A is pending; the next key release is stored in ``register``"""
    register: int


RUNNING = Running()

State = Union[Running, WaitingForKey]


# ═══════════════════════════════════════════════════════════════════════════════
# INTERPRETER
# ═══════════════════════════════════════════════════════════════════════════════

class Interpreter:
    """
    The virtual machine.

    The host drives it: ``run``/``tick`` for instructions, ``on_frame_tick``
    once per frame for the timers, ``key_down``/``key_up`` for input and
    ``pixels`` (or ``display``) for rendering.
    """

    def __init__(self, rom: Rom, rng: Optional[random.Random] = None, font: bytes = FONT):
        self.memory = Memory()
        self.memory.load_rom(rom)
        self.memory.load_font(font)

        self.registers = Registers()
        self.display = Display()
        self.rng = rng if rng is not None else random.Random()

        self.pc = PROGRAM_START
        self.i = 0                      # Index register
        self.stack: List[int] = []      # Return addresses
        self.delay_timer = 0
        self.sound_timer = 0
        self.keys = 0                   # Bit k set while key k is held
        self.state: State = RUNNING

    # ─── Host hooks ───

    @property
    def waiting(self) -> bool:
        return isinstance(self.state, WaitingForKey)

    @property
    def sound_active(self) -> bool:
        return self.sound_timer > 0

    def run(self, cycles: int) -> int:
        """Execute up to ``cycles`` instructions, stopping early on a key wait"""
        executed = 0
        while executed < cycles and not self.waiting:
            self.tick()
            executed += 1
        return executed

    def on_frame_tick(self):
        """Decrement timers (call at 60Hz)"""
        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1

    def pixels(self) -> Iterator[Pixel]:
        return self.display.pixels()

    def is_key_pressed(self, key: int) -> bool:
        self._check_key(key)
        return (self.keys >> key) & 1 == 1

    def key_down(self, key: int):
        self._check_key(key)
        self.keys |= 1 << key

    def key_up(self, key: int):
        """Release ``key``; completes a pending FX0A with the released key"""
        self._check_key(key)
        self.keys &= ~(1 << key)
        if isinstance(self.state, WaitingForKey):
            logger.debug("Key %x released, storing in V%X and resuming", key, self.state.register)
            self.registers.set(self.state.register, key)
            self.state = RUNNING

    @staticmethod
    def _check_key(key: int):
        if not 0 <= key < NUM_KEYS:
            raise KeyIndexError(key)

    # ─── Fetch / decode / execute ───

    def tick(self):
        """Execute a single instruction; does nothing while waiting for a key"""
        if self.waiting:
            return

        address = self.pc
        hi, lo = self.memory.read(address), self.memory.read(address + 1)
        ins = (hi << 8) | lo
        op = hi >> 4
        x = hi & 0xF
        y = lo >> 4
        n = lo & 0xF
        nn = lo
        nnn = ins & 0xFFF

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("$%03X: %04x  %s", address, ins, self.registers)

        self.pc = (self.pc + 2) & 0xFFFF

        if ins == 0x00E0:
            self.display.clear()
            return

        if ins == 0x00EE:
            if not self.stack:
                raise ExecutionError(ErrorKind.STACK_UNDERFLOW, ins, address)
            self.pc = self.stack.pop()
            return

        V = self.registers

        # ─── 1NNN: JP addr ───
        if op == 0x1:
            self.pc = nnn

        # ─── 2NNN: CALL addr ───
        elif op == 0x2:
            if len(self.stack) >= STACK_SIZE:
                raise ExecutionError(ErrorKind.STACK_OVERFLOW, ins, address)
            self.stack.append(self.pc)
            self.pc = nnn

        # ─── 3XNN: SE Vx, byte ───
        elif op == 0x3:
            if V.get(x) == nn:
                self._skip()

        # ─── 4XNN: SNE Vx, byte ───
        elif op == 0x4:
            if V.get(x) != nn:
                self._skip()

        # ─── 5XY0: SE Vx, Vy ───
        elif op == 0x5:
            if V.get(x) == V.get(y):
                self._skip()

        # ─── 6XNN: LD Vx, byte ───
        elif op == 0x6:
            V.set(x, nn)

        # ─── 7XNN: ADD Vx, byte (no carry) ───
        elif op == 0x7:
            V.set(x, V.get(x) + nn)

        # ─── 8XYN: ALU operations ───
        elif op == 0x8:
            self._math_op(x, y, n, ins, address)

        # ─── 9XY0: SNE Vx, Vy ───
        elif op == 0x9:
            if V.get(x) != V.get(y):
                self._skip()

        # ─── ANNN: LD I, addr ───
        elif op == 0xA:
            self.i = nnn

        # ─── BNNN: JP V0, addr ───
        elif op == 0xB:
            self.pc = nnn + V.get(0)

        # ─── CXNN: RND Vx, byte ───
        elif op == 0xC:
            V.set(x, self.rng.randrange(256) & nn)

        # ─── DXYN: DRW Vx, Vy, nibble ───
        elif op == 0xD:
            sprite = self.memory.slice(self.i, self.i + n)
            collision = self.display.draw(sprite, V.get(x), V.get(y))
            V.set_flag(1 if collision else 0)

        # ─── EX9E: SKP Vx ───
        elif op == 0xE and nn == 0x9E:
            if self.is_key_pressed(V.get(x)):
                self._skip()

        # ─── EXA1: SKNP Vx ───
        elif op == 0xE and nn == 0xA1:
            if not self.is_key_pressed(V.get(x)):
                self._skip()

        # ─── FXNN: Misc operations ───
        elif op == 0xF:
            self._misc(x, nn, ins, address)

        else:
            raise ExecutionError(ErrorKind.DECODE, ins, address)

    def _skip(self):
        self.pc = (self.pc + 2) & 0xFFFF

    def _math_op(self, x: int, y: int, n: int, ins: int, address: int):
        V = self.registers
        vx, vy = V.get(x), V.get(y)

        if n == 0x0:
            # 8XY0: LD Vx, Vy
            V.set(x, vy)

        elif n == 0x1:
            # 8XY1: OR Vx, Vy
            V.set(x, vx | vy)

        elif n == 0x2:
            # 8XY2: AND Vx, Vy
            V.set(x, vx & vy)

        elif n == 0x3:
            # 8XY3: XOR Vx, Vy
            V.set(x, vx ^ vy)

        elif n == 0x4:
            # 8XY4: ADD Vx, Vy (VF = carry)
            res = (vx + vy) & 0xFF
            V.set(x, res)
            V.set_flag(1 if res < vy else 0)

        elif n == 0x5:
            # 8XY5: SUB Vx, Vy (VF = borrow)
            V.set_flag(1 if vy > vx else 0)
            V.set(x, vx - vy)

        elif n == 0x6:
            # 8XY6: SHR Vx, Vy
            # Shifts read VY, following Octo rather than the SCHIP behaviour.
            V.set_flag(vy & 0x1)
            V.set(x, vy >> 1)

        elif n == 0x7:
            # 8XY7: SUBN Vx, Vy (VF = borrow)
            V.set_flag(1 if vx > vy else 0)
            V.set(x, vy - vx)

        elif n == 0xE:
            # 8XYE: SHL Vx, Vy
            V.set_flag((vy >> 7) & 0x1)
            V.set(x, vy << 1)

        else:
            raise ExecutionError(ErrorKind.DECODE, ins, address)

    def _misc(self, x: int, nn: int, ins: int, address: int):
        V = self.registers

        if nn == 0x07:
            # FX07: LD Vx, DT
            V.set(x, self.delay_timer)

        elif nn == 0x0A:
            # FX0A: LD Vx, K (completes on key release)
            logger.debug("Waiting for key release into V%X", x)
            self.state = WaitingForKey(x)

        elif nn == 0x15:
            # FX15: LD DT, Vx
            self.delay_timer = V.get(x)

        elif nn == 0x18:
            # FX18: LD ST, Vx
            self.sound_timer = V.get(x)

        elif nn == 0x1E:
            # FX1E: ADD I, Vx
            self.i = (self.i + V.get(x)) & 0xFFFF

        elif nn == 0x29:
            # FX29: LD F, Vx
            self.i = self.memory.font_offset(V.get(x))

        elif nn == 0x33:
            # FX33: LD B, Vx
            value = V.get(x)
            dst = self.memory.mut_slice(self.i, self.i + 3)
            dst[0] = value // 100
            dst[1] = (value // 10) % 10
            dst[2] = value % 10

        elif nn == 0x55:
            # FX55: LD [I], Vx (store V0-Vx, I advances)
            new_i = self.i + x + 1
            self.memory.mut_slice(self.i, new_i)[:] = V.slice(0, x + 1)
            self.i = new_i

        elif nn == 0x65:
            # FX65: LD Vx, [I] (load V0-Vx, I advances)
            new_i = self.i + x + 1
            V.mut_slice(0, x + 1)[:] = self.memory.slice(self.i, new_i)
            self.i = new_i

        else:
            raise ExecutionError(ErrorKind.DECODE, ins, address)
