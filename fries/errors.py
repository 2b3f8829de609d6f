"""Exceptions raised by the interpreter and its loaders"""

from enum import Enum
from typing import Optional


class Chip8Error(Exception):
    """Base class for every fatal interpreter condition"""


class ErrorKind(Enum):
    DECODE = "unknown instruction"
    STACK_UNDERFLOW = "return with empty stack"
    STACK_OVERFLOW = "call stack exhausted"


class ExecutionError(Chip8Error):
    """
    Terminal condition raised by ``Interpreter.tick``.

    Carries the kind of failure, the raw 16-bit instruction word and the
    address it was fetched from, so the host can report it and stop.
    """

    def __init__(self, kind: ErrorKind, instruction: int, address: Optional[int] = None):
        self.kind = kind
        self.instruction = instruction
        self.address = address
        where = f" at ${address:03X}" if address is not None else ""
        super().__init__(f"{kind.value}: {instruction:04x}{where}")


class MemoryBoundsError(Chip8Error, IndexError):
    """Memory access outside [0, MEMORY_SIZE)"""

    def __init__(self, start: int, end: int, size: int):
        self.start = start
        self.end = end
        self.size = size
        super().__init__(f"memory range [{start:#05x}, {end:#05x}) outside [0, {size:#05x})")


class RegisterIndexError(Chip8Error, IndexError):
    """Register index outside V0-VF"""

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"register index {index} out of range")


class RomError(Chip8Error):
    """ROM could not be read"""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Error loading ROM {path}: {reason}")


class KeyIndexError(Chip8Error, IndexError):
    """Key code outside the 16-key keypad"""

    def __init__(self, key: int):
        self.key = key
        super().__init__(f"key {key} out of range")


class HostError(Chip8Error):
    """Window or other front end resource could not be created"""
