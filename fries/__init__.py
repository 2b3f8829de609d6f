"""fries - a CHIP-8 interpreter"""

from .display import Display, Pixel
from .errors import (Chip8Error, ErrorKind, ExecutionError, MemoryBoundsError,
                     HostError, KeyIndexError, RegisterIndexError, RomError)
from .interpreter import RUNNING, Interpreter, Running, WaitingForKey
from .memory import Memory, Rom
from .registers import Registers

__version__ = "0.1.0"

__all__ = [
    "Chip8Error", "Display", "ErrorKind", "ExecutionError", "HostError",
    "Interpreter", "KeyIndexError",
    "Memory", "MemoryBoundsError", "Pixel", "RegisterIndexError", "Registers",
    "Rom", "RomError", "RUNNING", "Running", "WaitingForKey",
]
