import os
import random

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from fries import Interpreter, Rom


def assemble(*words: int) -> bytes:
    """Pack 16-bit instruction words big-endian"""
    return b"".join(w.to_bytes(2, "big") for w in words)


@pytest.fixture
def make_vm():
    """Build an interpreter running the given instruction words"""
    def _make(*words: int, seed: int = 0) -> Interpreter:
        return Interpreter(Rom.from_bytes(assemble(*words)), random.Random(seed))
    return _make
