"""Command line entry point"""

import argparse
import logging
import random
import sys
from typing import List, Optional

from .constants import CYCLES_PER_FRAME, FRAME_RATE, SCALE
from .errors import Chip8Error, HostError
from .interpreter import Interpreter
from .memory import Rom

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fries", description="CHIP-8 interpreter")
    parser.add_argument("rom", help="path to a CHIP-8 program")
    parser.add_argument("--cycles", type=int, default=CYCLES_PER_FRAME,
                        help="instructions per frame (default: %(default)s)")
    parser.add_argument("--fps", type=int, default=FRAME_RATE,
                        help="frames per second (default: %(default)s)")
    parser.add_argument("--scale", type=int, default=SCALE,
                        help="window pixels per CHIP-8 pixel (default: %(default)s)")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for the CXNN random source")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="trace every instruction")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="[%(levelname)s]:  %(message)s", stream=sys.stdout)

    try:
        rom = Rom.from_file(args.rom)
    except Chip8Error as e:
        logger.error("%s", e)
        return 1

    # Imported late so a bad ROM path is reported without starting SDL
    from .host import Emulator, HostConfig

    config = HostConfig(cycles_per_frame=args.cycles, frame_rate=args.fps,
                        scale=args.scale, seed=args.seed)
    vm = Interpreter(rom, random.Random(config.seed))
    emu = Emulator(vm, config)
    try:
        emu.run()
    except HostError as e:
        logger.error("%s", e)
        return 1
    except Chip8Error as e:
        logger.error("Execution stopped: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
