"""pygame front end: window, keyboard and the fixed-rate frame loop"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

import numpy as np
import pygame

from .constants import COLORS, COLS, CYCLES_PER_FRAME, FRAME_RATE, ROWS, SCALE
from .errors import HostError
from .interpreter import Interpreter

logger = logging.getLogger(__name__)

# Keyboard mapping (QWERTY -> CHIP-8 hex keypad)
# CHIP-8 Keypad:    Keyboard:
# 1 2 3 C          1 2 3 4
# 4 5 6 D          Q W E R
# 7 8 9 E          A S D F
# A 0 B F          Z X C V
KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}


@dataclass
class HostConfig:
    """Front end settings, filled from the command line"""
    cycles_per_frame: int = CYCLES_PER_FRAME
    frame_rate: int = FRAME_RATE
    scale: int = SCALE
    seed: Optional[int] = None
    colors: Dict[str, Tuple[int, int, int]] = field(default_factory=lambda: dict(COLORS))


class FrameRenderer:
    """Turns the boolean framebuffer into a scaled pygame surface"""

    def __init__(self, scale: int = SCALE,
                 fg_color: Tuple[int, int, int] = COLORS['on'],
                 bg_color: Tuple[int, int, int] = COLORS['off']):
        self.scale = scale
        self.fg_color = fg_color
        self.bg_color = bg_color
        self.size = (COLS * scale, ROWS * scale)

    def colorize(self, framebuffer: np.ndarray) -> np.ndarray:
        """(ROWS, COLS) bool -> (COLS, ROWS, 3) uint8, the layout surfarray expects"""
        rgb = np.where(framebuffer[..., None],
                       np.array(self.fg_color, dtype=np.uint8),
                       np.array(self.bg_color, dtype=np.uint8))
        return np.ascontiguousarray(rgb.transpose(1, 0, 2)).astype(np.uint8)

    def render(self, framebuffer: np.ndarray) -> pygame.Surface:
        small = pygame.surfarray.make_surface(self.colorize(framebuffer))
        return pygame.transform.scale(small, self.size)


class Emulator:
    """Main loop: a batch of instructions, the timers, a redraw, then input"""

    def __init__(self, vm: Interpreter, config: Optional[HostConfig] = None):
        self.vm = vm
        self.config = config or HostConfig()
        self.renderer = FrameRenderer(self.config.scale,
                                      self.config.colors['on'],
                                      self.config.colors['off'])
        self.running = True
        self.screen: Optional[pygame.Surface] = None
        self.clock: Optional[pygame.time.Clock] = None

    def handle_event(self, event: pygame.event.Event):
        """Process one input event"""
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.running = False
            elif event.key in KEY_MAP:
                self.vm.key_down(KEY_MAP[event.key])
        elif event.type == pygame.KEYUP:
            if event.key in KEY_MAP:
                self.vm.key_up(KEY_MAP[event.key])

    def step_frame(self) -> int:
        """Run one frame worth of instructions, then tick the timers"""
        executed = self.vm.run(self.config.cycles_per_frame)
        self.vm.on_frame_tick()
        return executed

    def render(self):
        if self.screen is None:
            return
        self.screen.blit(self.renderer.render(self.vm.display.to_array()), (0, 0))
        pygame.display.flip()

    def open(self):
        """Create the window; SDL failures surface as HostError"""
        try:
            pygame.init()
            pygame.display.set_caption("CHIP-8")
            self.screen = pygame.display.set_mode(self.renderer.size)
        except pygame.error as e:
            raise HostError(f"Could not create window: {e}") from e
        self.clock = pygame.time.Clock()

    def run(self):
        """Frame loop; returns when the window is closed or ESC is pressed"""
        try:
            self.open()
            logger.info("Running at %d cycles/frame, %d fps",
                        self.config.cycles_per_frame, self.config.frame_rate)
            while self.running:
                self.step_frame()
                self.render()
                for event in pygame.event.get():
                    self.handle_event(event)
                self.clock.tick(self.config.frame_rate)
        finally:
            pygame.quit()
