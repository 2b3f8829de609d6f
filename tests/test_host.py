import numpy as np
import pygame
import pytest

from fries import HostError
from fries.constants import COLS, ROWS
from fries.host import KEY_MAP, Emulator, FrameRenderer, HostConfig


def key_event(kind, key):
    return pygame.event.Event(kind, key=key, mod=0)


def test_keymap_covers_the_keypad():
    assert sorted(KEY_MAP.values()) == list(range(16))
    assert KEY_MAP[pygame.K_x] == 0x0
    assert KEY_MAP[pygame.K_v] == 0xF


def test_key_events_reach_the_interpreter(make_vm):
    emu = Emulator(make_vm())
    emu.handle_event(key_event(pygame.KEYDOWN, pygame.K_w))
    assert emu.vm.is_key_pressed(0x5)
    emu.handle_event(key_event(pygame.KEYUP, pygame.K_w))
    assert not emu.vm.is_key_pressed(0x5)
    emu.handle_event(key_event(pygame.KEYDOWN, pygame.K_m))
    assert emu.vm.keys == 0


def test_release_resolves_key_wait(make_vm):
    emu = Emulator(make_vm(0xF50A))
    emu.step_frame()
    assert emu.vm.waiting
    emu.handle_event(key_event(pygame.KEYDOWN, pygame.K_f))
    emu.handle_event(key_event(pygame.KEYUP, pygame.K_f))
    assert not emu.vm.waiting
    assert emu.vm.registers.get(5) == 0xE


def test_quit_and_escape_stop_the_loop(make_vm):
    emu = Emulator(make_vm())
    emu.handle_event(pygame.event.Event(pygame.QUIT))
    assert not emu.running
    emu = Emulator(make_vm())
    emu.handle_event(key_event(pygame.KEYDOWN, pygame.K_ESCAPE))
    assert not emu.running


def test_step_frame_runs_a_batch_then_ticks_timers(make_vm):
    # 200: LD V0, 09 / 202: LD DT, V0 / 204: ADD V1, 01 / 206: JP 204
    emu = Emulator(make_vm(0x6009, 0xF015, 0x7101, 0x1204), HostConfig(cycles_per_frame=10))
    assert emu.step_frame() == 10
    assert emu.vm.delay_timer == 8
    assert emu.vm.registers.get(1) == 4


def test_step_frame_stops_early_on_key_wait(make_vm):
    emu = Emulator(make_vm(0x6001, 0xF00A), HostConfig(cycles_per_frame=50))
    assert emu.step_frame() == 2
    assert emu.step_frame() == 0


def test_colorize_layout():
    renderer = FrameRenderer(scale=2, fg_color=(1, 2, 3), bg_color=(9, 9, 9))
    fb = np.zeros((ROWS, COLS), dtype=bool)
    fb[1, 5] = True
    rgb = renderer.colorize(fb)
    assert rgb.shape == (COLS, ROWS, 3)
    assert rgb.dtype == np.uint8
    assert tuple(rgb[5, 1]) == (1, 2, 3)
    assert tuple(rgb[0, 0]) == (9, 9, 9)


def test_render_scales_surface(make_vm):
    vm = make_vm()
    vm.display.draw([0x80], 0, 0)
    renderer = FrameRenderer(scale=3)
    surface = renderer.render(vm.display.to_array())
    assert surface.get_size() == (COLS * 3, ROWS * 3)


def test_open_wraps_sdl_failures(make_vm, monkeypatch):
    def no_display(size):
        raise pygame.error("nosuchdriver not available")

    monkeypatch.setattr(pygame.display, "set_mode", no_display)
    emu = Emulator(make_vm())
    with pytest.raises(HostError) as info:
        emu.open()
    assert "nosuchdriver" in str(info.value)
    pygame.quit()
