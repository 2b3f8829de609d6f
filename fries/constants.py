"""Machine constants and host defaults"""

# ═══════════════════════════════════════════════════════════════════════════════
# MEMORY
# ═══════════════════════════════════════════════════════════════════════════════

MEMORY_SIZE = 4096                      # 4KB RAM
PROGRAM_START = 0x200                   # Programs load at 0x200
ROM_SIZE = MEMORY_SIZE - PROGRAM_START  # Largest program that fits

FONT_BASE = 0x000                       # Glyph table lives at the bottom
FONT_SPRITES = 16                       # One glyph per hex digit
FONT_SPRITE_SIZE = 5                    # 8x5 pixels, one byte per row

# ═══════════════════════════════════════════════════════════════════════════════
# CPU
# ═══════════════════════════════════════════════════════════════════════════════

NUM_REGISTERS = 16                      # V0-VF
VF = 0xF                                # Carry / borrow / collision flag
STACK_SIZE = 16                         # 16-level stack
NUM_KEYS = 16                           # 16 hex keys

# ═══════════════════════════════════════════════════════════════════════════════
# DISPLAY
# ═══════════════════════════════════════════════════════════════════════════════

ROWS, COLS = 32, 64                     # CHIP-8 native resolution
ROW_MASK = (1 << COLS) - 1
MAX_SPRITE_HEIGHT = 15

# ═══════════════════════════════════════════════════════════════════════════════
# HOST DEFAULTS
# ═══════════════════════════════════════════════════════════════════════════════

SCALE = 10                              # Window pixels per CHIP-8 pixel
FRAME_RATE = 60                         # Frames (and timer ticks) per second
CYCLES_PER_FRAME = 100                  # Instructions per frame

COLORS = {
    'on': (0xff, 0xcc, 0x00),
    'off': (0x99, 0x66, 0x00),
}

# CHIP-8 Font (4x5 pixels, stored as 5 bytes each)
FONT = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])
