#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "C8VM Emulator"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory layout
MEM_SIZE = 0x1000
FONT_LOC = 0x000
PROGRAM_LOC = 0x200
STACK_SIZE = 16

# Display geometry
VID_WIDTH = 64
VID_HEIGHT = 32
MAX_SPRITE_HEIGHT = 15

# Clock speeds are in instructions per second.  Timers always run at 60Hz.
DEFAULT_CLOCK_SPEED = 500
MIN_CLOCK_SPEED = 50
MAX_CLOCK_SPEED = 2000
CLOCK_SPEED_STEP = 50
TIMER_FREQ = 60

# Built-in hex digit sprites 0-F, 5 bytes each
FONT = bytes((
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
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
))
FONT_GLYPH_SIZE = 5

# Default mappings for keys 0-F, later populated into a dictionary.  Note that the keyscans (on a UK QWERTY keyboard)
# and ASCII characters for these are the same code
DEFAULT_KEYMAP = "120,49,50,51,113,119,101,97,115,100,122,99,52,114,102,118"

# Host commands produced by input plugins, on top of the 16 keypad keys
CMD_QUIT = "quit"
CMD_PAUSE = "pause"
CMD_RESTART = "restart"
CMD_SPEED_UP = "speed_up"
CMD_SLOW_DOWN = "slow_down"

# Host command keys.  PyGame keycodes and terminal characters agree for all of these.
HOST_KEYMAP = {
    27: CMD_QUIT,       # ESC
    32: CMD_PAUSE,      # Space
    10: CMD_RESTART,    # Enter (terminal)
    13: CMD_RESTART,    # Return (PyGame)
    45: CMD_SLOW_DOWN,  # -
    61: CMD_SPEED_UP    # =
}

# Startup
SUPPORTED_RENDERERS = ["pygame", "curses", "null"]
