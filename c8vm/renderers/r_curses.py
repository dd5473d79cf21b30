#!/usr/bin/env python3

"""
Curses Renderer Plugin

Draws the framebuffer in a standard Linux-style TTY Terminal, the Windows
Command Prompt, or PowerShell.  Each pixel is drawn as inverted spaces,
stretched horizontally by the scale so the screen keeps roughly the right
aspect ratio.

The top line of the pad is reserved for the title, which carries the
performance report and the pause state.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import curses
import _curses
from itertools import groupby
from .r_null import Renderer as RendererBase


class Renderer(RendererBase):
    def __init__(self, scale=None, curses_cursor_mode=0, **kwargs):
        if scale is None:
            scale = 2  # Default horizontal stretch if not supplied, or set to default

        self.pixel_char = " " * scale
        self.pad = None
        self.refresh_needed = False
        self.last_screen_height = -1
        self.last_screen_width = -1
        self.cursor_mode = curses_cursor_mode
        self.screen = curses.initscr()

        try:
            curses.curs_set(self.cursor_mode)
        except _curses.error:
            # Terminals whose terminfo entry lacks civis/cvvis for the requested mode (such as "dumb") refuse it, and
            # the cursor stays as it was
            pass

        curses.noecho()
        curses.cbreak()
        super().__init__(scale)

    def shutdown(self):
        if self.pad:
            del self.pad
            self.pad = None

        curses.nocbreak()
        curses.echo()

        if self.cursor_mode != 1:
            try:
                curses.curs_set(1)
            except _curses.error:
                # Same as above, the terminal has no way of changing the cursor
                pass

        curses.endwin()
        super().shutdown()

    def set_resolution(self, width, height):
        # We have to allow one extra character, presumably for the cursor, otherwise we can't write the furthest
        # bottom-right pixel.  One more line is used for the title.
        self.pad = curses.newpad(height + 2, width * self.scale + 1)
        super().set_resolution(width, height)

    def render(self, framebuffer):
        # Terminal writes are slow, so draw each run of same-coloured pixels with a single call
        for y, row in enumerate(framebuffer.pixels):
            x = 0

            for pixel, run in groupby(row):
                run_length = len(list(run))
                curses_colour = curses.A_REVERSE if pixel else curses.A_NORMAL
                self.pad.addstr(y + 1, x * self.scale, self.pixel_char * run_length, curses_colour)
                x += run_length

        self.refresh_needed = True
        self.refresh_display(True)

    def refresh_display(self, content_changed=False):
        screen_height, screen_width = self.screen.getmaxyx()  # This doesn't seem to ever change/work on Windows?!

        if screen_height == self.last_screen_height and screen_width == self.last_screen_width:
            # Fast delta update
            if self.refresh_needed and self.pad:
                self.pad.refresh(0, 0, 0, 0, screen_height - 1, screen_width - 1)
                self.refresh_needed = False
        else:
            # Screen resolution changed, redraw everything
            self.screen.clear()

            if hasattr(curses, "resizeterm"):
                # This doesn't work on Windows
                curses.resizeterm(screen_height, screen_width)

            self.screen.refresh()
            self.last_screen_height = screen_height
            self.last_screen_width = screen_width
            self.refresh_needed = True

    def set_title(self, title):
        if self.pad:
            line_width = self.width * self.scale
            self.pad.addstr(0, 0, title[:line_width].ljust(line_width), curses.A_REVERSE)
            self.refresh_needed = True

        super().set_title(title)

    # No Superclass for this Curses-specific method

    def get_curses_screen(self):
        return self.screen
