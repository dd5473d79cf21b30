#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here, and are only drawn to the actual display (the host
rendering system) at 60Hz, when the host asks for them.  The host reads the
grid of booleans directly and never writes to it.

Unlike other computers, programs for this system cannot write directly into
video RAM.  Instead, sprites are drawn to the screen using an XOR method, and
every pixel lying outside the screen wraps around to the opposite edge.

Collisions (where any pixel was set, but was unset by an XOR), are reported
back to the caller so the CPU can set the Vf flag.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import VID_WIDTH, VID_HEIGHT, MAX_SPRITE_HEIGHT


class FramebufferError(Exception):
    pass


class Framebuffer:
    def __init__(self, vid_width=VID_WIDTH, vid_height=VID_HEIGHT):
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.pixels = [[False] * vid_width for _ in range(vid_height)]
        self.changed = True

    def clear(self):
        for row in self.pixels:
            row[:] = [False] * self.vid_width

        self.changed = True

    def xor_pixel(self, x, y):
        # Returns whether a set pixel was switched off
        x %= self.vid_width
        y %= self.vid_height
        row = self.pixels[y]
        collision = row[x]
        row[x] = not collision
        return collision

    def draw(self, x, y, sprite):
        # Each byte of the sprite is one 8-pixel row, most-significant bit on the left
        if len(sprite) > MAX_SPRITE_HEIGHT:
            raise FramebufferError(
                "Sprite has {} rows, but the maximum is {}".format(len(sprite), MAX_SPRITE_HEIGHT)
            )

        collided = False

        for row_num, spr_data in enumerate(sprite):
            for col_num in range(8):
                if spr_data & (0x80 >> col_num):
                    # Don't stop drawing.  Set the flag, and never unset it for this sprite.
                    if self.xor_pixel(x + col_num, y + row_num):
                        collided = True

        if sprite:
            self.changed = True

        return collided

    def get_pixel(self, x, y):
        return self.pixels[y][x]

    def get_vid_size(self):
        return self.vid_width, self.vid_height

    def take_changed(self):
        # Lets the host skip redrawing frames where nothing was drawn
        changed = self.changed
        self.changed = False
        return changed
