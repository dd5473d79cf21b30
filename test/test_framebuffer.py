#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from c8vm.framebuffer import Framebuffer, FramebufferError


class TestFrameBuffer(unittest.TestCase):
    def setUp(self):
        self.framebuffer = Framebuffer()
        self.framebuffer_small = Framebuffer(4, 5)

    def _set_pixels(self, framebuffer):
        return [(x, y) for y, row in enumerate(framebuffer.pixels) for x, pixel in enumerate(row) if pixel]

    def test_framebuffer_init(self):
        self.assertEqual((64, 32), self.framebuffer.get_vid_size())
        self.assertEqual(32, len(self.framebuffer.pixels))
        self.assertTrue(all(len(row) == 64 for row in self.framebuffer.pixels))
        self.assertEqual([], self._set_pixels(self.framebuffer))

    def test_framebuffer_xor_pixel(self):
        fb = self.framebuffer_small
        self.assertFalse(fb.xor_pixel(0, 0))
        self.assertTrue(fb.get_pixel(0, 0))
        self.assertFalse(fb.xor_pixel(1, 1))
        self.assertEqual([(0, 0), (1, 1)], self._set_pixels(fb))
        self.assertTrue(fb.xor_pixel(4, 5))  # Wraps onto 0, 0 and erases it
        self.assertEqual([(1, 1)], self._set_pixels(fb))

    def test_framebuffer_draw(self):
        fb = self.framebuffer
        self.assertFalse(fb.draw(2, 3, b"\xC0\x01"))
        self.assertEqual([(2, 3), (3, 3), (9, 4)], self._set_pixels(fb))

    def test_framebuffer_draw_twice_restores(self):
        fb = self.framebuffer
        fb.draw(12, 10, b"\x10")  # Single pixel at 15, 10, underneath the right side of the sprite
        before = [row[:] for row in fb.pixels]
        self.assertTrue(fb.draw(12, 9, b"\xF0\x90\xF0\x90\xF0"))
        self.assertFalse(fb.get_pixel(15, 10))
        self.assertTrue(fb.draw(12, 9, b"\xF0\x90\xF0\x90\xF0"))
        self.assertEqual(before, fb.pixels)

    def test_framebuffer_draw_no_collision_on_blank(self):
        fb = self.framebuffer
        self.assertFalse(fb.draw(0, 0, b"\xFF"))
        self.assertTrue(fb.draw(0, 0, b"\xFF"))
        self.assertEqual([], self._set_pixels(fb))

    def test_framebuffer_draw_wraps(self):
        fb = self.framebuffer
        fb.draw(62, 31, b"\xE0\xE0")
        self.assertEqual([(0, 0), (62, 0), (63, 0), (0, 31), (62, 31), (63, 31)], self._set_pixels(fb))

    def test_framebuffer_draw_wraps_at_bound(self):
        # A coordinate equal to the width or height is already off screen, so it wraps to 0
        fb = self.framebuffer
        fb.draw(64, 32, b"\x80")
        self.assertEqual([(0, 0)], self._set_pixels(fb))
        fb.clear()
        fb.draw(63, 31, b"\xC0")
        self.assertEqual([(0, 31), (63, 31)], self._set_pixels(fb))

    def test_framebuffer_draw_max_height(self):
        fb = self.framebuffer
        fb.draw(0, 20, b"\x80" * 15)  # Runs off the bottom and back onto the top
        self.assertEqual(15, len(self._set_pixels(fb)))
        self.assertTrue(fb.get_pixel(0, 2))
        self.assertFalse(fb.get_pixel(0, 3))
        self.assertRaises(FramebufferError, fb.draw, 0, 0, b"\x80" * 16)

    def test_framebuffer_clear(self):
        fb = self.framebuffer
        fb.draw(5, 5, b"\xFF\xFF")
        fb.clear()
        self.assertEqual([], self._set_pixels(fb))

    def test_framebuffer_changed(self):
        fb = self.framebuffer
        self.assertTrue(fb.take_changed())
        self.assertFalse(fb.take_changed())
        fb.draw(0, 0, b"")
        self.assertFalse(fb.take_changed())
        fb.draw(0, 0, b"\x01")
        self.assertTrue(fb.take_changed())
        fb.clear()
        self.assertTrue(fb.take_changed())
