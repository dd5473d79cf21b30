#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
import _curses
from unittest.mock import patch
from c8vm.framebuffer import Framebuffer
from c8vm.renderers import r_curses


class TestCursesRenderer(unittest.TestCase):
    def setUp(self):
        # Stand in for the terminal, so no real screen is taken over
        patcher = patch.object(r_curses, "curses")
        self.curses = patcher.start()
        self.addCleanup(patcher.stop)
        self.curses.initscr.return_value.getmaxyx.return_value = (40, 140)

    def test_curses_cursor_mode_refused(self):
        self.curses.curs_set.side_effect = _curses.error("curs_set() returned ERR")
        renderer = r_curses.Renderer(curses_cursor_mode=2)
        renderer.shutdown()
        self.assertEqual(2, self.curses.curs_set.call_count)
        self.curses.endwin.assert_called_once_with()

    def test_curses_render_runs(self):
        renderer = r_curses.Renderer()
        renderer.set_resolution(64, 32)
        pad = self.curses.newpad.return_value
        framebuffer = Framebuffer()
        framebuffer.draw(2, 0, b"\xC0")
        pad.addstr.reset_mock()
        renderer.render(framebuffer)

        # Line 0 is the title, so the first screen row is on line 1
        first_row = [call[0] for call in pad.addstr.call_args_list if call[0][0] == 1]
        self.assertEqual(
            [
                (1, 0, " " * 4, self.curses.A_NORMAL),
                (1, 4, " " * 4, self.curses.A_REVERSE),
                (1, 8, " " * 120, self.curses.A_NORMAL)
            ],
            first_row
        )
        self.assertEqual(32, len({call[0][0] for call in pad.addstr.call_args_list}))
