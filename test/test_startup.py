#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import os
import tempfile
import unittest
from unittest.mock import patch
from c8vm import StartupError, choose_renderer, load_plugins, main
from c8vm.audio import a_null
from c8vm.hostio import LoaderError
from c8vm.inputs import i_null
from c8vm.renderers import r_null
from chip8vm import parse_args


class TestStartup(unittest.TestCase):
    def test_choose_renderer_null(self):
        self.assertEqual("null", choose_renderer("null"))

    def test_choose_renderer_unknown(self):
        self.assertRaises(StartupError, choose_renderer, "vga")

    def test_choose_renderer_missing_library(self):
        with patch("c8vm._library_available", return_value=False):
            self.assertRaises(StartupError, choose_renderer, "pygame")
            self.assertRaises(StartupError, choose_renderer, "curses")
            self.assertRaises(StartupError, choose_renderer, None)
            self.assertEqual("null", choose_renderer("null"))

    def test_choose_renderer_fallback(self):
        with patch("c8vm._library_available", side_effect=lambda library: library == "curses"):
            self.assertEqual("curses", choose_renderer(None))

    def test_load_plugins_null(self):
        self.assertEqual((r_null.Renderer, i_null.Inputs, a_null.Audio), load_plugins("null"))
        self.assertEqual((r_null.Renderer, i_null.Inputs, a_null.Audio), load_plugins("null", True))

    def test_parse_args(self):
        args = vars(parse_args(["Game.ch8", "-c", "700", "-r", "null", "-p"]))
        self.assertEqual("Game.ch8", args["filename"])
        self.assertEqual(700, args["clock_speed"])
        self.assertEqual("null", args["renderer"])
        self.assertTrue(args["paused"])
        self.assertFalse(args["debug"])
        self.assertIsNone(args["mute"])
        self.assertIsNone(args["scale"])

    def test_parse_args_defaults(self):
        args = vars(parse_args(["Game.ch8"]))
        self.assertEqual(500, args["clock_speed"])
        self.assertIsNone(args["renderer"])
        self.assertFalse(args["paused"])

    def test_main_null(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            filename = os.path.join(temp_dir, "Test.ch8")

            with open(filename, "wb") as f:
                f.write(b"\x12\x00")

            args = vars(parse_args([filename, "-r", "null", "-c", "900", "-p"]))

            with patch("builtins.print"), patch("c8vm.Host") as host:
                main(args)

        host.return_value.run.assert_called_once_with()
        cpu, rom = host.call_args[0][:2]
        self.assertEqual(b"\x12\x00", rom)
        self.assertEqual(b"\x12\x00", bytes(cpu.ram.read_block(0x200, 2)))
        self.assertEqual(900, cpu.get_clock_rate())
        self.assertTrue(cpu.is_held())

    def test_main_missing_rom(self):
        args = vars(parse_args(["NoFile.ch8", "-r", "null"]))

        with patch("builtins.print"):
            self.assertRaises(LoaderError, main, args)
