#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from unittest.mock import patch
from c8vm.cpu import CPU
from c8vm.debugger import Debugger


class TestDebugger(unittest.TestCase):
    def setUp(self):
        self.debugger = Debugger()
        self.cpu = CPU(debugger=self.debugger)

    def test_debugger_line(self):
        self.cpu.v[0xF] = 0x12
        self.cpu.v[0x0] = 0x34
        self.cpu.i = 0x345
        self.cpu.timers.delay = 0x6
        self.cpu.timers.sound = 0x7
        self.cpu.opcode = 0x1234
        self.assertEqual(
            "V: 0x12" + "00" * 14 + "34 I: 0x0345 DT: 0x06 ST: 0x07 PC: 0x200 OP: 0x1234 IN: JP 0x234",
            self.debugger.debug(self.cpu, "JP 0x234")
        )

    def test_debugger_verbose(self):
        self.cpu.stack.push(0x202)
        self.cpu.stack.push(0x40A)
        self.cpu.cycles = 12
        output = self.debugger.debug(self.cpu, "???", verbose=True)
        self.assertIn("\nCycles: 12 SP: 2\nStack: 0x202 0x40a\nRAM:\n0x000: f0 90 90 90 f0", output)

    def test_debugger_verbose_empty_stack(self):
        self.assertIn("\nStack: (Empty)\n", self.debugger.debug(self.cpu, "???", verbose=True))

    def test_debugger_live(self):
        self.assertFalse(self.debugger.is_live())
        debugger = Debugger()
        debugger.set_live(True)
        cpu = CPU(debugger=debugger)
        cpu.load_rom(b"\x61\x02")

        with patch("builtins.print") as mock_print:
            cpu.tick()

        mock_print.assert_called_once()
        self.assertTrue(mock_print.call_args[0][0].endswith("OP: 0x6102 IN: LD V1, 0x02"))

    def test_debugger_not_live(self):
        self.cpu.load_rom(b"\x61\x02")

        with patch("builtins.print") as mock_print:
            self.cpu.tick()

        mock_print.assert_not_called()
