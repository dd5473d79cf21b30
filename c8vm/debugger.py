#!/usr/bin/env python3

"""
CPU Debugger

If enabled, this will output information before each instruction executed:
    * All 16 of the [V] registers, starting with most significant (Vf) and
      reducing to least significant (V0)
    * I  - Index register
    * DT - Delay timer
    * ST - Sound timer
    * PC - Program counter
    * OP - OpCode number
    * IN - Decoded instruction

If a crash occurs, all of the above will be outputted, with the addition of:
    * Cycles - Number of cycles executed since the last reset
    * SP     - Stack pointer
    * Stack  - Stack contents
    * RAM    - Hex dump of memory (rows of zeroes are collapsed)
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

REGISTERS_FORMAT = "V: 0x" + "{:02x}" * 16
STATE_FORMAT = " I: 0x{:04x} DT: 0x{:02x} ST: 0x{:02x} PC: 0x{:03x} OP: 0x{:04x} IN: {}"


class Debugger:
    def __init__(self):
        self.live = False

    def debug(self, cpu, instruction, verbose=False):
        timers = cpu.timers
        lines = [
            REGISTERS_FORMAT.format(*reversed(cpu.v)) +
            STATE_FORMAT.format(cpu.i, timers.delay, timers.sound, cpu.debug_pc, cpu.opcode, instruction)
        ]

        if verbose:
            lines.extend(self._snapshot(cpu))

        return "\n".join(lines)

    def _snapshot(self, cpu):
        stack_str = "".join(" 0x{:03x}".format(item) for item in cpu.stack.get_items())
        return [
            "Cycles: {} SP: {}".format(cpu.cycles, cpu.stack.sp),
            "Stack:{}".format(stack_str or " (Empty)"),
            "RAM:",
            cpu.ram.dump()
        ]

    def set_live(self, enabled):
        self.live = enabled

    def is_live(self):
        return self.live

    def output(self, cpu, instruction):
        print(self.debug(cpu, instruction))
