#!/usr/bin/env python3

"""
RAM Emulator

A flat 4K address space.  The built-in hex digit font lives at the very bottom
of memory, and programs are always loaded at 0x200, so the first 512 bytes are
otherwise unused by the interpreter.

Every access is bounds-checked.  Addresses reaching this module are usually
derived from the index register at runtime, so an out-of-range access is a
malformed program rather than an emulator bug.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import MEM_SIZE, FONT, FONT_LOC, PROGRAM_LOC


class RAMError(Exception):
    pass


class OutOfSpaceError(RAMError):
    pass


class RAM:
    def __init__(self, mem_size=MEM_SIZE):
        self.mem = memoryview(bytearray(mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size

    def read(self, location):
        self.check_overflow(location)
        return self.mem[location]

    def read_block(self, location, size=1):
        self.check_overflow(location)

        if size > 0:
            self.check_overflow(location + size - 1)

        return self.mem[location:location + size]

    def write(self, location, byte):
        self.check_overflow(location)
        self.mem[location] = byte

    def write_block(self, location, block):
        block_size = len(block)
        block_top = location + block_size
        self.check_overflow(location)

        if block_size > 0:
            self.check_overflow(block_top - 1)

        self.mem[location:block_top] = block

    def check_overflow(self, location):
        if location > self.mem_top or location < 0:
            raise RAMError("Memory access out of range at 0x{:04x}".format(location))

    def get_program_space(self):
        return self.mem_size - PROGRAM_LOC

    def check_program_fits(self, data):
        if len(data) > self.get_program_space():
            raise OutOfSpaceError(
                "Program is {} bytes, but only {} bytes are available from 0x{:03x}".format(
                    len(data), self.get_program_space(), PROGRAM_LOC
                )
            )

    def load_program(self, data):
        # Checked up-front so nothing is written if the program can't fit
        self.check_program_fits(data)
        self.write_block(PROGRAM_LOC, data)

    def seed_font(self):
        self.write_block(FONT_LOC, FONT)

    def clear(self):
        self.mem[:] = bytes(self.mem_size)

    def dump(self, row_size=32):
        # For debugging.  Rows of zeroes are collapsed to keep crash reports readable.
        lines = []
        skipping = False

        for row in range(0, self.mem_size, row_size):
            chunk = self.mem[row:row + row_size]

            if not any(chunk):
                if not skipping:
                    lines.append("0x{:03x}: *".format(row))
                    skipping = True

                continue

            skipping = False
            lines.append("0x{:03x}: {}".format(row, chunk.hex(" ")))

        return "\n".join(lines)
