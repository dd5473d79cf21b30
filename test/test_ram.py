#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from c8vm.constants import FONT
from c8vm.ram import RAM, RAMError, OutOfSpaceError


class TestRAM(unittest.TestCase):
    def setUp(self):
        self.ram = RAM(5)

    def test_ram_init(self):
        ram = RAM()
        self.assertEqual(0x1000, ram.mem_size)
        self.assertEqual(bytes(0x1000), bytes(ram.mem))

    def test_ram_write(self):
        self.ram.write(1, 255)
        self.assertEqual("00ff000000", self.ram.mem.hex())
        self.assertEqual(255, self.ram.read(1))

    def test_ram_write_block(self):
        self.ram.write_block(1, bytearray(b"\xFD\xFE"))
        self.ram.write_block(4, bytearray(b"\xFF"))
        self.assertEqual("00fdfe00ff", self.ram.mem.hex())
        self.assertEqual(b"\xFD\xFE", bytes(self.ram.read_block(1, 2)))

    def test_ram_empty_block(self):
        self.ram.write_block(0, b"")
        self.assertEqual(b"", bytes(self.ram.read_block(0, 0)))

    def test_ram_byte_overflow(self):
        self.assertRaises(RAMError, self.ram.write, 5, 255)
        self.assertRaises(RAMError, self.ram.read, 5)

    def test_ram_block_overflow(self):
        self.assertRaises(RAMError, self.ram.write_block, 4, bytearray(b"\xFE\xFF"))
        self.assertRaises(RAMError, self.ram.read_block, 4, 2)
        # Nothing should be written when the block doesn't fit
        self.assertEqual("0000000000", self.ram.mem.hex())

    def test_ram_clear(self):
        self.ram.write_block(1, bytearray(b"\xFD\xFE"))
        self.assertEqual("00fdfe0000", self.ram.mem.hex())
        self.ram.clear()
        self.assertEqual("0000000000", self.ram.mem.hex())

    def test_ram_seed_font(self):
        ram = RAM()
        ram.seed_font()
        self.assertEqual(FONT, bytes(ram.read_block(0, 80)))

        # Digit sprites are 5 bytes each, with digit d at 5 * d
        self.assertEqual(b"\xF0\x90\xF0\x90\xF0", bytes(ram.read_block(5 * 8, 5)))
        self.assertEqual(b"\xF0\x80\xF0\x80\x80", bytes(ram.read_block(5 * 0xF, 5)))

    def test_ram_load_program(self):
        ram = RAM()
        ram.load_program(b"\x12\x34\x56")
        self.assertEqual(b"\x12\x34\x56", bytes(ram.read_block(0x200, 3)))
        self.assertEqual(0, ram.read(0x1FF))

    def test_ram_load_program_max_size(self):
        ram = RAM()
        self.assertEqual(3584, ram.get_program_space())
        ram.load_program(b"\xAA" * 3584)
        self.assertEqual(0xAA, ram.read(0xFFF))

    def test_ram_load_program_too_large(self):
        ram = RAM()
        self.assertRaises(OutOfSpaceError, ram.load_program, b"\xAA" * 3585)
        self.assertEqual(bytes(0x1000), bytes(ram.mem))

    def test_ram_dump(self):
        ram = RAM(0x40)
        ram.write(0x21, 0xAB)
        self.assertEqual("0x000: *\n0x020: 00 ab" + " 00" * 30, ram.dump())
