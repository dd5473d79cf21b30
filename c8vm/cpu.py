#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

Like a real computer, this is where most of the processing happens.  The host
calls tick() once per emulated cycle, at whatever rate it likes, and each call
fetches, decodes and executes exactly one instruction.  The delay and sound
timers are stepped from the cycle count, once every cycles_per_tick cycles.

The CPU owns all of the machine state: RAM (with the font), registers, stack,
timers, framebuffer and the pressed-key latch.  The host is only expected to
write into pressed_keys and read the framebuffer.

Programs that break the architecture (unknown opcodes, stack overflows,
addresses beyond the end of RAM, etc.) halt the CPU.  There is no defined way
of recovering from these, so once halted, the CPU refuses to run until reset.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import randint
from .constants import APP_INTRO, DEFAULT_CLOCK_SPEED, FONT_LOC, FONT_GLYPH_SIZE, PROGRAM_LOC
from .debugger import Debugger
from .framebuffer import Framebuffer
from .ram import RAM, RAMError
from .stack import Stack, StackError
from .timers import Timers

CPU_ENDIAN = "big"  # CHIP-8 is big-endian
NUM_KEYS = 0x10


class CPUError(Exception):
    pass


class IllegalInstructionError(CPUError):
    pass


class InvalidOperandError(CPUError):
    pass


class StackFaultError(CPUError):
    pass


class CPU:
    def __init__(self, clock_hz=DEFAULT_CLOCK_SPEED, debugger=None):
        self.debugger = Debugger() if debugger is None else debugger
        self.live_debug = self.debugger.is_live()
        self.ram = RAM()
        self.stack = Stack()
        self.timers = Timers(clock_hz)
        self.framebuffer = Framebuffer()

        # Define instruction pointers.
        # n = Nibble
        # kk = Byte
        # nnn = address
        # x/y = register (0-15)
        self.instructions = {
            # Initial lookup for instructions' first nibble
            0x0: self._0nnn,  # Alias for bitmask 0xFFFF
            0x1: self._1nnn,
            0x2: self._2nnn,
            0x3: self._3xkk,
            0x4: self._4xkk,
            0x5: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0x6: self._6xkk,
            0x7: self._7xkk,
            0x8: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0x9: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0xA: self._Annn,
            0xB: self._Bnnn,
            0xC: self._Cxkk,
            0xD: self._Dxyn,
            0xE: self._Ennn_Fnnn,  # Alias for bitmask 0xF0FF
            0xF: self._Ennn_Fnnn,  # Alias for bitmask 0xF0FF
            # Instructions beginning with nibble 0x0, bitmask 0xFFFF (i.e., exact match)
            0x00E0: self._00E0,
            0x00EE: self._00EE,
            # Instructions beginning with nibble 0x5/0x8/0x9, bitmask 0xF00F
            0x5000: self._5xy0,
            0x8000: self._8xy0,
            0x8001: self._8xy1,
            0x8002: self._8xy2,
            0x8003: self._8xy3,
            0x8004: self._8xy4,
            0x8005: self._8xy5,
            0x8006: self._8xy6,
            0x8007: self._8xy7,
            0x800E: self._8xyE,
            0x9000: self._9xy0,
            # Instructions beginning with nibble 0xE/0xF, bitmask 0xF0FF
            0xE09E: self._Ex9E,
            0xE0A1: self._ExA1,
            0xF007: self._Fx07,
            0xF00A: self._Fx0A,
            0xF015: self._Fx15,
            0xF018: self._Fx18,
            0xF01E: self._Fx1E,
            0xF029: self._Fx29,
            0xF033: self._Fx33,
            0xF055: self._Fx55,
            0xF065: self._Fx65
        }

        # Pressed-key latch.  Written by the input plugins only, and never cleared here, so a key held through a
        # reset is still seen as held.
        self.pressed_keys = [False] * NUM_KEYS
        self.v = memoryview(bytearray(16))  # Bytearrays are mutable, so this should be fast when a register is updated
        self.hold_mode = False
        self.reset()

    def reset(self):
        # Clear memory and restore the font, so a reset CPU is identical to a new one
        self.ram.clear()
        self.ram.seed_font()

        # Initialise registers
        self.v[:] = bytes(16)
        self.i = 0  # Index register
        self.stack.reset()
        self.timers.reset()
        self.framebuffer.clear()

        # Initialise program counter, current opcode and cycle counter
        self.pc = PROGRAM_LOC
        self.debug_pc = PROGRAM_LOC
        self.opcode = 0
        self.cycles = 0

        # Register index waiting for a keypress, or None when running normally
        self.awaiting_key = None

        # First fault raised, if the CPU has halted
        self.fault = None

    def load_rom(self, data):
        # Refuse oversized programs before touching any state
        self.ram.check_program_fits(data)
        self.reset()
        self.ram.load_program(data)

    def set_clock_rate(self, clock_hz):
        self.timers.set_clock_rate(clock_hz)

    def get_clock_rate(self):
        return self.timers.clock_hz

    def get_cycles_per_tick(self):
        return self.timers.cycles_per_tick

    def set_hold_mode(self, enabled):
        # Manual pause from the host.  Not the same as waiting for a keypress.
        self.hold_mode = bool(enabled)

    def is_held(self):
        return self.hold_mode

    def is_awaiting_key(self):
        return self.awaiting_key is not None

    def is_halted(self):
        return self.fault is not None

    def tick(self):
        if self.fault is not None:
            raise CPUError("Emulation is halted and must be reset.\n\n{}".format(self.fault))

        if self.hold_mode:
            return

        if self.awaiting_key is None:
            # Keep track of the program counter before altering it in any way for debugging purposes
            self.debug_pc = self.pc

            try:
                self.opcode = self.fetch()
                self.inc_pc()  # Program counter updates after fetch, but before execute
                self.decode_exec()
            except StackError as error:
                self._halt(StackFaultError, str(error), error)
            except RAMError as error:
                self._halt(InvalidOperandError, str(error), error)
        else:
            self._check_awaited_key()

        # Cycles still count while waiting for a key, so the timers keep running
        self.cycles += 1
        self.timers.on_cycle(self.cycles)

    def fetch(self):
        return int.from_bytes(self.ram.read_block(self.pc, 2), CPU_ENDIAN, signed=False)

    def _call_masked_instruction(self, masked_opcode):
        instruction = self.instructions.get(masked_opcode)

        if instruction is None:
            self._opcode_unsupported()

        instruction()

    def decode_exec(self):
        self._call_masked_instruction((0xF000 & self.opcode) >> 12)

    def inc_pc(self):
        self.pc = (self.pc + 2) & 0xFFF

    def dec_pc(self):
        # Only used to re-run the keypress wait instruction
        self.pc = (self.pc - 2) & 0xFFF

    def get_pressed_key(self):
        for key, pressed in enumerate(self.pressed_keys):
            if pressed:
                return key

        return None

    def _check_awaited_key(self):
        key = self.get_pressed_key()

        if key is not None:
            self.v[self.awaiting_key] = key
            self.awaiting_key = None
            self.inc_pc()  # Move past the waiting instruction

    # References to Vx, Vy, byte and addr are always in the same opcode position throughout all instructions, so avoid
    # excessive code duplication (ever so slight slowdown).  Don't reference these more than necessary as they are
    # recalculated each time.
    @property
    def vx(self):
        return (self.opcode & 0xF00) >> 8

    @property
    def vy(self):
        return (self.opcode & 0xF0) >> 4

    @property
    def addr(self):
        return self.opcode & 0xFFF

    @property
    def byte(self):
        return self.opcode & 0xFF

    @property
    def nibble(self):
        return self.opcode & 0xF

    def _halt(self, error_class, reason, cause=None):
        error = error_class(
            (
                "Emulation halted.\n\n" +
                "{}Debug info:\n" +
                "{}\n\n{} (opcode 0x{:04x} at address 0x{:03x})."
            ).format(
                APP_INTRO, self.debugger.debug(self, "???", verbose=True), reason, self.opcode, self.debug_pc
            )
        )
        self.fault = error
        raise error from cause

    def _opcode_unsupported(self):
        self._halt(IllegalInstructionError, "Opcode 0x{:04x} is not a CHIP-8 instruction".format(self.opcode))

    def _invalid_operand(self, reason):
        self._halt(InvalidOperandError, reason)

    def debug(self, instruction):
        self.debugger.output(self, instruction)

    def _0nnn(self):  # SYS addr
        opcode = self.opcode

        if opcode < 0x10:
            # Let's use opcodes 0x0 - 0xF internally for indexing, since they're not used on any CHIP-8 variant
            self._opcode_unsupported()

        if opcode not in self.instructions:
            # Machine code routines only ran on the original COSMAC VIP interpreter
            self._halt(
                IllegalInstructionError, "SYS 0x{:03x} calls native machine code, which can't be emulated".format(
                    self.addr
                )
            )

        self._call_masked_instruction(opcode)

    def _5nnn_8nnn_9nnn(self):
        self._call_masked_instruction(self.opcode & 0xF00F)

    def _Ennn_Fnnn(self):
        self._call_masked_instruction(self.opcode & 0xF0FF)

    def _00E0(self):  # CLS
        if self.live_debug:
            self.debug("CLS")

        self.framebuffer.clear()

    def _00EE(self):  # RET
        if self.live_debug:
            self.debug("RET")

        self.pc = self.stack.pop()

    def _1nnn(self):  # JP addr
        if self.live_debug:
            self.debug("JP 0x{:03x}".format(self.addr))

        self.pc = self.addr

    def _2nnn(self):  # CALL addr
        if self.live_debug:
            self.debug("CALL 0x{:03x}".format(self.addr))

        # The PC has already moved on, so this is the return address
        self.stack.push(self.pc)
        self.pc = self.addr

    def _3xkk(self):  # SE Vx, byte
        if self.live_debug:
            self.debug("SE V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        if self.v[self.vx] == self.byte:
            self.inc_pc()

    def _4xkk(self):  # SNE Vx, byte
        if self.live_debug:
            self.debug("SNE V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        if self.v[self.vx] != self.byte:
            self.inc_pc()

    def _5xy0(self):  # SE Vx, Vy
        if self.live_debug:
            self.debug("SE V{:01x}, V{:01x}".format(self.vx, self.vy))

        if self.v[self.vx] == self.v[self.vy]:
            self.inc_pc()

    def _6xkk(self):  # LD Vx, byte
        if self.live_debug:
            self.debug("LD V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        self.v[self.vx] = self.byte

    def _7xkk(self):  # ADD Vx, byte
        vx = self.vx
        byte = self.byte

        if self.live_debug:
            self.debug("ADD V{:01x}, 0x{:02x}".format(vx, byte))

        # No carry flag for this one
        byte += self.v[vx]
        self.v[vx] = byte & 0xFF

    def _8xy0(self):  # LD Vx, Vy
        if self.live_debug:
            self.debug("LD V{:01x}, V{:01x}".format(self.vx, self.vy))

        self.v[self.vx] = self.v[self.vy]

    def _8xy1(self):  # OR Vx, Vy
        if self.live_debug:
            self.debug("OR V{:01x}, V{:01x}".format(self.vx, self.vy))

        self.v[self.vx] |= self.v[self.vy]

    def _8xy2(self):  # AND Vx, Vy
        if self.live_debug:
            self.debug("AND V{:01x}, V{:01x}".format(self.vx, self.vy))

        self.v[self.vx] &= self.v[self.vy]

    def _8xy3(self):  # XOR Vx, Vy
        if self.live_debug:
            self.debug("XOR V{:01x}, V{:01x}".format(self.vx, self.vy))

        self.v[self.vx] ^= self.v[self.vy]

    def _8xy4(self):  # ADD Vx, Vy
        vx = self.vx
        vy = self.vy

        if self.live_debug:
            self.debug("ADD V{:01x}, V{:01x}".format(vx, vy))

        val = self.v[vx] + self.v[vy]
        self.v[vx] = val & 0xFF
        self.v[0xF] = int(val > 0xFF)  # Vf is set when carrying

    def _post_8xy5_8xy7(self, val):  # Post-SUB/SUBN
        self.v[self.vx] = val & 0xFF
        # Vf is set when NOT borrowing, and this should happen AFTER Vx is set, as sometimes VF is specified in the
        # parameters.
        self.v[0xF] = int(val >= 0)

    def _8xy5(self):  # SUB Vx, Vy
        if self.live_debug:
            self.debug("SUB V{:01x}, V{:01x}".format(self.vx, self.vy))

        self._post_8xy5_8xy7(self.v[self.vx] - self.v[self.vy])

    def _8xy6(self):  # SHR Vx
        vx = self.vx

        if self.live_debug:
            self.debug("SHR V{:01x}".format(vx))

        val = self.v[vx]
        self.v[vx] = val >> 1
        self.v[0xF] = val & 1  # The whole byte gets set just for the flag

    def _8xy7(self):  # SUBN Vx, Vy
        if self.live_debug:
            self.debug("SUBN V{:01x}, V{:01x}".format(self.vx, self.vy))

        self._post_8xy5_8xy7(self.v[self.vy] - self.v[self.vx])

    def _8xyE(self):  # SHL Vx
        vx = self.vx

        if self.live_debug:
            self.debug("SHL V{:01x}".format(vx))

        val = self.v[vx]
        self.v[vx] = (val << 1) & 0xFF
        self.v[0xF] = val >> 7

    def _9xy0(self):  # SNE Vx, Vy
        if self.live_debug:
            self.debug("SNE V{:01x}, V{:01x}".format(self.vx, self.vy))

        if self.v[self.vx] != self.v[self.vy]:
            self.inc_pc()

    def _Annn(self):  # LD I, addr
        if self.live_debug:
            self.debug("LD I, 0x{:03x}".format(self.addr))

        self.i = self.addr

    def _Bnnn(self):  # JP V0, addr
        if self.live_debug:
            self.debug("JP V0, 0x{:03x}".format(self.addr))

        self.pc = (self.v[0] + self.addr) & 0xFFF

    def _Cxkk(self):  # RND Vx, byte
        if self.live_debug:
            self.debug("RND V{:01x}, 0x{:02x}".format(self.vx, self.byte))

        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[self.vx] = randint(0, 0xFF) & self.byte

    def _Dxyn(self):  # DRW Vx, Vy, nibble
        height = self.nibble

        if self.live_debug:
            self.debug("DRW V{:01x}, V{:01x}, 0x{:01x}".format(self.vx, self.vy, height))

        # Sprite rows come from I onwards.  The framebuffer wraps every pixel around the screen edges.
        sprite = self.ram.read_block(self.i, height)
        collided = self.framebuffer.draw(self.v[self.vx], self.v[self.vy], sprite)
        self.v[0xF] = int(collided)

    def _get_key_operand(self):
        key = self.v[self.vx]

        if key >= NUM_KEYS:
            self._invalid_operand("Key 0x{:02x} in V{:01x} is not on the keypad".format(key, self.vx))

        return key

    def _Ex9E(self):  # SKP Vx
        if self.live_debug:
            self.debug("SKP V{:01x}".format(self.vx))

        if self.pressed_keys[self._get_key_operand()]:
            self.inc_pc()

    def _ExA1(self):  # SKNP Vx
        if self.live_debug:
            self.debug("SKNP V{:01x}".format(self.vx))

        if not self.pressed_keys[self._get_key_operand()]:
            self.inc_pc()

    def _Fx07(self):  # LD Vx, DT
        if self.live_debug:
            self.debug("LD V{:01x}, DT".format(self.vx))

        self.v[self.vx] = self.timers.delay

    def _Fx0A(self):  # LD Vx, K
        if self.live_debug:
            self.debug("LD V{:01x}, K".format(self.vx))

        key = self.get_pressed_key()

        if key is None:
            # Stall on this instruction.  Following ticks only poll the keys (the timers still need to run) until one
            # is held, rather than re-fetching.
            self.awaiting_key = self.vx
            self.dec_pc()
        else:
            self.v[self.vx] = key

    def _Fx15(self):  # LD DT, Vx
        if self.live_debug:
            self.debug("LD DT, V{:01x}".format(self.vx))

        self.timers.delay = self.v[self.vx]

    def _Fx18(self):  # LD ST, Vx
        if self.live_debug:
            self.debug("LD ST, V{:01x}".format(self.vx))

        self.timers.sound = self.v[self.vx]

    def _Fx1E(self):  # ADD I, Vx
        if self.live_debug:
            self.debug("ADD I, V{:01x}".format(self.vx))

        # Only 12 bits of I can address anything
        self.i = (self.i + self.v[self.vx]) & 0xFFF

    def _Fx29(self):  # LD F, Vx
        if self.live_debug:
            self.debug("LD F, V{:01x}".format(self.vx))

        digit = self.v[self.vx]

        if digit > 0xF:
            self._invalid_operand("Digit 0x{:02x} in V{:01x} has no font sprite".format(digit, self.vx))

        self.i = FONT_LOC + FONT_GLYPH_SIZE * digit

    def _Fx33(self):  # LD B, Vx
        if self.live_debug:
            self.debug("LD B, V{:01x}".format(self.vx))

        val = self.v[self.vx]
        i = self.i
        self.ram.check_overflow(i + 2)  # Don't write a partial number
        self.ram.write(i, val // 100)             # Most-significant digit
        self.ram.write(i + 1, (val // 10) % 10)   # Middle digit
        self.ram.write(i + 2, val % 10)           # Least-significant digit

    def _Fx55(self):  # LD [I], Vx
        vx = self.vx

        if self.live_debug:
            self.debug("LD [I], V{:01x}".format(vx))

        # Ensure with +1s that the final register is copied
        self.ram.write_block(self.i, self.v[:vx + 1])

    def _Fx65(self):  # LD Vx, [I]
        vx = self.vx

        if self.live_debug:
            self.debug("LD V{:01x}, [I]".format(vx))

        # Ensure with +1s that the final register is copied
        self.v[:vx + 1] = self.ram.read_block(self.i, vx + 1)
