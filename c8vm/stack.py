#!/usr/bin/env python3

"""
Stack Emulator

It is unnecessary to include the CPU call stack as part of system RAM, because
there is no specified location for it.  There is also no stack pointer (SP)
register exposed to the running program, so the stack is kept in host memory
as a fixed array of 16 return addresses, plus a pointer.

Overflowing or underflowing the stack means the running program is broken.
There is no defined way to recover, so the CPU treats both as fatal.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import STACK_SIZE


class StackError(Exception):
    pass


class StackOverflowError(StackError):
    pass


class StackUnderflowError(StackError):
    pass


class Stack:
    def __init__(self, size=STACK_SIZE):
        self.size = size
        self.items = [0] * size
        self.sp = 0

    def push(self, item):
        if self.sp >= self.size:
            raise StackOverflowError("Stack overflow")

        self.items[self.sp] = item
        self.sp += 1

    def pop(self):
        if self.sp <= 0:
            raise StackUnderflowError("Stack underflow")

        self.sp -= 1
        return self.items[self.sp]

    def reset(self):
        self.items[:] = [0] * self.size
        self.sp = 0

    def get_items(self):
        # For debugging.  Only the live part of the stack is returned.
        return self.items[:self.sp]
