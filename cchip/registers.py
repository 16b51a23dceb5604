#!/usr/bin/env python3

"""
Register File

Holds the 16 general purpose [V] registers, the index register (I), the
program counter, both timers and the call stack.  Register VF doubles as the
flag register for arithmetic, shift and draw instructions.

Timers only ever count down.  The clock calls tick_timers() once per 60Hz tick.
"""

__copyright__ = "Copyright (C) 2024 ChocChip-8 contributors"
__license__ = "GNU Affero General Public License v3.0"

from .constants import NUM_REGISTERS, STACK_DEPTH
from .stack import Stack


class RegisterFile:
    def __init__(self, stack_depth=STACK_DEPTH):
        self.v = memoryview(bytearray(NUM_REGISTERS))  # Bytearrays are mutable, so register updates are fast
        self.i = 0   # Index register
        self.pc = 0  # Program counter
        self.dt = 0  # Delay timer (byte)
        self.st = 0  # Sound timer (byte)
        self.stack = Stack(stack_depth)

    def tick_timers(self):
        # Returns True if the sound timer has just run out
        if self.dt > 0:
            self.dt -= 1

        if self.st > 0:
            self.st -= 1
            return self.st == 0

        return False
