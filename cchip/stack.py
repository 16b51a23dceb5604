#!/usr/bin/env python3

"""
Stack Emulator

There is no specified location for the CPU call stack in system RAM, and no
stack pointer register is exposed to the running program, so a wrapped list
emulates it fully (and quickly).

The stack holds up to 16 return addresses.  Pushing a 17th, or popping an empty
stack, is fatal to the running program.
"""

__copyright__ = "Copyright (C) 2024 ChocChip-8 contributors"
__license__ = "GNU Affero General Public License v3.0"


class StackError(Exception):
    pass


class StackOverflowError(StackError):
    pass


class StackUnderflowError(StackError):
    pass


class Stack:
    def __init__(self, size):
        self.items = []
        self.size = size

    def push(self, item):
        # Fetching the stack size with 'len' should be immediate, so no slow loop
        if len(self.items) >= self.size:
            raise StackOverflowError("Stack overflow ({} levels deep)".format(self.size))

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackUnderflowError("Stack underflow") from None

    def depth(self):
        return len(self.items)

    def get_items(self):
        # For debugging
        return self.items
