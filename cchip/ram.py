#!/usr/bin/env python3

"""
RAM Emulator

Supports reading and writing of blocks of memory or individual bytes, and
zeroing of memory blocks.

The bottom of memory holds the system font.  Once written, that area can be
write-protected so a runaway program reports a fault instead of silently
corrupting the glyphs.

The framebuffer also uses this class as its video memory, one byte per pixel.
"""

__copyright__ = "Copyright (C) 2024 ChocChip-8 contributors"
__license__ = "GNU Affero General Public License v3.0"


class RAMError(Exception):
    pass


class RAM:
    def __init__(self):
        self.protected_top = 0
        self.resize(0)

    def resize(self, mem_size):
        self.mem = memoryview(bytearray(b"\x00" * mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size

    def protect(self, size):
        # Bytes below 'size' become read-only
        self.check_overflow(size - 1)
        self.protected_top = size

    def read(self, location):
        return self.mem[location]

    def read_block(self, location, size=1):
        return self.mem[location:location + size]

    def write(self, location, byte):
        self.check_overflow(location)
        self.check_protected(location)
        self.mem[location] = byte

    def write_block(self, location, block):
        block_size = len(block)
        block_top = location + block_size
        self.check_overflow(block_top - 1)
        self.check_protected(location)
        self.mem[location:block_top] = block

    def check_overflow(self, location):
        if location > self.mem_top:
            raise RAMError("Memory overflow at 0x{:04x}".format(location))

    def check_protected(self, location):
        if location < self.protected_top:
            raise RAMError("Write to read-only memory at 0x{:04x}".format(location))

    def zero_block(self, offset, size):
        block_top = offset + size
        self.check_overflow(block_top - 1)

        for i in range(offset, block_top):
            self.mem[i] = 0x00

    def clear(self):
        # Protected memory is zeroed too.  Only used on video memory, which is never protected.
        self.zero_block(0, self.mem_size)
