#!/usr/bin/env python3

"""
Host I/O Functionality

Handles loading ROM binaries for later writing into RAM.  A ROM is a raw stream
of big-endian opcodes and data with no header, so the only checks possible are
that it can be read, and that it fits above the interpreter area.
"""

__copyright__ = "Copyright (C) 2024 ChocChip-8 contributors"
__license__ = "GNU Affero General Public License v3.0"

from .constants import MAX_ROM_SIZE


class RomLoadError(Exception):
    pass


class Loader:
    def load_binary(self, filename):
        with open(filename, "rb") as f:
            return f.read()

    def load_rom(self, filename, max_size=MAX_ROM_SIZE):
        try:
            data = self.load_binary(filename)
        except OSError as error:
            raise RomLoadError("Unable to read ROM '{}': {}".format(filename, error.strerror or error)) from None

        if len(data) > max_size:
            raise RomLoadError(
                "ROM '{}' is {} bytes, but only {} bytes of program space are available".format(
                    filename, len(data), max_size
                )
            )

        return data
