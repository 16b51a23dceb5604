#!/usr/bin/env python3

"""
Null Input Plugin

Serves as a base class for other Input plugins.  Can be used on its own if zero
input functionality is required, or driven directly (as the tests do) through
press_key() and release_key().

Besides the up/down state of all 16 keys, this stores the next key pressed
after setup_keypress() has been called.  The CPU uses that to implement the
'wait for key' instruction.
"""

__copyright__ = "Copyright (C) 2024 ChocChip-8 contributors"
__license__ = "GNU Affero General Public License v3.0"

from ..constants import DEFAULT_KEYMAP


class InputsError(Exception):
    pass


class Inputs:
    def __init__(self, keymap=DEFAULT_KEYMAP, renderer=None):
        self.keymap_dict = {}
        self.renderer = renderer
        self.key_down = [False] * 0x10
        self.last_keypress = None
        keymap_split = keymap.split(",")

        if len(keymap_split) != 0x10:
            raise InputsError("Incorrect number of keys defined -- 16 required.  Use commas to split numbers")

        for key_num, key_defined in enumerate(keymap_split):
            try:
                key_defined_ord = int(key_defined)
            except ValueError:
                raise InputsError("Defined keys are not all integer values") from None

            if key_defined_ord in self.keymap_dict:
                raise InputsError("Duplicate keys defined")

            self.keymap_dict[key_defined_ord] = key_num

    def process_messages(self):
        return False  # Don't exit the program

    def press_key(self, key):
        if not self.key_down[key]:
            self.key_down[key] = True
            self.last_keypress = key

    def release_key(self, key):
        self.key_down[key] = False

    def is_key_down(self, key):
        return self.key_down[key]

    def setup_keypress(self):
        # Forget any earlier press.  Keys already held must be pressed again.
        self.last_keypress = None

    def get_keypress(self):
        return self.last_keypress

    def shutdown(self):
        pass
