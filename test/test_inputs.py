#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2024 ChocChip-8 contributors"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from cchip.inputs.i_null import Inputs, InputsError


class TestInputs(unittest.TestCase):
    def setUp(self):
        self.inputs = Inputs()

    def test_inputs_default_keymap(self):
        self.assertEqual(16, len(self.inputs.keymap_dict))
        self.assertEqual(0x0, self.inputs.keymap_dict[ord("x")])
        self.assertEqual(0xF, self.inputs.keymap_dict[ord("v")])

    def test_inputs_bad_keymaps(self):
        self.assertRaises(InputsError, Inputs, "1,2,3")
        self.assertRaises(InputsError, Inputs, ",".join(["a"] * 16))
        self.assertRaises(InputsError, Inputs, ",".join(["1"] * 16))

    def test_inputs_key_state(self):
        self.assertFalse(self.inputs.is_key_down(0x4))
        self.inputs.press_key(0x4)
        self.assertTrue(self.inputs.is_key_down(0x4))
        self.inputs.release_key(0x4)
        self.assertFalse(self.inputs.is_key_down(0x4))

    def test_inputs_keypress(self):
        self.inputs.press_key(0x1)
        self.inputs.setup_keypress()
        self.assertIsNone(self.inputs.get_keypress())

        # A key held through the setup doesn't count until it's pressed again
        self.inputs.press_key(0x1)
        self.assertIsNone(self.inputs.get_keypress())
        self.inputs.release_key(0x1)
        self.inputs.press_key(0x1)
        self.assertEqual(0x1, self.inputs.get_keypress())

    def test_inputs_no_quit(self):
        self.assertFalse(self.inputs.process_messages())
        self.inputs.shutdown()
