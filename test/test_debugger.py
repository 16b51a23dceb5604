#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2024 ChocChip-8 contributors"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from cchip import create_machine
from cchip.debugger import Debugger
from cchip.renderers.r_null import Renderer
from cchip.inputs.i_null import Inputs
from cchip.audio.a_null import Audio


class TestDebugger(unittest.TestCase):
    def setUp(self):
        self.debugger = Debugger()
        self.cpu = create_machine(b"\x6A\x05\x22\x00", Renderer(), Inputs(), Audio(), self.debugger)
        self.cpu.registers.pc = 0x200

    def test_debugger_live_flag(self):
        self.assertFalse(self.debugger.is_live())
        self.debugger.set_live(True)
        self.assertTrue(self.debugger.is_live())

    def test_debugger_no_instruction(self):
        self.assertIn("IN: (None)", self.debugger.debug(self.cpu, None))

    def test_debugger_debug(self):
        self.cpu.step()
        debug_str = self.debugger.debug(self.cpu, self.cpu.instruction)
        self.assertTrue(debug_str.startswith("V: 0x" + "00" * 5 + "05" + "00" * 10))  # Vf first
        self.assertIn("PC: 0x200 OP: 0x6a05 IN: LD Va, 0x05", debug_str)
        self.assertNotIn("Stack", debug_str)

    def test_debugger_verbose(self):
        self.cpu.step()
        self.assertIn("Stack: (Empty)", self.debugger.debug(self.cpu, self.cpu.instruction, verbose=True))
        self.cpu.step()
        self.assertIn("Stack: 0x202", self.debugger.debug(self.cpu, self.cpu.instruction, verbose=True))
