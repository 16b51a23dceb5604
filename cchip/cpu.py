#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

Like a real computer, this is where most of the processing happens.  Each call
to step() fetches one opcode, decodes it, and executes it against the register
file, RAM and framebuffer.  Pacing, timers and input polling are left to the
Clock.

Instructions that don't alter control flow advance the program counter once
they have completed.  Jumps, calls, returns and skips set the program counter
themselves, so they are listed in CONTROL_FLOW and never auto-advance.

The 'wait for key' instruction doesn't block.  It parks the CPU in an awaiting
state with the program counter still pointing at the instruction, and the
Clock hands over the key with supply_key() once one has been pressed.
"""

__copyright__ = "Copyright (C) 2024 ChocChip-8 contributors"
__license__ = "GNU Affero General Public License v3.0"

from random import Random
from . import decoder
from .constants import ADDR_MASK, FLAG_REGISTER, FONT_LOCATION, GLYPH_SIZE, OPCODE_SIZE

# Instructions which set the program counter themselves
CONTROL_FLOW = frozenset((
    decoder.RET, decoder.JP, decoder.CALL, decoder.JP_V0_ADDR, decoder.SE_VX_BYTE, decoder.SNE_VX_BYTE,
    decoder.SE_VX_VY, decoder.SNE_VX_VY, decoder.SKP, decoder.SKNP, decoder.LD_VX_K
))


class CPUError(Exception):
    pass


class UnknownOpcodeError(CPUError):
    def __init__(self, opcode, address):
        self.opcode = opcode
        self.address = address
        super().__init__(
            "Opcode 0x{:04x} at address 0x{:03x} is not a CHIP-8 instruction".format(opcode, address)
        )


class CPU:
    def __init__(self, ram, registers, framebuffer, inputs, audio, debugger, seed=None):
        self.ram = ram
        self.registers = registers
        self.v = registers.v  # Shared memoryview, so writes land in the register file
        self.stack = registers.stack
        self.framebuffer = framebuffer
        self.inputs = inputs
        self.audio = audio
        self.debugger = debugger
        self.live_debug = self.debugger.is_live()

        # Seeded once per machine.  A fixed seed makes runs repeatable.
        self.rng = Random(seed)

        # Keep track of the program counter and instruction for debugging purposes
        self.debug_pc = 0
        self.instruction = None

        # Register waiting for a keypress, if any
        self.awaiting_key_register = None

        # Dispatch table.  n = nibble, kk = byte, nnn = address, x/y = register (0-15)
        self.instructions = {
            decoder.SYS: self._0nnn,
            decoder.CLS: self._00E0,
            decoder.RET: self._00EE,
            decoder.JP: self._1nnn,
            decoder.CALL: self._2nnn,
            decoder.SE_VX_BYTE: self._3xkk,
            decoder.SNE_VX_BYTE: self._4xkk,
            decoder.SE_VX_VY: self._5xy0,
            decoder.LD_VX_BYTE: self._6xkk,
            decoder.ADD_VX_BYTE: self._7xkk,
            decoder.LD_VX_VY: self._8xy0,
            decoder.OR: self._8xy1,
            decoder.AND: self._8xy2,
            decoder.XOR: self._8xy3,
            decoder.ADD_VX_VY: self._8xy4,
            decoder.SUB: self._8xy5,
            decoder.SHR: self._8xy6,
            decoder.SUBN: self._8xy7,
            decoder.SHL: self._8xyE,
            decoder.SNE_VX_VY: self._9xy0,
            decoder.LD_I_ADDR: self._Annn,
            decoder.JP_V0_ADDR: self._Bnnn,
            decoder.RND: self._Cxkk,
            decoder.DRW: self._Dxyn,
            decoder.SKP: self._Ex9E,
            decoder.SKNP: self._ExA1,
            decoder.LD_VX_DT: self._Fx07,
            decoder.LD_VX_K: self._Fx0A,
            decoder.LD_DT_VX: self._Fx15,
            decoder.LD_ST_VX: self._Fx18,
            decoder.ADD_I_VX: self._Fx1E,
            decoder.LD_F_VX: self._Fx29,
            decoder.LD_B_VX: self._Fx33,
            decoder.LD_I_VX: self._Fx55,
            decoder.LD_VX_I: self._Fx65,
            decoder.UNKNOWN: self._opcode_unsupported
        }

    def fetch(self):
        # High byte first.  The low byte wraps round to the start of memory.
        pc = self.registers.pc
        return (self.ram.read(pc) << 8) | self.ram.read((pc + 1) & ADDR_MASK)

    def step(self):
        # Keep track of the program counter before altering it in any way.  Do this all the time in case of a crash.
        self.debug_pc = self.registers.pc
        self.execute(decoder.decode(self.fetch()))

    def execute(self, instruction):
        self.instruction = instruction

        if self.live_debug:
            self.debugger.output(self, instruction)

        self.instructions[instruction.tag](instruction)

        if instruction.tag not in CONTROL_FLOW:
            self.inc_pc()

    def inc_pc(self):
        self.registers.pc = (self.registers.pc + OPCODE_SIZE) & ADDR_MASK

    def _skip_if(self, condition):
        # Skip over the next instruction, or just move on to it
        self.registers.pc = (self.registers.pc + (OPCODE_SIZE * 2 if condition else OPCODE_SIZE)) & ADDR_MASK

    def is_awaiting_key(self):
        return self.awaiting_key_register is not None

    def supply_key(self, key):
        # Completes a pending 'LD Vx, K'
        if self.awaiting_key_register is None:
            raise CPUError("A key was supplied, but the CPU is not waiting for one")

        self.v[self.awaiting_key_register] = key
        self.awaiting_key_register = None
        self.inc_pc()

    def _opcode_unsupported(self, ins):
        raise UnknownOpcodeError(ins.opcode, self.debug_pc)

    def _0nnn(self, ins):  # SYS addr
        # Jumps to native machine code on the original hardware.  Ignored.
        pass

    def _00E0(self, ins):  # CLS
        self.framebuffer.clear()

    def _00EE(self, ins):  # RET
        self.registers.pc = self.stack.pop()

    def _1nnn(self, ins):  # JP addr
        self.registers.pc = ins.nnn

    def _2nnn(self, ins):  # CALL addr
        self.stack.push(self.registers.pc)
        self.registers.pc = ins.nnn

    def _3xkk(self, ins):  # SE Vx, byte
        self._skip_if(self.v[ins.x] == ins.kk)

    def _4xkk(self, ins):  # SNE Vx, byte
        self._skip_if(self.v[ins.x] != ins.kk)

    def _5xy0(self, ins):  # SE Vx, Vy
        self._skip_if(self.v[ins.x] == self.v[ins.y])

    def _6xkk(self, ins):  # LD Vx, byte
        self.v[ins.x] = ins.kk

    def _7xkk(self, ins):  # ADD Vx, byte
        # No carry flag for this one
        self.v[ins.x] = (self.v[ins.x] + ins.kk) & 0xFF

    def _8xy0(self, ins):  # LD Vx, Vy
        self.v[ins.x] = self.v[ins.y]

    def _8xy1(self, ins):  # OR Vx, Vy
        self.v[ins.x] |= self.v[ins.y]

    def _8xy2(self, ins):  # AND Vx, Vy
        self.v[ins.x] &= self.v[ins.y]

    def _8xy3(self, ins):  # XOR Vx, Vy
        self.v[ins.x] ^= self.v[ins.y]

    def _8xy4(self, ins):  # ADD Vx, Vy
        val = self.v[ins.x] + self.v[ins.y]
        self.v[ins.x] = val & 0xFF
        self.v[FLAG_REGISTER] = int(val > 0xFF)  # Vf is set when carrying

    def _sub(self, x, minuend, subtrahend):  # Shared by SUB/SUBN
        self.v[x] = (minuend - subtrahend) & 0xFF
        # Vf is set when NOT borrowing.  Set it AFTER Vx, as Vf is sometimes specified in the parameters.
        self.v[FLAG_REGISTER] = int(minuend > subtrahend)

    def _8xy5(self, ins):  # SUB Vx, Vy
        self._sub(ins.x, self.v[ins.x], self.v[ins.y])

    def _8xy6(self, ins):  # SHR Vx {, Vy}
        # Vy is ignored
        val = self.v[ins.x]
        self.v[ins.x] = val >> 1
        self.v[FLAG_REGISTER] = val & 1  # The whole byte gets set just for the flag

    def _8xy7(self, ins):  # SUBN Vx, Vy
        self._sub(ins.x, self.v[ins.y], self.v[ins.x])

    def _8xyE(self, ins):  # SHL Vx {, Vy}
        # Vy is ignored
        val = self.v[ins.x]
        self.v[ins.x] = (val << 1) & 0xFF
        self.v[FLAG_REGISTER] = val >> 7

    def _9xy0(self, ins):  # SNE Vx, Vy
        self._skip_if(self.v[ins.x] != self.v[ins.y])

    def _Annn(self, ins):  # LD I, addr
        self.registers.i = ins.nnn

    def _Bnnn(self, ins):  # JP V0, addr
        self.registers.pc = (self.v[0] + ins.nnn) & ADDR_MASK

    def _Cxkk(self, ins):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[ins.x] = self.rng.randint(0, 0xFF) & ins.kk

    def _Dxyn(self, ins):  # DRW Vx, Vy, nibble
        # The sprite's start position wraps, and so does every pixel drawn after it
        framebuffer = self.framebuffer
        vid_width, vid_height = framebuffer.get_vid_size()
        vx_pos = self.v[ins.x] % vid_width
        vy_pos = self.v[ins.y] % vid_height
        i = self.registers.i
        collided = False

        for y in range(ins.n):
            if framebuffer.draw_byte(vx_pos, vy_pos + y, self.ram.read((i + y) & ADDR_MASK)):
                # Don't stop drawing.  Set the flag, and never unset it for this sprite.
                collided = True

        self.v[FLAG_REGISTER] = int(collided)

    def _Ex9E(self, ins):  # SKP Vx
        self._skip_if(self.inputs.is_key_down(self.v[ins.x] & 0xF))

    def _ExA1(self, ins):  # SKNP Vx
        self._skip_if(not self.inputs.is_key_down(self.v[ins.x] & 0xF))

    def _Fx07(self, ins):  # LD Vx, DT
        self.v[ins.x] = self.registers.dt

    def _Fx0A(self, ins):  # LD Vx, K
        # Leave the program counter here until the Clock supplies a key
        self.inputs.setup_keypress()  # Forget any previously pressed key
        self.awaiting_key_register = ins.x

    def _Fx15(self, ins):  # LD DT, Vx
        self.registers.dt = self.v[ins.x]

    def _Fx18(self, ins):  # LD ST, Vx
        st = self.v[ins.x]
        # Allow the program to start the buzzer, or immediately stop it before the sound timer hits zero
        self.audio.enable_buzzer(st > 0)
        self.registers.st = st

    def _Fx1E(self, ins):  # ADD I, Vx
        self.registers.i = (self.registers.i + self.v[ins.x]) & ADDR_MASK

    def _Fx29(self, ins):  # LD F, Vx
        self.registers.i = (FONT_LOCATION + GLYPH_SIZE * (self.v[ins.x] & 0xF)) & ADDR_MASK

    def _Fx33(self, ins):  # LD B, Vx
        val = self.v[ins.x]
        i = self.registers.i
        self.ram.write(i & ADDR_MASK, val // 100)             # Most-significant digit
        self.ram.write((i + 1) & ADDR_MASK, (val // 10) % 10)  # Middle digit
        self.ram.write((i + 2) & ADDR_MASK, val % 10)          # Least-significant digit

    def _Fx55(self, ins):  # LD [I], Vx
        i = self.registers.i

        # V0 to Vx inclusive
        for reg in range(ins.x + 1):
            self.ram.write((i + reg) & ADDR_MASK, self.v[reg])

    def _Fx65(self, ins):  # LD Vx, [I]
        i = self.registers.i

        for reg in range(ins.x + 1):
            self.v[reg] = self.ram.read((i + reg) & ADDR_MASK)
