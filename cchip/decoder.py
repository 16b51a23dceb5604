#!/usr/bin/env python3

"""
Instruction Decoder

Turns a 16-bit opcode into an immutable Instruction: a tag naming the operation
plus every operand field the opcode layout can carry.  Operands always sit in
the same nibble positions, so they are extracted by fixed bit masks whatever
the instruction:

    x   = 0x0F00 (register)
    y   = 0x00F0 (register)
    n   = 0x000F (nibble)
    kk  = 0x00FF (byte)
    nnn = 0x0FFF (address)

The first nibble selects the instruction family.  Some families need a second
lookup on the masked opcode, as with the CPU dispatch tables in most CHIP-8
interpreters:

    0x0      : whole opcode (0x00E0, 0x00EE, otherwise SYS)
    0x5/8/9  : bitmask 0xF00F
    0xE/F    : bitmask 0xF0FF

Decoding never fails.  Anything unrecognised decodes to UNKNOWN, and it is up
to the CPU to refuse to execute it.
"""

__copyright__ = "Copyright (C) 2024 ChocChip-8 contributors"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple

Instruction = namedtuple("Instruction", ("tag", "opcode", "x", "y", "n", "kk", "nnn"))

# Instruction tags, named after the Cowgod mnemonics
SYS = "SYS"                  # 0nnn
CLS = "CLS"                  # 00E0
RET = "RET"                  # 00EE
JP = "JP"                    # 1nnn
CALL = "CALL"                # 2nnn
SE_VX_BYTE = "SE_VX_BYTE"    # 3xkk
SNE_VX_BYTE = "SNE_VX_BYTE"  # 4xkk
SE_VX_VY = "SE_VX_VY"        # 5xy0
LD_VX_BYTE = "LD_VX_BYTE"    # 6xkk
ADD_VX_BYTE = "ADD_VX_BYTE"  # 7xkk
LD_VX_VY = "LD_VX_VY"        # 8xy0
OR = "OR"                    # 8xy1
AND = "AND"                  # 8xy2
XOR = "XOR"                  # 8xy3
ADD_VX_VY = "ADD_VX_VY"      # 8xy4
SUB = "SUB"                  # 8xy5
SHR = "SHR"                  # 8xy6
SUBN = "SUBN"                # 8xy7
SHL = "SHL"                  # 8xyE
SNE_VX_VY = "SNE_VX_VY"      # 9xy0
LD_I_ADDR = "LD_I_ADDR"      # Annn
JP_V0_ADDR = "JP_V0_ADDR"    # Bnnn
RND = "RND"                  # Cxkk
DRW = "DRW"                  # Dxyn
SKP = "SKP"                  # Ex9E
SKNP = "SKNP"                # ExA1
LD_VX_DT = "LD_VX_DT"        # Fx07
LD_VX_K = "LD_VX_K"          # Fx0A
LD_DT_VX = "LD_DT_VX"        # Fx15
LD_ST_VX = "LD_ST_VX"        # Fx18
ADD_I_VX = "ADD_I_VX"        # Fx1E
LD_F_VX = "LD_F_VX"          # Fx29
LD_B_VX = "LD_B_VX"          # Fx33
LD_I_VX = "LD_I_VX"          # Fx55
LD_VX_I = "LD_VX_I"          # Fx65
UNKNOWN = "UNKNOWN"

# Families decided by the first nibble alone
_FAMILIES = {
    0x1: JP,
    0x2: CALL,
    0x3: SE_VX_BYTE,
    0x4: SNE_VX_BYTE,
    0x6: LD_VX_BYTE,
    0x7: ADD_VX_BYTE,
    0xA: LD_I_ADDR,
    0xB: JP_V0_ADDR,
    0xC: RND,
    0xD: DRW
}

# Families needing a second lookup on the masked opcode
_MASKED = {
    # Bitmask 0xFFFF (exact match)
    0x00E0: CLS,
    0x00EE: RET,
    # Bitmask 0xF00F
    0x5000: SE_VX_VY,
    0x8000: LD_VX_VY,
    0x8001: OR,
    0x8002: AND,
    0x8003: XOR,
    0x8004: ADD_VX_VY,
    0x8005: SUB,
    0x8006: SHR,
    0x8007: SUBN,
    0x800E: SHL,
    0x9000: SNE_VX_VY,
    # Bitmask 0xF0FF
    0xE09E: SKP,
    0xE0A1: SKNP,
    0xF007: LD_VX_DT,
    0xF00A: LD_VX_K,
    0xF015: LD_DT_VX,
    0xF018: LD_ST_VX,
    0xF01E: ADD_I_VX,
    0xF029: LD_F_VX,
    0xF033: LD_B_VX,
    0xF055: LD_I_VX,
    0xF065: LD_VX_I
}

_FAMILY_MASKS = {
    0x5: 0xF00F,
    0x8: 0xF00F,
    0x9: 0xF00F,
    0xE: 0xF0FF,
    0xF: 0xF0FF
}


def decode_tag(opcode):
    family = opcode >> 12
    tag = _FAMILIES.get(family)

    if tag is not None:
        return tag

    if family == 0x0:
        # Anything that isn't CLS or RET is a call to a native routine
        return _MASKED.get(opcode, SYS)

    return _MASKED.get(opcode & _FAMILY_MASKS[family], UNKNOWN)


def decode(opcode):
    opcode &= 0xFFFF

    return Instruction(
        decode_tag(opcode),
        opcode,
        (opcode & 0xF00) >> 8,
        (opcode & 0xF0) >> 4,
        opcode & 0xF,
        opcode & 0xFF,
        opcode & 0xFFF
    )


# Assembly text for the debugger.  Fields: x, y, n, kk, nnn
_MNEMONICS = {
    SYS: "SYS 0x{4:03x}",
    CLS: "CLS",
    RET: "RET",
    JP: "JP 0x{4:03x}",
    CALL: "CALL 0x{4:03x}",
    SE_VX_BYTE: "SE V{0:01x}, 0x{3:02x}",
    SNE_VX_BYTE: "SNE V{0:01x}, 0x{3:02x}",
    SE_VX_VY: "SE V{0:01x}, V{1:01x}",
    LD_VX_BYTE: "LD V{0:01x}, 0x{3:02x}",
    ADD_VX_BYTE: "ADD V{0:01x}, 0x{3:02x}",
    LD_VX_VY: "LD V{0:01x}, V{1:01x}",
    OR: "OR V{0:01x}, V{1:01x}",
    AND: "AND V{0:01x}, V{1:01x}",
    XOR: "XOR V{0:01x}, V{1:01x}",
    ADD_VX_VY: "ADD V{0:01x}, V{1:01x}",
    SUB: "SUB V{0:01x}, V{1:01x}",
    SHR: "SHR V{0:01x}",
    SUBN: "SUBN V{0:01x}, V{1:01x}",
    SHL: "SHL V{0:01x}",
    SNE_VX_VY: "SNE V{0:01x}, V{1:01x}",
    LD_I_ADDR: "LD I, 0x{4:03x}",
    JP_V0_ADDR: "JP V0, 0x{4:03x}",
    RND: "RND V{0:01x}, 0x{3:02x}",
    DRW: "DRW V{0:01x}, V{1:01x}, 0x{2:01x}",
    SKP: "SKP V{0:01x}",
    SKNP: "SKNP V{0:01x}",
    LD_VX_DT: "LD V{0:01x}, DT",
    LD_VX_K: "LD V{0:01x}, K",
    LD_DT_VX: "LD DT, V{0:01x}",
    LD_ST_VX: "LD ST, V{0:01x}",
    ADD_I_VX: "ADD I, V{0:01x}",
    LD_F_VX: "LD F, V{0:01x}",
    LD_B_VX: "LD B, V{0:01x}",
    LD_I_VX: "LD [I], V{0:01x}",
    LD_VX_I: "LD V{0:01x}, [I]",
    UNKNOWN: "???"
}


def mnemonic(instruction):
    return _MNEMONICS[instruction.tag].format(
        instruction.x, instruction.y, instruction.n, instruction.kk, instruction.nnn
    )
