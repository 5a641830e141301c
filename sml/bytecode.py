from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


MAX_INT = 2**31 - 1
MIN_INT = -(2**31)


class Opcode(Enum):
    ADD = "add"    # ADD dst, left, right
    SUB = "sub"    # SUB dst, left, right
    MUL = "mul"    # MUL dst, left, right
    DIV = "div"    # DIV dst, left, right
    LIN = "lin"    # LIN reg, value
    OUT = "out"    # OUT reg
    BNZ = "bnz"    # BNZ reg, label
    NOOP = "noop"  # NOOP text (unrecognised source line)


# Operand kinds per opcode token, in source order. "int" tokens go through
# the integer scanner, "label" tokens are taken verbatim.
OPERAND_KINDS = {
    Opcode.ADD: ("int", "int", "int"),
    Opcode.SUB: ("int", "int", "int"),
    Opcode.MUL: ("int", "int", "int"),
    Opcode.DIV: ("int", "int", "int"),
    Opcode.LIN: ("int", "int"),
    Opcode.OUT: ("int",),
    Opcode.BNZ: ("int", "label"),
}


@dataclass(frozen=True)
class Instruction:
    label: str
    opcode: Opcode
    args: tuple = ()

    def __str__(self):
        if self.opcode is Opcode.NOOP:
            body = self.args[0] if self.args else ""
            return f"{self.label}: {body.strip()}".rstrip()
        return f"{self.label}: {self.opcode.value} {' '.join(map(str, self.args))}".rstrip()


def noop(label: str, text: str = "") -> Instruction:
    # text is kept verbatim; only the rendering trims it
    return Instruction(label, Opcode.NOOP, (text,))


__all__ = ["Instruction", "Opcode", "OPERAND_KINDS", "MAX_INT", "MIN_INT", "noop"]
