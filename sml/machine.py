from __future__ import annotations

import logging
import sys
from typing import Iterable, List, Optional, TextIO

from .bytecode import Instruction, Opcode
from .labels import Labels
from .registers import Registers
from .translator import PathLike, Translator, read_source
from .vm_errors import MachineRuntimeError, StepLimitExceeded, TranslationError
from .vm_events import MachineSnapshot

logger = logging.getLogger(__name__)

DEFAULT_REGISTER_COUNT = 32


class Machine:
    """The SML interpreter.

    Holds the registers, the labels and the program, and the program counter
    containing the address (index into ``program``) of the next instruction
    to execute.
    """

    def __init__(
        self,
        pc: int = 0,
        register_count: int = DEFAULT_REGISTER_COUNT,
        *,
        strict: bool = False,
        stdout: Optional[TextIO] = None,
    ):
        self.pc = pc
        self.registers = Registers(register_count)
        self.labels = Labels()
        self.program: List[Instruction] = []
        self.output: List[int] = []
        self.steps = 0
        self.stdout = stdout
        self.translator = Translator(strict=strict)
        # Opcode dispatch table
        self._handlers = {
            Opcode.ADD: self._op_ADD,
            Opcode.SUB: self._op_SUB,
            Opcode.MUL: self._op_MUL,
            Opcode.DIV: self._op_DIV,
            Opcode.LIN: self._op_LIN,
            Opcode.OUT: self._op_OUT,
            Opcode.BNZ: self._op_BNZ,
            Opcode.NOOP: self._op_NOOP,
        }

    def __str__(self):
        return "".join(f"{inst}\n" for inst in self.program)

    # -------------------- Translation --------------------
    def read_and_translate(self, path: PathLike, encoding: str = "utf-8") -> bool:
        """Translate the program in ``path`` into the labels and the program.

        Returns False, with the program and labels left empty, when the file
        cannot be read.
        """
        self.labels.reset()
        self.program.clear()
        try:
            lines = read_source(path, encoding)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("File: IO error %s", exc)
            return False
        self.translate(lines)
        logger.debug("translated %s: %d instructions, %d labels", path, len(self.program), len(self.labels))
        return True

    def translate(self, lines: Iterable[str]) -> None:
        try:
            self.translator.translate(lines, self.labels, self.program)
        except TranslationError:
            self.labels.reset()
            self.program.clear()
            raise

    def load(self, program: Iterable[Instruction]) -> None:
        """Install an already built program and index its labels."""
        self.labels.reset()
        self.program = list(program)
        for address, inst in enumerate(self.program):
            if inst.label:
                self.labels.add_label(inst.label, address)

    # -------------------- Execution --------------------
    def execute(self, debug: bool = False, max_steps: Optional[int] = None) -> List[int]:
        """Execute the program from the current program counter until it runs off the end."""
        # the step budget applies to this run only
        start = self.steps
        while self.pc < len(self.program):
            self._check_pc()
            if max_steps is not None and self.steps - start >= max_steps:
                raise StepLimitExceeded(
                    f"step limit of {max_steps} exceeded", self.pc, self.program[self.pc]
                )
            if debug:
                out = self.stdout or sys.stdout
                print(f"[PC={self.pc}] EXEC: {self.program[self.pc]}", file=out)
                print(f"  REGISTERS: {self.registers}", file=out)
            self.step()
        return self.output

    def step(self) -> bool:
        """Executes a single instruction. Returns False if the machine has already halted."""
        if self.pc >= len(self.program):
            return False
        self._check_pc()

        address = self.pc
        inst = self.program[address]
        self.pc += 1
        try:
            self._handlers[inst.opcode](inst.args)
        except MachineRuntimeError:
            raise
        except Exception as exc:
            message = str(exc) or exc.__class__.__name__
            raise MachineRuntimeError(message, address, inst) from exc
        self.steps += 1
        return True

    def jump_to_instruction(self, label: str) -> None:
        """Point the program counter at ``label``; unknown labels leave it unchanged."""
        address = self.labels.get_address(label)
        if address is not None:
            self.pc = address

    def snapshot_state(self) -> MachineSnapshot:
        return MachineSnapshot(
            pc=self.pc,
            registers=self.registers.as_list(),
            output=list(self.output),
            steps=self.steps,
        )

    def _check_pc(self) -> None:
        if self.pc < 0:
            raise MachineRuntimeError(f"program counter {self.pc} out of range", self.pc)

    def _check_registers(self, *indices: int) -> None:
        for index in indices:
            if not self.registers.is_valid(index):
                raise IndexError(f"invalid register {index}")

    # -------------------- Opcode handlers --------------------
    def _op_ADD(self, args):
        dst, left, right = args
        self._check_registers(dst, left, right)
        self.registers[dst] = self.registers[left] + self.registers[right]

    def _op_SUB(self, args):
        dst, left, right = args
        self._check_registers(dst, left, right)
        self.registers[dst] = self.registers[left] - self.registers[right]

    def _op_MUL(self, args):
        dst, left, right = args
        self._check_registers(dst, left, right)
        self.registers[dst] = self.registers[left] * self.registers[right]

    def _op_DIV(self, args):
        dst, left, right = args
        self._check_registers(dst, left, right)
        divisor = self.registers[right]
        if divisor == 0:
            raise ZeroDivisionError("division by zero")
        dividend = self.registers[left]
        # truncate toward zero
        quotient = abs(dividend) // abs(divisor)
        if (dividend < 0) != (divisor < 0):
            quotient = -quotient
        self.registers[dst] = quotient

    def _op_LIN(self, args):
        reg, value = args
        self._check_registers(reg)
        self.registers[reg] = value

    def _op_OUT(self, args):
        reg = args[0]
        self._check_registers(reg)
        value = self.registers[reg]
        self.output.append(value)
        print(value, file=self.stdout or sys.stdout)

    def _op_BNZ(self, args):
        reg, label = args
        self._check_registers(reg)
        if self.registers[reg] != 0:
            self.jump_to_instruction(label)

    def _op_NOOP(self, args):
        pass


__all__ = ["Machine", "DEFAULT_REGISTER_COUNT"]
