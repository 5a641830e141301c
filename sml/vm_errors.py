from __future__ import annotations

from typing import Optional

from .bytecode import Instruction


class SMLError(RuntimeError):
    """Base class for every error raised by the SML interpreter."""


class TranslationError(SMLError):
    """Raised when source text cannot be turned into a program."""

    def __init__(self, message: str, line_number: Optional[int] = None, line: Optional[str] = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
        self.line = line


class MachineRuntimeError(SMLError):
    """Runtime error raised by the machine with the faulting address attached."""

    def __init__(self, message: str, pc: int, instruction: Optional[Instruction] = None):
        super().__init__(message)
        self.pc = pc
        self.instruction = instruction

    def __str__(self) -> str:
        message = super().__str__()
        if self.instruction is None:
            return f"{message} (pc={self.pc})"
        return f"{message} (pc={self.pc}, {self.instruction})"


class StepLimitExceeded(MachineRuntimeError):
    pass


__all__ = ["SMLError", "TranslationError", "MachineRuntimeError", "StepLimitExceeded"]
