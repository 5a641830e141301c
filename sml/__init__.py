from .bytecode import MAX_INT, Instruction, Opcode
from .labels import Labels
from .machine import Machine
from .registers import Registers
from .runtime import run_file, run_source
from .vm_errors import MachineRuntimeError, SMLError, StepLimitExceeded, TranslationError

__all__ = [
    "run_file",
    "run_source",
    "Machine",
    "Registers",
    "Labels",
    "Instruction",
    "Opcode",
    "MAX_INT",
    "SMLError",
    "TranslationError",
    "MachineRuntimeError",
    "StepLimitExceeded",
]
