from __future__ import annotations

import logging
import os
import re
from typing import Iterable, List, Union

from .bytecode import MAX_INT, MIN_INT, OPERAND_KINDS, Instruction, Opcode, noop
from .labels import Labels
from .vm_errors import TranslationError

logger = logging.getLogger(__name__)

# Opcode token -> variant. Tokens not listed here translate to a no-op.
OPCODES = {op.value: op for op in OPERAND_KINDS}

_BLANK = "".join(chr(c) for c in range(33))
_INT_RE = re.compile(r"[+-]?[0-9]+")

PathLike = Union[str, "os.PathLike[str]"]


class LineScanner:
    """Consumes one source line token by token, left to right."""

    def __init__(self, line: str):
        self.rest = line

    def scan(self) -> str:
        """Return the next word and remove it from the line, or "" if none is left."""
        self.rest = self.rest.strip(_BLANK)
        if not self.rest:
            return ""
        i = 0
        while i < len(self.rest) and self.rest[i] not in " \t":
            i += 1
        word = self.rest[:i]
        self.rest = self.rest[i:]
        return word

    def scan_int(self) -> int:
        """Return the next word as an integer, or MAX_INT if it is missing or malformed."""
        value = parse_int(self.scan())
        return MAX_INT if value is None else value


def parse_int(word: str):
    if not _INT_RE.fullmatch(word):
        return None
    value = int(word)
    if not MIN_INT <= value <= MAX_INT:
        return None
    return value


class Translator:
    def __init__(self, strict: bool = False):
        self.strict = strict

    def translate(self, lines: Iterable[str], labels: Labels, program: List[Instruction]) -> None:
        """Translate ``lines`` into ``labels`` and ``program``, replacing their contents."""
        labels.reset()
        program.clear()
        for line_number, line in enumerate(lines, start=1):
            scanner = LineScanner(line.rstrip("\r\n"))
            label = scanner.scan()
            if not label:
                continue
            labels.add_label(label, len(program))
            program.append(self.get_instruction(label, scanner, line_number))

    def get_instruction(self, label: str, scanner: LineScanner, line_number: int = 0) -> Instruction:
        """Build one instruction from the rest of a line whose label has already been scanned."""
        text = scanner.rest
        opcode = OPCODES.get(scanner.scan())
        if opcode is None:
            return noop(label, text)

        args = []
        for kind in OPERAND_KINDS[opcode]:
            if kind == "label":
                args.append(scanner.scan())
            elif self.strict:
                word = scanner.scan()
                value = parse_int(word)
                if value is None:
                    raise TranslationError(
                        f"expected an integer operand for '{opcode.value}', got {word or 'nothing'!r}",
                        line_number,
                        text,
                    )
                args.append(value)
            else:
                args.append(scanner.scan_int())
        return Instruction(label, opcode, tuple(args))


def read_source(path: PathLike, encoding: str = "utf-8") -> List[str]:
    with open(path, "r", encoding=encoding) as f:
        return f.readlines()


__all__ = ["LineScanner", "Translator", "OPCODES", "parse_int", "read_source"]
