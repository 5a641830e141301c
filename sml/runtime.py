from __future__ import annotations

from typing import Mapping, Optional, TextIO

from .machine import DEFAULT_REGISTER_COUNT, Machine
from .translator import PathLike
from .vm_errors import TranslationError


def _prepare_machine(
    register_count: int,
    registers: Optional[Mapping[int, int]],
    strict: bool,
    stdout: Optional[TextIO],
) -> Machine:
    machine = Machine(0, register_count, strict=strict, stdout=stdout)
    for index, value in (registers or {}).items():
        machine.registers[index] = value
    return machine


def run_source(
    source: str,
    *,
    registers: Optional[Mapping[int, int]] = None,
    register_count: int = DEFAULT_REGISTER_COUNT,
    max_steps: Optional[int] = None,
    strict: bool = False,
    debug: bool = False,
    stdout: Optional[TextIO] = None,
) -> Machine:
    machine = _prepare_machine(register_count, registers, strict, stdout)
    machine.translate(source.splitlines())
    machine.execute(debug=debug, max_steps=max_steps)
    return machine


def run_file(
    path: PathLike,
    *,
    registers: Optional[Mapping[int, int]] = None,
    register_count: int = DEFAULT_REGISTER_COUNT,
    max_steps: Optional[int] = None,
    strict: bool = False,
    debug: bool = False,
    encoding: str = "utf-8",
    stdout: Optional[TextIO] = None,
) -> Machine:
    machine = _prepare_machine(register_count, registers, strict, stdout)
    if not machine.read_and_translate(path, encoding=encoding):
        raise TranslationError(f"cannot read program file {path}")
    machine.execute(debug=debug, max_steps=max_steps)
    return machine


__all__ = ["run_source", "run_file"]
