from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence


@dataclass(frozen=True)
class MachineSnapshot:
    """Point-in-time copy of the machine state, used for tracing and tests."""

    pc: int
    registers: Sequence[int]
    output: Sequence[int] = field(default_factory=list)
    steps: int = 0


__all__ = ["MachineSnapshot"]
