from __future__ import annotations

from typing import Iterator, List

from .bytecode import MAX_INT


def wrap_int(value: int) -> int:
    """Truncate ``value`` to a 32-bit two's complement integer."""
    value &= 0xFFFFFFFF
    if value > MAX_INT:
        value -= 1 << 32
    return value


class Registers:
    def __init__(self, size: int):
        if size < 0:
            raise ValueError(f"register count must be non-negative, got {size}")
        self._values: List[int] = [0] * size

    def _check(self, index: int) -> None:
        if not 0 <= index < len(self._values):
            raise IndexError(f"register index {index} out of range 0..{len(self._values) - 1}")

    def is_valid(self, index: int) -> bool:
        return 0 <= index < len(self._values)

    def __getitem__(self, index: int) -> int:
        self._check(index)
        return self._values[index]

    def __setitem__(self, index: int, value: int) -> None:
        self._check(index)
        self._values[index] = wrap_int(value)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[int]:
        return iter(self._values)

    def clear(self) -> None:
        for i in range(len(self._values)):
            self._values[i] = 0

    def as_list(self) -> List[int]:
        return list(self._values)

    def __str__(self):
        return " ".join(f"{i}={v}" for i, v in enumerate(self._values))


__all__ = ["Registers", "wrap_int"]
