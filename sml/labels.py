from __future__ import annotations

from typing import Dict, Iterator, Optional


class Labels:
    """Label name to program address bindings, in definition order."""

    def __init__(self):
        self._addresses: Dict[str, int] = {}

    def add_label(self, name: str, address: int) -> None:
        # the first definition of a name keeps its address
        self._addresses.setdefault(name, address)

    def get_address(self, name: str) -> Optional[int]:
        return self._addresses.get(name)

    def reset(self) -> None:
        self._addresses.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._addresses

    def __len__(self) -> int:
        return len(self._addresses)

    def __iter__(self) -> Iterator[str]:
        return iter(self._addresses)

    def __str__(self):
        return "(" + ", ".join(self._addresses) + ")"


__all__ = ["Labels"]
