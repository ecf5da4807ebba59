from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, List, Tuple

from .maybe import NOTHING, Maybe

__all__ = ["MemoryWindow"]


@dataclass(frozen=True, order=True)
class MemoryWindow:
    """
    The last `order` steps seen while training or generating.

    Windows are values: equality, hashing and ordering are slot by slot, so
    they key the transition table directly. The length never changes after
    construction; `advance` returns a new window.
    """

    slots: Tuple[Maybe[Any], ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "slots", tuple(self.slots))
        for slot in self.slots:
            if not isinstance(slot, Maybe):
                raise TypeError(f"memory slots must be Maybe values, got {slot!r}")

    @classmethod
    def empty(cls, order: int) -> "MemoryWindow":
        if order < 0:
            raise ValueError(f"window order must be >= 0, got {order}")
        return cls((NOTHING,) * order)

    @property
    def order(self) -> int:
        return len(self.slots)

    def advance(self, symbol: Maybe[Any]) -> "MemoryWindow":
        """Drop the oldest slot and append `symbol` at the end."""
        if not self.slots:
            return self
        return MemoryWindow(self.slots[1:] + (symbol,))

    def symbols(self) -> List[Any]:
        return [slot.value for slot in self.slots if not slot.is_nothing]

    def __len__(self) -> int:
        return len(self.slots)

    def __iter__(self) -> Iterator[Maybe[Any]]:
        return iter(self.slots)

    def __repr__(self) -> str:
        inner = ", ".join(repr(slot) for slot in self.slots)
        return f"MemoryWindow({inner})"
