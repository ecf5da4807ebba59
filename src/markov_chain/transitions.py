from __future__ import annotations

from typing import Any, Dict, Iterator, List, Tuple

from .errors import UnknownStateError
from .maybe import Maybe
from .memory import MemoryWindow

__all__ = ["Distribution", "TransitionTable"]


class Distribution:
    """
    Integer weights for the transitions observed out of one memory window.

    Probabilities are implicit: a target's weight divided by `total()`.
    Entries iterate in ascending key order, which puts the termination
    marker ahead of every concrete symbol.
    """

    def __init__(self) -> None:
        self._counts: Dict[Maybe[Any], int] = {}
        self._ordered: List[Maybe[Any]] | None = None
        self._total = 0

    def add(self, target: Maybe[Any], weight: int = 1) -> None:
        if target not in self._counts:
            self._counts[target] = 0
            self._ordered = None
        self._counts[target] += weight
        self._total += weight

    def total(self) -> int:
        return self._total

    def get(self, target: Maybe[Any], default: int = 0) -> int:
        return self._counts.get(target, default)

    def keys(self) -> List[Maybe[Any]]:
        if self._ordered is None:
            self._ordered = sorted(self._counts)
        return list(self._ordered)

    def items(self) -> List[Tuple[Maybe[Any], int]]:
        return [(key, self._counts[key]) for key in self.keys()]

    def select(self, draw: int) -> Maybe[Any]:
        """
        Return the first target whose inclusive running sum exceeds `draw`.

        `draw` must lie in `[0, total())`.
        """
        if draw < 0 or draw >= self._total:
            raise ValueError(f"draw {draw} outside [0, {self._total})")
        running = 0
        for key, count in self.items():
            running += count
            if running > draw:
                return key
        raise AssertionError("running sum never exceeded draw")  # pragma: no cover

    def as_dict(self) -> Dict[Maybe[Any], int]:
        return dict(self._counts)

    def __getitem__(self, target: Maybe[Any]) -> int:
        return self._counts[target]

    def __contains__(self, target: object) -> bool:
        return target in self._counts

    def __iter__(self) -> Iterator[Maybe[Any]]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._counts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Distribution):
            return NotImplemented
        return self._counts == other._counts

    def __repr__(self) -> str:
        inner = ", ".join(f"{key!r}: {count}" for key, count in self.items())
        return f"Distribution({{{inner}}})"


class TransitionTable:
    """Maps each memory window seen in training to its outgoing distribution."""

    def __init__(self, order: int) -> None:
        if order < 0:
            raise ValueError(f"chain order must be >= 0, got {order}")
        self.order = order
        self._states: Dict[MemoryWindow, Distribution] = {}

    def initial_state(self) -> MemoryWindow:
        return MemoryWindow.empty(self.order)

    def record(self, state: MemoryWindow, target: Maybe[Any], weight: int = 1) -> None:
        if len(state) != self.order:
            raise ValueError(f"window of length {len(state)} does not match chain order {self.order}")
        distribution = self._states.get(state)
        if distribution is None:
            distribution = Distribution()
            self._states[state] = distribution
        distribution.add(target, weight)

    def lookup(self, state: MemoryWindow) -> Distribution:
        distribution = self._states.get(state)
        if distribution is None:
            raise UnknownStateError(state)
        return distribution

    def get(self, state: MemoryWindow) -> Distribution | None:
        return self._states.get(state)

    def states(self) -> List[MemoryWindow]:
        return sorted(self._states)

    def items(self) -> List[Tuple[MemoryWindow, Distribution]]:
        return [(state, self._states[state]) for state in self.states()]

    def __contains__(self, state: object) -> bool:
        return state in self._states

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[MemoryWindow]:
        return iter(self.states())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransitionTable):
            return NotImplemented
        return self.order == other.order and self._states == other._states

    def __repr__(self) -> str:
        return f"TransitionTable(order={self.order}, states={len(self._states)})"
