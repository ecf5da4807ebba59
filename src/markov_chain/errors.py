from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .memory import MemoryWindow

__all__ = ["ChainError", "UnknownStateError"]


class ChainError(Exception):
    """Base class for failures raised by the chain engine."""


class UnknownStateError(ChainError):
    """
    Generation reached a memory window it cannot sample a transition from.

    Tables built only through training never produce this, so it signals a
    broken invariant (an untrained chain or a hand-edited table) rather than
    a condition worth retrying.
    """

    def __init__(self, state: "MemoryWindow", reason: str = "not present in the transition table") -> None:
        self.state = state
        self.reason = reason
        super().__init__(f"impossible memory state {state!r}: {reason}")
