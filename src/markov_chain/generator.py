from __future__ import annotations

from typing import Any, Callable, Iterator, List

from log_helpers import log_verbose

from .errors import UnknownStateError
from .transitions import TransitionTable

__all__ = ["Generator"]


class Generator:
    """
    Walks a transition table with integer-weighted sampling.

    There is no length cap: a table trained only through `Trainer` records a
    termination at every reachable window, so the walk ends once the
    termination marker is drawn. A hand-edited table without reachable
    terminations loops forever; bound `iter_symbols` externally if the
    table cannot be trusted.
    """

    def __init__(self, table: TransitionTable, random_source: Callable[[], int]) -> None:
        self.table = table
        self.random_source = random_source

    def iter_symbols(self) -> Iterator[Any]:
        state = self.table.initial_state()
        while True:
            distribution = self.table.lookup(state)
            total = distribution.total()
            if total <= 0:
                raise UnknownStateError(state, "has no weighted transitions")
            draw = self.random_source() % total
            target = distribution.select(draw)
            if target.is_nothing:
                return
            yield target.value
            state = state.advance(target)

    def generate(self) -> List[Any]:
        output = list(self.iter_symbols())
        log_verbose(3, f"[generator:v3] Generated {len(output)} symbol(s).")
        return output

    def generate_text(self, separator: str = "") -> str:
        """Join generated `str` symbols into one text value."""
        pieces = self.generate()
        for piece in pieces:
            if not isinstance(piece, str):
                raise TypeError(f"generate_text needs str symbols, got {type(piece).__name__}")
        return separator.join(pieces)
