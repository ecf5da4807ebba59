from __future__ import annotations

import copy
from typing import Any, Callable, Iterable, Iterator, List, Tuple

from .generator import Generator
from .random_source import as_random_source
from .stats import TableStats, summarize
from .trainer import ProgressCallback, Trainer
from .transitions import TransitionTable

__all__ = ["Chain"]


def _own_copy(source: Callable[[], int]) -> Callable[[], int]:
    """
    Deep-copy `source` so chain draws leave the caller's generator untouched.

    Sources without copyable state (`random.SystemRandom`, callables holding
    locks or sockets) are shared instead, like plain functions.
    """
    try:
        return copy.deepcopy(source)
    except (TypeError, NotImplementedError, copy.Error):
        return source


class Chain:
    """
    Higher-order Markov chain over arbitrary orderable symbols.

    Counts stay integers and there is no finalisation step, so a chain can
    keep learning between generations. The random source is copied in at
    construction when its state can be copied, so the caller's own
    generator is not advanced by the chain.
    """

    def __init__(
        self,
        order: int,
        random_source: Any = None,
        data: Iterable[Any] | None = None,
    ) -> None:
        if isinstance(order, bool) or not isinstance(order, int):
            raise TypeError(f"order must be an int, got {type(order).__name__}")
        if order < 0:
            raise ValueError(f"order must be >= 0, got {order}")
        self._table = TransitionTable(order)
        self._random_source: Callable[[], int] = _own_copy(as_random_source(random_source))
        self._trainer = Trainer(self._table)
        self._generator = Generator(self._table, self._random_source)
        if data is not None:
            self._trainer.train_all(data)

    @property
    def order(self) -> int:
        return self._table.order

    @property
    def table(self) -> TransitionTable:
        return self._table

    @property
    def random_source(self) -> Callable[[], int]:
        return self._random_source

    # ------------------------------------------------------------------ #
    # Training
    # ------------------------------------------------------------------ #
    def train(
        self,
        sequence: Iterable[Any],
        weight: int = 1,
        *,
        progress_callback: ProgressCallback | None = None,
    ) -> "Chain":
        self._trainer.train(sequence, weight, progress_callback=progress_callback)
        return self

    def train_pair(self, pair: Tuple[Iterable[Any], int]) -> "Chain":
        self._trainer.train_pair(pair)
        return self

    def train_all(
        self,
        samples: Iterable[Any],
        *,
        progress_callback: ProgressCallback | None = None,
    ) -> "Chain":
        self._trainer.train_all(samples, progress_callback=progress_callback)
        return self

    # ------------------------------------------------------------------ #
    # Generation
    # ------------------------------------------------------------------ #
    def generate(self) -> List[Any]:
        return self._generator.generate()

    def iter_symbols(self) -> Iterator[Any]:
        return self._generator.iter_symbols()

    def generate_text(self, separator: str = "") -> str:
        return self._generator.generate_text(separator)

    def __call__(self) -> List[Any]:
        return self.generate()

    def stats(self) -> TableStats:
        return summarize(self._table)

    def __repr__(self) -> str:
        return f"Chain(order={self.order}, states={len(self._table)})"
