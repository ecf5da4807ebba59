from __future__ import annotations

from typing import Any, Callable, Iterable, NamedTuple, Sequence, Sized, Tuple

from log_helpers import log_verbose

from .maybe import NOTHING, Just
from .memory import MemoryWindow
from .transitions import TransitionTable

__all__ = ["Trainer", "WeightedSample", "validate_weight"]

ProgressCallback = Callable[[str, int, int], None]


class WeightedSample(NamedTuple):
    """A training sequence paired with how often it occurs."""

    sequence: Sequence[Any]
    weight: int = 1


def validate_weight(weight: int) -> int:
    if isinstance(weight, bool) or not isinstance(weight, int):
        raise TypeError(f"weight must be an int, got {type(weight).__name__}")
    if weight < 0:
        raise ValueError(f"weight must be >= 0, got {weight}")
    return weight


class Trainer:
    """Folds input sequences into a transition table."""

    def __init__(self, table: TransitionTable) -> None:
        self.table = table

    def train(
        self,
        sequence: Iterable[Any],
        weight: int = 1,
        *,
        progress_callback: ProgressCallback | None = None,
    ) -> MemoryWindow:
        """
        Record every transition of `sequence` with `weight`, then the
        termination at the final window. Returns that final window.

        A weight of zero records nothing, so training with weight `w` leaves
        the same table as `w` unit trainings.
        """
        validate_weight(weight)
        symbols = list(sequence)
        state = self.table.initial_state()
        if weight == 0:
            return state
        total = len(symbols)
        stride = max(1, total // 20) if total else 1
        for idx, symbol in enumerate(symbols, start=1):
            target = Just(symbol)
            self.table.record(state, target, weight)
            state = state.advance(target)
            if progress_callback and (idx % stride == 0 or idx == total):
                progress_callback("train", idx, total)
        self.table.record(state, NOTHING, weight)
        log_verbose(3, f"[trainer:v3] Folded {total} symbol(s) with weight {weight}; end state {state!r}.")
        return state

    def train_pair(
        self,
        pair: Tuple[Iterable[Any], int],
        *,
        progress_callback: ProgressCallback | None = None,
    ) -> MemoryWindow:
        sequence, weight = pair
        return self.train(sequence, weight, progress_callback=progress_callback)

    def train_all(
        self,
        samples: Iterable[Any],
        *,
        progress_callback: ProgressCallback | None = None,
    ) -> int:
        """
        Train every sample in order. `WeightedSample` entries carry their own
        weight, anything else is a plain sequence of weight 1. Returns the
        number of samples consumed.

        Progress reports `("samples", done, total)`; `total` is 0 when
        `samples` has no length (generators, streamed corpora).
        """
        total = len(samples) if isinstance(samples, Sized) else 0
        count = 0
        for sample in samples:
            if isinstance(sample, WeightedSample):
                self.train(sample.sequence, sample.weight)
            else:
                self.train(sample)
            count += 1
            if progress_callback:
                progress_callback("samples", count, total)
        return count
