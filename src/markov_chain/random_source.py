"""
Random sources consumed by the generator.

The engine only needs one capability: a zero-argument callable returning a
uniformly distributed non-negative integer. Seeding, thread affinity and
reproducibility stay with whoever builds the source.

Draws are reduced with `draw % total`. When `total` does not evenly divide
the source's range, lower targets are very slightly favoured. This is an
accepted approximation; with a 32-bit source and realistic weights the skew
is far below sampling noise.
"""

from __future__ import annotations

import random
from typing import Any, Callable, Iterable, Protocol, Sequence, runtime_checkable

__all__ = [
    "RandomSource",
    "MersenneSource",
    "SequenceSource",
    "as_random_source",
]


@runtime_checkable
class RandomSource(Protocol):
    """Anything that returns a uniformly distributed unsigned integer when called."""

    def __call__(self) -> int:
        ...


class MersenneSource:
    """Mersenne Twister draws of `bits` width (32 by default, like mt19937)."""

    def __init__(self, seed: Any = None, *, bits: int = 32) -> None:
        if bits <= 0:
            raise ValueError(f"bits must be positive, got {bits}")
        self.bits = bits
        self._rng = random.Random(seed)

    @property
    def max_value(self) -> int:
        return (1 << self.bits) - 1

    def seed(self, seed: Any = None) -> None:
        self._rng.seed(seed)

    def __call__(self) -> int:
        return self._rng.getrandbits(self.bits)

    def __repr__(self) -> str:
        return f"MersenneSource(bits={self.bits})"


class SequenceSource:
    """Replays a fixed list of draws, wrapping around when exhausted."""

    def __init__(self, values: Iterable[int]) -> None:
        self.values: Sequence[int] = tuple(int(value) for value in values)
        if not self.values:
            raise ValueError("SequenceSource needs at least one value")
        for value in self.values:
            if value < 0:
                raise ValueError(f"draws must be non-negative, got {value}")
        self._index = 0

    @property
    def position(self) -> int:
        return self._index

    def reset(self) -> None:
        self._index = 0

    def __call__(self) -> int:
        value = self.values[self._index % len(self.values)]
        self._index += 1
        return value

    def __repr__(self) -> str:
        return f"SequenceSource({list(self.values)!r})"


class _RandomAdapter:
    def __init__(self, rng: random.Random, bits: int = 32) -> None:
        self.rng = rng
        self.bits = bits

    def __call__(self) -> int:
        return self.rng.getrandbits(self.bits)

    def __repr__(self) -> str:
        return f"_RandomAdapter({self.rng!r}, bits={self.bits})"


def as_random_source(source: Any) -> Callable[[], int]:
    """
    Normalise `source` into a zero-argument draw callable.

    `None` builds an entropy-seeded `MersenneSource`, `random.Random`
    instances draw 32-bit integers, and plain callables are used as is.
    """
    if source is None:
        return MersenneSource()
    if isinstance(source, random.Random):
        return _RandomAdapter(source)
    if callable(source):
        return source
    raise TypeError(f"random source must be callable or random.Random, got {type(source).__name__}")
