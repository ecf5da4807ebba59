"""
Higher-order Markov chains over arbitrary symbols.

The model keeps plain integer transition counts keyed by a fixed-length
memory window:
    * Trainer: folds weighted example sequences into the transition table.
    * Generator: samples a new sequence by integer-weighted selection.
    * Chain: facade owning the table plus a copy of the random source.

Training never finalises into probabilities, so a chain can keep learning
while it is being sampled.
"""

from .chain import Chain
from .errors import ChainError, UnknownStateError
from .generator import Generator
from .maybe import NOTHING, Just, Maybe, just
from .memory import MemoryWindow
from .random_source import MersenneSource, RandomSource, SequenceSource, as_random_source
from .stats import TableStats, summarize
from .trainer import Trainer, WeightedSample
from .transitions import Distribution, TransitionTable

__all__ = [
    "Chain",
    "ChainError",
    "Distribution",
    "Generator",
    "Just",
    "MemoryWindow",
    "MersenneSource",
    "Maybe",
    "NOTHING",
    "RandomSource",
    "SequenceSource",
    "TableStats",
    "Trainer",
    "TransitionTable",
    "UnknownStateError",
    "WeightedSample",
    "as_random_source",
    "just",
    "summarize",
]
