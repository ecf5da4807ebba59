from __future__ import annotations

import itertools
import unittest

from markov_chain.errors import UnknownStateError
from markov_chain.generator import Generator
from markov_chain.maybe import NOTHING, Just
from markov_chain.memory import MemoryWindow
from markov_chain.random_source import MersenneSource, SequenceSource
from markov_chain.trainer import Trainer
from markov_chain.transitions import TransitionTable


def trained_table(order: int, *sequences) -> TransitionTable:
    table = TransitionTable(order)
    trainer = Trainer(table)
    for sequence in sequences:
        trainer.train(sequence)
    return table


class GeneratorTests(unittest.TestCase):
    def test_zero_draws_stop_at_the_first_end(self) -> None:
        # NOTHING iterates ahead of "B" in state (A,), so a zero draw ends there.
        table = trained_table(1, ["A", "B", "A"])
        self.assertEqual(Generator(table, SequenceSource([0])).generate(), ["A"])

    def test_scripted_draws_walk_through_b(self) -> None:
        table = trained_table(1, ["A", "B", "A"])
        source = SequenceSource([0, 1, 0, 0])
        self.assertEqual(Generator(table, source).generate(), ["A", "B", "A"])
        self.assertEqual(source.position, 4)

    def test_draws_are_reduced_modulo_total(self) -> None:
        table = trained_table(1, ["A", "B", "A"])
        # 7 % 1 == 0 picks A, 5 % 2 == 1 picks B, 9 % 1 == 0 picks A, 4 % 2 == 0 ends.
        self.assertEqual(Generator(table, SequenceSource([7, 5, 9, 4])).generate(), ["A", "B", "A"])

    def test_reproduces_sequence_when_order_covers_it(self) -> None:
        table = trained_table(5, "hello")
        generator = Generator(table, MersenneSource(3))
        for _ in range(20):
            self.assertEqual(generator.generate(), list("hello"))

    def test_never_emits_unseen_symbols(self) -> None:
        table = trained_table(2, "banana", "bandana")
        generator = Generator(table, MersenneSource(11))
        alphabet = set("banana") | set("bandana")
        for _ in range(50):
            self.assertTrue(set(generator.generate()) <= alphabet)

    def test_empty_training_generates_empty_output(self) -> None:
        table = trained_table(3, [], [])
        generator = Generator(table, MersenneSource(5))
        for _ in range(10):
            self.assertEqual(generator.generate(), [])

    def test_seeded_sources_are_reproducible(self) -> None:
        table = trained_table(1, "mississippi", "missouri", "minnesota")
        first = Generator(table, MersenneSource(1234))
        second = Generator(table, MersenneSource(1234))
        self.assertEqual(
            [first.generate() for _ in range(25)],
            [second.generate() for _ in range(25)],
        )

    def test_untrained_table_raises_unknown_state(self) -> None:
        table = TransitionTable(2)
        with self.assertRaises(UnknownStateError) as ctx:
            Generator(table, SequenceSource([0])).generate()
        self.assertEqual(ctx.exception.state, MemoryWindow.empty(2))

    def test_hand_edited_table_reaching_unseen_state_raises(self) -> None:
        table = TransitionTable(1)
        table.record(table.initial_state(), Just("x"))
        with self.assertRaises(UnknownStateError) as ctx:
            Generator(table, SequenceSource([0])).generate()
        self.assertEqual(ctx.exception.state, MemoryWindow((Just("x"),)))

    def test_zero_weight_state_raises(self) -> None:
        table = TransitionTable(1)
        table.record(table.initial_state(), NOTHING, 0)
        with self.assertRaises(UnknownStateError) as ctx:
            Generator(table, SequenceSource([0])).generate()
        self.assertIn("no weighted transitions", str(ctx.exception))

    def test_order_zero_draws_from_a_single_state(self) -> None:
        table = trained_table(0, "ab")
        # Single state order: NOTHING, a, b (one each).
        self.assertEqual(Generator(table, SequenceSource([1, 2, 0])).generate(), ["a", "b"])

    def test_iter_symbols_can_be_bounded_by_the_caller(self) -> None:
        table = TransitionTable(1)
        table.record(table.initial_state(), Just("a"))
        table.record(MemoryWindow((Just("a"),)), Just("a"))
        symbols = itertools.islice(Generator(table, SequenceSource([0])).iter_symbols(), 5)
        self.assertEqual(list(symbols), ["a"] * 5)

    def test_generate_text(self) -> None:
        table = trained_table(3, "cat")
        self.assertEqual(Generator(table, SequenceSource([0])).generate_text(), "cat")
        words = trained_table(2, ["hello", "world"])
        self.assertEqual(Generator(words, SequenceSource([0])).generate_text(" "), "hello world")

    def test_generate_text_rejects_non_text_symbols(self) -> None:
        table = trained_table(1, [1, 2])
        with self.assertRaises(TypeError):
            Generator(table, SequenceSource([0])).generate_text()


if __name__ == "__main__":
    unittest.main()
