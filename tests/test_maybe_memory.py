from __future__ import annotations

import copy
import unittest

from markov_chain.maybe import NOTHING, Just, Maybe, Nothing, just
from markov_chain.memory import MemoryWindow


class MaybeTests(unittest.TestCase):
    def test_nothing_is_a_singleton(self) -> None:
        self.assertIs(Nothing(), NOTHING)
        self.assertIs(copy.deepcopy(NOTHING), NOTHING)

    def test_truthiness_follows_variant_not_payload(self) -> None:
        self.assertFalse(NOTHING)
        self.assertTrue(Just(0))
        self.assertTrue(Just(""))

    def test_nothing_sorts_before_every_symbol(self) -> None:
        self.assertLess(NOTHING, Just(0))
        self.assertLess(NOTHING, Just("A"))
        self.assertLess(Just("A"), Just("B"))
        self.assertEqual(sorted([Just("B"), NOTHING, Just("A")]), [NOTHING, Just("A"), Just("B")])

    def test_equality_and_hash_are_structural(self) -> None:
        self.assertEqual(Just("x"), just("x"))
        self.assertNotEqual(Just("x"), NOTHING)
        self.assertEqual(len({Just("x"), Just("x"), NOTHING, Nothing()}), 2)

    def test_base_class_is_abstract(self) -> None:
        with self.assertRaises(TypeError):
            Maybe()  # type: ignore[abstract]

    def test_value_access(self) -> None:
        self.assertEqual(Just(42).value, 42)
        with self.assertRaises(ValueError):
            NOTHING.value


class MemoryWindowTests(unittest.TestCase):
    def test_empty_window_holds_only_nothing(self) -> None:
        window = MemoryWindow.empty(3)
        self.assertEqual(len(window), 3)
        self.assertTrue(all(slot is NOTHING for slot in window))
        self.assertEqual(window.symbols(), [])

    def test_advance_preserves_length(self) -> None:
        for order in range(5):
            window = MemoryWindow.empty(order)
            for symbol in "abcdefg":
                window = window.advance(Just(symbol))
                self.assertEqual(len(window), order)

    def test_advance_shifts_fifo(self) -> None:
        window = MemoryWindow.empty(2).advance(Just("a"))
        self.assertEqual(window.slots, (NOTHING, Just("a")))
        window = window.advance(Just("b")).advance(Just("c"))
        self.assertEqual(window.slots, (Just("b"), Just("c")))
        self.assertEqual(window.symbols(), ["b", "c"])

    def test_advance_returns_new_value(self) -> None:
        original = MemoryWindow.empty(1)
        advanced = original.advance(Just("a"))
        self.assertEqual(original.slots, (NOTHING,))
        self.assertNotEqual(original, advanced)

    def test_zero_order_window_stays_empty(self) -> None:
        window = MemoryWindow.empty(0)
        self.assertEqual(window.advance(Just("a")).slots, ())

    def test_structural_equality_and_ordering(self) -> None:
        first = MemoryWindow((Just("a"), Just("b")))
        second = MemoryWindow((Just("a"), Just("b")))
        self.assertEqual(first, second)
        self.assertEqual(hash(first), hash(second))
        self.assertLess(MemoryWindow((NOTHING, Just("z"))), first)
        self.assertLess(first, MemoryWindow((Just("a"), Just("c"))))

    def test_list_slots_become_a_hashable_tuple(self) -> None:
        window = MemoryWindow([NOTHING, Just("a")])  # type: ignore[arg-type]
        self.assertEqual(window.slots, (NOTHING, Just("a")))
        self.assertEqual(window, MemoryWindow.empty(2).advance(Just("a")))
        self.assertEqual({window: 1}[MemoryWindow((NOTHING, Just("a")))], 1)

    def test_rejects_raw_symbols_and_negative_order(self) -> None:
        with self.assertRaises(TypeError):
            MemoryWindow(("a",))  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            MemoryWindow.empty(-1)


if __name__ == "__main__":
    unittest.main()
