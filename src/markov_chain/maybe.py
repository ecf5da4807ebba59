from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, Tuple, TypeVar

T = TypeVar("T")

__all__ = ["Maybe", "Just", "Nothing", "NOTHING", "just"]


class Maybe(ABC, Generic[T]):
    """
    Either a concrete symbol (`Just`) or the termination marker (`NOTHING`).

    The ordering is total over both variants: `NOTHING` sorts before any
    `Just`, and two `Just` values compare by payload. Distributions rely on
    this to iterate in a fixed order.
    """

    __slots__ = ()

    @property
    @abstractmethod
    def is_nothing(self) -> bool:
        ...

    @abstractmethod
    def _sort_key(self) -> Tuple[Any, ...]:
        ...

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Maybe):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Maybe):
            return NotImplemented
        return self._sort_key() <= other._sort_key()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Maybe):
            return NotImplemented
        return self._sort_key() > other._sort_key()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Maybe):
            return NotImplemented
        return self._sort_key() >= other._sort_key()


class Nothing(Maybe[Any]):
    """Termination marker; also fills window slots before enough history exists."""

    __slots__ = ()
    _instance: "Nothing | None" = None

    def __new__(cls) -> "Nothing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def is_nothing(self) -> bool:
        return True

    @property
    def value(self) -> Any:
        raise ValueError("NOTHING carries no symbol")

    def _sort_key(self) -> Tuple[Any, ...]:
        return (0,)

    def __bool__(self) -> bool:
        return False

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Nothing)

    def __hash__(self) -> int:
        return hash(Nothing)

    def __repr__(self) -> str:
        return "NOTHING"

    def __reduce__(self):
        return (Nothing, ())


class Just(Maybe[T]):
    __slots__ = ("_value",)

    def __init__(self, value: T) -> None:
        self._value = value

    @property
    def is_nothing(self) -> bool:
        return False

    @property
    def value(self) -> T:
        return self._value

    def _sort_key(self) -> Tuple[Any, ...]:
        return (1, self._value)

    def __bool__(self) -> bool:
        return True

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Just) and self._value == other._value

    def __hash__(self) -> int:
        return hash((Just, self._value))

    def __repr__(self) -> str:
        return f"Just({self._value!r})"

    def __reduce__(self):
        return (Just, (self._value,))


NOTHING = Nothing()


def just(value: T) -> Just[T]:
    return Just(value)
