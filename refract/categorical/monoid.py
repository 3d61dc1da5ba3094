"""Monoids for folding the foci of a traversal."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, List, TypeVar

from ..core.maybe import Maybe, Absent

M = TypeVar("M")


class Monoid(ABC, Generic[M]):
    """
    Monoid (M, concat, empty).

    Laws:
        concat(empty(), x) == x == concat(x, empty())
        concat(concat(x, y), z) == concat(x, concat(y, z))
    """

    name: str = "Monoid"

    @abstractmethod
    def empty(self) -> M:
        """Return the identity element."""
        pass

    @abstractmethod
    def concat(self, x: M, y: M) -> M:
        """Associative binary operation."""
        pass

    def concat_all(self, values: List[M]) -> M:
        result = self.empty()
        for v in values:
            result = self.concat(result, v)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class _FunctionMonoid(Monoid[M]):
    def __init__(self, empty: Callable[[], M], concat: Callable[[M, M], M], name: str):
        self._empty = empty
        self._concat = concat
        self.name = name

    def empty(self) -> M:
        return self._empty()

    def concat(self, x: M, y: M) -> M:
        return self._concat(x, y)

    def __repr__(self) -> str:
        return f"Monoid({self.name})"


def monoid(
    empty: Callable[[], M], concat: Callable[[M, M], M], name: str = "custom"
) -> Monoid[M]:
    """Build a monoid from an identity thunk and a binary operation."""
    return _FunctionMonoid(empty, concat, name)


class SumMonoid(Monoid[Any]):
    name = "sum"

    def empty(self):
        return 0

    def concat(self, x, y):
        return x + y


class ProductMonoid(Monoid[Any]):
    name = "product"

    def empty(self):
        return 1

    def concat(self, x, y):
        return x * y


class StringMonoid(Monoid[str]):
    name = "string"

    def empty(self) -> str:
        return ""

    def concat(self, x: str, y: str) -> str:
        return x + y


class ListMonoid(Monoid[list]):
    name = "list"

    def empty(self) -> list:
        return []

    def concat(self, x: list, y: list) -> list:
        return [*x, *y]


class AnyMonoid(Monoid[bool]):
    name = "any"

    def empty(self) -> bool:
        return False

    def concat(self, x: bool, y: bool) -> bool:
        return x or y


class AllMonoid(Monoid[bool]):
    name = "all"

    def empty(self) -> bool:
        return True

    def concat(self, x: bool, y: bool) -> bool:
        return x and y


class MinMonoid(Monoid[Maybe]):
    """Smallest value seen, ``Absent`` when nothing was folded."""

    name = "min"

    def empty(self) -> Maybe:
        return Absent

    def concat(self, x: Maybe, y: Maybe) -> Maybe:
        if x.is_absent:
            return y
        if y.is_absent:
            return x
        return y if y.value < x.value else x


class MaxMonoid(Monoid[Maybe]):
    """Largest value seen, ``Absent`` when nothing was folded."""

    name = "max"

    def empty(self) -> Maybe:
        return Absent

    def concat(self, x: Maybe, y: Maybe) -> Maybe:
        if x.is_absent:
            return y
        if y.is_absent:
            return x
        return y if y.value > x.value else x


__all__ = [
    "Monoid",
    "monoid",
    "SumMonoid",
    "ProductMonoid",
    "StringMonoid",
    "ListMonoid",
    "AnyMonoid",
    "AllMonoid",
    "MinMonoid",
    "MaxMonoid",
]
