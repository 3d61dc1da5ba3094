"""Core types and utilities for refract."""

from enum import Enum
from typing import Any, TypeVar

import numpy as np

S = TypeVar("S")
T = TypeVar("T")
A = TypeVar("A")
B = TypeVar("B")


class OpticKind(str, Enum):
    """Runtime discriminator carried by every optic."""

    LENS = "Lens"
    PRISM = "Prism"
    OPTIONAL = "Optional"
    TRAVERSAL = "Traversal"
    ISO = "Iso"

    @property
    def is_total(self) -> bool:
        """Exactly one focus on every source."""
        return self in (OpticKind.LENS, OpticKind.ISO)

    @property
    def is_multi(self) -> bool:
        return self is OpticKind.TRAVERSAL


def identity(x):
    """Identity function, handy as a default modifier and sort key."""
    return x


def constant(value):
    """Return a function ignoring its argument and yielding ``value``."""
    return lambda _: value


def values_equal(x: Any, y: Any) -> bool:
    """Equality that compares numpy arrays elementwise instead of truth-testing them."""
    if isinstance(x, np.ndarray) or isinstance(y, np.ndarray):
        return bool(np.array_equal(x, y))
    return bool(x == y)


__all__ = [
    "S",
    "T",
    "A",
    "B",
    "OpticKind",
    "identity",
    "constant",
    "values_equal",
]
