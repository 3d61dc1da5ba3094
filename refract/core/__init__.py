"""Core types and the Maybe container."""

from .types import S, T, A, B, OpticKind, identity, constant, values_equal
from .maybe import Maybe, Present, Absent

__all__ = [
    "S",
    "T",
    "A",
    "B",
    "OpticKind",
    "identity",
    "constant",
    "values_equal",
    "Maybe",
    "Present",
    "Absent",
]
