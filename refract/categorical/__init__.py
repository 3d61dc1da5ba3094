"""Algebraic structures used to fold optic foci."""

from .monoid import (
    Monoid,
    monoid,
    SumMonoid,
    ProductMonoid,
    StringMonoid,
    ListMonoid,
    AnyMonoid,
    AllMonoid,
    MinMonoid,
    MaxMonoid,
)

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
