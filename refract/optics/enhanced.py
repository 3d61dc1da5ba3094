"""Convenience folds over optional foci."""

from typing import Any, Callable

from .base import Lens, Optional


class EnhancedOptional(Optional):
    """
    An Optional with defaulting and narrowing helpers.

    Wraps any optic exposing ``get_option`` and ``set`` (Optional, Prism,
    Lens). Writes through an absent focus leave the source unchanged.
    """

    __slots__ = ("_base",)

    def __init__(self, base: Any):
        self._base = base
        super().__init__(base.get_option, base.set)

    def or_else(self, s: Any, default: Any) -> Any:
        """The focus, or ``default`` when absent."""
        return self.get_option(s).get_or_else(default)

    def or_else_with(self, s: Any, fn: Callable[[Any], Any]) -> Any:
        """The focus, or ``fn(s)`` when absent."""
        return self.get_option(s).get_or_else_with(lambda: fn(s))

    def filter(self, predicate: Callable[[Any], bool]) -> "EnhancedOptional":
        """Narrow to foci that are present and satisfy ``predicate``."""
        base = self._base
        return EnhancedOptional(
            Optional(lambda s: base.get_option(s).filter(predicate), base.set)
        )

    def map_or(self, s: Any, default: Any, f: Callable[[Any], Any]) -> Any:
        return self.get_option(s).match(f, lambda: default)

    def map_or_else(
        self, s: Any, default_fn: Callable[[Any], Any], f: Callable[[Any], Any]
    ) -> Any:
        return self.get_option(s).match(f, lambda: default_fn(s))

    def or_else_lens(self, default: Any) -> Lens:
        """
        Total view reading ``default`` when the focus is absent.

        Writes delegate to this optional, so they are dropped when absent.
        """
        return Lens(lambda s: self.or_else(s, default), self.set)

    def __repr__(self) -> str:
        return f"EnhancedOptional({self._base!r})"


def enhanced(base: Any) -> EnhancedOptional:
    return EnhancedOptional(base)


__all__ = ["EnhancedOptional", "enhanced"]
