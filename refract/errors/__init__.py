"""Exception hierarchy for refract."""

from .core import (
    RefractError,
    OpticError,
    OutOfBoundsError,
    KeyNotFoundError,
    CompositionError,
    LawViolationError,
    ConfigurationError,
)

__all__ = [
    "RefractError",
    "OpticError",
    "OutOfBoundsError",
    "KeyNotFoundError",
    "CompositionError",
    "LawViolationError",
    "ConfigurationError",
]
