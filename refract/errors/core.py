"""
Error Handling Module for refract.

This module provides the exception hierarchy used across the library:
- A base error carrying a code and structured details
- Optic errors for the documented "always succeeds" accessors
- Composition, law and configuration errors

Partial optics (Prism, Optional, Traversal) never raise on absence; the
errors below are reserved for programmer defects.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


# =============================================================================
# EXCEPTIONS
# =============================================================================


class RefractError(Exception):
    """Base exception for all refract errors.

    Attributes:
        message: Error message
        code: Error code for categorization
        details: Additional error details
        cause: Underlying exception, if any
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "cause": repr(self.cause) if self.cause else None,
        }

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        return " | ".join(parts)


class OpticError(RefractError):
    """Error related to optic construction or use.

    Raised when there are issues with:
    - Composer operands of the wrong kind
    - Accessors documented as total failing on their input
    """

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("code", "OPTIC_ERROR")
        super().__init__(message, **kwargs)


class OutOfBoundsError(OpticError, IndexError):
    """Positional lens access outside the sequence range."""

    def __init__(
        self,
        index: int,
        length: int,
        message: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        details.update({"index": index, "length": length})
        super().__init__(
            message or f"Index {index} out of bounds for length {length}",
            code="OUT_OF_BOUNDS",
            details=details,
            **kwargs,
        )
        self.index = index
        self.length = length


class KeyNotFoundError(OpticError, KeyError):
    """Keyed lens access on a missing key."""

    def __init__(self, key: Any, message: Optional[str] = None, **kwargs: Any) -> None:
        details = kwargs.pop("details", {})
        details.update({"key": key})
        super().__init__(
            message or f"Key not found: {key!r}",
            code="NOT_FOUND",
            details=details,
            **kwargs,
        )
        self.key = key


class CompositionError(OpticError):
    """A kind pair with no entry in the composition table."""

    def __init__(
        self,
        outer_kind: Any,
        inner_kind: Any,
        message: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        details.update({"outer_kind": str(outer_kind), "inner_kind": str(inner_kind)})
        super().__init__(
            message or f"No composer for {outer_kind} then {inner_kind}",
            code="UNMATCHED_COMPOSITION",
            details=details,
            **kwargs,
        )
        self.outer_kind = outer_kind
        self.inner_kind = inner_kind


class LawViolationError(RefractError):
    """An optic or monoid failed one of its laws on sample data."""

    def __init__(
        self,
        message: str,
        violations: Optional[list] = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        details.update({"violations": list(violations or [])})
        super().__init__(message, code="LAW_VIOLATION", details=details, **kwargs)
        self.violations = list(violations or [])


class ConfigurationError(RefractError):
    """Error related to configuration.

    Raised when there are issues with:
    - Unknown logging levels or formats
    - Values of the wrong type
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        details.update({"config_key": config_key})
        super().__init__(message, code="CONFIG_ERROR", details=details, **kwargs)


# =============================================================================
# MODULE EXPORTS
# =============================================================================

__all__ = [
    "RefractError",
    "OpticError",
    "OutOfBoundsError",
    "KeyNotFoundError",
    "CompositionError",
    "LawViolationError",
    "ConfigurationError",
]
