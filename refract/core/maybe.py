"""
In-band absence for partial optics.

Partial reads (Prism, Optional) never raise on a miss; they return a Maybe:
- Present(value): the focus exists
- Absent: the focus does not exist (a singleton)
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, List, Optional

from .types import A, B


class Maybe(ABC, Generic[A]):
    """Optional value: either ``Present(value)`` or ``Absent``."""

    __slots__ = ()

    @staticmethod
    def of(value: Optional[A]) -> "Maybe[A]":
        """Lift a nullable value, mapping ``None`` to ``Absent``."""
        return Absent if value is None else Present(value)

    @property
    @abstractmethod
    def is_present(self) -> bool:
        pass

    @property
    def is_absent(self) -> bool:
        return not self.is_present

    @abstractmethod
    def map(self, f: Callable[[A], B]) -> "Maybe[B]":
        pass

    @abstractmethod
    def flat_map(self, f: Callable[[A], "Maybe[B]"]) -> "Maybe[B]":
        pass

    @abstractmethod
    def filter(self, predicate: Callable[[A], bool]) -> "Maybe[A]":
        pass

    @abstractmethod
    def get_or_else(self, default: A) -> A:
        pass

    @abstractmethod
    def get_or_else_with(self, fn: Callable[[], A]) -> A:
        pass

    @abstractmethod
    def match(self, present: Callable[[A], B], absent: Callable[[], B]) -> B:
        """Fold both cases into one value."""
        pass

    def to_list(self) -> List[A]:
        return self.match(lambda a: [a], lambda: [])

    def __bool__(self) -> bool:
        return self.is_present


class Present(Maybe[A]):
    """A focus that exists."""

    __slots__ = ("value",)

    def __init__(self, value: A):
        object.__setattr__(self, "value", value)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Present is immutable")

    @property
    def is_present(self) -> bool:
        return True

    def map(self, f: Callable[[A], B]) -> Maybe[B]:
        return Present(f(self.value))

    def flat_map(self, f: Callable[[A], Maybe[B]]) -> Maybe[B]:
        return f(self.value)

    def filter(self, predicate: Callable[[A], bool]) -> Maybe[A]:
        return self if predicate(self.value) else Absent

    def get_or_else(self, default: A) -> A:
        return self.value

    def get_or_else_with(self, fn: Callable[[], A]) -> A:
        return self.value

    def match(self, present: Callable[[A], B], absent: Callable[[], B]) -> B:
        return present(self.value)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Present) and self.value == other.value

    def __hash__(self) -> int:
        return hash(("Present", self.value))

    def __repr__(self) -> str:
        return f"Present({self.value!r})"


class _Absent(Maybe[Any]):
    """A focus that does not exist. Use the ``Absent`` singleton."""

    __slots__ = ()
    _instance: Optional["_Absent"] = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def is_present(self) -> bool:
        return False

    def map(self, f):
        return self

    def flat_map(self, f):
        return self

    def filter(self, predicate):
        return self

    def get_or_else(self, default):
        return default

    def get_or_else_with(self, fn):
        return fn()

    def match(self, present, absent):
        return absent()

    def __eq__(self, other: object) -> bool:
        return isinstance(other, _Absent)

    def __hash__(self) -> int:
        return hash("Absent")

    def __repr__(self) -> str:
        return "Absent"

    def __reduce__(self):
        return (_Absent, ())


Absent: Maybe[Any] = _Absent()


__all__ = ["Maybe", "Present", "Absent"]
