"""
Optic core types.

Optics model bidirectional access into a structure:
- get (read): S → A, or S → Maybe[A], or S → [A]
- set (write): S × B → T

Five kinds are provided, each carrying an ``OpticKind`` discriminator:

    Lens       exactly one focus, total replace
    Prism      zero or one focus, total build from B
    Optional   zero or one focus, replace only if present
    Traversal  zero or more ordered foci, replace all
    Iso        exactly one focus, reversible

Optics only close over the functions they are built from; every write path
returns a new value and never mutates its input.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Generic, List

from ..core.types import S, T, A, B, OpticKind, identity, constant
from ..core.maybe import Maybe, Present, Absent


class Optic(ABC, Generic[S, T, A, B]):
    """Operations shared by every optic kind."""

    __slots__ = ()

    kind: ClassVar[OpticKind]
    is_indexed: ClassVar[bool] = False

    @abstractmethod
    def get_option(self, s: S) -> Maybe[A]:
        """First focus, or ``Absent`` when there is none."""
        pass

    @abstractmethod
    def get_all(self, s: S) -> List[A]:
        """Every focus, in order."""
        pass

    @abstractmethod
    def set(self, s: S, b: B) -> T:
        pass

    @abstractmethod
    def modify(self, s: S, f: Callable[[A], B]) -> T:
        pass

    def exists(self, s: S, predicate: Callable[[A], bool]) -> bool:
        """True when some focus satisfies ``predicate``."""
        return any(predicate(a) for a in self.get_all(s))

    def forall(self, s: S, predicate: Callable[[A], bool]) -> bool:
        """True when every focus satisfies ``predicate`` (vacuously on none)."""
        return all(predicate(a) for a in self.get_all(s))

    def then(self, other: "Optic", strict: bool = False) -> "Optic":
        """
        Compose with an optic focusing inside this one's focus.

        The result kind is the weakest of the two operands.
        """
        from .compose import compose

        return compose(self, other, strict=strict)

    def __rshift__(self, other: "Optic") -> "Optic":
        return self.then(other)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class Lens(Optic[S, T, A, B]):
    """
    Lens (get, set) focusing on exactly one part of a structure.

    Laws:
        get(set(s, b)) == b
        set(s, get(s)) == s
        set(set(s, b1), b2) == set(s, b2)
    """

    __slots__ = ("_getter", "_setter")

    kind = OpticKind.LENS

    def __init__(self, getter: Callable[[S], A], setter: Callable[[S, B], T]):
        self._getter = getter
        self._setter = setter

    def __call__(self, s: S) -> A:
        return self.get(s)

    def get(self, s: S) -> A:
        return self._getter(s)

    def get_option(self, s: S) -> Maybe[A]:
        return Present(self._getter(s))

    def get_all(self, s: S) -> List[A]:
        return [self._getter(s)]

    def set(self, s: S, b: B) -> T:
        return self._setter(s, b)

    def modify(self, s: S, f: Callable[[A], B]) -> T:
        return self._setter(s, f(self._getter(s)))

    def exists(self, s: S, predicate: Callable[[A], bool]) -> bool:
        return predicate(self._getter(s))

    def forall(self, s: S, predicate: Callable[[A], bool]) -> bool:
        return predicate(self._getter(s))

    @staticmethod
    def identity() -> "Lens[S, S, S, S]":
        """Identity lens."""
        return Lens(getter=identity, setter=lambda s, b: b)


class Prism(Optic[S, T, A, B]):
    """
    Prism (match, build) focusing on one case of a sum type.

    ``match`` returns ``Present(a)`` when the case applies and ``Absent``
    otherwise; ``build`` constructs the whole from a focus.

    Laws:
        get_option(review(b)) == Present(b)
        get_option(s) == Present(a)  implies  review(a) == s
    """

    __slots__ = ("_match", "_build")

    kind = OpticKind.PRISM

    def __init__(self, match: Callable[[S], Maybe[A]], build: Callable[[B], T]):
        self._match = match
        self._build = build

    def get(self, s: S) -> Maybe[A]:
        return self._match(s)

    def get_option(self, s: S) -> Maybe[A]:
        return self._match(s)

    def get_all(self, s: S) -> List[A]:
        return self._match(s).to_list()

    def set(self, s: S, b: B) -> T:
        return self._build(b)

    def modify(self, s: S, f: Callable[[A], B]) -> T:
        return self._match(s).match(lambda a: self._build(f(a)), lambda: s)

    def review(self, b: B) -> T:
        """Build the whole structure from a focus."""
        return self._build(b)

    def is_matching(self, s: S) -> bool:
        return self._match(s).is_present


class Optional(Optic[S, T, A, B]):
    """
    Optional (get_option, set): a lens that may fail to focus.

    Writes through an absent focus return the source unchanged; the supplied
    setter is only ever called when ``get_option`` reports a focus.
    """

    __slots__ = ("_get_option", "_setter")

    kind = OpticKind.OPTIONAL

    def __init__(
        self,
        get_option: Callable[[S], Maybe[A]],
        setter: Callable[[S, B], T],
    ):
        self._get_option = get_option
        self._setter = setter

    def get(self, s: S) -> Maybe[A]:
        return self._get_option(s)

    def get_option(self, s: S) -> Maybe[A]:
        return self._get_option(s)

    def get_all(self, s: S) -> List[A]:
        return self._get_option(s).to_list()

    def set(self, s: S, b: B) -> T:
        if self._get_option(s).is_absent:
            return s
        return self._setter(s, b)

    def modify(self, s: S, f: Callable[[A], B]) -> T:
        return self._get_option(s).match(lambda a: self._setter(s, f(a)), lambda: s)


class Traversal(Optic[S, T, A, B]):
    """
    Traversal (get_all, modify_all) focusing on zero or more ordered parts.

    ``modify_all(s, f)`` must call ``f`` once per focus, in ``get_all`` order,
    and must not change the number or order of foci.
    """

    __slots__ = ("_get_all", "_modify_all")

    kind = OpticKind.TRAVERSAL

    def __init__(
        self,
        get_all: Callable[[S], List[A]],
        modify_all: Callable[[S, Callable[[A], B]], T],
    ):
        self._get_all = get_all
        self._modify_all = modify_all

    def get(self, s: S) -> List[A]:
        return self.get_all(s)

    def get_all(self, s: S) -> List[A]:
        return list(self._get_all(s))

    def get_option(self, s: S) -> Maybe[A]:
        return self.head(s)

    def modify_all(self, s: S, f: Callable[[A], B]) -> T:
        return self._modify_all(s, f)

    def modify(self, s: S, f: Callable[[A], B]) -> T:
        return self._modify_all(s, f)

    def set(self, s: S, b: B) -> T:
        return self._modify_all(s, constant(b))

    def set_all(self, s: S, b: B) -> T:
        return self._modify_all(s, constant(b))

    # ----- intermediate operations -----------------------------------------

    def filter(self, predicate: Callable[[A], bool]) -> "Traversal[S, T, A, B]":
        from .traversal_ops import filter_traversal

        return filter_traversal(self, predicate)

    def take(self, n: int) -> "Traversal[S, T, A, B]":
        from .traversal_ops import take_traversal

        return take_traversal(self, n)

    def drop(self, n: int) -> "Traversal[S, T, A, B]":
        from .traversal_ops import drop_traversal

        return drop_traversal(self, n)

    def slice(self, start: int, end: Any = None) -> "Traversal[S, T, A, B]":
        from .traversal_ops import slice_traversal

        return slice_traversal(self, start, end)

    def reverse(self) -> "Traversal[S, T, A, B]":
        from .traversal_ops import reverse_traversal

        return reverse_traversal(self)

    def sort_by(self, key: Callable[[A], Any] = identity) -> "Traversal[S, T, A, B]":
        from .traversal_ops import sort_by_traversal

        return sort_by_traversal(self, key)

    def distinct(self) -> "Traversal[S, T, A, B]":
        from .traversal_ops import distinct_traversal

        return distinct_traversal(self)

    # ----- terminal operations ---------------------------------------------

    def reduce(self, s: S, reducer: Callable[[Any, A], Any], seed: Any) -> Any:
        from .traversal_ops import reduce_traversal

        return reduce_traversal(self, s, reducer, seed)

    def fold_map(self, s: S, monoid: Any, project: Callable[[A], Any] = identity) -> Any:
        from .traversal_ops import fold_map_traversal

        return fold_map_traversal(self, s, monoid, project)

    def all(self, s: S, predicate: Callable[[A], bool]) -> bool:
        return self.forall(s, predicate)

    def any(self, s: S, predicate: Callable[[A], bool]) -> bool:
        return self.exists(s, predicate)

    def count(self, s: S) -> int:
        return len(self.get_all(s))

    def is_empty(self, s: S) -> bool:
        return not self.get_all(s)

    def find(self, s: S, predicate: Callable[[A], bool]) -> Maybe[A]:
        for a in self.get_all(s):
            if predicate(a):
                return Present(a)
        return Absent

    def head(self, s: S) -> Maybe[A]:
        foci = self.get_all(s)
        return Present(foci[0]) if foci else Absent

    def last(self, s: S) -> Maybe[A]:
        foci = self.get_all(s)
        return Present(foci[-1]) if foci else Absent

    def collect(self, s: S, f: Callable[[A], Any]) -> List[Any]:
        return [f(a) for a in self.get_all(s)]


class Iso(Optic[S, T, A, B]):
    """
    Iso (to, from_): a lossless, reversible change of representation.

    Laws:
        reverse_get(get(s)) == s
        get(reverse_get(b)) == b
    """

    __slots__ = ("_to", "_from")

    kind = OpticKind.ISO

    def __init__(self, to: Callable[[S], A], from_: Callable[[B], T]):
        self._to = to
        self._from = from_

    def __call__(self, s: S) -> A:
        return self._to(s)

    def get(self, s: S) -> A:
        return self._to(s)

    def get_option(self, s: S) -> Maybe[A]:
        return Present(self._to(s))

    def get_all(self, s: S) -> List[A]:
        return [self._to(s)]

    def set(self, s: S, b: B) -> T:
        return self._from(b)

    def modify(self, s: S, f: Callable[[A], B]) -> T:
        return self._from(f(self._to(s)))

    def reverse_get(self, b: B) -> T:
        return self._from(b)

    def reverse(self) -> "Iso":
        """The same isomorphism read in the other direction."""
        return Iso(self._from, self._to)

    def exists(self, s: S, predicate: Callable[[A], bool]) -> bool:
        return predicate(self._to(s))

    def forall(self, s: S, predicate: Callable[[A], bool]) -> bool:
        return predicate(self._to(s))

    @staticmethod
    def identity() -> "Iso[S, S, S, S]":
        return Iso(identity, identity)


# ----- constructors ---------------------------------------------------------


def lens(getter: Callable[[S], A], setter: Callable[[S, B], T]) -> Lens[S, T, A, B]:
    """Create a lens from a total getter and a setter ``(s, b) -> t``."""
    return Lens(getter, setter)


def prism(match: Callable[[S], Maybe[A]], build: Callable[[B], T]) -> Prism[S, T, A, B]:
    """Create a prism from a matcher ``s -> Maybe[a]`` and a builder ``b -> t``."""
    return Prism(match, build)


def optional(
    get_option: Callable[[S], Maybe[A]], set: Callable[[S, B], T]
) -> Optional[S, T, A, B]:
    """Create an optional from a partial getter and a setter ``(s, b) -> t``."""
    return Optional(get_option, set)


def traversal(
    get_all: Callable[[S], List[A]],
    modify_all: Callable[[S, Callable[[A], B]], T],
) -> Traversal[S, T, A, B]:
    """Create a traversal from ``s -> [a]`` and ``(s, f) -> t``."""
    return Traversal(get_all, modify_all)


def iso(to: Callable[[S], A], from_: Callable[[B], T]) -> Iso[S, T, A, B]:
    """Create an isomorphism from two mutually inverse functions."""
    return Iso(to, from_)


__all__ = [
    "Optic",
    "Lens",
    "Prism",
    "Optional",
    "Traversal",
    "Iso",
    "lens",
    "prism",
    "optional",
    "traversal",
    "iso",
]
