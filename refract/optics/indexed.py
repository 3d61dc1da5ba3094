"""
Indexed optics.

An indexed optic carries an ``index`` alongside its focus and exposes
explicit-index accessors (``get_at``, ``set_at``, ``modify_at``). Reading or
writing through the plain optic interface uses the stored index.

Composing two indexed optics yields an indexed optic whose index is the pair
``(outer.index, inner.index)``; its kind follows ``COMPOSITION_TABLE``.
"""

from typing import Any, Callable, ClassVar, List, Sequence, Tuple

from ..core.types import OpticKind, constant
from ..core.maybe import Maybe, Present, Absent
from ..errors import OutOfBoundsError, KeyNotFoundError, OpticError
from .base import Lens, Prism, Optional, Traversal
from .compose import composition_kind


class IndexedLens(Lens):
    """Lens focusing on the element at ``index``."""

    __slots__ = ("index", "_get_at", "_set_at")

    is_indexed: ClassVar[bool] = True

    def __init__(
        self,
        index: Any,
        getter: Callable[[Any, Any], Any],
        setter: Callable[[Any, Any, Any], Any],
    ):
        self.index = index
        self._get_at = getter
        self._set_at = setter
        super().__init__(lambda s: getter(s, index), lambda s, b: setter(s, index, b))

    def get_at(self, s, i):
        return self._get_at(s, i)

    def get_at_option(self, s, i) -> Maybe:
        return Present(self._get_at(s, i))

    def get_all_at(self, s, i) -> List[Any]:
        return [self._get_at(s, i)]

    def set_at(self, s, i, b):
        return self._set_at(s, i, b)

    def modify_at(self, s, i, f):
        return self._set_at(s, i, f(self._get_at(s, i)))

    def __repr__(self) -> str:
        return f"IndexedLens({self.index!r})"


class IndexedPrism(Prism):
    """
    Prism matching the element at ``index``.

    ``build(i, b)`` reviews a focus into a fresh structure. ``update(s, i, b)``
    replaces a matched focus inside an existing one and defaults to ``build``.
    """

    __slots__ = ("index", "_match_at", "_build_at", "_update_at")

    is_indexed: ClassVar[bool] = True

    def __init__(
        self,
        index: Any,
        match: Callable[[Any, Any], Maybe],
        build: Callable[[Any, Any], Any],
        update: Callable[[Any, Any, Any], Any] = None,
    ):
        self.index = index
        self._match_at = match
        self._build_at = build
        self._update_at = update or (lambda s, i, b: build(i, b))
        super().__init__(lambda s: match(s, index), lambda b: build(index, b))

    def get_at(self, s, i) -> Maybe:
        return self._match_at(s, i)

    def get_at_option(self, s, i) -> Maybe:
        return self._match_at(s, i)

    def get_all_at(self, s, i) -> List[Any]:
        return self._match_at(s, i).to_list()

    def review_at(self, i, b):
        return self._build_at(i, b)

    def set_at(self, s, i, b):
        if self._match_at(s, i).is_absent:
            return s
        return self._update_at(s, i, b)

    def modify_at(self, s, i, f):
        return self._match_at(s, i).match(lambda a: self._update_at(s, i, f(a)), lambda: s)

    def set(self, s, b):
        if self._match_at(s, self.index).is_absent:
            return self._build_at(self.index, b)
        return self._update_at(s, self.index, b)

    def modify(self, s, f):
        return self.modify_at(s, self.index, f)

    def __repr__(self) -> str:
        return f"IndexedPrism({self.index!r})"


class IndexedOptional(Optional):
    """Optional focusing on the element at ``index``, if there is one."""

    __slots__ = ("index", "_get_option_at", "_set_at")

    is_indexed: ClassVar[bool] = True

    def __init__(
        self,
        index: Any,
        get_option: Callable[[Any, Any], Maybe],
        setter: Callable[[Any, Any, Any], Any],
    ):
        self.index = index
        self._get_option_at = get_option
        self._set_at = setter
        super().__init__(lambda s: get_option(s, index), lambda s, b: setter(s, index, b))

    def get_at(self, s, i) -> Maybe:
        return self._get_option_at(s, i)

    def get_at_option(self, s, i) -> Maybe:
        return self._get_option_at(s, i)

    def get_all_at(self, s, i) -> List[Any]:
        return self._get_option_at(s, i).to_list()

    def set_at(self, s, i, b):
        if self._get_option_at(s, i).is_absent:
            return s
        return self._set_at(s, i, b)

    def modify_at(self, s, i, f):
        return self._get_option_at(s, i).match(lambda a: self._set_at(s, i, f(a)), lambda: s)

    def __repr__(self) -> str:
        return f"IndexedOptional({self.index!r})"


class IndexedTraversal(Traversal):
    """Traversal whose foci are all reached through ``index``."""

    __slots__ = ("index", "_get_all_at", "_modify_all_at")

    is_indexed: ClassVar[bool] = True

    def __init__(
        self,
        index: Any,
        get_all: Callable[[Any, Any], List[Any]],
        modify_all: Callable[[Any, Any, Callable], Any],
    ):
        self.index = index
        self._get_all_at = get_all
        self._modify_all_at = modify_all
        super().__init__(lambda s: get_all(s, index), lambda s, f: modify_all(s, index, f))

    def get_at(self, s, i) -> List[Any]:
        return list(self._get_all_at(s, i))

    def get_all_at(self, s, i) -> List[Any]:
        return list(self._get_all_at(s, i))

    def get_at_option(self, s, i) -> Maybe:
        foci = self.get_all_at(s, i)
        return Present(foci[0]) if foci else Absent

    def set_at(self, s, i, b):
        return self._modify_all_at(s, i, constant(b))

    def modify_at(self, s, i, f):
        return self._modify_all_at(s, i, f)

    def get_all_with_indices(self, s) -> List[Tuple[Any, Any]]:
        """Every focus paired with this traversal's index."""
        return [(self.index, a) for a in self.get_all(s)]

    def modify_with_indices(self, s, f: Callable[[Any, Any], Any]):
        """Modify every focus with ``f(index, focus)``."""
        return self._modify_all_at(s, self.index, lambda a: f(self.index, a))

    def collect_with_indices(self, s, f: Callable[[Any, Any], Any]) -> List[Any]:
        return [f(self.index, a) for a in self.get_all(s)]

    def __repr__(self) -> str:
        return f"IndexedTraversal({self.index!r})"


def indexed_lens(index, getter, setter) -> IndexedLens:
    return IndexedLens(index, getter, setter)


def indexed_prism(index, match, build, update=None) -> IndexedPrism:
    return IndexedPrism(index, match, build, update)


def indexed_optional(index, get_option, set) -> IndexedOptional:
    return IndexedOptional(index, get_option, set)


def indexed_traversal(index, get_all, modify_all) -> IndexedTraversal:
    return IndexedTraversal(index, get_all, modify_all)


# =============================================================================
# COMPOSITION
# =============================================================================


def compose_indexed(outer: Any, inner: Any):
    """
    Compose two indexed optics.

    The result is indexed by ``(outer.index, inner.index)``; accessors given
    an explicit pair route its halves to the outer and inner optic.
    """
    kind = composition_kind(outer.kind, inner.kind)
    index = (outer.index, inner.index)

    def put_at(s, ij, b):
        i, j = ij
        return outer.modify_at(s, i, lambda a: inner.set_at(a, j, b))

    def get_option_at(s, ij):
        i, j = ij
        return outer.get_at_option(s, i).flat_map(lambda a: inner.get_at_option(a, j))

    if kind is OpticKind.LENS:
        return IndexedLens(
            index,
            lambda s, ij: inner.get_at(outer.get_at(s, ij[0]), ij[1]),
            put_at,
        )
    if kind is OpticKind.PRISM:
        return IndexedPrism(
            index,
            get_option_at,
            lambda ij, b: outer.review_at(ij[0], inner.review_at(ij[1], b)),
            put_at,
        )
    if kind is OpticKind.OPTIONAL:
        return IndexedOptional(index, get_option_at, put_at)
    if kind is OpticKind.TRAVERSAL:

        def get_all_at(s, ij):
            i, j = ij
            return [c for a in outer.get_all_at(s, i) for c in inner.get_all_at(a, j)]

        def modify_all_at(s, ij, f):
            i, j = ij
            return outer.modify_at(s, i, lambda a: inner.modify_at(a, j, f))

        return IndexedTraversal(index, get_all_at, modify_all_at)

    raise OpticError(
        f"Cannot compose indexed {outer.kind} with indexed {inner.kind}",
        details={"outer_kind": str(outer.kind), "inner_kind": str(inner.kind)},
    )


# =============================================================================
# SEQUENCE AND MAPPING OPTICS
# =============================================================================


def _in_bounds(seq: Sequence, i: int) -> bool:
    return 0 <= i < len(seq)


def rebuild_like(seq: Sequence, items: List[Any]) -> Sequence:
    """Sequence of the same kind as ``seq`` (list, tuple or namedtuple) holding ``items``."""
    if isinstance(seq, tuple):
        return seq._make(items) if hasattr(seq, "_make") else tuple(items)
    return list(items)


def replace_at(seq: Sequence, i: int, value: Any) -> Sequence:
    """Copy of ``seq`` with position ``i`` replaced."""
    items = list(seq)
    items[i] = value
    return rebuild_like(seq, items)


def with_key(mapping: Any, key: Any, value: Any) -> dict:
    """Copy of ``mapping`` with ``key`` bound to ``value``."""
    updated = dict(mapping)
    updated[key] = value
    return updated


def _checked_get(seq: Sequence, i: int) -> Any:
    if not _in_bounds(seq, i):
        raise OutOfBoundsError(i, len(seq))
    return seq[i]


def _checked_set(seq: Sequence, i: int, value: Any) -> Sequence:
    if not _in_bounds(seq, i):
        raise OutOfBoundsError(i, len(seq))
    return replace_at(seq, i, value)


def sequence_index_lens(i: int) -> IndexedLens:
    """Lens on position ``i``; raises ``OutOfBoundsError`` outside the sequence."""
    return IndexedLens(i, _checked_get, _checked_set)


def sequence_index_prism(i: int) -> IndexedPrism:
    """Prism on position ``i``; ``Absent`` outside the sequence."""

    def match(seq, j):
        return Present(seq[j]) if _in_bounds(seq, j) else Absent

    def build(j, value):
        return [None] * j + [value]

    return IndexedPrism(i, match, build, replace_at)


def sequence_index_traversal(i: int) -> IndexedTraversal:
    """Traversal over position ``i``: one focus in range, none outside."""

    def get_all(seq, j):
        return [seq[j]] if _in_bounds(seq, j) else []

    def modify_all(seq, j, f):
        if not _in_bounds(seq, j):
            return seq
        return replace_at(seq, j, f(seq[j]))

    return IndexedTraversal(i, get_all, modify_all)


def _checked_lookup(mapping: Any, k: Any) -> Any:
    if k not in mapping:
        raise KeyNotFoundError(k)
    return mapping[k]


def dict_key_lens(k: Any) -> IndexedLens:
    """Lens on key ``k``; raises ``KeyNotFoundError`` when reading a missing key."""
    return IndexedLens(k, _checked_lookup, with_key)


def dict_key_prism(k: Any) -> IndexedPrism:
    """Prism on key ``k``; ``Absent`` when the key is missing."""

    def match(mapping, key):
        return Present(mapping[key]) if key in mapping else Absent

    def build(key, value):
        return {key: value}

    return IndexedPrism(k, match, build, with_key)


__all__ = [
    "IndexedLens",
    "IndexedPrism",
    "IndexedOptional",
    "IndexedTraversal",
    "indexed_lens",
    "indexed_prism",
    "indexed_optional",
    "indexed_traversal",
    "compose_indexed",
    "rebuild_like",
    "replace_at",
    "with_key",
    "sequence_index_lens",
    "sequence_index_prism",
    "sequence_index_traversal",
    "dict_key_lens",
    "dict_key_prism",
]
