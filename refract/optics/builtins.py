"""
Ready-made optics for common Python structures.

Dict keys, dataclass and namedtuple attributes, sequence positions, tagged
unions, runtime types, and numpy arrays.
"""

import copy
import dataclasses
from typing import Any

import numpy as np

from ..core.types import identity
from ..core.maybe import Maybe, Present, Absent
from ..errors import OutOfBoundsError
from .base import Lens, Prism, Optional, Traversal
from .indexed import (
    IndexedLens,
    dict_key_lens,
    sequence_index_lens,
    rebuild_like,
    replace_at,
    with_key,
)


def _set_attr(obj: Any, name: str, value: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.replace(obj, **{name: value})
    if isinstance(obj, tuple) and hasattr(obj, "_replace"):
        return obj._replace(**{name: value})
    updated = copy.copy(obj)
    setattr(updated, name, value)
    return updated


def key(k: Any) -> IndexedLens:
    """Lens on a mapping key."""
    return dict_key_lens(k)


def attr(name: str) -> Lens:
    """
    Lens on an attribute.

    Dataclasses are updated with ``dataclasses.replace`` and namedtuples with
    ``_replace``; other objects are shallow-copied before assignment.
    """
    return Lens(lambda s: getattr(s, name), lambda s, b: _set_attr(s, name, b))


def index(i: int) -> IndexedLens:
    """Lens on a sequence position."""
    return sequence_index_lens(i)


def head() -> IndexedLens:
    return sequence_index_lens(0)


def last() -> Lens:
    """Lens on the final element; raises ``OutOfBoundsError`` on an empty sequence."""

    def get(seq):
        if not seq:
            raise OutOfBoundsError(-1, 0)
        return seq[-1]

    def put(seq, b):
        if not seq:
            raise OutOfBoundsError(-1, 0)
        return replace_at(seq, len(seq) - 1, b)

    return Lens(get, put)


def nullable_key(k: Any) -> Optional:
    """Optional on a mapping key that may be missing or ``None``."""
    return Optional(lambda s: Maybe.of(s.get(k)), lambda s, b: with_key(s, k, b))


def nullable_attr(name: str) -> Optional:
    """Optional on an attribute that may be ``None``."""
    return Optional(
        lambda s: Maybe.of(getattr(s, name, None)),
        lambda s, b: _set_attr(s, name, b),
    )


def present() -> Prism:
    """Prism from a ``Maybe`` to its value."""
    return Prism(identity, Present)


def variant(tag: Any, tag_field: str = "tag") -> Prism:
    """
    Prism selecting one case of a tagged union of dicts.

    Matches when ``s[tag_field] == tag``; building stamps the tag on the value.
    """

    def match(s):
        return Present(s) if s.get(tag_field) == tag else Absent

    def build(b):
        return with_key(b, tag_field, tag)

    return Prism(match, build)


def instance_of(cls: type) -> Prism:
    """Prism matching values of a runtime type."""
    return Prism(lambda s: Present(s) if isinstance(s, cls) else Absent, identity)


def each() -> Traversal:
    """Traversal over every element of a list or tuple."""
    return Traversal(list, lambda s, f: rebuild_like(s, [f(a) for a in s]))


def values() -> Traversal:
    """Traversal over the values of a mapping, in iteration order."""
    return Traversal(
        lambda s: list(s.values()),
        lambda s, f: {k: f(v) for k, v in s.items()},
    )


def keys() -> Traversal:
    """
    Traversal over the keys of a mapping.

    The edit function must be injective or entries will merge.
    """
    return Traversal(
        lambda s: list(s.keys()),
        lambda s, f: {f(k): v for k, v in s.items()},
    )


def ndarray_elements() -> Traversal:
    """Traversal over the elements of a numpy array in C order, keeping its shape."""

    def get_all(s):
        return np.asarray(s).ravel().tolist()

    def modify_all(s, f):
        arr = np.asarray(s)
        if arr.size == 0:
            return arr.copy()
        return np.asarray([f(a) for a in arr.ravel().tolist()]).reshape(arr.shape)

    return Traversal(get_all, modify_all)


__all__ = [
    "key",
    "attr",
    "index",
    "head",
    "last",
    "nullable_key",
    "nullable_attr",
    "present",
    "variant",
    "instance_of",
    "each",
    "values",
    "keys",
    "ndarray_elements",
]
