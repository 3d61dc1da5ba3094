"""
Optic composition.

``compose(outer, inner)`` looks the pair of kinds up in a fixed table and
dispatches to the composer that builds the weaker optic. Lens and Iso are
total single-focus optics; Prism and Optional may miss; anything composed
with a Traversal is a Traversal.
"""

import logging
from functools import reduce
from typing import Any, Callable, Dict, Optional as Opt, Tuple

from ..core.types import OpticKind
from ..errors import CompositionError, OpticError
from .base import Optic, Lens, Prism, Optional, Traversal, Iso

logger = logging.getLogger(__name__)

L, P, O, TR, I = (
    OpticKind.LENS,
    OpticKind.PRISM,
    OpticKind.OPTIONAL,
    OpticKind.TRAVERSAL,
    OpticKind.ISO,
)

COMPOSITION_TABLE: Dict[Tuple[OpticKind, OpticKind], OpticKind] = {
    (L, L): L,
    (L, P): O,
    (L, O): O,
    (L, TR): TR,
    (L, I): L,
    (P, L): O,
    (P, P): P,
    (P, O): O,
    (P, TR): TR,
    (P, I): P,
    (O, L): O,
    (O, P): O,
    (O, O): O,
    (O, TR): TR,
    (O, I): O,
    (TR, L): TR,
    (TR, P): TR,
    (TR, O): TR,
    (TR, TR): TR,
    (TR, I): TR,
    (I, L): L,
    (I, P): P,
    (I, O): O,
    (I, TR): TR,
    (I, I): I,
}


def composition_kind(outer_kind: Any, inner_kind: Any) -> Opt[OpticKind]:
    """Result kind of composing ``outer_kind`` then ``inner_kind``, if tabled."""
    return COMPOSITION_TABLE.get((outer_kind, inner_kind))


def _expect(optic: Any, kinds: Tuple[OpticKind, ...], role: str) -> None:
    kind = getattr(optic, "kind", None)
    if kind not in kinds:
        expected = " or ".join(k.value for k in kinds)
        raise OpticError(
            f"{role} operand must be a {expected}, got {kind}",
            details={"role": role, "kind": str(kind)},
        )


_TOTAL = (L, I)
_SINGLE = (L, P, O, I)


# =============================================================================
# COMPOSERS
# =============================================================================


def compose_lens_lens(outer: Any, inner: Any) -> Lens:
    """Lens then Lens: a Lens. Either side may also be an Iso."""
    _expect(outer, _TOTAL, "outer")
    _expect(inner, _TOTAL, "inner")

    def get(s):
        return inner.get(outer.get(s))

    def put(s, d):
        return outer.set(s, inner.set(outer.get(s), d))

    return Lens(get, put)


def compose_lens_prism(outer: Any, inner: Any) -> Optional:
    """Lens then Prism: an Optional that writes only when the prism matches."""
    _expect(outer, _TOTAL, "outer")
    _expect(inner, (P,), "inner")

    def get_option(s):
        return inner.get_option(outer.get(s))

    def put(s, d):
        return outer.set(s, inner.set(outer.get(s), d))

    return Optional(get_option, put)


def compose_lens_optional(outer: Any, inner: Any) -> Optional:
    _expect(outer, _TOTAL, "outer")
    _expect(inner, (O,), "inner")

    def get_option(s):
        return inner.get_option(outer.get(s))

    def put(s, d):
        return outer.set(s, inner.set(outer.get(s), d))

    return Optional(get_option, put)


def compose_prism_lens(outer: Any, inner: Any) -> Optional:
    _expect(outer, (P,), "outer")
    _expect(inner, (L,), "inner")

    def get_option(s):
        return outer.get_option(s).map(inner.get)

    def put(s, d):
        return outer.get_option(s).match(lambda a: outer.set(s, inner.set(a, d)), lambda: s)

    return Optional(get_option, put)


def compose_prism_prism(outer: Any, inner: Any) -> Prism:
    _expect(outer, (P,), "outer")
    _expect(inner, (P,), "inner")

    def match(s):
        return outer.get_option(s).flat_map(inner.get_option)

    def build(d):
        return outer.review(inner.review(d))

    return Prism(match, build)


def compose_prism_optional(outer: Any, inner: Any) -> Optional:
    _expect(outer, (P,), "outer")
    _expect(inner, (O,), "inner")

    def get_option(s):
        return outer.get_option(s).flat_map(inner.get_option)

    def put(s, d):
        return outer.get_option(s).match(lambda a: outer.set(s, inner.set(a, d)), lambda: s)

    return Optional(get_option, put)


def compose_optional_lens(outer: Any, inner: Any) -> Optional:
    """Optional then Lens (or Iso): an Optional."""
    _expect(outer, (O,), "outer")
    _expect(inner, _TOTAL, "inner")

    def get_option(s):
        return outer.get_option(s).map(inner.get)

    def put(s, d):
        return outer.get_option(s).match(lambda a: outer.set(s, inner.set(a, d)), lambda: s)

    return Optional(get_option, put)


def compose_optional_prism(outer: Any, inner: Any) -> Optional:
    """Optional then Prism: an Optional that writes only when both match."""
    _expect(outer, (O,), "outer")
    _expect(inner, (P,), "inner")

    def get_option(s):
        return outer.get_option(s).flat_map(inner.get_option)

    def put(s, d):
        return outer.get_option(s).match(lambda a: outer.set(s, inner.set(a, d)), lambda: s)

    return Optional(get_option, put)


def _compose_partial(outer: Any, inner: Any) -> Optional:
    def get_option(s):
        return outer.get_option(s).flat_map(inner.get_option)

    def put(s, d):
        return outer.get_option(s).match(lambda a: outer.set(s, inner.set(a, d)), lambda: s)

    return Optional(get_option, put)


def compose_optional_optional(outer: Any, inner: Any) -> Optional:
    """Optional then Optional. Accepts any single-focus operands."""
    _expect(outer, _SINGLE, "outer")
    _expect(inner, _SINGLE, "inner")
    return _compose_partial(outer, inner)


def compose_with_traversal(outer: Any, inner: Any) -> Traversal:
    """
    Any optic composed with a Traversal, or a Traversal with any optic.

    Foci are the flattened inner foci of every outer focus, in order.
    """

    def get_all(s):
        return [c for a in outer.get_all(s) for c in inner.get_all(a)]

    def modify_all(s, f):
        return outer.modify(s, lambda a: inner.modify(a, f))

    return Traversal(get_all, modify_all)


def compose_iso_iso(outer: Any, inner: Any) -> Iso:
    _expect(outer, (I,), "outer")
    _expect(inner, (I,), "inner")
    return Iso(
        lambda s: inner.get(outer.get(s)),
        lambda d: outer.reverse_get(inner.reverse_get(d)),
    )


def compose_iso_prism(outer: Any, inner: Any) -> Prism:
    _expect(outer, (I,), "outer")
    _expect(inner, (P,), "inner")

    def match(s):
        return inner.get_option(outer.get(s))

    def build(d):
        return outer.reverse_get(inner.review(d))

    return Prism(match, build)


def compose_prism_iso(outer: Any, inner: Any) -> Prism:
    _expect(outer, (P,), "outer")
    _expect(inner, (I,), "inner")

    def match(s):
        return outer.get_option(s).map(inner.get)

    def build(d):
        return outer.review(inner.reverse_get(d))

    return Prism(match, build)


_COMPOSERS: Dict[Tuple[OpticKind, OpticKind], Callable[[Any, Any], Optic]] = {
    (L, L): compose_lens_lens,
    (L, P): compose_lens_prism,
    (L, O): compose_lens_optional,
    (L, I): compose_lens_lens,
    (P, L): compose_prism_lens,
    (P, P): compose_prism_prism,
    (P, O): compose_prism_optional,
    (P, I): compose_prism_iso,
    (O, L): compose_optional_lens,
    (O, P): compose_optional_prism,
    (O, O): compose_optional_optional,
    (O, I): compose_optional_lens,
    (I, L): compose_lens_lens,
    (I, P): compose_iso_prism,
    (I, O): compose_lens_optional,
    (I, I): compose_iso_iso,
}


def compose(outer: Any, inner: Any, strict: bool = False) -> Optic:
    """
    Compose ``outer`` then ``inner``.

    Args:
        outer: Optic focusing from S to A
        inner: Optic focusing from A to C
        strict: Raise ``CompositionError`` for kinds missing from the
            table instead of falling back to Optional composition

    Returns:
        Optic from S to C whose kind is given by ``COMPOSITION_TABLE``
    """
    if getattr(outer, "is_indexed", False) and getattr(inner, "is_indexed", False):
        from .indexed import compose_indexed

        return compose_indexed(outer, inner)

    outer_kind = getattr(outer, "kind", None)
    inner_kind = getattr(inner, "kind", None)

    if TR in (outer_kind, inner_kind):
        return compose_with_traversal(outer, inner)

    composer = _COMPOSERS.get((outer_kind, inner_kind))
    if composer is not None:
        return composer(outer, inner)

    if strict:
        raise CompositionError(outer_kind, inner_kind)
    logger.debug(
        "No composer for %s then %s, falling back to Optional composition",
        outer_kind,
        inner_kind,
    )
    return _compose_partial(outer, inner)


def chain(*optics: Any) -> Optic:
    """
    Compose optics left to right.

    ``chain(a, b, c)`` is ``a.then(b).then(c)``; ``chain()`` is the identity iso.
    """
    if not optics:
        return Iso.identity()
    return reduce(compose, optics)


__all__ = [
    "COMPOSITION_TABLE",
    "composition_kind",
    "compose",
    "chain",
    "compose_lens_lens",
    "compose_lens_prism",
    "compose_lens_optional",
    "compose_prism_lens",
    "compose_prism_prism",
    "compose_prism_optional",
    "compose_optional_lens",
    "compose_optional_prism",
    "compose_optional_optional",
    "compose_with_traversal",
    "compose_iso_iso",
    "compose_iso_prism",
    "compose_prism_iso",
]
