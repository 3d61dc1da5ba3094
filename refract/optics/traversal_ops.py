"""
Bulk operations over traversals.

Intermediate operations (filter, take, drop, slice, reverse, sort_by,
distinct) return a new Traversal over a regrouped view of the base foci.
Each view is described by a list of position groups into the base's
``get_all`` list:

- reads take the first position of every group, in group order
- writes call the edit function once per group, in group order, store the
  result at every position of the group and hand the full replacement
  list back to the base traversal in its own focus order

Positions outside every group keep their current value, so non-selected
foci pass through a write unchanged. Terminal operations fold the foci to
a single value.
"""

from functools import reduce as _reduce
from typing import Any, Callable, Dict, List

from ..core.types import identity, values_equal
from ..core.maybe import Maybe
from .base import Traversal

Grouping = Callable[[List[Any]], List[List[int]]]


def _clamp(n: int, length: int) -> int:
    return max(0, min(n, length))


def _regroup(base: Traversal, grouping: Grouping) -> Traversal:
    def get_all(s):
        foci = base.get_all(s)
        if not foci:
            return []
        return [foci[group[0]] for group in grouping(foci)]

    def modify_all(s, f):
        foci = base.get_all(s)
        if not foci:
            return s
        groups = grouping(foci)
        if not groups:
            return s
        replacements = list(foci)
        for group in groups:
            b = f(foci[group[0]])
            for position in group:
                replacements[position] = b
        it = iter(replacements)
        return base.modify_all(s, lambda _a: next(it))

    return Traversal(get_all, modify_all)


# =============================================================================
# INTERMEDIATE OPERATIONS
# =============================================================================


def filter_traversal(base: Traversal, predicate: Callable[[Any], bool]) -> Traversal:
    """Keep only foci satisfying ``predicate``."""
    return _regroup(base, lambda xs: [[i] for i, x in enumerate(xs) if predicate(x)])


def take_traversal(base: Traversal, n: int) -> Traversal:
    """The first ``n`` foci, ``n`` clamped to ``[0, length]``."""
    return _regroup(base, lambda xs: [[i] for i in range(_clamp(n, len(xs)))])


def drop_traversal(base: Traversal, n: int) -> Traversal:
    """All but the first ``n`` foci, ``n`` clamped to ``[0, length]``."""
    return _regroup(base, lambda xs: [[i] for i in range(_clamp(n, len(xs)), len(xs))])


def slice_traversal(base: Traversal, start: int, end: Any = None) -> Traversal:
    """
    Foci in ``[start, end)``: ``drop(start)`` then ``take(end - start)``.

    ``start`` clamps to ``[0, length]`` like ``drop``. A negative ``end``
    counts from the tail and ``end=None`` means the last focus.
    """

    def grouping(xs):
        length = len(xs)
        stop = length if end is None else (end + length if end < 0 else end)
        lo = _clamp(start, length)
        hi = _clamp(lo + max(0, stop - start), length)
        return [[i] for i in range(lo, hi)]

    return _regroup(base, grouping)


def reverse_traversal(base: Traversal) -> Traversal:
    """Foci in reverse order; writes are scattered back to their positions."""
    return _regroup(base, lambda xs: [[i] for i in reversed(range(len(xs)))])


def sort_by_traversal(base: Traversal, key: Callable[[Any], Any] = identity) -> Traversal:
    """Foci stably sorted by ``key``; writes are applied in sorted order."""
    return _regroup(
        base, lambda xs: [[i] for i in sorted(range(len(xs)), key=lambda i: key(xs[i]))]
    )


def _is_hashable(value: Any) -> bool:
    try:
        hash(value)
    except TypeError:
        return False
    return True


def _distinct_groups(xs: List[Any]) -> List[List[int]]:
    groups: List[List[int]] = []
    by_value: Dict[Any, List[int]] = {}
    for i, x in enumerate(xs):
        if _is_hashable(x):
            group = by_value.get(x)
        else:
            group = next((g for g in groups if values_equal(xs[g[0]], x)), None)
        if group is None:
            group = [i]
            groups.append(group)
            if _is_hashable(x):
                by_value[x] = group
        else:
            group.append(i)
    return groups


def distinct_traversal(base: Traversal) -> Traversal:
    """
    First occurrence of every distinct focus.

    A write edits each distinct value once and stores the result at every
    position holding an equal value.
    """
    return _regroup(base, _distinct_groups)


# =============================================================================
# TERMINAL OPERATIONS
# =============================================================================


def reduce_traversal(
    base: Traversal, s: Any, reducer: Callable[[Any, Any], Any], seed: Any
) -> Any:
    return _reduce(reducer, base.get_all(s), seed)


def fold_map_traversal(
    base: Traversal, s: Any, monoid: Any, project: Callable[[Any], Any] = identity
) -> Any:
    """Project every focus into ``monoid`` and combine left to right."""
    result = monoid.empty()
    for a in base.get_all(s):
        result = monoid.concat(result, project(a))
    return result


def all_traversal(base: Traversal, s: Any, predicate: Callable[[Any], bool]) -> bool:
    return base.forall(s, predicate)


def any_traversal(base: Traversal, s: Any, predicate: Callable[[Any], bool]) -> bool:
    return base.exists(s, predicate)


def count_traversal(base: Traversal, s: Any) -> int:
    return base.count(s)


def find_traversal(base: Traversal, s: Any, predicate: Callable[[Any], bool]) -> Maybe:
    return base.find(s, predicate)


def head_traversal(base: Traversal, s: Any) -> Maybe:
    return base.head(s)


def last_traversal(base: Traversal, s: Any) -> Maybe:
    return base.last(s)


def collect_traversal(base: Traversal, s: Any, f: Callable[[Any], Any]) -> List[Any]:
    return base.collect(s, f)


def is_empty_traversal(base: Traversal, s: Any) -> bool:
    return base.is_empty(s)


def set_all_traversal(base: Traversal, s: Any, value: Any) -> Any:
    return base.set_all(s, value)


__all__ = [
    "filter_traversal",
    "take_traversal",
    "drop_traversal",
    "slice_traversal",
    "reverse_traversal",
    "sort_by_traversal",
    "distinct_traversal",
    "reduce_traversal",
    "fold_map_traversal",
    "all_traversal",
    "any_traversal",
    "count_traversal",
    "find_traversal",
    "head_traversal",
    "last_traversal",
    "collect_traversal",
    "is_empty_traversal",
    "set_all_traversal",
]
