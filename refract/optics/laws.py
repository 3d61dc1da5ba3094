"""
Law checks for optics and monoids.

Each checker evaluates the laws of one optic kind on caller-supplied sample
data and returns a ``LawReport``. ``assert_laws`` turns a failing report into
a ``LawViolationError``.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Sequence

from ..core.types import identity, values_equal
from ..core.maybe import Present
from ..errors import LawViolationError

logger = logging.getLogger(__name__)


@dataclass
class LawReport:
    """Outcome of a law check."""

    subject: str
    checked: int = 0
    violations: List[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.violations

    def record(self, law: str, ok: bool, sample: Any) -> None:
        self.checked += 1
        if not ok:
            self.violations.append(f"{law} failed for {sample!r}")

    def __bool__(self) -> bool:
        return self.passed


def _finish(report: LawReport) -> LawReport:
    if report.passed:
        logger.debug("%s: %d law checks passed", report.subject, report.checked)
    else:
        logger.warning(
            "%s: %d of %d law checks failed",
            report.subject,
            len(report.violations),
            report.checked,
        )
    return report


def check_lens_laws(optic: Any, sources: Iterable[Any], values: Sequence[Any]) -> LawReport:
    """
    Check get-set, set-get and set-set on every source/value combination.

    Applies to Lens and Iso.
    """
    report = LawReport(f"lens {optic!r}")
    for s in sources:
        report.record("set(s, get(s)) == s", values_equal(optic.set(s, optic.get(s)), s), s)
        for b in values:
            report.record(
                "get(set(s, b)) == b", values_equal(optic.get(optic.set(s, b)), b), (s, b)
            )
            for b2 in values:
                report.record(
                    "set(set(s, b1), b2) == set(s, b2)",
                    values_equal(optic.set(optic.set(s, b), b2), optic.set(s, b2)),
                    (s, b, b2),
                )
    return _finish(report)


def check_prism_laws(optic: Any, sources: Iterable[Any], values: Sequence[Any]) -> LawReport:
    report = LawReport(f"prism {optic!r}")
    for b in values:
        report.record(
            "get_option(review(b)) == Present(b)",
            optic.get_option(optic.review(b)) == Present(b),
            b,
        )
    for s in sources:
        matched = optic.get_option(s)
        if matched.is_present:
            report.record(
                "review(a) == s when matched", values_equal(optic.review(matched.value), s), s
            )
    return _finish(report)


def check_iso_laws(optic: Any, sources: Iterable[Any], values: Sequence[Any]) -> LawReport:
    report = LawReport(f"iso {optic!r}")
    for s in sources:
        report.record(
            "reverse_get(get(s)) == s", values_equal(optic.reverse_get(optic.get(s)), s), s
        )
    for b in values:
        report.record(
            "get(reverse_get(b)) == b", values_equal(optic.get(optic.reverse_get(b)), b), b
        )
    return _finish(report)


def check_traversal_laws(
    optic: Any,
    sources: Iterable[Any],
    fns: Sequence[Callable[[Any], Any]] = (),
) -> LawReport:
    """
    Check identity, composition and focus-count preservation.

    ``fns`` are edit functions whose pairwise composition is checked.
    """
    report = LawReport(f"traversal {optic!r}")
    for s in sources:
        report.record(
            "modify_all(s, identity) == s", values_equal(optic.modify_all(s, identity), s), s
        )
        count = len(optic.get_all(s))
        for f in fns:
            report.record(
                "len(get_all(modify_all(s, f))) == len(get_all(s))",
                len(optic.get_all(optic.modify_all(s, f))) == count,
                s,
            )
            for g in fns:
                report.record(
                    "modify_all(modify_all(s, f), g) == modify_all(s, g . f)",
                    values_equal(
                        optic.modify_all(optic.modify_all(s, f), g),
                        optic.modify_all(s, lambda a, f=f, g=g: g(f(a))),
                    ),
                    s,
                )
    return _finish(report)


def check_monoid_laws(monoid: Any, samples: Sequence[Any]) -> LawReport:
    report = LawReport(f"monoid {monoid!r}")
    empty = monoid.empty()
    for x in samples:
        report.record("concat(empty, x) == x", values_equal(monoid.concat(empty, x), x), x)
        report.record("concat(x, empty) == x", values_equal(monoid.concat(x, empty), x), x)
        for y in samples:
            for z in samples:
                report.record(
                    "associativity",
                    values_equal(
                        monoid.concat(monoid.concat(x, y), z),
                        monoid.concat(x, monoid.concat(y, z)),
                    ),
                    (x, y, z),
                )
    return _finish(report)


def assert_laws(report: LawReport) -> LawReport:
    """Raise ``LawViolationError`` unless ``report`` passed."""
    if not report.passed:
        raise LawViolationError(
            f"{report.subject} violated {len(report.violations)} law check(s)",
            violations=report.violations,
        )
    return report


__all__ = [
    "LawReport",
    "check_lens_laws",
    "check_prism_laws",
    "check_iso_laws",
    "check_traversal_laws",
    "check_monoid_laws",
    "assert_laws",
]
