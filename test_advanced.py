"""
Advanced Test Suite for refract.
Tests bulk operations, indexed optics, enhanced optionals, built-in optics,
monoids, errors, configuration and logging.
"""

import sys

print("=" * 60)
print("REFRACT - ADVANCED FEATURES TESTS")
print("=" * 60)


def test_take_drop_slice():
    print("\n[1/12] Testing take / drop / slice...")
    from refract import each

    xs = [1, 2, 3, 4, 5]
    assert each().take(10).get_all(xs) == xs
    assert each().take(-1).get_all(xs) == []
    assert each().drop(2).get_all(xs) == [3, 4, 5]
    assert each().drop(9).get_all(xs) == []
    assert each().slice(-3).get_all(xs) == xs
    assert each().slice(-2, 3).get_all(xs) == [1, 2, 3, 4, 5]
    assert each().slice(0, -1).get_all(xs) == [1, 2, 3, 4]
    assert each().slice(3, 1).get_all(xs) == []
    assert each().take(2).modify(xs, lambda x: 0) == [0, 0, 3, 4, 5]
    assert each().drop(3).set(xs, 9) == [1, 2, 3, 9, 9]
    assert each().filter(lambda x: x > 9).modify(xs, lambda x: 0) is xs

    print("  ✓ clamping, negative bounds, pass-through writes")


def test_reverse_involution():
    print("\n[2/12] Testing reverse().reverse()...")
    from refract import each

    xs = ["a", "b", "c"]
    twice = each().reverse().reverse()
    assert twice.get_all(xs) == xs

    calls = []

    def record(x):
        calls.append(x)
        return x.upper()

    assert twice.modify(xs, record) == ["A", "B", "C"]
    assert calls == xs

    print("  ✓ read and write order restored")


def test_terminal_ops():
    print("\n[3/12] Testing Terminal Operations...")
    from refract import each, SumMonoid, MinMonoid, ListMonoid, Present, Absent

    xs = [4, 2, 7]
    t = each()
    assert t.reduce(xs, lambda acc, x: acc + x, 0) == 13
    assert t.fold_map(xs, SumMonoid()) == 13
    assert t.fold_map([], SumMonoid()) == 0
    assert t.fold_map([], ListMonoid()) == []
    assert t.fold_map(xs, MinMonoid(), Present) == Present(2)
    assert t.fold_map([], MinMonoid(), Present) is Absent
    assert t.all([], lambda x: False) is True
    assert t.any([], lambda x: True) is False
    assert t.all(xs, lambda x: x > 1)
    assert t.count(xs) == 3
    assert t.find(xs, lambda x: x > 3) == Present(4)
    assert t.find(xs, lambda x: x > 30) is Absent
    assert t.head(xs) == Present(4) and t.last(xs) == Present(7)
    assert t.head([]) is Absent
    assert t.collect(xs, str) == ["4", "2", "7"]
    assert t.is_empty([]) and not t.is_empty(xs)
    assert t.set_all(xs, 1) == [1, 1, 1]
    assert t.get_option(xs) == Present(4)

    print("  ✓ reduce, fold_map, all/any, count, find, head/last, collect")


def test_free_functions():
    print("\n[4/12] Testing Free Functions...")
    from refract import each, SumMonoid
    from refract.optics.traversal_ops import (
        filter_traversal,
        sort_by_traversal,
        distinct_traversal,
        fold_map_traversal,
        count_traversal,
    )

    xs = [3, 3, 1, 2]
    odd = filter_traversal(each(), lambda x: x % 2)
    assert odd.get_all(xs) == [3, 3, 1]
    assert sort_by_traversal(distinct_traversal(each())).get_all(xs) == [1, 2, 3]
    assert fold_map_traversal(each(), xs, SumMonoid()) == 9
    assert count_traversal(odd, xs) == 3

    print("  ✓ filter_traversal, sort_by_traversal, fold_map_traversal")


def test_traversal_composition():
    print("\n[5/12] Testing Traversal Composition...")
    from refract import key, each, instance_of, OpticKind, SumMonoid

    order = {"items": [{"price": 3}, {"price": 5}], "id": 1}
    prices = key("items").then(each()).then(key("price"))
    assert prices.kind is OpticKind.TRAVERSAL
    assert prices.get_all(order) == [3, 5]
    assert prices.modify(order, lambda p: p * 2) == {
        "items": [{"price": 6}, {"price": 10}],
        "id": 1,
    }
    assert prices.fold_map(order, SumMonoid()) == 8

    nested = [[1, 2], [], [3]]
    flat = each().then(each())
    assert flat.get_all(nested) == [1, 2, 3]
    assert flat.modify(nested, lambda x: x + 1) == [[2, 3], [], [4]]

    ints = each().then(instance_of(int))
    mixed = [1, "a", 2]
    assert ints.get_all(mixed) == [1, 2]
    assert ints.modify(mixed, lambda x: x + 1) == [2, "a", 3]

    cheap = prices.filter(lambda p: p < 4)
    assert cheap.set(order, 0)["items"] == [{"price": 0}, {"price": 5}]

    print("  ✓ key → each → key, nested each, each → prism")


def test_indexed_optics():
    print("\n[6/12] Testing Indexed Optics...")
    from refract import (
        sequence_index_lens,
        sequence_index_prism,
        sequence_index_traversal,
        dict_key_lens,
        dict_key_prism,
        OutOfBoundsError,
        KeyNotFoundError,
        Present,
        Absent,
    )

    second = sequence_index_lens(1)
    assert second.index == 1
    assert second.get([10, 20, 30]) == 20
    assert second.get_at([10, 20, 30], 2) == 30
    assert second.set_at((1, 2, 3), 0, 9) == (9, 2, 3)
    assert second.modify_at([1, 2], 0, lambda x: -x) == [-1, 2]

    try:
        sequence_index_lens(5).get([1])
        assert False, "expected OutOfBoundsError"
    except OutOfBoundsError as e:
        assert isinstance(e, IndexError)
        assert e.details == {"index": 5, "length": 1}

    try:
        dict_key_lens("x").get({})
        assert False, "expected KeyNotFoundError"
    except KeyError as e:
        assert isinstance(e, KeyNotFoundError)

    assert sequence_index_prism(5).get_option([1]) is Absent
    short = [1]
    assert sequence_index_prism(5).set_at(short, 5, 0) is short
    assert sequence_index_prism(0).set([1, 2], 7) == [7, 2]

    mapping = {"a": 1, "b": 2}
    assert dict_key_prism("a").get_option(mapping) == Present(1)
    assert dict_key_prism("z").get_option(mapping) is Absent
    assert dict_key_prism("a").set(mapping, 9) == {"a": 9, "b": 2}
    assert dict_key_prism("a").review(4) == {"a": 4}

    first = sequence_index_traversal(0)
    assert first.get_all([]) == []
    assert first.get_all_with_indices([5, 6]) == [(0, 5)]
    assert first.modify_with_indices([5, 6], lambda i, a: a + i + 1) == [6, 6]
    assert first.collect_with_indices([5, 6], lambda i, a: f"{i}:{a}") == ["0:5"]

    print("  ✓ IndexedLens, IndexedPrism, IndexedTraversal built-ins")


def test_indexed_composition():
    print("\n[7/12] Testing Indexed Composition...")
    from refract import (
        Lens,
        dict_key_lens,
        dict_key_prism,
        sequence_index_lens,
        sequence_index_prism,
        sequence_index_traversal,
        IndexedLens,
        IndexedPrism,
        IndexedOptional,
        IndexedTraversal,
        Present,
        Absent,
    )

    data = {"users": [7, 8]}
    first_user = dict_key_lens("users").then(sequence_index_lens(0))
    assert isinstance(first_user, IndexedLens)
    assert first_user.index == ("users", 0)
    assert first_user.get(data) == 7
    assert first_user.get_at(data, ("users", 1)) == 8
    assert first_user.set_at(data, ("users", 1), 9) == {"users": [7, 9]}
    assert data == {"users": [7, 8]}

    fourth = dict_key_lens("xs").then(sequence_index_prism(3))
    assert isinstance(fourth, IndexedOptional)
    source = {"xs": [1]}
    assert fourth.get_option(source) is Absent
    assert fourth.set(source, 0) is source
    assert fourth.set({"xs": [1, 2, 3, 4]}, 0) == {"xs": [1, 2, 3, 0]}

    ab = dict_key_prism("a").then(dict_key_prism("b"))
    assert isinstance(ab, IndexedPrism)
    assert ab.get_option({"a": {"b": 1}}) == Present(1)
    assert ab.get_option({"a": {}}) is Absent
    assert ab.review(5) == {"a": {"b": 5}}
    assert ab.set({"a": {"b": 1, "c": 2}}, 7) == {"a": {"b": 7, "c": 2}}

    cell = sequence_index_traversal(0).then(sequence_index_traversal(1))
    assert isinstance(cell, IndexedTraversal)
    assert cell.index == (0, 1)
    assert cell.get_all([[1, 2], [3]]) == [2]
    assert cell.get_all_with_indices([[1, 2]]) == [((0, 1), 2)]

    field_of_first = sequence_index_traversal(0).then(dict_key_lens("a"))
    assert isinstance(field_of_first, IndexedTraversal)
    assert field_of_first.index == (0, "a")
    rows = [{"a": 1}, {"a": 2}]
    assert field_of_first.get_all(rows) == [1]
    assert field_of_first.modify(rows, lambda x: x + 10) == [{"a": 11}, {"a": 2}]
    assert field_of_first.get_all([]) == []
    assert field_of_first.modify([], lambda x: x + 10) == []
    assert rows == [{"a": 1}, {"a": 2}]

    second_x = dict_key_lens("xs").then(sequence_index_traversal(1))
    assert isinstance(second_x, IndexedTraversal)
    assert second_x.index == ("xs", 1)
    assert second_x.get_all({"xs": [5, 6]}) == [6]
    assert second_x.get_all({"xs": [5]}) == []
    assert second_x.modify({"xs": [5, 6]}, lambda x: -x) == {"xs": [5, -6]}
    assert second_x.modify({"xs": [5]}, lambda x: -x) == {"xs": [5]}

    head_of_p = dict_key_prism("p").then(sequence_index_lens(0))
    assert isinstance(head_of_p, IndexedOptional)
    assert head_of_p.index == ("p", 0)
    assert head_of_p.get_option({"p": [3]}) == Present(3)
    assert head_of_p.get_option({}) is Absent
    missing = {}
    assert head_of_p.set(missing, 1) is missing
    assert head_of_p.set({"p": [3, 4]}, 9) == {"p": [9, 4]}

    k_of_second = sequence_index_traversal(1).then(dict_key_prism("k"))
    assert isinstance(k_of_second, IndexedTraversal)
    assert k_of_second.index == (1, "k")
    assert k_of_second.get_all([{}, {"k": 2}]) == [2]
    assert k_of_second.get_all([{}, {}]) == []
    assert k_of_second.modify([{}, {"k": 2}], lambda x: x * 3) == [{}, {"k": 6}]
    assert k_of_second.get_all_with_indices([{}, {"k": 2}]) == [((1, "k"), 2)]

    plain = dict_key_lens("a").then(Lens.identity())
    assert isinstance(plain, Lens)
    assert not plain.is_indexed

    print("  ✓ pair indices, kinds follow the table, indexed∘plain is plain")


def test_enhanced_optional():
    print("\n[8/12] Testing Enhanced Optional...")
    from refract import enhanced, nullable_key, Present, Absent

    nick = enhanced(nullable_key("nick"))
    assert nick.or_else({}, "anon") == "anon"
    assert nick.or_else({"nick": "al"}, "anon") == "al"
    assert nick.or_else_with({"id": 3}, lambda s: f"user{s['id']}") == "user3"
    assert nick.map_or({"nick": "al"}, 0, len) == 2
    assert nick.map_or({}, 0, len) == 0
    assert nick.map_or_else({"id": 4}, lambda s: s["id"], len) == 4

    long_nick = nick.filter(lambda n: len(n) > 3)
    short = {"nick": "bo"}
    assert long_nick.get_option(short) is Absent
    assert long_nick.set(short, "robert") is short
    assert long_nick.get_option({"nick": "robert"}) == Present("robert")
    assert long_nick.or_else(short, "?") == "?"

    total = nick.or_else_lens("anon")
    assert total.get({}) == "anon"
    assert total.set({"nick": "al"}, "bo") == {"nick": "bo"}

    print("  ✓ or_else, or_else_with, filter, map_or, or_else_lens")


def test_builtin_optics():
    print("\n[9/12] Testing Built-in Optics...")
    from collections import namedtuple
    from dataclasses import dataclass

    import numpy as np

    from refract import (
        attr,
        each,
        head,
        last,
        nullable_attr,
        present,
        variant,
        values,
        keys,
        ndarray_elements,
        Present,
        Absent,
        OutOfBoundsError,
    )

    @dataclass(frozen=True)
    class Point:
        x: int
        y: int

    p = Point(1, 2)
    assert attr("x").get(p) == 1
    assert attr("x").set(p, 5) == Point(5, 2)

    Pair = namedtuple("Pair", "left right")
    assert attr("left").set(Pair(1, 2), 0) == Pair(0, 2)

    @dataclass
    class Node:
        parent: object = None

    assert nullable_attr("parent").get_option(Node()) is Absent
    assert nullable_attr("parent").get_option(Node("root")) == Present("root")

    assert head().get([1, 2, 3]) == 1
    assert last().get([1, 2, 3]) == 3
    assert last().set((1, 2, 3), 0) == (1, 2, 0)
    try:
        last().get([])
        assert False, "expected OutOfBoundsError"
    except OutOfBoundsError:
        pass

    assert present().get_option(Present(3)) == Present(3)
    assert present().get_option(Absent) is Absent
    assert present().review(4) == Present(4)

    ok = variant("ok", tag_field="kind")
    assert ok.review({"value": 1}) == {"value": 1, "kind": "ok"}
    assert ok.get_option({"kind": "err"}) is Absent

    assert values().modify({"a": 1, "b": 2}, lambda v: v * 3) == {"a": 3, "b": 6}
    assert keys().modify({"a": 1}, str.upper) == {"A": 1}

    arr = np.arange(6).reshape(2, 3)
    cells = ndarray_elements()
    assert cells.get_all(arr) == [0, 1, 2, 3, 4, 5]
    doubled = cells.modify(arr, lambda x: x * 2)
    assert doubled.shape == (2, 3)
    assert np.array_equal(doubled, arr * 2)
    clipped = cells.filter(lambda x: x > 3).set(arr, 0)
    assert np.array_equal(clipped, np.array([[0, 1, 2], [3, 0, 0]]))
    assert arr[1, 2] == 5, "modify must not mutate the array"

    rows = [np.array([1, 2]), np.array([1, 2]), np.array([3])]
    unique_rows = each().distinct().get_all(rows)
    assert len(unique_rows) == 2
    assert np.array_equal(unique_rows[0], [1, 2])
    assert np.array_equal(unique_rows[1], [3])
    scaled = each().distinct().modify(rows, lambda r: r * 10)
    assert [r.tolist() for r in scaled] == [[10, 20], [10, 20], [30]]
    assert rows[0].tolist() == [1, 2]

    print("  ✓ attr, head/last, present, variant, values/keys, arrays")


def test_monoids():
    print("\n[10/12] Testing Monoids...")
    from refract import (
        SumMonoid,
        ProductMonoid,
        StringMonoid,
        ListMonoid,
        AnyMonoid,
        AllMonoid,
        MinMonoid,
        MaxMonoid,
        monoid,
        check_monoid_laws,
        Present,
        Absent,
    )

    samples = {
        SumMonoid(): [0, 1, 5],
        ProductMonoid(): [1, 2, 3],
        StringMonoid(): ["", "a", "bc"],
        ListMonoid(): [[], [1], [2, 3]],
        AnyMonoid(): [True, False],
        AllMonoid(): [True, False],
        MinMonoid(): [Absent, Present(1), Present(3)],
        MaxMonoid(): [Absent, Present(1), Present(3)],
        monoid(lambda: 0, max, name="max0"): [0, 4, 2],
    }
    for m, xs in samples.items():
        report = check_monoid_laws(m, xs)
        assert report.passed, (m, report.violations)

    assert MaxMonoid().concat_all([Present(2), Absent, Present(9)]) == Present(9)
    assert repr(monoid(lambda: 0, max, name="max0")) == "Monoid(max0)"

    print("  ✓ identity and associativity for stock monoids")


def test_errors():
    print("\n[11/12] Testing Errors...")
    from refract import (
        Lens,
        key,
        compose,
        Maybe,
        Present,
        RefractError,
        OpticError,
        OutOfBoundsError,
        CompositionError,
        instance_of,
    )
    from refract.optics.compose import compose_lens_lens
    from refract.logging import LogCapture

    err = OutOfBoundsError(5, 2)
    assert str(err) == "[OUT_OF_BOUNDS] Index 5 out of bounds for length 2 | Details: {'index': 5, 'length': 2}"
    assert err.to_dict()["code"] == "OUT_OF_BOUNDS"
    assert isinstance(err, RefractError)

    try:
        compose_lens_lens(instance_of(int), Lens.identity())
        assert False, "expected OpticError"
    except OpticError as e:
        assert e.details["role"] == "outer"

    class Affine:
        kind = "Affine"

        def get_option(self, s):
            return Maybe.of(s.get("x"))

        def set(self, s, b):
            return {**s, "x": b}

    try:
        compose(Lens.identity(), Affine(), strict=True)
        assert False, "expected CompositionError"
    except CompositionError as e:
        assert e.code == "UNMATCHED_COMPOSITION"
        assert e.inner_kind == "Affine"

    with LogCapture() as capture:
        fallback = key("a").then(Affine())
    assert capture.contains("falling back")
    assert fallback.get_option({"a": {"x": 1}}) == Present(1)
    assert fallback.set({"a": {"x": 1}}, 2) == {"a": {"x": 2}}

    print("  ✓ error codes, wrong-kind operands, strict and fallback composition")


def test_config_and_logging():
    print("\n[12/12] Testing Configuration and Logging...")
    import io
    import json
    import logging
    import os
    import tempfile

    from refract import check_lens_laws, lens, ConfigurationError
    from refract.config import (
        Config,
        load_yaml,
        load_json,
        merge_configs,
        get_default_config,
        apply_config,
    )
    from refract.logging import (
        LogCapture,
        get_logger,
        set_level,
        get_level,
        add_context,
        get_context,
        clear_context,
        context,
    )

    defaults = get_default_config()
    assert defaults.get("logging.level") == "WARNING"
    assert defaults.composition.strict is False
    assert defaults.get("missing.key", 3) == 3
    assert isinstance(defaults.logging, Config)

    merged = merge_configs(defaults.to_dict(), {"logging": {"format": "json"}})
    assert merged.get("logging.level") == "WARNING"
    assert merged.get("logging.format") == "json"

    try:
        os.environ["REFRACT_TEST_LEVEL"] = "INFO"
        with tempfile.TemporaryDirectory() as tmp:
            yaml_path = os.path.join(tmp, "refract.yaml")
            with open(yaml_path, "w") as f:
                f.write("logging:\n  level: ${REFRACT_TEST_LEVEL}\n  format: ${UNSET_REFRACT_VAR}\n")
            loaded = load_yaml(yaml_path)
            assert loaded.get("logging.level") == "INFO"
            assert loaded.get("logging.format") == "${UNSET_REFRACT_VAR}"

            json_path = os.path.join(tmp, "refract.json")
            with open(json_path, "w") as f:
                json.dump({"composition": {"strict": True}}, f)
            assert load_json(json_path).get("composition.strict") is True

        stream = io.StringIO()
        settings = apply_config(
            {"composition": {"strict": "true"}, "logging": {"level": "debug", "format": "json"}},
            stream=stream,
        )
        assert settings.strict_composition is True
        assert settings.log_level == logging.DEBUG
        assert settings.log_format == "json"

        with context(request_id="r-1"):
            logging.getLogger("refract.tests").debug("hello")
        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["message"] == "hello"
        assert record["request_id"] == "r-1"

        for bad in ({"logging": {"level": "LOUD"}}, {"logging": {"format": "xml"}}):
            try:
                apply_config(bad, stream=io.StringIO())
                assert False, f"expected ConfigurationError for {bad}"
            except ConfigurationError as e:
                assert e.code == "CONFIG_ERROR"

        defaults_applied = apply_config(stream=io.StringIO())
        assert defaults_applied.log_level == logging.WARNING
        assert defaults_applied.strict_composition is False

        set_level("refract.tests", "ERROR")
        assert get_level("refract.tests") == logging.ERROR
        set_level("refract.tests", logging.NOTSET)
        assert get_logger() is logging.getLogger("refract")
        assert get_logger("refract.tests") is logging.getLogger("refract.tests")

        add_context("user", "ada")
        assert get_context() == {"user": "ada"}
        clear_context()
        assert get_context() == {}

        broken = lens(lambda s: s, lambda s, b: b + 1)
        with LogCapture() as capture:
            check_lens_laws(broken, [1], [2])
        assert capture.contains("law checks failed")
        assert any(r.levelno == logging.WARNING for r in capture.records)
    finally:
        os.environ.pop("REFRACT_TEST_LEVEL", None)
        library_logger = get_logger()
        for handler in library_logger.handlers[:]:
            library_logger.removeHandler(handler)
            handler.close()
        library_logger.setLevel(logging.NOTSET)

    print("  ✓ Config, env interpolation, apply_config, JSON logs, LogCapture")


def main():
    results = []
    tests = [
        ("take / drop / slice", test_take_drop_slice),
        ("reverse involution", test_reverse_involution),
        ("Terminal Operations", test_terminal_ops),
        ("Free Functions", test_free_functions),
        ("Traversal Composition", test_traversal_composition),
        ("Indexed Optics", test_indexed_optics),
        ("Indexed Composition", test_indexed_composition),
        ("Enhanced Optional", test_enhanced_optional),
        ("Built-in Optics", test_builtin_optics),
        ("Monoids", test_monoids),
        ("Errors", test_errors),
        ("Configuration and Logging", test_config_and_logging),
    ]

    passed = 0
    failed = 0

    for name, test_fn in tests:
        try:
            test_fn()
            passed += 1
            results.append((name, True, None))
        except Exception as e:
            failed += 1
            results.append((name, False, str(e)))
            print(f"  ✗ FAILED: {e}")

    print("\n" + "=" * 60)
    print("TEST RESULTS SUMMARY")
    print("=" * 60)

    for name, success, error in results:
        status = "✓ PASS" if success else "✗ FAIL"
        print(f"  {status}: {name}")
        if error:
            print(f"         Error: {error[:50]}...")

    print("-" * 60)
    print(f"Total: {passed} passed, {failed} failed out of {len(tests)} tests")
    print("=" * 60)

    return failed == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
