"""Tests for the reader value model and the value classifier."""

from __future__ import annotations

import pytest

from formspan.core.errors import UnknownCollectionKindError
from formspan.core.forms import (
    Char,
    FormList,
    FormMap,
    FormSet,
    Keyword,
    Symbol,
    TaggedLiteral,
    Vector,
    rebuild,
)
from formspan.core.kinds import (
    COLLECTION_BOUNDS,
    CollectionKind,
    bounds_for,
    children,
    collection_kind,
    is_collection,
    is_primitive,
    is_scalar,
)

# ============================================================================
# Metadata
# ============================================================================


class TestMetadata:
    """Metadata rides along without affecting equality."""

    def test_with_meta_returns_equal_copy(self) -> None:
        vec = Vector([1, 2])
        annotated = vec.with_meta({"line": 3})
        assert annotated == vec
        assert annotated is not vec
        assert annotated.meta == {"line": 3}
        assert vec.meta == {}

    def test_meta_is_read_only(self) -> None:
        sym = Symbol("x", meta={"line": 1})
        with pytest.raises(TypeError):
            sym.meta["line"] = 2  # type: ignore[index]

    def test_symbol_equality_ignores_meta(self) -> None:
        assert Symbol("inc", "clojure.core", meta={"line": 1}) == Symbol("inc", "clojure.core")
        assert hash(Symbol("x", meta={"a": 1})) == hash(Symbol("x"))
        assert Symbol("x") != Symbol("x", "user")

    def test_map_hashable_and_ordered(self) -> None:
        m = FormMap([(Keyword("b"), 2), (Keyword("a"), 1)], meta={"line": 1})
        assert list(m) == [Keyword("b"), Keyword("a")]
        assert m == FormMap({Keyword("a"): 1, Keyword("b"): 2})
        assert hash(m) == hash(FormMap({Keyword("a"): 1, Keyword("b"): 2}))
        assert m.with_meta({}).meta == {}

    def test_set_with_meta(self) -> None:
        s = FormSet([1, 2]).with_meta({"source": "#{1 2}"})
        assert isinstance(s, FormSet)
        assert s == {1, 2}
        assert s.meta["source"] == "#{1 2}"

    def test_list_with_meta_keeps_type(self) -> None:
        lst = FormList([1]).with_meta({"line": 2})
        assert type(lst) is FormList


class TestRebuild:
    """rebuild() swaps children and keeps type and metadata."""

    def test_vector(self) -> None:
        vec = Vector([1, 2], meta={"line": 4})
        rebuilt = rebuild(vec, [3, 4])
        assert type(rebuilt) is Vector
        assert rebuilt == (3, 4)
        assert rebuilt.meta == {"line": 4}

    def test_map_from_flattened_entries(self) -> None:
        m = FormMap({Keyword("a"): 1}, meta={"line": 1})
        rebuilt = rebuild(m, [Keyword("b"), 2])
        assert rebuilt == FormMap({Keyword("b"): 2})
        assert rebuilt.meta == {"line": 1}

    def test_plain_containers(self) -> None:
        assert rebuild([1, 2], [3]) == [3]
        assert rebuild({"a": 1}, ["b", 2]) == {"b": 2}
        assert rebuild(frozenset({1}), [2]) == frozenset({2})


# ============================================================================
# Classifier and kind table
# ============================================================================


class TestClassifier:
    """Classification agrees with the delimiter table."""

    @pytest.mark.parametrize(
        "value,kind",
        [
            (Vector([1]), CollectionKind.VECTOR),
            (FormList([1]), CollectionKind.LIST),
            (FormSet([1]), CollectionKind.SET),
            (FormMap({1: 2}), CollectionKind.MAP),
            ([1], CollectionKind.VECTOR),
            ((1,), CollectionKind.LIST),
            ({1}, CollectionKind.SET),
            ({1: 2}, CollectionKind.MAP),
        ],
    )
    def test_collection_kinds(self, value: object, kind: CollectionKind) -> None:
        assert collection_kind(value) is kind
        assert is_collection(value)
        assert kind in COLLECTION_BOUNDS

    def test_list_checked_before_vector(self) -> None:
        # FormList subclasses Vector for storage only
        assert collection_kind(FormList([])) is CollectionKind.LIST

    @pytest.mark.parametrize(
        "value",
        [None, True, 1, 1.5, "s", Keyword("k"), Symbol("s"), Char("c"), TaggedLiteral("inst", "x")],
    )
    def test_scalars(self, value: object) -> None:
        assert collection_kind(value) is None
        assert is_scalar(value)
        assert children(value) == ()

    def test_primitives(self) -> None:
        assert is_primitive(1)
        assert is_primitive("s")
        assert is_primitive(Keyword("k"))
        assert is_primitive([1, 2])
        assert not is_primitive(Symbol("s"))
        assert not is_primitive(Vector([]))
        assert not is_primitive(FormMap({}))

    def test_map_children_are_flattened(self) -> None:
        m = FormMap([(Keyword("a"), 1), (Keyword("b"), 2)])
        assert children(m) == (Keyword("a"), 1, Keyword("b"), 2)

    def test_sequence_children_in_order(self) -> None:
        assert children(FormList([3, 1, 2])) == (3, 1, 2)


class TestKindTable:
    """The delimiter table is fixed and complete."""

    def test_delimiters(self) -> None:
        assert bounds_for(CollectionKind.VECTOR) == ("[", "]")
        assert bounds_for(CollectionKind.LIST) == ("(", ")")
        assert bounds_for(CollectionKind.SET) == ("#{", "}")
        assert bounds_for(CollectionKind.MAP) == ("{", "}")

    def test_every_kind_has_bounds(self) -> None:
        assert set(COLLECTION_BOUNDS) == set(CollectionKind)

    def test_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            COLLECTION_BOUNDS[CollectionKind.VECTOR] = ("<", ">")  # type: ignore[index]

    def test_unknown_kind_fails_loudly(self) -> None:
        with pytest.raises(UnknownCollectionKindError, match="tuple"):
            bounds_for("tuple")  # type: ignore[arg-type]
