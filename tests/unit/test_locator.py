"""Tests for the span locator."""

from __future__ import annotations

from formspan.core.forms import FormList, FormMap, FormSet, Keyword, Symbol, TaggedLiteral, Vector
from formspan.core.locator import SpanMatch, interior_offset, locate

# ============================================================================
# Scalars
# ============================================================================


class TestScalarLocate:
    """Scalars are found by a literal search for their printed form."""

    def test_keyword(self) -> None:
        assert locate(Keyword("b"), "(:a :b [1 2])") == SpanMatch(":b", 4, 6)

    def test_number_in_vector(self) -> None:
        assert locate(2, "[1 2]") == SpanMatch("2", 3, 4)

    def test_not_found_is_none(self) -> None:
        assert locate(Keyword("zzz"), "(:a :b)") is None

    def test_metacharacters_are_literal(self) -> None:
        assert locate(Symbol("+"), "(+ 1 2)") == SpanMatch("+", 1, 2)
        assert locate(Symbol("a.b*"), "(x a.b* ab)") == SpanMatch("a.b*", 3, 7)

    def test_first_occurrence_wins(self) -> None:
        assert locate(1, "(1 2 1)") == SpanMatch("1", 1, 2)

    def test_start_offset(self) -> None:
        assert locate(1, "(1 2 1)", start=2) == SpanMatch("1", 5, 6)

    def test_token_boundaries(self) -> None:
        assert locate(1, "(10 1)") == SpanMatch("1", 4, 5)
        assert locate(Keyword("a"), "(:ab :a)") == SpanMatch(":a", 5, 7)
        assert locate(-1, "(x-1 -1)") == SpanMatch("-1", 5, 7)

    def test_token_boundaries_disabled(self) -> None:
        assert locate(1, "(10 1)", token_boundaries=False) == SpanMatch("1", 1, 2)

    def test_string_literal(self) -> None:
        assert locate("[x]", '(println "[x]" [y])') == SpanMatch('"[x]"', 9, 14)

    def test_symbol_inside_string_is_skipped(self) -> None:
        assert locate(Symbol("b"), '(foo "a b" b)') == SpanMatch("b", 11, 12)

    def test_symbol_inside_comment_is_skipped(self) -> None:
        assert locate(Symbol("x"), "(f ; x\n x)") == SpanMatch("x", 8, 9)

    def test_tagged_literal(self) -> None:
        text = '(inst #inst "2020-01-01")'
        assert locate(TaggedLiteral("inst", "2020-01-01"), text) == SpanMatch(
            '#inst "2020-01-01"', 6, 24
        )

    def test_opaque_value_is_unmatchable(self) -> None:
        assert locate(object(), "#{#unknown/a [] #unknown/b []}") is None


# ============================================================================
# Collections
# ============================================================================


class TestCollectionLocate:
    """Collections are found by delimiters, never by content."""

    def test_map_bounded_by_delimiters(self) -> None:
        assert locate(FormMap({1: 2}), "{1 2}") == SpanMatch("{1 2}", 0, 5)

    def test_map_content_is_not_consulted(self) -> None:
        # A map whose printed content differs from the text still matches.
        assert locate(FormMap({Keyword("x"): 9}), "(f {1 2})") == SpanMatch("{1 2}", 3, 8)

    def test_vector(self) -> None:
        assert locate(Vector([1, 2]), "(:a :b [1 2])") == SpanMatch("[1 2]", 7, 12)

    def test_list(self) -> None:
        assert locate(FormList([1]), "[a (1) b]") == SpanMatch("(1)", 3, 6)

    def test_nested_close_delimiter_balances(self) -> None:
        assert locate(Vector([Vector([1]), 2]), "(a [[1] 2])") == SpanMatch("[[1] 2]", 3, 10)

    def test_set_and_map_are_told_apart(self) -> None:
        text = "(f #{:a} {:b 1})"
        assert locate(FormSet([Keyword("a")]), text) == SpanMatch("#{:a}", 3, 8)
        assert locate(FormMap({Keyword("b"): 1}), text) == SpanMatch("{:b 1}", 9, 15)

    def test_delimiters_in_strings_are_ignored(self) -> None:
        text = '(println "[x]" [y])'
        assert locate(Vector([Symbol("y")]), text) == SpanMatch("[y]", 15, 18)
        assert locate(Vector([]), '["]" 1]') == SpanMatch('["]" 1]', 0, 7)

    def test_delimiters_in_comments_are_ignored(self) -> None:
        assert locate(Vector([Symbol("c")]), "(a ; [b]\n [c])") == SpanMatch("[c]", 10, 13)

    def test_unclosed_is_none(self) -> None:
        assert locate(Vector([1]), "[1 2") is None

    def test_missing_open_is_none(self) -> None:
        assert locate(FormSet([1]), "(1 2)") is None

    def test_start_skips_own_delimiter(self) -> None:
        assert locate(Vector([1]), "[[1]]", start=1) == SpanMatch("[1]", 1, 4)


class TestInteriorOffset:
    """interior_offset() points just past a value's own opening delimiter."""

    def test_collections(self) -> None:
        assert interior_offset(Vector([]), "[1 2]") == 1
        assert interior_offset(FormSet([]), "#{1}") == 2
        assert interior_offset(FormList([]), "  (f)") == 3

    def test_scalar(self) -> None:
        assert interior_offset(1, "1") == 0
