"""
Span locator.

Finds the text a value was read from inside a text known to contain it.

Scalars are rendered back to source text (see ``printer``) and found with
a literal search. Collections are never matched on content: the locator
takes the first opening delimiter of the collection's kind and the close
delimiter that balances it. Delimiters and tokens inside string literals,
character literals and comments are ignored.

There is no backtracking. When a literal occurs more than once in the
searched text the first occurrence wins.
"""

from __future__ import annotations

import bisect
import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from .kinds import COLLECTION_BOUNDS, Delimiters, bounds_for, collection_kind
from .printer import render

# Characters that can continue a symbol, keyword or number token.
_TOKEN_CHAR_CLASS = r"[\w*+!\-?<>=/.:#$%&|']"
_TOKEN_CHAR = re.compile(_TOKEN_CHAR_CLASS)

# "{" preceded by "#" opens a set, not a map.
_SHADOWING_PREFIXES: dict[str, tuple[str, ...]] = {
    d.open: tuple(
        other.open[: -len(d.open)]
        for other in COLLECTION_BOUNDS.values()
        if other.open != d.open and other.open.endswith(d.open)
    )
    for d in COLLECTION_BOUNDS.values()
}

# Opening characters that nest against each close delimiter.
_OPENERS_BY_CLOSE: dict[str, frozenset[str]] = {
    d.close: frozenset(o.open[-1] for o in COLLECTION_BOUNDS.values() if o.close == d.close)
    for d in COLLECTION_BOUNDS.values()
}


@dataclass(frozen=True)
class SpanMatch:
    """A located span. Offsets are relative to the searched text."""

    text: str
    start: int
    end: int


def locate(
    value: Any, text: str, *, start: int = 0, token_boundaries: bool = True
) -> SpanMatch | None:
    """
    Locate ``value`` inside ``text``.

    Args:
        value: Scalar or collection to find
        text: Text known to contain the value
        start: Offset to begin searching from
        token_boundaries: Reject scalar matches glued to other token
            characters (``1`` inside ``10``)

    Returns:
        The first match, or None when the value cannot be found
    """
    kind = collection_kind(value)
    if kind is None:
        return _locate_scalar(value, text, start, token_boundaries)
    return _locate_collection(bounds_for(kind), text, start)


def interior_offset(value: Any, text: str) -> int:
    """Offset just past ``value``'s own opening delimiter in its text (0 for scalars)."""
    kind = collection_kind(value)
    if kind is None:
        return 0
    delimiters = bounds_for(kind)
    open_at = _find_open(text, delimiters.open, 0, _LiteralRegions(text))
    if open_at is None:
        return 0
    return open_at + len(delimiters.open)


def _locate_scalar(value: Any, text: str, start: int, token_boundaries: bool) -> SpanMatch | None:
    rendered = render(value)
    pattern = re.escape(rendered)
    if token_boundaries:
        if _TOKEN_CHAR.match(rendered[0]):
            pattern = f"(?<!{_TOKEN_CHAR_CLASS})" + pattern
        if _TOKEN_CHAR.match(rendered[-1]):
            pattern += f"(?!{_TOKEN_CHAR_CLASS})"

    regions = _LiteralRegions(text)
    for match in re.compile(pattern).finditer(text, start):
        begin, end = match.span()
        region = regions.containing(begin)
        # Inside a string or comment only a whole literal counts.
        if region is None or region == (begin, end):
            return SpanMatch(match.group(0), begin, end)
    return None


def _locate_collection(delimiters: Delimiters, text: str, start: int) -> SpanMatch | None:
    regions = _LiteralRegions(text)
    open_at = _find_open(text, delimiters.open, start, regions)
    if open_at is None:
        return None
    end = _find_close(text, delimiters, open_at, regions)
    if end is None:
        return None
    return SpanMatch(text[open_at:end], open_at, end)


def _find_open(text: str, open_delim: str, start: int, regions: _LiteralRegions) -> int | None:
    shadows = _SHADOWING_PREFIXES.get(open_delim, ())
    i = text.find(open_delim, start)
    while i != -1:
        shadowed = any(text.endswith(prefix, 0, i) for prefix in shadows)
        if not shadowed and regions.containing(i) is None:
            return i
        i = text.find(open_delim, i + 1)
    return None


def _find_close(
    text: str, delimiters: Delimiters, open_at: int, regions: _LiteralRegions
) -> int | None:
    openers = _OPENERS_BY_CLOSE[delimiters.close]
    depth = 0
    i = open_at + len(delimiters.open) - 1
    n = len(text)
    while i < n:
        skip_to = regions.ends_by_start.get(i)
        if skip_to is not None:
            i = skip_to
            continue
        if text[i] in openers:
            depth += 1
        elif text.startswith(delimiters.close, i):
            depth -= 1
            if depth == 0:
                return i + len(delimiters.close)
        i += 1
    return None


class _LiteralRegions:
    """Spans of string literals, character literals and comments in a text."""

    def __init__(self, text: str) -> None:
        self.spans = list(_scan_literals(text))
        self.ends_by_start = dict(self.spans)
        self._starts = [begin for begin, _ in self.spans]

    def containing(self, pos: int) -> tuple[int, int] | None:
        i = bisect.bisect_right(self._starts, pos) - 1
        if i >= 0 and pos < self.spans[i][1]:
            return self.spans[i]
        return None


def _scan_literals(text: str) -> Iterator[tuple[int, int]]:
    i = 0
    n = len(text)
    while i < n:
        c = text[i]
        if c == '"':
            j = i + 1
            while j < n and text[j] != '"':
                j += 2 if text[j] == "\\" else 1
            end = min(j + 1, n)
        elif c == ";":
            j = text.find("\n", i)
            end = n if j == -1 else j
        elif c == "\\":
            # named characters run on: \newline, \space
            j = i + 2
            while j < n and text[j].isalnum():
                j += 1
            end = min(j, n)
        else:
            i += 1
            continue
        yield i, end
        i = end
