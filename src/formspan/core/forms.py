"""
Reader value model for formspan.

Forms are the immutable values a Clojure/EDN style reader produces.
Symbols and the four collection types can carry a metadata mapping (the
reader's seed, or the attribution records derived from it). Everything
else is a primitive: numbers, strings, keywords, characters, nil and
booleans come back from attribution unchanged.

Metadata never takes part in equality or hashing.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

_EMPTY_META: Mapping[str, Any] = MappingProxyType({})


def _freeze_meta(meta: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if not meta:
        return _EMPTY_META
    return MappingProxyType(dict(meta))


class MetaCarrier:
    """Mixin for values that can hold a read-only metadata mapping."""

    _meta: Mapping[str, Any] = _EMPTY_META

    @property
    def meta(self) -> Mapping[str, Any]:
        return self._meta

    def with_meta(self, meta: Mapping[str, Any] | None) -> Any:
        """Return an equal copy of this value carrying ``meta``."""
        clone = self._clone()
        clone._meta = _freeze_meta(meta)
        return clone

    def _clone(self) -> Any:
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Keyword:
    """A keyword such as ``:a`` or ``:user/id``."""

    name: str
    namespace: str | None = None

    def __str__(self) -> str:
        if self.namespace:
            return f":{self.namespace}/{self.name}"
        return f":{self.name}"


class Symbol(MetaCarrier):
    """A symbol such as ``map`` or ``clojure.core/inc``."""

    def __init__(
        self, name: str, namespace: str | None = None, meta: Mapping[str, Any] | None = None
    ) -> None:
        self.name = name
        self.namespace = namespace
        self._meta = _freeze_meta(meta)

    def _clone(self) -> Symbol:
        return Symbol(self.name, self.namespace)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Symbol):
            return NotImplemented
        return (self.namespace, self.name) == (other.namespace, other.name)

    def __hash__(self) -> int:
        return hash(("symbol", self.namespace, self.name))

    def __str__(self) -> str:
        if self.namespace:
            return f"{self.namespace}/{self.name}"
        return self.name

    def __repr__(self) -> str:
        return f"Symbol({str(self)!r})"


@dataclass(frozen=True)
class Char:
    """A character literal such as ``\\a`` or ``\\newline``."""

    value: str


@dataclass(frozen=True)
class TaggedLiteral:
    """A reader literal the reader kept as ``#tag form``."""

    tag: str
    form: Any


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------


class Vector(MetaCarrier, tuple):
    """A ``[...]`` sequence."""

    def __new__(cls, items: Iterable[Any] = (), meta: Mapping[str, Any] | None = None):
        obj = super().__new__(cls, items)
        obj._meta = _freeze_meta(meta)
        return obj

    def _clone(self) -> Vector:
        return type(self)(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class FormList(Vector):
    """A ``(...)`` list.

    Subclasses ``Vector`` only for storage; the classifier checks for a
    list before it checks for a vector.
    """


class FormSet(MetaCarrier, frozenset):
    """A ``#{...}`` set."""

    def __new__(cls, items: Iterable[Any] = (), meta: Mapping[str, Any] | None = None):
        obj = super().__new__(cls, items)
        obj._meta = _freeze_meta(meta)
        return obj

    def _clone(self) -> FormSet:
        return type(self)(self)

    def __repr__(self) -> str:
        return f"FormSet({list(self)!r})"


class FormMap(MetaCarrier, Mapping):
    """A ``{...}`` map preserving the order entries were read in."""

    def __init__(
        self,
        entries: Mapping[Any, Any] | Iterable[tuple[Any, Any]] = (),
        meta: Mapping[str, Any] | None = None,
    ) -> None:
        self._entries = dict(entries)
        self._meta = _freeze_meta(meta)

    def _clone(self) -> FormMap:
        return FormMap(self._entries)

    def __getitem__(self, key: Any) -> Any:
        return self._entries[key]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __hash__(self) -> int:
        return hash(frozenset(self._entries.items()))

    def __repr__(self) -> str:
        return f"FormMap({self._entries!r})"


def rebuild(value: Any, children: Iterable[Any]) -> Any:
    """
    Return a collection of the same type as ``value`` holding ``children``.

    Map children come flattened as ``k1, v1, k2, v2, ...``. The value's
    metadata, if any, is kept.
    """
    items = list(children)
    if isinstance(value, FormMap):
        return FormMap(zip(items[0::2], items[1::2]), meta=value.meta)
    if isinstance(value, (Vector, FormSet)):
        return type(value)(items, meta=value.meta)
    if isinstance(value, Mapping):
        return type(value)(zip(items[0::2], items[1::2]))
    return type(value)(items)
