"""
Value classification and the collection delimiter table.

Every value is either a scalar (a traversal leaf) or a collection of one
of four kinds. Each kind has a fixed pair of textual delimiters; the
delimiters are a property of the kind, never of a value's content.

Plain Python containers are classified too, so trees from readers that
return ``list``/``tuple``/``set``/``dict`` can still be walked (their
nodes just cannot carry metadata).
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import Any, NamedTuple

from .errors import UnknownCollectionKindError
from .forms import FormList, FormMap, FormSet, MetaCarrier, Vector


class CollectionKind(StrEnum):
    """Kinds of collection literal."""

    VECTOR = "vector"
    LIST = "list"
    SET = "set"
    MAP = "map"


class Delimiters(NamedTuple):
    open: str
    close: str


COLLECTION_BOUNDS: Mapping[CollectionKind, Delimiters] = MappingProxyType(
    {
        CollectionKind.VECTOR: Delimiters("[", "]"),
        CollectionKind.LIST: Delimiters("(", ")"),
        CollectionKind.SET: Delimiters("#{", "}"),
        CollectionKind.MAP: Delimiters("{", "}"),
    }
)


def bounds_for(kind: CollectionKind) -> Delimiters:
    """Return the delimiters for ``kind``; fails loudly for a kind the table lacks."""
    try:
        return COLLECTION_BOUNDS[kind]
    except KeyError:
        raise UnknownCollectionKindError(
            f"No delimiters registered for collection kind {kind!r}",
            hint="Add the kind to COLLECTION_BOUNDS alongside the classifier.",
        ) from None


def collection_kind(value: Any) -> CollectionKind | None:
    """
    Classify ``value`` by its declared type.

    ``FormList`` is checked before ``Vector`` (it subclasses it), and the
    form types before the plain containers they derive from.

    Returns:
        The collection kind, or None for scalars.
    """
    if isinstance(value, FormList):
        return CollectionKind.LIST
    if isinstance(value, Vector):
        return CollectionKind.VECTOR
    if isinstance(value, FormSet):
        return CollectionKind.SET
    if isinstance(value, FormMap):
        return CollectionKind.MAP
    if isinstance(value, list):
        return CollectionKind.VECTOR
    if isinstance(value, tuple):
        return CollectionKind.LIST
    if isinstance(value, (set, frozenset)):
        return CollectionKind.SET
    if isinstance(value, Mapping):
        return CollectionKind.MAP
    return None


def is_collection(value: Any) -> bool:
    return collection_kind(value) is not None


def is_scalar(value: Any) -> bool:
    return collection_kind(value) is None


def is_primitive(value: Any) -> bool:
    """True for values that cannot carry metadata."""
    return not isinstance(value, MetaCarrier)


def children(value: Any) -> tuple[Any, ...]:
    """Direct child values in a stable order; map entries are flattened."""
    kind = collection_kind(value)
    if kind is None:
        return ()
    if kind is CollectionKind.MAP:
        return tuple(item for entry in value.items() for item in entry)
    return tuple(value)
