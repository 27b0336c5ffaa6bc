"""Core formspan functionality: value model, classifier, span locator, attribution walker."""

from .attribution import (
    AttachResult,
    AttachStatus,
    SourceAttribution,
    attach,
    compose,
    seed_attribution,
)
from .config import AttributionConfig, UnmatchedPolicy, load_config, resolve_config
from .errors import (
    ConfigError,
    FormspanError,
    MissingSeedError,
    ReaderLoadError,
    UnknownCollectionKindError,
)
from .forms import Char, FormList, FormMap, FormSet, Keyword, MetaCarrier, Symbol, TaggedLiteral, Vector
from .kinds import COLLECTION_BOUNDS, CollectionKind, children, collection_kind, is_primitive
from .locator import SpanMatch, locate
from .walker import AttributedExpr, attribute, detailed_exprs, source_of

__all__ = [
    "AttachResult",
    "AttachStatus",
    "AttributedExpr",
    "AttributionConfig",
    "COLLECTION_BOUNDS",
    "Char",
    "CollectionKind",
    "ConfigError",
    "FormList",
    "FormMap",
    "FormSet",
    "FormspanError",
    "Keyword",
    "MetaCarrier",
    "MissingSeedError",
    "ReaderLoadError",
    "SourceAttribution",
    "SpanMatch",
    "Symbol",
    "TaggedLiteral",
    "UnknownCollectionKindError",
    "UnmatchedPolicy",
    "Vector",
    "attach",
    "attribute",
    "children",
    "collection_kind",
    "compose",
    "detailed_exprs",
    "is_primitive",
    "load_config",
    "locate",
    "resolve_config",
    "seed_attribution",
    "source_of",
]
