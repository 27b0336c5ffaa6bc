"""
Attribution walker.

Walks a root form whose metadata holds the reader's seed record and
derives a record for every sub-expression. Each child is searched for in
its parent's matched text (never the whole document), starting just past
the parent's opening delimiter, and the relative span is composed into
the root's coordinates.

When a node cannot be located the policy in ``AttributionConfig`` decides
what happens below it:

- ``stop`` (default): its descendants get the empty record as well.
- ``ancestor``: its descendants are searched in the text of the nearest
  ancestor that was located.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .attribution import EMPTY, SourceAttribution, attach, compose, seed_attribution
from .config import AttributionConfig, UnmatchedPolicy
from .forms import MetaCarrier, rebuild
from .kinds import children
from .locator import interior_offset, locate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttributedExpr:
    """
    One node of an attributed tree.

    Attributes:
        path: Child indices from the root; ``()`` is the root itself
        value: The annotated value
        attribution: Its record (empty when unmatched)
        attached: Whether the record is stored on ``value`` as metadata
    """

    path: tuple[int, ...]
    value: Any
    attribution: SourceAttribution
    attached: bool


@dataclass(frozen=True)
class _Window:
    attribution: SourceAttribution
    start: int


def source_of(
    parent: SourceAttribution,
    child: Any,
    config: AttributionConfig | None = None,
    *,
    start: int = 0,
) -> SourceAttribution:
    """Locate ``child`` inside ``parent.source`` and return its absolute record."""
    config = config or AttributionConfig()
    if not parent.matched:
        return EMPTY
    match = locate(child, parent.source, start=start, token_boundaries=config.token_boundaries)
    if match is None:
        return EMPTY
    return compose(parent, match)


def attribute(
    form: Any,
    config: AttributionConfig | None = None,
    *,
    seed: Mapping[str, Any] | None = None,
) -> Any:
    """
    Return ``form`` with source attribution attached to every sub-expression.

    The result is equal to ``form`` and has the same shape. The root keeps
    its own metadata; primitives are returned unchanged (use
    ``detailed_exprs`` to get their records).

    Args:
        form: Root form carrying ``{source, line, start_character}`` metadata
        config: Attribution options
        seed: Explicit seed record for roots that cannot carry metadata

    Raises:
        MissingSeedError: If the root has no usable seed
    """
    annotated, _ = _Walk(config).run(form, seed)
    return annotated


def detailed_exprs(
    form: Any,
    config: AttributionConfig | None = None,
    *,
    seed: Mapping[str, Any] | None = None,
) -> list[AttributedExpr]:
    """All nodes of the attributed tree, root first, then breadth first."""
    _, exprs = _Walk(config).run(form, seed)
    return sorted(exprs, key=lambda expr: (len(expr.path), expr.path))


class _Walk:
    """A single top-down pass over one form."""

    def __init__(self, config: AttributionConfig | None) -> None:
        self.config = config or AttributionConfig()
        self.exprs: list[AttributedExpr] = []

    def run(self, form: Any, seed: Mapping[str, Any] | None) -> tuple[Any, list[AttributedExpr]]:
        root = seed_attribution(form, seed)
        window = _Window(root, interior_offset(form, root.source))
        annotated = self._descend(form, (), window)
        self.exprs.append(AttributedExpr((), annotated, root, isinstance(annotated, MetaCarrier)))

        unmatched = sum(1 for expr in self.exprs if not expr.attribution.matched)
        unsupported = sum(1 for expr in self.exprs if not expr.attached)
        logger.debug(
            "Attributed form at line %s: %d nodes, %d unmatched, %d without metadata",
            root.line,
            len(self.exprs),
            unmatched,
            unsupported,
        )
        return annotated, self.exprs

    def _descend(self, value: Any, path: tuple[int, ...], window: _Window | None) -> Any:
        kids = children(value)
        if not kids:
            return value
        return rebuild(value, [self._visit(kid, path + (i,), window) for i, kid in enumerate(kids)])

    def _visit(self, value: Any, path: tuple[int, ...], window: _Window | None) -> Any:
        if window is None:
            attribution = EMPTY
        else:
            attribution = source_of(window.attribution, value, self.config, start=window.start)

        if attribution.matched:
            child_window: _Window | None = _Window(
                attribution, interior_offset(value, attribution.source)
            )
        else:
            if window is not None:
                logger.debug("No source match for %r at path %s", value, path)
            if self.config.unmatched_policy is UnmatchedPolicy.ANCESTOR:
                child_window = window
            else:
                child_window = None

        result = attach(self._descend(value, path, child_window), attribution)
        self.exprs.append(AttributedExpr(path, result.value, attribution, result.attached))
        return result.value
