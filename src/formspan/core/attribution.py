"""
Source attribution records.

A record says where a value's text sits in the root form's source:
the matched substring, absolute start/end character offsets and start/end
line numbers. The root's record (the seed) comes from the reader; every
other record is composed from its parent's record and a located span.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import MissingSeedError
from .forms import MetaCarrier
from .locator import SpanMatch

SEED_KEYS = ("source", "line", "start_character")


class SourceAttribution(BaseModel):
    """
    Where a value was read from.

    All fields are None for the empty record, which is what an unmatched
    value gets.

    Attributes:
        source: Exact text the value was read from
        start_character: Absolute offset of the first character
        end_character: Absolute offset one past the last character
        line: Line the text starts on
        end_line: Line the text ends on
    """

    source: str | None = None
    start_character: int | None = None
    end_character: int | None = None
    line: int | None = None
    end_line: int | None = None

    model_config = ConfigDict(frozen=True, strict=True)

    @property
    def matched(self) -> bool:
        return self.source is not None

    def to_meta(self) -> dict[str, Any]:
        """Metadata mapping for this record; empty for the empty record."""
        return self.model_dump(exclude_none=True)


EMPTY = SourceAttribution()


class AttachStatus(StrEnum):
    """Whether a record could be stored on its value."""

    ATTACHED = "attached"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class AttachResult:
    """Outcome of attaching a record to a value."""

    status: AttachStatus
    value: Any
    attribution: SourceAttribution

    @property
    def attached(self) -> bool:
        return self.status is AttachStatus.ATTACHED


def attach(value: Any, attribution: SourceAttribution) -> AttachResult:
    """
    Attach ``attribution`` to ``value`` as metadata.

    Primitives cannot carry metadata; they come back unchanged with status
    UNSUPPORTED so the caller can keep the record out of band.
    """
    if isinstance(value, MetaCarrier):
        return AttachResult(AttachStatus.ATTACHED, value.with_meta(attribution.to_meta()), attribution)
    return AttachResult(AttachStatus.UNSUPPORTED, value, attribution)


def compose(parent: SourceAttribution, match: SpanMatch) -> SourceAttribution:
    """Turn a span located inside ``parent.source`` into an absolute record."""
    if not parent.matched:
        return EMPTY
    line = parent.line + parent.source.count("\n", 0, match.start)
    return SourceAttribution(
        source=match.text,
        start_character=parent.start_character + match.start,
        end_character=parent.start_character + match.end,
        line=line,
        end_line=line + match.text.count("\n"),
    )


def seed_attribution(form: Any, seed: Mapping[str, Any] | None = None) -> SourceAttribution:
    """
    Read the root record from ``form``'s metadata (or an explicit ``seed``).

    ``source``, ``line`` and ``start_character`` are required and trusted.
    ``end_character`` and ``end_line`` are derived when absent.

    Raises:
        MissingSeedError: If the seed is unavailable or malformed
    """
    if seed is None:
        if not isinstance(form, MetaCarrier):
            raise MissingSeedError(
                f"Root form of type {type(form).__name__} cannot carry seed metadata",
                hint="Pass the reader's {source, line, start_character} record as seed=.",
            )
        seed = form.meta

    missing = [key for key in SEED_KEYS if seed.get(key) is None]
    if missing:
        raise MissingSeedError(f"Root form metadata is missing: {', '.join(missing)}")

    source = seed["source"]
    try:
        return SourceAttribution(
            source=source,
            line=seed["line"],
            start_character=seed["start_character"],
            end_character=seed.get("end_character", seed["start_character"] + len(source)),
            end_line=seed.get("end_line", seed["line"] + source.count("\n")),
        )
    except (TypeError, ValidationError) as e:
        raise MissingSeedError(f"Root form metadata is malformed: {e}") from e
