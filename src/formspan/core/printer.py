"""
Canonical printed form of reader values.

``render`` is the inverse of reading a literal: it produces the text a
reader would most plausibly have been given for a value. The span locator
searches for this text, so a value written differently in the source
(``0x10`` for ``16``, ``1e3`` for ``1000.0``) is simply not found.
"""

from __future__ import annotations

import math
import re
import uuid
from collections.abc import Mapping
from decimal import Decimal
from fractions import Fraction
from typing import Any

from .forms import Char, Keyword, Symbol, TaggedLiteral
from .kinds import CollectionKind, bounds_for, collection_kind

_STRING_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
    "\f": "\\f",
    "\b": "\\b",
}

_CHAR_NAMES = {
    "\n": "newline",
    " ": "space",
    "\t": "tab",
    "\b": "backspace",
    "\f": "formfeed",
    "\r": "return",
}


def render(value: Any) -> str:
    """Render ``value`` as reader source text."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _render_float(value)
    if isinstance(value, Fraction):
        if value.denominator == 1:
            return str(value.numerator)
        return f"{value.numerator}/{value.denominator}"
    if isinstance(value, Decimal):
        return f"{value}M"
    if isinstance(value, str):
        return '"' + "".join(_STRING_ESCAPES.get(c, c) for c in value) + '"'
    if isinstance(value, (Keyword, Symbol)):
        return str(value)
    if isinstance(value, Char):
        return "\\" + _CHAR_NAMES.get(value.value, value.value)
    if isinstance(value, TaggedLiteral):
        return f"#{value.tag} {render(value.form)}"
    if isinstance(value, uuid.UUID):
        return f'#uuid "{value}"'
    if isinstance(value, re.Pattern):
        return f'#"{value.pattern}"'

    kind = collection_kind(value)
    if kind is not None:
        return _render_collection(value, kind)

    # Opaque reader results print the way the host prints unknown objects,
    # which never occurs in source text.
    return f"#object[{type(value).__name__} {value!r}]"


def _render_float(value: float) -> str:
    if math.isnan(value):
        return "##NaN"
    if math.isinf(value):
        return "##Inf" if value > 0 else "##-Inf"
    return repr(value)


def _render_collection(value: Any, kind: CollectionKind) -> str:
    delimiters = bounds_for(kind)
    if kind is CollectionKind.MAP and isinstance(value, Mapping):
        body = ", ".join(f"{render(k)} {render(v)}" for k, v in value.items())
    else:
        body = " ".join(render(item) for item in value)
    return f"{delimiters.open}{body}{delimiters.close}"
