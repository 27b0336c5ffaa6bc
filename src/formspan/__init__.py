"""
formspan - source spans for every sub-expression of a read form.

Given a top-level form and the text it was read from, re-derive the
exact source text, character offsets and line numbers of each nested
value, so structural lint results can be mapped back to editor ranges.
"""

from __future__ import annotations

import re
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

# Re-export commonly used types for convenience
from .core.attribution import SourceAttribution
from .core.errors import (
    ConfigError,
    FormspanError,
    MissingSeedError,
    ReaderLoadError,
    UnknownCollectionKindError,
)
from .core.locator import locate
from .core.walker import AttributedExpr, attribute, detailed_exprs


def _get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text()
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    try:
        return _metadata_version("formspan")
    except Exception:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "AttributedExpr",
    "SourceAttribution",
    "attribute",
    "detailed_exprs",
    "locate",
    "FormspanError",
    "MissingSeedError",
    "UnknownCollectionKindError",
    "ConfigError",
    "ReaderLoadError",
]
