"""
formspan configuration.

Read from ``formspan.toml``::

    [attribution]
    unmatched_policy = "stop"      # or "ancestor"
    token_boundaries = true
    reader = "myreader.edn:read_forms"

or from the ``[tool.formspan]`` table of a ``pyproject.toml`` (same keys).
"""

import tomllib
from dataclasses import dataclass, fields
from enum import StrEnum
from pathlib import Path
from typing import Any

from .errors import ConfigError

CONFIG_FILENAME = "formspan.toml"


class UnmatchedPolicy(StrEnum):
    """What to search a child in when its parent could not be located."""

    STOP = "stop"  # descendants of an unmatched node stay unattributed
    ANCESTOR = "ancestor"  # search in the nearest attributed ancestor's text


@dataclass(frozen=True)
class AttributionConfig:
    """Attribution options."""

    unmatched_policy: UnmatchedPolicy = UnmatchedPolicy.STOP
    token_boundaries: bool = True
    reader: str | None = None  # "package.module:function"


def config_from_dict(data: dict[str, Any]) -> AttributionConfig:
    """Build a config from a parsed TOML table, validating each option."""
    known = {f.name for f in fields(AttributionConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration option(s): {', '.join(unknown)}")

    policy_value = data.get("unmatched_policy", UnmatchedPolicy.STOP.value)
    try:
        policy = UnmatchedPolicy(policy_value)
    except ValueError:
        choices = ", ".join(p.value for p in UnmatchedPolicy)
        raise ConfigError(
            f"Invalid unmatched_policy {policy_value!r}", hint=f"Use one of: {choices}"
        ) from None

    token_boundaries = data.get("token_boundaries", True)
    if not isinstance(token_boundaries, bool):
        raise ConfigError(f"token_boundaries must be true or false, got {token_boundaries!r}")

    reader = data.get("reader")
    if reader is not None and not isinstance(reader, str):
        raise ConfigError(f"reader must be a string, got {reader!r}")

    return AttributionConfig(
        unmatched_policy=policy,
        token_boundaries=token_boundaries,
        reader=reader,
    )


def load_config(path: Path) -> AttributionConfig:
    """
    Load configuration from a ``formspan.toml`` or ``pyproject.toml`` file.

    A pyproject without a ``[tool.formspan]`` table gives the defaults.

    Raises:
        ConfigError: If the file cannot be read or holds invalid options
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Cannot read configuration {path}: {e}") from e

    if path.name == "pyproject.toml":
        table = data.get("tool", {}).get("formspan", {})
    else:
        table = data.get("attribution", {})
    return config_from_dict(table)


def find_config(directory: Path) -> Path | None:
    """Return ``formspan.toml`` or ``pyproject.toml`` in ``directory``, if either exists."""
    for name in (CONFIG_FILENAME, "pyproject.toml"):
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def resolve_config(path: Path | None = None, directory: Path | None = None) -> AttributionConfig:
    """Load ``path`` if given, otherwise the config found in ``directory`` (cwd by default)."""
    if path is None:
        path = find_config(directory or Path.cwd())
        if path is None:
            return AttributionConfig()
    return load_config(path)
