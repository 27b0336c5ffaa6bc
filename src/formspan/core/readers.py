"""
External reader plugins.

formspan does not read source text itself. A reader is any callable
``read(text) -> Iterable[form]`` whose root forms carry the seed metadata
``{source, line, start_character}``. The CLI loads one by dotted path,
``"package.module:function"``.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable, Iterable
from typing import Any

from .errors import ReaderLoadError

logger = logging.getLogger(__name__)

Reader = Callable[[str], Iterable[Any]]


def load_reader(path: str) -> Reader:
    """
    Import the reader named by ``path``.

    Raises:
        ReaderLoadError: If the path is malformed, the import fails, or the
            target is not callable
    """
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ReaderLoadError(
            f"Invalid reader path {path!r}",
            hint="Use the form 'package.module:function'.",
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ReaderLoadError(f"Cannot import reader module {module_name!r}: {e}") from e

    target: Any = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError:
            raise ReaderLoadError(f"Reader {path!r} not found in {module_name}") from None

    if not callable(target):
        raise ReaderLoadError(f"Reader {path!r} is not callable")

    logger.debug("Loaded reader %s", path)
    return target


def read_forms(reader: Reader, text: str) -> list[Any]:
    """Run ``reader`` over ``text`` and collect the root forms."""
    return list(reader(text))
