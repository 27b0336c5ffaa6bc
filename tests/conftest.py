"""Shared pytest fixtures for formspan tests."""

from collections.abc import Callable
from typing import Any

import pytest

from formspan.core.forms import FormList, Keyword, Vector


def with_seed(form: Any, source: str, line: int = 1, start_character: int = 0) -> Any:
    """Attach reader-style seed metadata to a root form."""
    return form.with_meta({"source": source, "line": line, "start_character": start_character})


@pytest.fixture
def seeded() -> Callable[..., Any]:
    """Return a helper that seeds a root form with its source text."""
    return with_seed


@pytest.fixture
def simple_form() -> Any:
    """``(:a :b [1 2])`` read from a single line."""
    form = FormList([Keyword("a"), Keyword("b"), Vector([1, 2])])
    return with_seed(form, "(:a :b [1 2])")


@pytest.fixture
def multiline_form() -> Any:
    """``(:a :b [1 2])`` with two newlines before the vector."""
    form = FormList([Keyword("a"), Keyword("b"), Vector([1, 2])])
    return with_seed(form, "(:a :b\n\n[1 2])")
