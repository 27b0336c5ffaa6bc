"""
Error types for formspan attribution, configuration, and reader loading.

An unmatchable sub-expression is never an error: it gets an empty
attribution record. The exceptions here cover caller and programmer
mistakes only.
"""

from __future__ import annotations


class FormspanError(Exception):
    """Base exception for all formspan errors."""

    def __init__(self, message: str, hint: str | None = None):
        self.message = message
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with the hint if available."""
        if self.hint:
            return f"{self.message}\nHint: {self.hint}"
        return self.message


class MissingSeedError(FormspanError):
    """
    Raised when a root form lacks the reader-supplied seed metadata.

    Examples:
    - Root value cannot carry metadata and no explicit seed was given
    - Metadata has no ``source``, ``line`` or ``start_character`` key
    - Seed values have the wrong types
    """

    pass


class UnknownCollectionKindError(FormspanError):
    """
    Raised when a collection kind has no entry in the delimiter table.

    This means the classifier and the table disagree, which is a bug in
    formspan rather than a problem with the data.
    """

    pass


class ConfigError(FormspanError):
    """
    Raised when configuration cannot be loaded.

    Examples:
    - Malformed TOML
    - Unknown unmatched policy
    - Option with the wrong type
    """

    pass


class ReaderLoadError(FormspanError):
    """
    Raised when the external reader plugin cannot be loaded.

    Examples:
    - Path not in ``package.module:function`` form
    - Module import fails
    - Attribute missing or not callable
    """

    pass
