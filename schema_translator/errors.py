"""Exceptions and warnings raised by the schema translator."""

from typing import Any, Optional


class TranslatorError(Exception):
    """Base class for schema translator errors."""


class ConfigurationError(TranslatorError):
    """Required configuration (database URL, schema name) is missing."""


class InvalidRowError(TranslatorError):
    """A raw catalog row is missing a field needed to identify its column."""

    def __init__(self, row: Any, reason: str):
        self.row = row
        self.reason = reason
        super().__init__(f"Invalid catalog row ({reason}): {row!r}")


class UnmappedTypeWarning(UserWarning):
    """A source type matched no translation rule and was passed through verbatim."""

    def __init__(self, source_type: str, target: str, table: Optional[str] = None, column: Optional[str] = None):
        self.source_type = source_type
        self.target = target
        self.table = table
        self.column = column
        where = f"{table}.{column}" if table and column else "<unknown column>"
        super().__init__(f"No {target} type rule for '{source_type}' ({where}); emitted verbatim")

    def key(self) -> tuple:
        return (self.table, self.column, self.source_type, self.target)
