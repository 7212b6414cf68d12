"""Exception types for the column settings package.

Most operations recover silently (unknown keys are no-ops, widths are
clamped, malformed records fall back to defaults). The types below cover the
few places where a failure is either a caller programming error or an
internal signal that is caught before reaching the caller.
"""

from __future__ import annotations

__all__ = [
    "ColumnSettingsError",
    "DuplicateColumnKeyError",
    "MalformedRecordError",
]


class ColumnSettingsError(Exception):
    """Base class for column settings errors."""


class DuplicateColumnKeyError(ColumnSettingsError, ValueError):
    """Raised when a column sequence contains the same key more than once."""

    def __init__(self, key: str):
        super().__init__(f"Duplicate column key '{key}'")
        self.key = key


class MalformedRecordError(ColumnSettingsError, ValueError):
    """Raised by the record parser when a persisted record has the wrong shape.

    Never escapes :meth:`ColumnConfigPersistenceService.load`.
    """
