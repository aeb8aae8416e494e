"""Exceptions raised by notesync."""

from __future__ import annotations


class NotesyncError(Exception):
    """Base class for notesync errors."""


class TableNotInitializedError(NotesyncError):
    """Raised when a table operation runs before ``initialize``."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Table must be initialized before calling {operation}()")
        self.operation = operation


class TableInitializationError(NotesyncError):
    """Raised when the backing collection cannot be created or opened."""


class RowShapeError(NotesyncError):
    """Raised (or returned) when a stored row is missing required fields."""

    def __init__(self, missing: list) -> None:
        super().__init__(f"Row is missing required fields: {', '.join(missing)}")
        self.missing = missing


class FilterError(NotesyncError, ValueError):
    """Raised when a predicate references an unknown field or a bad value."""
