"""Database-specific exception types for the project."""

from __future__ import annotations

import sqlite3
from typing import Any


class DatabaseError(Exception):
    """Base exception for database-related errors."""


class IntegrityError(DatabaseError):
    """Raised when a constraint violation occurs."""


class NotFoundError(DatabaseError):
    """Raised when a requested row cannot be found.

    Also raised when a guarded UPDATE/DELETE matched no rows, so callers
    cannot tell a missing row from one whose guard did not hold.
    """

    def __init__(self, message: str = "Row not found", *, table: str | None = None, key: Any = None) -> None:
        super().__init__(message)
        self.table = table
        self.key = key


def from_sqlite_error(error: sqlite3.Error) -> DatabaseError:
    """Map a raw sqlite3 error to a project-level DatabaseError.

    IntegrityError is mapped to IntegrityError, all others to DatabaseError.
    """
    if isinstance(error, sqlite3.IntegrityError):
        return IntegrityError(str(error))
    return DatabaseError(str(error))


def ensure_found(row: Any, message: str = "Row not found", **context: Any) -> Any:
    """Raise NotFoundError if a row is missing, otherwise return it.

    Args:
        row: Row result to check (may be None).
        message: Error message to use if row is None.
        **context: Forwarded to NotFoundError (table, key).

    Returns:
        The row value if it's not None.

    Raises:
        NotFoundError: If row is None.
    """
    if row is None:
        raise NotFoundError(message, **context)
    return row


def ensure_affected(rowcount: int, message: str = "No rows affected", **context: Any) -> int:
    """Raise NotFoundError if a write touched zero rows, otherwise return the count."""
    if rowcount == 0:
        raise NotFoundError(message, **context)
    return rowcount
