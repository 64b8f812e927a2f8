"""Public interface for the database package.

This module exposes the main primitives needed by the rest of the
project: connection helpers, initialization entrypoints, error types and
generic CRUD utilities.
"""

from .connection import MEMORY_DB, get_connection, transaction
from .crud import delete, insert, select, update
from .errors import DatabaseError, IntegrityError, NotFoundError
from .init import (
    CURRENT_SCHEMA_VERSION,
    DatabaseLockedError,
    apply_schema,
    delete_database,
    get_schema_version,
    initialize_database,
)

__all__ = [
    "MEMORY_DB",
    "get_connection",
    "transaction",
    "initialize_database",
    "apply_schema",
    "get_schema_version",
    "delete_database",
    "DatabaseError",
    "DatabaseLockedError",
    "IntegrityError",
    "NotFoundError",
    "CURRENT_SCHEMA_VERSION",
    "insert",
    "select",
    "update",
    "delete",
]
