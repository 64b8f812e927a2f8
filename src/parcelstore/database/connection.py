"""Database connection helpers.

This module provides a small, synchronous API for obtaining SQLite
connections and scoping them. Store objects never open or close
connections themselves; the helpers here are how callers acquire one.
"""

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterator
from pathlib import Path

from .. import global_config as g

logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"


def _resolve_db_path(db_path: Path | str | None) -> Path | str:
    """Return the database location, falling back to the global default.

    The special in-memory name is passed through untouched.
    """
    if db_path is None:
        return g.DEFAULT_DB_PATH
    if db_path == MEMORY_DB:
        return MEMORY_DB
    return db_path if isinstance(db_path, Path) else Path(db_path)


def _configure_connection(conn: sqlite3.Connection) -> None:
    """Apply standard pragmas and row factory to a new connection.

    Args:
        conn: SQLite connection to configure.

    Side Effects:
        - Sets row_factory to sqlite3.Row for dict-like access.
        - Enables foreign key constraints.
    """
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")


def get_connection(db_path: Path | str | None = None) -> sqlite3.Connection:
    """Return a configured SQLite connection.

    Ensures the parent directory exists before SQLite creates the file.

    Args:
        db_path: Path to SQLite database file, or ":memory:". Defaults to
            global_config.DEFAULT_DB_PATH.

    Returns:
        Configured SQLite connection ready for use.

    Logs:
        - DEBUG: "Opening SQLite database at {path}" when creating connection.
    """
    resolved = _resolve_db_path(db_path)
    if isinstance(resolved, Path):
        resolved.parent.mkdir(parents=True, exist_ok=True)

    logger.debug("Opening SQLite database at %s", resolved)
    conn = sqlite3.connect(str(resolved))
    _configure_connection(conn)
    return conn


@contextlib.contextmanager
def transaction(
    db_path: Path | str | None = None,
    existing_connection: sqlite3.Connection | None = None,
) -> Iterator[sqlite3.Connection]:
    """Context manager for a transactional connection block.

    Commits on success and rolls back on error. If an existing connection
    is provided, it is reused and left open. Otherwise a new connection is
    created and closed on exit.

    Args:
        db_path: Path to database file (only used if existing_connection
            is None). Defaults to global config.
        existing_connection: Existing connection to reuse.

    Yields:
        SQLite connection ready for database operations.

    Logs:
        - DEBUG: "Beginning transaction" / "Transaction committed".
        - ERROR: "Transaction rolled back due to error" on failure.
    """
    owns_connection = existing_connection is None
    conn = existing_connection or get_connection(db_path=db_path)

    try:
        logger.debug("Beginning transaction")
        yield conn
        conn.commit()
        logger.debug("Transaction committed")
    except Exception:
        logger.exception("Transaction rolled back due to error")
        conn.rollback()
        raise
    finally:
        if owns_connection:
            conn.close()
            logger.debug("Connection closed")


def execute_script(conn: sqlite3.Connection, sql: str, *, description: str) -> None:
    """Execute a multi-statement SQL script with logging.

    Args:
        conn: Database connection to execute script on.
        sql: Multi-statement SQL script to execute.
        description: Human-readable description for logging purposes.

    Raises:
        sqlite3.Error: If script execution fails.
    """
    logger.info("Executing SQL script: %s", description)
    try:
        conn.executescript(sql)
    except sqlite3.Error:
        logger.exception("Failed while executing SQL script: %s", description)
        raise
