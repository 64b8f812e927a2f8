"""Database initialization and removal.

This module creates a fresh database (or brings an existing one up to
date) by executing the packaged `sql/schema.sql`, and maintains a minimal
`schema_meta` table with a `schema_version` value. Stores never call into
this module; schema management is the caller's job.
"""

from __future__ import annotations

import errno
import logging
import sqlite3
from pathlib import Path

from .. import global_config as g

from .connection import execute_script, get_connection
from .errors import DatabaseError, from_sqlite_error

logger = logging.getLogger(__name__)

CURRENT_SCHEMA_VERSION = 1


class DatabaseLockedError(DatabaseError):
    """Raised when database deletion fails because the database is in use."""


def _schema_path() -> Path:
    return g.SQL_DIR / "schema.sql"


def _set_schema_version(conn: sqlite3.Connection, version: int) -> None:
    """Upsert the schema_version entry in schema_meta, creating the table if needed."""
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS schema_meta (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        )
        """
    )
    conn.execute(
        """
        INSERT INTO schema_meta (key, value)
        VALUES ('schema_version', ?)
        ON CONFLICT(key) DO UPDATE SET value = excluded.value
        """,
        (str(version),),
    )


def get_schema_version(conn: sqlite3.Connection) -> int | None:
    """Return the recorded schema version, or None for an uninitialized database."""
    try:
        row = conn.execute("SELECT value FROM schema_meta WHERE key = 'schema_version'").fetchone()
    except sqlite3.OperationalError:
        return None
    return int(row[0]) if row is not None else None


def apply_schema(conn: sqlite3.Connection) -> None:
    """Execute schema.sql on an open connection and record the schema version.

    Does not commit; the caller owns the transaction.

    Raises:
        FileNotFoundError: If schema.sql doesn't exist.
        DatabaseError: If SQL execution fails.
    """
    schema_file = _schema_path()
    if not schema_file.exists():
        msg = f"Schema file not found: {schema_file}"
        raise FileNotFoundError(msg)

    try:
        execute_script(conn, schema_file.read_text(encoding="utf-8"), description="schema.sql")
        _set_schema_version(conn, CURRENT_SCHEMA_VERSION)
    except sqlite3.Error as exc:
        raise from_sqlite_error(exc) from exc


def initialize_database(db_path: Path | str | None = None) -> None:
    """Initialize the database file using `schema.sql`.

    Safe to re-run on an existing database: the schema SQL is idempotent.

    Args:
        db_path: Path to SQLite database file. Defaults to global config.

    Raises:
        FileNotFoundError: If schema.sql doesn't exist.
        DatabaseError: If SQL execution fails.

    Logs:
        - INFO: "Initializing database at {path}" at start.
        - INFO: "Database initialization complete (schema_version={version})".
    """
    logger.info("Initializing database at %s", db_path or g.DEFAULT_DB_PATH)

    conn = get_connection(db_path=db_path)
    try:
        apply_schema(conn)
        conn.commit()
        logger.info("Database initialization complete (schema_version=%s)", CURRENT_SCHEMA_VERSION)
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def delete_database(db_path: Path | str | None = None) -> int:
    """Delete a SQLite database file and its WAL/SHM companions.

    Missing files are skipped, so deleting an absent database succeeds.

    Args:
        db_path: Path to SQLite database file. Defaults to global config.

    Returns:
        Number of files removed.

    Raises:
        DatabaseLockedError: If a file cannot be removed because it is in use.
        OSError: If deletion fails for other reasons (permissions, etc.).
    """
    resolved = Path(db_path) if db_path is not None else g.DEFAULT_DB_PATH
    logger.info("Attempting to delete database at %s", resolved)

    if not resolved.exists():
        logger.info("Database does not exist (already deleted)")
        return 0

    files_to_delete = [
        resolved,
        resolved.with_name(resolved.name + "-wal"),
        resolved.with_name(resolved.name + "-shm"),
    ]

    deleted = 0
    for file_path in files_to_delete:
        if not file_path.exists():
            continue
        try:
            file_path.unlink()
        except OSError as exc:
            if exc.errno == errno.EBUSY or "locked" in str(exc).lower():
                logger.error("Failed to delete %s: database is locked", file_path)
                msg = "Database is in use; close all processes using it and retry."
                raise DatabaseLockedError(msg) from exc
            logger.error("Failed to delete %s: %s", file_path, exc)
            raise
        deleted += 1
        logger.debug("Deleted %s", file_path)

    logger.info("Database deleted successfully (%d file(s) removed)", deleted)
    return deleted
