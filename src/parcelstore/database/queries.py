"""Basic query execution helpers.

These wrap low-level sqlite3 operations with logging and typed return
shapes used by higher-level CRUD helpers. Rows are converted to dicts
from the cursor description, so they work whatever row_factory the
caller's connection uses.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any

logger = logging.getLogger(__name__)

Params = tuple | dict | None


def _row_to_dict(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    columns = [col[0] for col in cursor.description]
    return dict(zip(columns, row))


def execute_query(conn: sqlite3.Connection, sql: str, params: Params = None) -> sqlite3.Cursor:
    """Execute a SQL statement and return the cursor.

    Raises:
        sqlite3.Error: If execution fails.

    Logs:
        - DEBUG: "Executed query: {sql[:80]}" on success.
        - ERROR: "Query execution failed: {exc}" with traceback on failure.
    """
    try:
        cursor = conn.execute(sql, params or ())
        logger.debug("Executed query: %s", " ".join(sql.split())[:80])
        return cursor
    except sqlite3.Error as exc:
        logger.exception("Query execution failed: %s", exc)
        raise


def fetch_all(conn: sqlite3.Connection, sql: str, params: Params = None) -> list[dict[str, Any]]:
    """Execute query and return all rows as list of dicts (empty if none match)."""
    cursor = execute_query(conn, sql, params)
    return [_row_to_dict(cursor, row) for row in cursor.fetchall()]


def execute_update(conn: sqlite3.Connection, sql: str, params: Params = None) -> int:
    """Execute UPDATE/DELETE and return number of affected rows.

    Logs:
        - DEBUG: "Update affected {rowcount} rows" on success.
    """
    cursor = execute_query(conn, sql, params)
    rowcount = cursor.rowcount
    logger.debug("Update affected %s rows", rowcount)
    return rowcount


def execute_insert(conn: sqlite3.Connection, sql: str, params: Params = None) -> int:
    """Execute an INSERT and return the rowid SQLite assigned to the new row."""
    cursor = execute_query(conn, sql, params)
    rowid = cursor.lastrowid
    logger.debug("Inserted row with rowid %s", rowid)
    return rowid
