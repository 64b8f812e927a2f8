"""Generic CRUD helpers built on top of the low-level query helpers.

These functions operate on table names and dict-like row data and are
intended to stay low-level and generic. They do *not* open, commit or
close connections; callers are responsible for providing a connection
and managing transaction boundaries.

Each helper issues exactly one SQL statement.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Mapping, Sequence
from typing import Any

from . import queries
from .errors import from_sqlite_error

logger = logging.getLogger(__name__)


def _validate_identifier(name: str) -> None:
    """Validate SQL identifier to prevent injection.

    Only alphanumeric characters and underscores are accepted. This is a
    basic safeguard for table and column names, which cannot be bound as
    parameters; values always go through placeholders.

    Raises:
        ValueError: If identifier contains unsafe characters.
    """
    if not name.replace("_", "").isalnum():
        msg = f"Unsafe SQL identifier: {name!r}"
        raise ValueError(msg)


def _where(filters: Mapping[str, Any]) -> tuple[str, list[Any]]:
    clauses: list[str] = []
    params: list[Any] = []
    for col, value in filters.items():
        _validate_identifier(col)
        clauses.append(f"{col} = ?")
        params.append(value)
    return " AND ".join(clauses), params


def insert(conn: sqlite3.Connection, table: str, data: Mapping[str, Any]) -> int:
    """Insert a single record into table and return its generated rowid.

    Args:
        conn: Database connection (caller manages transaction).
        table: Table name to insert into.
        data: Column name to value mapping for the new record.

    Returns:
        The rowid assigned by SQLite. For tables with an INTEGER PRIMARY KEY
        this is the primary key.

    Raises:
        ValueError: If table or column names are invalid.
        IntegrityError: If constraint violation occurs.
        DatabaseError: If database operation fails.
    """
    _validate_identifier(table)
    for col in data:
        _validate_identifier(col)

    columns = ", ".join(data.keys())
    placeholders = ", ".join("?" for _ in data)
    sql = f"INSERT INTO {table} ({columns}) VALUES ({placeholders})"  # noqa: S608

    try:
        rowid = queries.execute_insert(conn, sql, tuple(data.values()))
    except sqlite3.Error as exc:
        raise from_sqlite_error(exc) from exc
    logger.debug("Inserted record into %s", table)
    return rowid


def select(
    conn: sqlite3.Connection,
    table: str,
    filters: Mapping[str, Any] | None = None,
    *,
    columns: Sequence[str] | None = None,
    order_by: str | None = None,
    limit: int | None = None,
) -> list[dict[str, Any]]:
    """Select rows from table using simple equality filters.

    Args:
        conn: Database connection.
        table: Table name to query.
        filters: Column name to value mapping, ANDed together.
        columns: Columns to return. Defaults to all columns.
        order_by: Column name to sort by (optional).
        limit: Maximum number of rows to return (optional).

    Returns:
        List of dictionaries, one per row, with column names as keys.

    Raises:
        ValueError: If table, column names, or order_by are invalid.
        DatabaseError: If database operation fails.
    """
    _validate_identifier(table)
    if columns:
        for col in columns:
            _validate_identifier(col)
        projection = ", ".join(columns)
    else:
        projection = "*"

    sql = f"SELECT {projection} FROM {table}"  # noqa: S608
    params: list[Any] = []
    if filters:
        where_sql, params = _where(filters)
        sql += " WHERE " + where_sql

    if order_by:
        _validate_identifier(order_by)
        sql += f" ORDER BY {order_by}"

    if limit is not None:
        sql += " LIMIT ?"
        params.append(limit)

    try:
        return queries.fetch_all(conn, sql, tuple(params))
    except sqlite3.Error as exc:
        raise from_sqlite_error(exc) from exc


def update(
    conn: sqlite3.Connection,
    table: str,
    filters: Mapping[str, Any],
    values: Mapping[str, Any],
) -> int:
    """Update rows in table matching filters with values.

    Requires at least one filter to prevent accidental full-table updates.
    Filters double as guards: a filter on a non-key column turns the
    statement into a conditional update.

    Returns:
        Number of rows affected by the update.

    Raises:
        ValueError: If table/column names are invalid, or filters or values
            are empty.
        DatabaseError: If database operation fails.
    """
    _validate_identifier(table)
    if not filters:
        msg = "Refusing to perform UPDATE with no filters"
        raise ValueError(msg)
    if not values:
        msg = "Refusing to perform UPDATE with no values"
        raise ValueError(msg)

    set_clauses: list[str] = []
    params: list[Any] = []
    for col, value in values.items():
        _validate_identifier(col)
        set_clauses.append(f"{col} = ?")
        params.append(value)

    where_sql, where_params = _where(filters)
    sql = f"UPDATE {table} SET " + ", ".join(set_clauses)  # noqa: S608
    sql += " WHERE " + where_sql

    try:
        return queries.execute_update(conn, sql, tuple(params + where_params))
    except sqlite3.Error as exc:
        raise from_sqlite_error(exc) from exc


def delete(conn: sqlite3.Connection, table: str, filters: Mapping[str, Any]) -> int:
    """Delete rows in table matching filters.

    Requires at least one filter to prevent accidental full-table deletes.

    Returns:
        Number of rows deleted.

    Raises:
        ValueError: If table/column names are invalid or filters is empty.
        DatabaseError: If database operation fails.
    """
    _validate_identifier(table)
    if not filters:
        msg = "Refusing to perform DELETE with no filters"
        raise ValueError(msg)

    where_sql, params = _where(filters)
    sql = f"DELETE FROM {table} WHERE " + where_sql  # noqa: S608

    try:
        return queries.execute_update(conn, sql, tuple(params))
    except sqlite3.Error as exc:
        raise from_sqlite_error(exc) from exc
