"""Tests for database connection, schema and CRUD helpers."""

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from parcelstore.database import (
    CURRENT_SCHEMA_VERSION,
    IntegrityError,
    MEMORY_DB,
    apply_schema,
    crud,
    delete_database,
    get_connection,
    get_schema_version,
    initialize_database,
    transaction,
)


@pytest.mark.integration
def test_initialize_database_creates_schema(sqlite_path: Path) -> None:
    initialize_database(db_path=sqlite_path)

    with transaction(db_path=sqlite_path) as conn:
        tables = {
            row["name"] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        }
        assert "parcel" in tables
        assert get_schema_version(conn) == CURRENT_SCHEMA_VERSION


@pytest.mark.integration
def test_initialize_database_is_idempotent(sqlite_path: Path) -> None:
    initialize_database(db_path=sqlite_path)
    with transaction(db_path=sqlite_path) as conn:
        crud.insert(conn, "parcel", {"client": 1, "status": "registered"})

    initialize_database(db_path=sqlite_path)

    with transaction(db_path=sqlite_path) as conn:
        assert len(crud.select(conn, "parcel")) == 1


@pytest.mark.unit
def test_get_schema_version_uninitialized() -> None:
    conn = get_connection(MEMORY_DB)
    try:
        assert get_schema_version(conn) is None
        apply_schema(conn)
        assert get_schema_version(conn) == CURRENT_SCHEMA_VERSION
    finally:
        conn.close()


@pytest.mark.integration
def test_delete_database(sqlite_path: Path) -> None:
    initialize_database(db_path=sqlite_path)
    assert sqlite_path.exists()

    assert delete_database(db_path=sqlite_path) >= 1
    assert not sqlite_path.exists()
    assert delete_database(db_path=sqlite_path) == 0


@pytest.mark.integration
def test_get_connection_creates_parent_dir(project_root: Path) -> None:
    db_path = project_root / "nested" / "dir" / "x.sqlite"
    conn = get_connection(db_path)
    conn.close()
    assert db_path.parent.is_dir()


@pytest.mark.integration
def test_transaction_rolls_back_on_error(sqlite_path: Path) -> None:
    initialize_database(db_path=sqlite_path)

    with pytest.raises(RuntimeError):
        with transaction(db_path=sqlite_path) as conn:
            crud.insert(conn, "parcel", {"client": 1, "status": "registered"})
            raise RuntimeError("boom")

    with transaction(db_path=sqlite_path) as conn:
        assert crud.select(conn, "parcel") == []


@pytest.mark.integration
def test_transaction_reuses_existing_connection(db_conn: sqlite3.Connection) -> None:
    with transaction(existing_connection=db_conn) as conn:
        assert conn is db_conn
    # still open
    db_conn.execute("SELECT 1")


@pytest.mark.integration
def test_crud_round_trip(db_conn: sqlite3.Connection) -> None:
    rowid = crud.insert(db_conn, "parcel", {"client": 5, "status": "registered", "address": "x"})

    rows = crud.select(db_conn, "parcel", {"number": rowid}, columns=("client", "address"))
    assert rows == [{"client": 5, "address": "x"}]

    assert crud.update(db_conn, "parcel", {"number": rowid, "status": "sent"}, {"address": "y"}) == 0
    assert crud.update(db_conn, "parcel", {"number": rowid}, {"address": "y"}) == 1
    assert crud.delete(db_conn, "parcel", {"number": rowid}) == 1
    assert crud.select(db_conn, "parcel") == []


@pytest.mark.unit
def test_crud_rejects_unsafe_identifiers(db_conn: sqlite3.Connection) -> None:
    with pytest.raises(ValueError, match="Unsafe SQL identifier"):
        crud.select(db_conn, "parcel; DROP TABLE parcel")
    with pytest.raises(ValueError, match="Unsafe SQL identifier"):
        crud.insert(db_conn, "parcel", {"client--": 1})


@pytest.mark.unit
def test_crud_refuses_unfiltered_writes(db_conn: sqlite3.Connection) -> None:
    with pytest.raises(ValueError, match="no filters"):
        crud.update(db_conn, "parcel", {}, {"address": "x"})
    with pytest.raises(ValueError, match="no values"):
        crud.update(db_conn, "parcel", {"number": 1}, {})
    with pytest.raises(ValueError, match="no filters"):
        crud.delete(db_conn, "parcel", {})


@pytest.mark.integration
def test_insert_maps_integrity_error(db_conn: sqlite3.Connection) -> None:
    rowid = crud.insert(db_conn, "parcel", {"client": 1})
    with pytest.raises(IntegrityError):
        crud.insert(db_conn, "parcel", {"number": rowid, "client": 2})


@pytest.mark.integration
def test_select_order_by_and_limit(db_conn: sqlite3.Connection) -> None:
    for address in ("c", "a", "b"):
        crud.insert(db_conn, "parcel", {"client": 1, "address": address})

    rows = crud.select(db_conn, "parcel", {"client": 1}, columns=("address",), order_by="address", limit=2)
    assert rows == [{"address": "a"}, {"address": "b"}]

    with pytest.raises(ValueError, match="Unsafe SQL identifier"):
        crud.select(db_conn, "parcel", order_by="address DESC")
