from __future__ import annotations

import sqlite3
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from parcelstore.parcels import Parcel, ParcelStatus, ParcelStore
from parcelstore.utils.time import now_ts_utc_z

PARCEL_TABLE_SQL = (
    "CREATE TABLE parcel ("
    "number INTEGER PRIMARY KEY AUTOINCREMENT, "
    "client INTEGER, status TEXT, address TEXT, created_at TEXT)"
)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """
    A dedicated temp root directory for each test.
    All filesystem writes in tests should be under this root (or tmp_path directly).
    """
    root = tmp_path / "proj"
    (root / "db").mkdir(parents=True)
    return root


@pytest.fixture(autouse=True)
def chdir_to_project_root(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Automatically change working directory to project_root for all tests.
    This ensures relative-path operations go into the temp directory by default.
    """
    monkeypatch.chdir(project_root)


@pytest.fixture
def sqlite_path(project_root: Path) -> Path:
    """
    On-disk SQLite DB under the temp project root.
    """
    return project_root / "db" / "test.sqlite"


@pytest.fixture
def db_conn() -> Iterator[sqlite3.Connection]:
    """
    An in-memory SQLite connection with the parcel table, always closed after each test.

    The schema is created here rather than by the store, which never manages schema.
    """
    conn = sqlite3.connect(":memory:")
    try:
        conn.execute(PARCEL_TABLE_SQL)
        yield conn
    finally:
        conn.close()


@pytest.fixture
def store(db_conn: sqlite3.Connection) -> ParcelStore:
    return ParcelStore(db_conn)


def _new_parcel(client: int = 1000, address: str = "test") -> Parcel:
    return Parcel(
        client=client,
        status=ParcelStatus.REGISTERED,
        address=address,
        created_at=now_ts_utc_z(),
    )


@pytest.fixture
def make_parcel() -> Callable[..., Parcel]:
    """Factory for unsaved registered parcels stamped with the current time."""
    return _new_parcel
