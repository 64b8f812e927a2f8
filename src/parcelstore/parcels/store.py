"""SQLite-backed data access for the `parcel` table.

`ParcelStore` is bound to one open connection supplied by the caller.
Each method issues exactly one SQL statement through the generic CRUD
helpers. The store does not commit, close the connection, or create the
schema; wrap calls in `database.transaction` to persist them.
"""

from __future__ import annotations

import logging
import sqlite3

from ..database import crud
from ..database.errors import ensure_affected, ensure_found
from .models import Parcel, ParcelStatus, status_value

logger = logging.getLogger(__name__)

TABLE = "parcel"
COLUMNS = ("number", "client", "status", "address", "created_at")


class ParcelStore:
    """CRUD access to parcels with the registered-only guard on mutation."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def add(self, parcel: Parcel) -> int:
        """Insert a parcel and return the number SQLite assigned to it.

        `parcel.number` is ignored; the caller's object is not modified.

        Raises:
            DatabaseError: If the insert fails.
        """
        number = crud.insert(
            self.conn,
            TABLE,
            {
                "client": parcel.client,
                "status": status_value(parcel.status),
                "address": parcel.address,
                "created_at": parcel.created_at,
            },
        )
        logger.debug("Added parcel %s for client %s", number, parcel.client)
        return number

    def get(self, number: int) -> Parcel:
        """Fetch one parcel by number.

        Raises:
            NotFoundError: If no parcel has this number.
            DatabaseError: If the query fails.
        """
        rows = crud.select(self.conn, TABLE, {"number": number}, columns=COLUMNS, limit=1)
        row = ensure_found(rows[0] if rows else None, f"Parcel {number} not found", table=TABLE, key=number)
        return Parcel.from_row(row)

    def get_by_client(self, client: int) -> list[Parcel]:
        """Return every parcel owned by client, oldest number first. Empty if none."""
        rows = crud.select(self.conn, TABLE, {"client": client}, columns=COLUMNS, order_by="number")
        return [Parcel.from_row(row) for row in rows]

    def set_status(self, number: int, status: ParcelStatus | str) -> None:
        """Set the status unconditionally.

        A missing parcel is not reported: the update simply touches no rows.
        Values outside ParcelStatus are stored as given.

        Raises:
            DatabaseError: If the update fails.
        """
        value = status_value(status)
        count = crud.update(self.conn, TABLE, {"number": number}, {"status": value})
        logger.debug("Set status of parcel %s to %s (%s row(s))", number, value, count)

    def set_address(self, number: int, address: str) -> None:
        """Change the address of a parcel that is still registered.

        Raises:
            NotFoundError: If the parcel does not exist or is no longer
                registered; the two cases are not distinguished.
            DatabaseError: If the update fails.
        """
        count = crud.update(
            self.conn,
            TABLE,
            {"number": number, "status": ParcelStatus.REGISTERED.value},
            {"address": address},
        )
        ensure_affected(count, f"Registered parcel {number} not found", table=TABLE, key=number)
        logger.debug("Changed address of parcel %s", number)

    def delete(self, number: int) -> None:
        """Delete a parcel that is still registered.

        Raises:
            NotFoundError: If the parcel does not exist or is no longer
                registered; the two cases are not distinguished.
            DatabaseError: If the delete fails.
        """
        count = crud.delete(
            self.conn,
            TABLE,
            {"number": number, "status": ParcelStatus.REGISTERED.value},
        )
        ensure_affected(count, f"Registered parcel {number} not found", table=TABLE, key=number)
        logger.debug("Deleted parcel %s", number)
