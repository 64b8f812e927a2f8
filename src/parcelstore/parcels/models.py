"""Parcel record and status enumeration."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Mapping

from ..utils.time import now_ts_utc_z


class ParcelStatus(str, enum.Enum):
    """
    Parcel status enumeration.

    Status flow:
        REGISTERED → SENT → DELIVERED
    Address changes and deletion are only allowed while REGISTERED.
    """

    REGISTERED = "registered"
    SENT = "sent"
    DELIVERED = "delivered"

    def __str__(self) -> str:
        return self.value


def parse_status(value: Any) -> ParcelStatus | Any:
    """Return the matching ParcelStatus, or the stored value unchanged.

    The `parcel` table does not constrain `status`, so rows written by other
    clients may hold NULL or text outside the enum; those read back as-is.
    """
    try:
        return ParcelStatus(value)
    except ValueError:
        return value


def status_value(status: ParcelStatus | Any) -> Any:
    """Return the value to bind for a status, leaving unknown values untouched."""
    return status.value if isinstance(status, ParcelStatus) else status


@dataclass
class Parcel:
    """A shipment row in the `parcel` table.

    `number` is 0 until the store assigns one on insert. `status` is a
    ParcelStatus for known values and the raw stored value otherwise. `created_at` is a
    canonical UTC instant string (YYYY-MM-DDTHH:MM:SSZ).
    """

    client: int
    status: ParcelStatus | str | None
    address: str
    created_at: str
    number: int = 0

    @classmethod
    def new(cls, client: int, address: str) -> Parcel:
        """Build an unsaved, freshly registered parcel stamped with the current time."""
        return cls(
            client=client,
            status=ParcelStatus.REGISTERED,
            address=address,
            created_at=now_ts_utc_z(),
        )

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Parcel:
        return cls(
            number=row["number"],
            client=row["client"],
            status=parse_status(row["status"]),
            address=row["address"],
            created_at=row["created_at"],
        )
