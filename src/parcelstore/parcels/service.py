"""Parcel workflows built on top of ParcelStore.

The service adds the one piece of lifecycle knowledge the store lacks:
the forward order of statuses. Everything else delegates straight to
the store.
"""

from __future__ import annotations

import logging

from .models import Parcel, ParcelStatus
from .store import ParcelStore

logger = logging.getLogger(__name__)

NEXT_STATUS: dict[ParcelStatus, ParcelStatus] = {
    ParcelStatus.REGISTERED: ParcelStatus.SENT,
    ParcelStatus.SENT: ParcelStatus.DELIVERED,
}


class InvalidStatusTransition(ValueError):
    """Raised when a parcel has no status to advance to."""


class ParcelService:
    def __init__(self, store: ParcelStore) -> None:
        self.store = store

    def register(self, client: int, address: str) -> Parcel:
        """Create a registered parcel and return it with its assigned number."""
        parcel = Parcel.new(client, address)
        parcel.number = self.store.add(parcel)
        logger.info("Registered parcel %s for client %s", parcel.number, client)
        return parcel

    def next_status(self, number: int) -> ParcelStatus:
        """Advance a parcel one step along registered → sent → delivered.

        Raises:
            NotFoundError: If the parcel does not exist.
            InvalidStatusTransition: If the parcel is delivered or holds a
                status outside ParcelStatus.
        """
        parcel = self.store.get(number)
        next_status = NEXT_STATUS.get(parcel.status)
        if next_status is None:
            msg = f"Parcel {number} is {parcel.status}; no further status"
            raise InvalidStatusTransition(msg)

        self.store.set_status(number, next_status)
        logger.info("Parcel %s: %s -> %s", number, parcel.status, next_status)
        return next_status

    def change_address(self, number: int, address: str) -> None:
        self.store.set_address(number, address)

    def delete(self, number: int) -> None:
        self.store.delete(number)

    def client_parcels(self, client: int) -> list[Parcel]:
        return self.store.get_by_client(client)
