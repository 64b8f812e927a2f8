"""Tests for ParcelService workflows."""

from __future__ import annotations

import pytest

from parcelstore.database import NotFoundError
from parcelstore.parcels import InvalidStatusTransition, ParcelService, ParcelStatus, ParcelStore
from parcelstore.utils.time import assert_ts_utc_z


@pytest.fixture
def service(store: ParcelStore) -> ParcelService:
    return ParcelService(store)


@pytest.mark.integration
def test_register(service: ParcelService) -> None:
    parcel = service.register(7, "1 Main St")

    assert parcel.number > 0
    assert parcel.status is ParcelStatus.REGISTERED
    assert_ts_utc_z(parcel.created_at)
    assert service.store.get(parcel.number) == parcel


@pytest.mark.integration
def test_next_status_walks_lifecycle(service: ParcelService) -> None:
    parcel = service.register(7, "1 Main St")

    assert service.next_status(parcel.number) is ParcelStatus.SENT
    assert service.next_status(parcel.number) is ParcelStatus.DELIVERED

    with pytest.raises(InvalidStatusTransition):
        service.next_status(parcel.number)

    assert service.store.get(parcel.number).status is ParcelStatus.DELIVERED


@pytest.mark.integration
def test_next_status_missing_parcel(service: ParcelService) -> None:
    with pytest.raises(NotFoundError):
        service.next_status(99)


@pytest.mark.integration
def test_change_address_and_delete_blocked_after_send(service: ParcelService) -> None:
    parcel = service.register(7, "1 Main St")
    service.change_address(parcel.number, "2 Main St")
    service.next_status(parcel.number)

    with pytest.raises(NotFoundError):
        service.change_address(parcel.number, "3 Main St")
    with pytest.raises(NotFoundError):
        service.delete(parcel.number)

    assert service.store.get(parcel.number).address == "2 Main St"


@pytest.mark.integration
def test_client_parcels(service: ParcelService) -> None:
    first = service.register(7, "a")
    second = service.register(7, "b")
    service.register(8, "c")

    numbers = {p.number for p in service.client_parcels(7)}
    assert numbers == {first.number, second.number}


@pytest.mark.integration
def test_next_status_from_unknown_status(service: ParcelService) -> None:
    parcel = service.register(7, "1 Main St")
    service.store.set_status(parcel.number, "lost")

    with pytest.raises(InvalidStatusTransition):
        service.next_status(parcel.number)
