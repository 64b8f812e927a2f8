"""Parcel records, the SQLite-backed store and the workflow service."""

from .models import Parcel, ParcelStatus
from .service import InvalidStatusTransition, ParcelService
from .store import ParcelStore

__all__ = [
    "Parcel",
    "ParcelStatus",
    "ParcelStore",
    "ParcelService",
    "InvalidStatusTransition",
]
