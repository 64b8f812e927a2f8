"""Canonical timestamp utilities.

Parcel timestamps at rest are RFC3339 strings in a single canonical shape:
YYYY-MM-DDTHH:MM:SSZ (seconds-only, UTC). Internal code may work with
tz-aware datetime objects, but everything written to the database goes
through `format_ts_utc_z`.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime

# Canonical ts_utc format: exactly 20 characters, YYYY-MM-DDTHH:MM:SSZ
TS_UTC_LENGTH = 20
TS_UTC_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$")


def utc_now() -> datetime:
    """Return current UTC time as tz-aware datetime."""
    return datetime.now(UTC)


def format_ts_utc_z(dt: datetime) -> str:
    """Format a datetime as canonical UTC instant string (YYYY-MM-DDTHH:MM:SSZ).

    Converts any aware datetime to UTC before formatting. Sub-second
    precision is dropped.

    Args:
        dt: Datetime to format. Must be timezone-aware.

    Returns:
        Canonical instant string, exactly 20 characters.

    Raises:
        ValueError: If dt is naive (no timezone).
    """
    if dt.tzinfo is None:
        raise ValueError(f"Cannot format naive datetime {dt}. Attach a timezone first.")

    iso_str = dt.astimezone(UTC).isoformat(timespec="seconds")
    if iso_str.endswith("+00:00"):
        return iso_str[:-6] + "Z"
    return iso_str


def now_ts_utc_z() -> str:
    """Return current UTC time as canonical instant string."""
    return format_ts_utc_z(utc_now())


def assert_ts_utc_z(s: str) -> None:
    """Reject anything that is not a canonical YYYY-MM-DDTHH:MM:SSZ string.

    Args:
        s: String to validate.

    Raises:
        ValueError: If string is not exactly in canonical format.
    """
    if not isinstance(s, str):
        raise ValueError(f"Expected string, got {type(s).__name__}: {s}")

    if re.search(r"[+-]\d{2}:\d{2}$", s):
        raise ValueError("ts_utc must match YYYY-MM-DDTHH:MM:SSZ")

    if len(s) != TS_UTC_LENGTH:
        raise ValueError(
            f"ts_utc must be exactly {TS_UTC_LENGTH} characters, got {len(s)}: {s}"
        )

    if not TS_UTC_PATTERN.match(s):
        raise ValueError("ts_utc must match YYYY-MM-DDTHH:MM:SSZ")
