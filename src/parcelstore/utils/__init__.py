"""Utility modules.

This package provides shared utilities used across the codebase.
"""

from .time import (
    assert_ts_utc_z,
    format_ts_utc_z,
    now_ts_utc_z,
    utc_now,
)

__all__ = [
    "assert_ts_utc_z",
    "format_ts_utc_z",
    "now_ts_utc_z",
    "utc_now",
]
