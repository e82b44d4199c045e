"""
Timestamp display helpers.

Record timestamps are opaque strings; these helpers only format the ones
that parse as ISO-8601 and pass anything else through unchanged.
"""

from typing import Optional

import pandas as pd


def parse_timestamp(value: str) -> Optional[pd.Timestamp]:
    """Parse an ISO-8601 string, or return None."""
    if not value:
        return None
    parsed = pd.to_datetime(value, errors="coerce", format="ISO8601")
    if pd.isna(parsed):
        return None
    return parsed


def format_time_of_day(value: str) -> str:
    """'2024-01-01T12:30:05Z' -> '12:30:05'. Unparseable input is returned as-is."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return value
    return parsed.strftime("%H:%M:%S")


def format_date_time(value: str) -> str:
    """'2024-01-01T12:30:05Z' -> '2024-01-01 12:30:05'. Unparseable input is returned as-is."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return value
    return parsed.strftime("%Y-%m-%d %H:%M:%S")
