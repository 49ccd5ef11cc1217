"""
Time Interface (P3).

All document timestamps are stored as UTC ISO-8601 strings.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol


class TimePort(Protocol):
    """Port for time operations."""

    def now_utc(self) -> datetime:
        """Get current UTC time (timezone-aware)."""
        ...


def to_timestamp(dt: datetime) -> str:
    """Format a datetime as the stored timestamp string."""
    return dt.isoformat()
