"""
Time-related utilities for the application.

All timestamps are generated in UTC and serialized using
ISO-8601 format with timezone information to ensure
correct lexicographic ordering in DynamoDB.
"""

import time
from datetime import datetime, timezone


def utc_now_iso() -> str:
    """Return current UTC time in ISO-8601 format.

    Example:
        2024-01-15T10:42:31.123456+00:00

    This format is safe for:
    - DynamoDB range key comparisons
    - Sorting
    - JSON serialization
    """
    return datetime.now(timezone.utc).isoformat()


def epoch_millis() -> int:
    """Return the current wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def millis_to_iso(millis: int) -> str:
    """Convert epoch milliseconds to an ISO-8601 UTC string."""
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc).isoformat()
