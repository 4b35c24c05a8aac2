"""
Date helpers for the Pivot API.
"""

from datetime import datetime, timezone


def utc_now_iso() -> str:
    """
    Current UTC time as an ISO-8601 string with millisecond precision.

    Returns:
        e.g. '2025-07-02T10:15:30.123Z'
    """
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )
