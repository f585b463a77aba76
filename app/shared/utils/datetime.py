"""UTC datetime helpers.

All datetime values in the system are timezone-aware UTC.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info (use instead of datetime.utcnow())."""
    return datetime.now(UTC)
