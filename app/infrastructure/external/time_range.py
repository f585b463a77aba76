"""Interval resolver: picks the histogram bucket size for a time range."""

from app.domain.value_objects.time_range import TimeRange

# (token, seconds), smallest first.
INTERVAL_LADDER: tuple[tuple[str, int], ...] = (
    ("1m", 60),
    ("5m", 5 * 60),
    ("15m", 15 * 60),
    ("1h", 3600),
    ("3h", 3 * 3600),
    ("6h", 6 * 3600),
    ("12h", 12 * 3600),
    ("1d", 86400),
)

DEFAULT_MAX_BUCKETS = 100


class IntervalResolver:
    """Chooses the smallest interval that keeps a range within max_buckets buckets.

    All-time ranges and ranges too long for the ladder use the largest interval.
    """

    def __init__(self, max_buckets: int = DEFAULT_MAX_BUCKETS) -> None:
        if max_buckets < 1:
            raise ValueError("max_buckets must be at least 1")
        self._max_buckets = max_buckets

    def resolve(self, time_range: TimeRange) -> str:
        seconds = time_range.seconds
        if seconds is None:
            return INTERVAL_LADDER[-1][0]
        for token, width in INTERVAL_LADDER:
            if seconds / width <= self._max_buckets:
                return token
        return INTERVAL_LADDER[-1][0]
