"""Domain value objects and shared value types."""

from app.domain.value_objects.time_range import TimeRange

__all__ = [
    "TimeRange",
]
