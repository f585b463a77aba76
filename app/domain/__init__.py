"""Domain layer: value objects and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.exceptions import (
    AggregationRequestException,
    OverviewException,
    SeriesLengthMismatchException,
    SeriesNotFoundException,
    ValidationException,
)
from app.domain.value_objects import TimeRange

__all__ = [
    # Exceptions
    "AggregationRequestException",
    "OverviewException",
    "SeriesLengthMismatchException",
    "SeriesNotFoundException",
    "ValidationException",
    # Value objects
    "TimeRange",
]
