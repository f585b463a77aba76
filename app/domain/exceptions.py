"""Domain exceptions for the Event Overview application.

Defines domain-level exceptions for the overview panel. The refresh
controller handles aggregation and data-integrity errors locally; the
presentation layer maps the rest to HTTP responses in exception handlers.
"""

from typing import Any


class OverviewException(Exception):
    """Base exception for all Event Overview application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, category).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the HTTP exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(OverviewException):
    """Raised when input validation fails (e.g. invalid time range token)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AggregationRequestException(OverviewException):
    """Raised when a call to the aggregation API fails (transport or server error).

    Also raised when the API answers with a payload that does not match the
    expected shape.
    """

    def __init__(
        self,
        operation: str,
        reason: str,
        status_code: int | None = None,
    ) -> None:
        """Initialize with the failed operation and reason.

        Args:
            operation: Aggregation operation name (e.g. 'group_by', 'histogram_time').
            reason: Short description of the failure.
            status_code: HTTP status returned by the API, when there was one.
        """
        details: dict[str, Any] = {"operation": operation}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(
            f"Aggregation request '{operation}' failed: {reason}",
            "AGGREGATION_REQUEST_ERROR",
            details,
        )
        self.operation = operation
        self.status_code = status_code


class SeriesLengthMismatchException(OverviewException):
    """Raised when a histogram has a different point count than the chart's time axis."""

    def __init__(self, category: str, expected: int, actual: int) -> None:
        """Initialize with the category and the two lengths.

        Args:
            category: Event category whose histogram was rejected.
            expected: Number of labels already fixed on the chart.
            actual: Number of points in the rejected histogram.
        """
        super().__init__(
            f"Label and data mismatch for '{category}': expected {expected} points, got {actual}",
            "SERIES_LENGTH_MISMATCH",
            {"category": category, "expected": expected, "actual": actual},
        )
        self.category = category
        self.expected = expected
        self.actual = actual


class SeriesNotFoundException(OverviewException):
    """Raised when a legend action targets a series that is not on the live chart."""

    def __init__(self, series_index: int, label: str) -> None:
        """Initialize with the index and label sent by the legend.

        Args:
            series_index: Series position the legend reported.
            label: Series label (event category) the legend reported.
        """
        super().__init__(
            f"Series not found: #{series_index} ({label})",
            "SERIES_NOT_FOUND",
            {"series_index": series_index, "label": label},
        )
