"""Service interfaces (ports) for the application layer.

Protocols define contracts for the overview panel's external collaborators
(DIP): the aggregation API, the time-range resolver and the render sink.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.overview import (
        CategoryCount,
        ChartSnapshot,
        GroupByRequest,
        HistogramPoint,
        HistogramRequest,
    )
    from app.domain.value_objects.time_range import TimeRange


# Aggregation API interface
class IAggregationClient(Protocol):
    """Protocol for the backend aggregation API (group-by and time histogram)."""

    async def group_by(self, request: GroupByRequest) -> list[CategoryCount]:
        """Return the top request.size values of request.field by count, in count order.

        Raises AggregationRequestException on transport/server failure.
        """

    async def histogram_time(self, request: HistogramRequest) -> list[HistogramPoint]:
        """Return time-bucketed counts for one event type, ordered by time.

        Raises AggregationRequestException on transport/server failure.
        """


# Time range resolver interface
class IIntervalResolver(Protocol):
    """Protocol for turning a time range into a histogram bucket interval."""

    def resolve(self, time_range: TimeRange) -> str:
        """Return the interval token (e.g. '1h') for the given range. Pure function."""


# Render sink interface
class IRenderSink(Protocol):
    """Protocol for the chart surface. Receives a snapshot on every chart change."""

    def render(self, snapshot: ChartSnapshot) -> None:
        """Draw (or push) the given snapshot. Must not block."""
