"""Pydantic request/response schemas for the API and the aggregation wire format."""

from app.schemas.aggregation import (
    GroupByResponse,
    GroupByRow,
    HistogramBucket,
    HistogramResponse,
)
from app.schemas.health import HealthResponse
from app.schemas.overview import (
    ChartResponse,
    DiagnosticItem,
    DiagnosticsResponse,
    LegendClickRequest,
    LegendClickResponse,
    RefreshResponse,
    SeriesResponse,
    TimeRangeRequest,
    VisibilityResponse,
    WebSocketStatusResponse,
)

__all__ = [
    "ChartResponse",
    "DiagnosticItem",
    "DiagnosticsResponse",
    "GroupByResponse",
    "GroupByRow",
    "HealthResponse",
    "HistogramBucket",
    "HistogramResponse",
    "LegendClickRequest",
    "LegendClickResponse",
    "RefreshResponse",
    "SeriesResponse",
    "TimeRangeRequest",
    "VisibilityResponse",
    "WebSocketStatusResponse",
]
