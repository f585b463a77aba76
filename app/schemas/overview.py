"""Overview panel API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class SeriesResponse(BaseModel):
    """One chart dataset (one event type)."""

    label: str
    data: list[int] = Field(default_factory=list)
    hidden: bool = False


class ChartResponse(BaseModel):
    """Current chart state for GET /overview/chart."""

    generation: int
    time_range: str = Field(..., description="Time range token; empty means all time")
    interval: str | None = Field(
        default=None, description="Bucket interval of the current cycle"
    )
    loading: int = Field(..., ge=0, description="Calls still in flight for this cycle")
    labels: list[int] = Field(default_factory=list)
    datasets: list[SeriesResponse] = Field(default_factory=list)
    options: dict = Field(default_factory=dict)


class RefreshResponse(BaseModel):
    """Response for POST /overview/refresh and PUT /overview/time-range."""

    started: bool = Field(..., description="False when a refresh was already in flight")
    generation: int
    loading: int = Field(..., ge=0)


class TimeRangeRequest(BaseModel):
    """Body for PUT /overview/time-range."""

    time_range: str = Field(
        default="", max_length=16, description="Duration like '24h' or '7d'; empty for all time"
    )


class LegendClickRequest(BaseModel):
    """Legend click as reported by the chart: which series and its current visibility."""

    series_index: int = Field(..., ge=0)
    label: str = Field(..., min_length=1)
    visible: bool = Field(..., description="Visibility before the click")


class LegendClickResponse(BaseModel):
    """New visibility of the clicked series."""

    label: str
    visible: bool


class VisibilityResponse(BaseModel):
    """Known event types and whether their series are hidden."""

    hidden: dict[str, bool] = Field(default_factory=dict)


class DiagnosticItem(BaseModel):
    """One recorded refresh anomaly."""

    kind: str
    generation: int
    message: str
    category: str | None = None
    trace_id: str | None = None
    recorded_at: datetime


class DiagnosticsResponse(BaseModel):
    """Recent refresh anomalies, oldest first."""

    items: list[DiagnosticItem] = Field(default_factory=list)


class WebSocketStatusResponse(BaseModel):
    """Response for GET /ws/status (connection count)."""

    total_connections: int = Field(..., description="Number of active WebSocket connections")
