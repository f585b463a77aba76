"""Wire schemas for aggregation API responses (validated on receipt)."""

from pydantic import BaseModel, Field


class GroupByRow(BaseModel):
    """One bucket of a group-by response."""

    key: str
    count: int = Field(..., ge=0)


class GroupByResponse(BaseModel):
    """Response of GET /api/agg."""

    rows: list[GroupByRow] = Field(default_factory=list)


class HistogramBucket(BaseModel):
    """One time bucket of a histogram response."""

    time: int
    count: int = Field(..., ge=0)


class HistogramResponse(BaseModel):
    """Response of GET /api/report/histogram/time."""

    data: list[HistogramBucket] = Field(default_factory=list)
