"""Application DTOs (no HTTP or rendering dependency)."""

from app.application.dtos.overview import (
    CategoryCount,
    ChartOptions,
    ChartSeries,
    ChartSnapshot,
    GroupByRequest,
    HistogramPoint,
    HistogramRequest,
    SeriesSnapshot,
)

__all__ = [
    "CategoryCount",
    "ChartOptions",
    "ChartSeries",
    "ChartSnapshot",
    "GroupByRequest",
    "HistogramPoint",
    "HistogramRequest",
    "SeriesSnapshot",
]
