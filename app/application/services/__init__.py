"""Application services: series registry, chart model adapter, diagnostics."""

from app.application.services.chart_model import ChartModel, ChartModelAdapter
from app.application.services.diagnostics import (
    Diagnostic,
    DiagnosticKind,
    DiagnosticLog,
)
from app.application.services.series_registry import SeriesRegistry

__all__ = [
    "ChartModel",
    "ChartModelAdapter",
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticLog",
    "SeriesRegistry",
]
