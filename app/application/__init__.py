"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (aggregation client, interval
resolver, render sink).
"""

from app.application.interfaces import (
    IAggregationClient,
    IIntervalResolver,
    IRenderSink,
)
from app.application.services import (
    ChartModelAdapter,
    DiagnosticLog,
    SeriesRegistry,
)
from app.application.use_cases import RefreshController

__all__ = [
    "ChartModelAdapter",
    "DiagnosticLog",
    "IAggregationClient",
    "IIntervalResolver",
    "IRenderSink",
    "RefreshController",
    "SeriesRegistry",
]
