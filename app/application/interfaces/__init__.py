"""Application interfaces (ports) for the overview panel's external collaborators."""

from app.application.interfaces.services import (
    IAggregationClient,
    IIntervalResolver,
    IRenderSink,
)

__all__ = [
    "IAggregationClient",
    "IIntervalResolver",
    "IRenderSink",
]
