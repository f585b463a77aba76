"""Application use cases: one entry point per workflow."""

from app.application.use_cases.refresh import (
    DEFAULT_HIDDEN_TYPES,
    PendingCounter,
    RefreshController,
    RefreshCycle,
)

__all__ = [
    "DEFAULT_HIDDEN_TYPES",
    "PendingCounter",
    "RefreshController",
    "RefreshCycle",
]
