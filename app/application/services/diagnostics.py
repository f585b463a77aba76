"""Diagnostic channel for the refresh controller.

Failures inside a refresh cycle never reach the user as errors; they are
recorded here, logged, and attached to the current trace span instead.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from app.shared.telemetry.tracing import add_span_event, get_trace_id
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class DiagnosticKind(str, Enum):
    """What went wrong in a refresh cycle."""

    TRANSPORT_FAILURE = "transport_failure"
    LENGTH_MISMATCH = "length_mismatch"


@dataclass(frozen=True)
class Diagnostic:
    """One recorded anomaly."""

    kind: DiagnosticKind
    generation: int
    message: str
    category: str | None = None
    trace_id: str | None = None
    recorded_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "generation": self.generation,
            "message": self.message,
            "category": self.category,
            "recorded_at": self.recorded_at.isoformat(),
            "trace_id": self.trace_id,
        }


class DiagnosticLog:
    """Bounded in-memory log of recent diagnostics (oldest dropped first)."""

    def __init__(self, max_entries: int = 200) -> None:
        self._entries: deque[Diagnostic] = deque(maxlen=max_entries)

    def record(
        self,
        kind: DiagnosticKind,
        generation: int,
        message: str,
        category: str | None = None,
    ) -> Diagnostic:
        """Store a diagnostic, log it as a warning, and add a span event."""
        diagnostic = Diagnostic(
            kind=kind,
            generation=generation,
            message=message,
            category=category,
            trace_id=get_trace_id(),
        )
        self._entries.append(diagnostic)
        logger.warning(
            "Overview diagnostic [%s] generation=%d category=%s: %s",
            kind.value,
            generation,
            category,
            message,
        )
        attributes: dict[str, str | int] = {"kind": kind.value, "generation": generation}
        if category is not None:
            attributes["category"] = category
        add_span_event("overview.diagnostic", attributes)
        return diagnostic

    def entries(self, kind: DiagnosticKind | None = None) -> list[Diagnostic]:
        """Return recorded diagnostics, oldest first, optionally filtered by kind."""
        if kind is None:
            return list(self._entries)
        return [d for d in self._entries if d.kind == kind]

    def count(self, kind: DiagnosticKind | None = None) -> int:
        return len(self.entries(kind))

    def clear(self) -> None:
        self._entries.clear()
