"""Refresh controller use case: discovery plus per-category histograms into one chart.

A refresh cycle issues one group-by call to discover event types, then one
histogram call per discovered type. Histogram responses arrive in any order
and are merged into the cycle's own ChartModel. Each cycle carries a
generation number; responses from a superseded cycle are dropped.

All work runs on one asyncio event loop. Each call is its own task and the
cycle's PendingCounter joins them; no locks are needed because every
mutation happens between two awaits.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from app.application.dtos.overview import GroupByRequest, HistogramRequest
from app.application.services.chart_model import ChartModel, ChartModelAdapter
from app.application.services.diagnostics import DiagnosticKind, DiagnosticLog
from app.application.services.series_registry import SeriesRegistry
from app.domain.exceptions import (
    AggregationRequestException,
    SeriesLengthMismatchException,
)
from app.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from app.application.interfaces.services import (
        IAggregationClient,
        IIntervalResolver,
    )
    from app.domain.value_objects.time_range import TimeRange

logger = logging.getLogger(__name__)

# Event types whose series start hidden (high-volume, low-signal records).
DEFAULT_HIDDEN_TYPES: tuple[str, ...] = ("anomaly", "stats", "netflow")


class PendingCounter:
    """Counts in-flight calls of one cycle; wait() returns once the count is back to 0."""

    def __init__(self) -> None:
        self._count = 0
        self._settled = asyncio.Event()
        self._settled.set()

    @property
    def count(self) -> int:
        return self._count

    def add(self) -> None:
        self._count += 1
        self._settled.clear()

    def done(self) -> None:
        if self._count <= 0:
            raise RuntimeError("PendingCounter.done() called more times than add()")
        self._count -= 1
        if self._count == 0:
            self._settled.set()

    async def wait(self) -> None:
        await self._settled.wait()


@dataclass
class RefreshCycle:
    """State captured at the start of one refresh: immutable inputs plus its own chart model."""

    generation: int
    time_range: "TimeRange"
    interval: str
    model: ChartModel
    pending: PendingCounter = field(default_factory=PendingCounter)

    @property
    def settled(self) -> bool:
        return self.pending.count == 0

    async def wait(self) -> None:
        """Wait until the discovery call and every histogram call of this cycle have settled."""
        await self.pending.wait()


class RefreshController:
    """Drives the events-by-type chart: one discovery call, then N histogram calls.

    The injected ChartModelAdapter holds the SeriesRegistry (visibility
    survives refreshes) and one ChartModel per generation.
    """

    def __init__(
        self,
        client: "IAggregationClient",
        resolver: "IIntervalResolver",
        adapter: ChartModelAdapter,
        time_range: "TimeRange",
        *,
        diagnostics: DiagnosticLog | None = None,
        discovery_field: str = "event_type",
        discovery_size: int = 100,
        query_string: str = "",
    ) -> None:
        self._client = client
        self._resolver = resolver
        self._time_range = time_range
        self._adapter = adapter
        self._diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
        self._discovery_field = discovery_field
        self._discovery_size = discovery_size
        self._query_string = query_string
        self._generation = 0
        self._cycle: RefreshCycle | None = None
        self._tasks: set[asyncio.Task[None]] = set()

    # ---- State ----

    @property
    def registry(self) -> SeriesRegistry:
        return self._adapter.registry

    @property
    def adapter(self) -> ChartModelAdapter:
        return self._adapter

    @property
    def diagnostics(self) -> DiagnosticLog:
        return self._diagnostics

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def time_range(self) -> "TimeRange":
        return self._time_range

    @property
    def current_cycle(self) -> RefreshCycle | None:
        return self._cycle

    @property
    def loading(self) -> int:
        """In-flight calls of the current cycle (drives the loading indicator)."""
        if self._cycle is None:
            return 0
        return self._cycle.pending.count

    # ---- Triggers ----

    def request_refresh(self) -> RefreshCycle | None:
        """Start a refresh cycle without waiting for it.

        A no-op while the current cycle still has calls in flight.

        Returns:
            The new cycle, or None when the trigger was suppressed.
        """
        if self.loading > 0:
            logger.debug(
                "Refresh suppressed: generation %d still has %d pending calls",
                self._generation,
                self.loading,
            )
            return None
        return self._start_cycle()

    async def refresh(self) -> None:
        """Run a refresh cycle and wait for all of its calls to settle."""
        cycle = self.request_refresh()
        if cycle is not None:
            await cycle.wait()

    def set_time_range(self, time_range: "TimeRange") -> RefreshCycle:
        """Switch to a new time range; always starts a new cycle, superseding any in flight."""
        self._time_range = time_range
        return self._start_cycle()

    async def change_time_range(self, time_range: "TimeRange") -> None:
        await self.set_time_range(time_range).wait()

    def on_legend_click(
        self, series_index: int, label: str, currently_visible: bool
    ) -> bool:
        """Legend handler for the render sink; see ChartModelAdapter.on_legend_click."""
        return self._adapter.on_legend_click(series_index, label, currently_visible)

    async def aclose(self) -> None:
        """Cancel calls still in flight (shutdown)."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    # ---- Cycle ----

    def _start_cycle(self) -> RefreshCycle:
        self._generation += 1
        time_range = self._time_range
        cycle = RefreshCycle(
            generation=self._generation,
            time_range=time_range,
            interval=self._resolver.resolve(time_range),
            model=self._adapter.reset(self._generation),
        )
        self._cycle = cycle
        logger.info(
            "Refresh generation %d: time_range=%r interval=%s",
            cycle.generation,
            str(time_range),
            cycle.interval,
        )
        cycle.pending.add()
        self._spawn(self._discover(cycle))
        return cycle

    def _is_current(self, cycle: RefreshCycle) -> bool:
        return cycle.generation == self._generation

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    @traced("overview.discover")
    async def _discover(self, cycle: RefreshCycle) -> None:
        add_span_attributes(generation=cycle.generation)
        try:
            try:
                rows = await self._client.group_by(
                    GroupByRequest(
                        field=self._discovery_field,
                        size=self._discovery_size,
                        time_range=cycle.time_range,
                    )
                )
            except Exception as e:
                self._report_failure(cycle, e)
                return
            if not self._is_current(cycle):
                return
            self._issue_histograms(cycle, (row.key for row in rows))
        finally:
            # Histogram calls are counted above, so the cycle cannot look settled early.
            cycle.pending.done()

    def _issue_histograms(self, cycle: RefreshCycle, categories: Iterable[str]) -> None:
        for category in categories:
            cycle.pending.add()
            self._spawn(self._fetch_series(cycle, category))

    @traced("overview.histogram")
    async def _fetch_series(self, cycle: RefreshCycle, category: str) -> None:
        add_span_attributes(generation=cycle.generation)
        try:
            try:
                points = await self._client.histogram_time(
                    HistogramRequest(
                        time_range=cycle.time_range,
                        interval=cycle.interval,
                        event_type=category,
                        query_string=self._query_string,
                    )
                )
            except Exception as e:
                self._report_failure(cycle, e, category)
                return
            if not self._is_current(cycle):
                return
            try:
                self._adapter.merge_series(cycle.model, category, points)
            except SeriesLengthMismatchException as e:
                self._diagnostics.record(
                    DiagnosticKind.LENGTH_MISMATCH,
                    cycle.generation,
                    e.message,
                    category=category,
                )
        finally:
            cycle.pending.done()

    def _report_failure(
        self,
        cycle: RefreshCycle,
        error: Exception,
        category: str | None = None,
    ) -> None:
        if not self._is_current(cycle):
            return
        if not isinstance(error, AggregationRequestException):
            logger.exception(
                "Unexpected error in refresh generation %d (category=%s)",
                cycle.generation,
                category,
            )
        self._diagnostics.record(
            DiagnosticKind.TRANSPORT_FAILURE,
            cycle.generation,
            str(error),
            category=category,
        )
