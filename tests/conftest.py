"""Pytest configuration and fixtures for the overview service.

Uses app.main:app for HTTP tests. The aggregation API is replaced by
FakeAggregationClient; its gates let a test decide the order in which
discovery and histogram responses arrive.
"""

import asyncio
from collections.abc import Callable, Iterable

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.websocket import ConnectionManager, WebSocketRenderSink
from app.application.dtos.overview import (
    CategoryCount,
    ChartSnapshot,
    GroupByRequest,
    HistogramPoint,
    HistogramRequest,
)
from app.application.services.chart_model import ChartModelAdapter
from app.application.services.series_registry import SeriesRegistry
from app.application.use_cases.refresh import DEFAULT_HIDDEN_TYPES, RefreshController
from app.core.config import get_settings
from app.core.lifespan import build_refresh_controller
from app.domain.value_objects.time_range import TimeRange
from app.infrastructure.external.time_range import IntervalResolver
from app.main import app


class FakeAggregationClient:
    """In-memory aggregation API.

    histograms maps an event type (or '<time_range>/<event_type>' for a
    range-specific answer) to a list of (time, count) pairs or to an
    exception to raise. With gate_histograms=True every histogram call
    waits until release() is called for its event type and time range.
    """

    def __init__(
        self,
        rows: Iterable[tuple[str, int]] = (),
        histograms: dict | None = None,
        *,
        gate_histograms: bool = False,
    ) -> None:
        self.rows = [CategoryCount(key=k, count=c) for k, c in rows]
        self.histograms = histograms or {}
        self.group_by_error: Exception | None = None
        self.gate_histograms = gate_histograms
        self.group_by_calls: list[GroupByRequest] = []
        self.histogram_calls: list[HistogramRequest] = []
        self._discovery_gates: dict[str, asyncio.Event] = {}
        self._histogram_gates: dict[str, asyncio.Event] = {}

    def hold_discovery(self, time_range: str = "24h") -> None:
        self._discovery_gates[time_range] = asyncio.Event()

    def release_discovery(self, time_range: str = "24h") -> None:
        self._discovery_gates[time_range].set()

    def release(self, event_type: str, time_range: str = "24h") -> None:
        self._histogram_gate(f"{time_range}/{event_type}").set()

    def _histogram_gate(self, key: str) -> asyncio.Event:
        return self._histogram_gates.setdefault(key, asyncio.Event())

    async def group_by(self, request: GroupByRequest) -> list[CategoryCount]:
        self.group_by_calls.append(request)
        gate = self._discovery_gates.get(str(request.time_range))
        if gate is not None:
            await gate.wait()
        if self.group_by_error is not None:
            raise self.group_by_error
        return list(self.rows)

    async def histogram_time(self, request: HistogramRequest) -> list[HistogramPoint]:
        self.histogram_calls.append(request)
        key = f"{request.time_range}/{request.event_type}"
        if self.gate_histograms:
            await self._histogram_gate(key).wait()
        result = self.histograms.get(key, self.histograms.get(request.event_type, []))
        if isinstance(result, Exception):
            raise result
        return [HistogramPoint(time=t, count=c) for t, c in result]


class RecordingSink:
    """Render sink that keeps every snapshot it receives."""

    def __init__(self) -> None:
        self.snapshots: list[ChartSnapshot] = []

    def render(self, snapshot: ChartSnapshot) -> None:
        self.snapshots.append(snapshot)

    @property
    def last(self) -> ChartSnapshot:
        return self.snapshots[-1]


async def _spin(times: int = 20) -> None:
    """Let every ready task run (no real I/O happens in these tests)."""
    for _ in range(times):
        await asyncio.sleep(0)


@pytest.fixture
def spin() -> Callable:
    """Coroutine function that yields to the loop until queued tasks have run."""
    return _spin


@pytest.fixture
def fake_client_factory() -> Callable[..., FakeAggregationClient]:
    """Factory for FakeAggregationClient (same arguments as the class)."""
    return FakeAggregationClient


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def make_controller(sink: RecordingSink) -> Callable[..., RefreshController]:
    """Build a RefreshController over a fake client and the recording sink (range 24h)."""

    def _make(client: FakeAggregationClient, time_range: str = "24h", **kwargs) -> RefreshController:
        return RefreshController(
            client=client,
            resolver=IntervalResolver(),
            adapter=ChartModelAdapter(SeriesRegistry(DEFAULT_HIDDEN_TYPES), sink),
            time_range=TimeRange(time_range),
            **kwargs,
        )

    return _make


@pytest.fixture
def api_fake_client() -> FakeAggregationClient:
    """Aggregation client behind the API tests: dns, alert and stats over two buckets."""
    return FakeAggregationClient(
        rows=[("dns", 30), ("alert", 20), ("stats", 5)],
        histograms={
            "dns": [(100, 1), (200, 2)],
            "alert": [(100, 5), (200, 7)],
            "stats": [(100, 9), (200, 9)],
        },
    )


@pytest.fixture
async def client(api_fake_client: FakeAggregationClient) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI).

    ASGITransport does not run the lifespan, so the objects it would build are
    put on app.state here, with the fake aggregation client.
    """
    manager = ConnectionManager()
    render_sink = WebSocketRenderSink(manager)
    app.state.ws_manager = manager
    app.state.render_sink = render_sink
    app.state.controller = build_refresh_controller(
        get_settings(), api_fake_client, render_sink
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    await app.state.controller.aclose()
    await render_sink.drain()
    del app.state.controller
    del app.state.render_sink
    del app.state.ws_manager
