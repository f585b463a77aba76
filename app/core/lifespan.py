"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of the aggregation client, the
refresh controller, the WebSocket manager and telemetry.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from app.api.websocket import ConnectionManager, WebSocketRenderSink
from app.application.interfaces.services import IAggregationClient, IRenderSink
from app.application.services.chart_model import ChartModelAdapter
from app.application.services.diagnostics import DiagnosticLog
from app.application.services.series_registry import SeriesRegistry
from app.application.use_cases.refresh import RefreshController
from app.core.config import Settings, get_settings
from app.domain.value_objects.time_range import TimeRange
from app.infrastructure.external.aggregation import HttpAggregationClient
from app.infrastructure.external.time_range import IntervalResolver
from app.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


def build_refresh_controller(
    settings: Settings,
    client: IAggregationClient,
    sink: IRenderSink,
) -> RefreshController:
    """Compose the refresh controller from settings (composition root)."""
    return RefreshController(
        client=client,
        resolver=IntervalResolver(),
        adapter=ChartModelAdapter(SeriesRegistry(settings.default_hidden_types), sink),
        time_range=TimeRange.parse(settings.default_time_range),
        diagnostics=DiagnosticLog(max_entries=settings.diagnostics_max_entries),
        discovery_field=settings.discovery_field,
        discovery_size=settings.discovery_size,
        query_string=settings.histogram_query_string,
    )


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, shared HTTP client, WebSocket manager, refresh
    controller, initial refresh. Shutdown order:
    controller (cancel in-flight calls), pending broadcasts, HTTP client,
    telemetry (set up in create_app when enabled).
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    # Shared HTTP client for aggregation API calls (connection reuse).
    app.state.aggregation_http_client = httpx.AsyncClient(
        timeout=settings.aggregation_api_timeout_seconds
    )
    client = HttpAggregationClient(
        settings.aggregation_api_url,
        http_client=app.state.aggregation_http_client,
        timeout=settings.aggregation_api_timeout_seconds,
    )

    app.state.ws_manager = ConnectionManager()
    app.state.render_sink = WebSocketRenderSink(app.state.ws_manager)
    app.state.controller = build_refresh_controller(
        settings, client, app.state.render_sink
    )

    if settings.refresh_on_startup:
        app.state.controller.request_refresh()
        logger.info("Initial overview refresh started")

    yield

    # ---- Shutdown ----
    await app.state.controller.aclose()
    await app.state.render_sink.drain()
    logger.info("Refresh controller stopped")

    if getattr(app.state, "aggregation_http_client", None) is not None:
        await app.state.aggregation_http_client.aclose()
        app.state.aggregation_http_client = None
        logger.info("Aggregation HTTP client closed")

    from app.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
