"""OpenTelemetry setup for the overview service.

Built from Settings at startup when TELEMETRY_ENABLED is true. Refresh
cycles, aggregation calls (httpx) and HTTP requests (FastAPI) become spans;
log records get trace_id/span_id.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

# Health probes would otherwise produce one trace every few seconds.
_EXCLUDED_URLS = "/api/v1/health"


def _build_exporter(exporter_type: str, otlp_endpoint: str | None) -> SpanExporter | None:
    """Exporter for exporter_type; None for 'none'. Unknown types fall back to console."""
    if exporter_type == "none":
        return None
    if exporter_type == "otlp":
        if not otlp_endpoint:
            logger.warning("OTLP exporter selected without an endpoint, using console")
            return ConsoleSpanExporter()
        return OTLPSpanExporter(
            endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
        )
    if exporter_type != "console":
        logger.warning("Unknown exporter type '%s', using console", exporter_type)
    return ConsoleSpanExporter()


class TelemetryConfig:
    """Tracer provider plus the instrumentations the service turns on."""

    def __init__(
        self,
        service_name: str,
        service_version: str,
        environment: str = "development",
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.environment = environment
        self.exporter_type = exporter_type
        self.otlp_endpoint = otlp_endpoint
        self.sample_rate = sample_rate
        self.tracer_provider: TracerProvider | None = None
        self._instrumented_httpx = False
        self._instrumented_logging = False

    @classmethod
    def from_settings(cls, settings: "Settings") -> "TelemetryConfig":
        return cls(
            service_name=settings.app_name,
            service_version=settings.app_version,
            environment=settings.telemetry_environment,
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )

    def setup(self) -> TracerProvider:
        """Create the tracer provider and install it globally."""
        resource = Resource(
            attributes={
                SERVICE_NAME: self.service_name,
                SERVICE_VERSION: self.service_version,
                "deployment.environment": self.environment,
            }
        )
        provider = TracerProvider(
            resource=resource,
            sampler=ParentBased(TraceIdRatioBased(self.sample_rate)),
        )
        exporter = _build_exporter(self.exporter_type, self.otlp_endpoint)
        if exporter is not None:
            provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)
        self.tracer_provider = provider
        logger.info(
            "OpenTelemetry initialized: service=%s, version=%s, exporter=%s, sample_rate=%s",
            self.service_name,
            self.service_version,
            self.exporter_type,
            self.sample_rate,
        )
        return provider

    def instrument(self, app: FastAPI) -> None:
        """Instrument FastAPI requests, outgoing httpx calls and log records."""
        if self.tracer_provider is None:
            return
        FastAPIInstrumentor.instrument_app(
            app,
            tracer_provider=self.tracer_provider,
            excluded_urls=_EXCLUDED_URLS,
        )
        if not self._instrumented_httpx:
            HTTPXClientInstrumentor().instrument(tracer_provider=self.tracer_provider)
            self._instrumented_httpx = True
        if not self._instrumented_logging:
            LoggingInstrumentor().instrument(
                tracer_provider=self.tracer_provider,
                set_logging_format=True,
            )
            self._instrumented_logging = True
        logger.info("FastAPI, httpx and logging instrumentation enabled")

    def shutdown(self) -> None:
        """Remove instrumentation and flush spans still in the batch processor."""
        if self._instrumented_httpx:
            HTTPXClientInstrumentor().uninstrument()
            self._instrumented_httpx = False
        if self._instrumented_logging:
            LoggingInstrumentor().uninstrument()
            self._instrumented_logging = False
        if self.tracer_provider is not None:
            self.tracer_provider.shutdown()
            self.tracer_provider = None
            logger.info("Telemetry shutdown complete")


_telemetry: TelemetryConfig | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> TelemetryConfig | None:
    """Return the telemetry instance installed at startup, if any."""
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    """Install (or clear, with None) the process-wide telemetry instance."""
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry
