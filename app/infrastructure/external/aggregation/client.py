"""HTTP client for the backend aggregation API (group-by and time histogram).

All HTTP calls use httpx.AsyncClient so they do not block the event loop.
Transport errors, non-2xx responses and malformed payloads are all raised
as AggregationRequestException.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from app.application.dtos.overview import (
    CategoryCount,
    GroupByRequest,
    HistogramPoint,
    HistogramRequest,
)
from app.domain.exceptions import AggregationRequestException
from app.domain.value_objects.time_range import TimeRange
from app.schemas.aggregation import GroupByResponse, HistogramResponse
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import traced

logger = get_logger(__name__)

_GROUP_BY_PATH = "/api/agg"
_HISTOGRAM_TIME_PATH = "/api/report/histogram/time"


def _time_range_params(time_range: TimeRange) -> dict[str, str]:
    """All-time ranges send no time_range parameter."""
    if time_range.is_all:
        return {}
    return {"time_range": str(time_range)}


class HttpAggregationClient:
    """Aggregation API client over HTTP."""

    def __init__(
        self,
        base_url: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._shared_http = http_client
        self._timeout = timeout

    @asynccontextmanager
    async def _http_cm(self) -> AsyncIterator[httpx.AsyncClient]:
        """Yield shared HTTP client or a short-lived one (connection reuse when shared)."""
        if self._shared_http is not None:
            yield self._shared_http
            return
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            yield client

    async def _get(
        self,
        operation: str,
        path: str,
        params: dict[str, Any],
        schema: type[BaseModel],
    ) -> Any:
        """GET path and validate the JSON body against schema."""
        url = f"{self._base_url}{path}"
        try:
            async with self._http_cm() as client:
                resp = await client.get(url, params=params, timeout=self._timeout)
        except httpx.HTTPError as e:
            raise AggregationRequestException(operation, f"{type(e).__name__}: {e}") from e
        if resp.status_code != 200:
            raise AggregationRequestException(
                operation,
                f"HTTP {resp.status_code}",
                status_code=resp.status_code,
            )
        try:
            return schema.model_validate_json(resp.content)
        except ValidationError as e:
            raise AggregationRequestException(
                operation, f"invalid response payload ({e.error_count()} errors)"
            ) from e

    @traced("aggregation.group_by")
    async def group_by(self, request: GroupByRequest) -> list[CategoryCount]:
        """Return the top request.size values of request.field by count."""
        params: dict[str, Any] = {"field": request.field, "size": request.size}
        params.update(_time_range_params(request.time_range))
        body: GroupByResponse = await self._get(
            "group_by", _GROUP_BY_PATH, params, GroupByResponse
        )
        logger.debug(
            "group_by %s returned %d rows", request.field, len(body.rows)
        )
        return [CategoryCount(key=row.key, count=row.count) for row in body.rows]

    @traced("aggregation.histogram_time")
    async def histogram_time(self, request: HistogramRequest) -> list[HistogramPoint]:
        """Return time-bucketed counts for request.event_type."""
        params: dict[str, Any] = {
            "interval": request.interval,
            "event_type": request.event_type,
            "query_string": request.query_string,
        }
        params.update(_time_range_params(request.time_range))
        body: HistogramResponse = await self._get(
            "histogram_time", _HISTOGRAM_TIME_PATH, params, HistogramResponse
        )
        return [HistogramPoint(time=b.time, count=b.count) for b in body.data]
