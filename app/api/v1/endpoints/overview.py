"""Overview panel API: events-by-type chart, refresh, time range, legend."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.api.v1.dependencies import get_refresh_controller
from app.application.services.diagnostics import DiagnosticKind
from app.application.use_cases.refresh import RefreshController
from app.domain.exceptions import ValidationException
from app.domain.value_objects.time_range import TimeRange
from app.schemas.overview import (
    ChartResponse,
    DiagnosticItem,
    DiagnosticsResponse,
    LegendClickRequest,
    LegendClickResponse,
    RefreshResponse,
    SeriesResponse,
    TimeRangeRequest,
    VisibilityResponse,
)

router = APIRouter()

Controller = Annotated[RefreshController, Depends(get_refresh_controller)]


@router.get("/chart", response_model=ChartResponse)
async def get_chart(controller: Controller) -> ChartResponse:
    """Return the live chart: labels, datasets in merge order, and loading state."""
    snapshot = controller.adapter.snapshot()
    cycle = controller.current_cycle
    return ChartResponse(
        generation=snapshot.generation,
        time_range=str(controller.time_range),
        interval=cycle.interval if cycle is not None else None,
        loading=controller.loading,
        labels=list(snapshot.labels),
        datasets=[
            SeriesResponse(label=s.label, data=list(s.values), hidden=s.hidden)
            for s in snapshot.series
        ],
        options=snapshot.options.to_dict(),
    )


@router.post(
    "/refresh",
    response_model=RefreshResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def refresh(controller: Controller) -> RefreshResponse:
    """Start a refresh (manual refresh button). Ignored while one is in flight."""
    cycle = controller.request_refresh()
    return RefreshResponse(
        started=cycle is not None,
        generation=controller.generation,
        loading=controller.loading,
    )


@router.put(
    "/time-range",
    response_model=RefreshResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def set_time_range(body: TimeRangeRequest, controller: Controller) -> RefreshResponse:
    """Change the time range; always starts a new cycle and supersedes the one in flight."""
    try:
        time_range = TimeRange.parse(body.time_range)
    except ValueError as e:
        raise ValidationException(str(e), field="time_range") from e
    controller.set_time_range(time_range)
    return RefreshResponse(
        started=True,
        generation=controller.generation,
        loading=controller.loading,
    )


@router.post("/legend", response_model=LegendClickResponse)
async def legend_click(body: LegendClickRequest, controller: Controller) -> LegendClickResponse:
    """Toggle one series from the legend; the choice is kept across refreshes."""
    visible = controller.on_legend_click(body.series_index, body.label, body.visible)
    return LegendClickResponse(label=body.label, visible=visible)


@router.get("/visibility", response_model=VisibilityResponse)
async def get_visibility(controller: Controller) -> VisibilityResponse:
    """Return every known event type and whether its series starts hidden."""
    return VisibilityResponse(hidden=controller.registry.snapshot())


@router.get("/diagnostics", response_model=DiagnosticsResponse)
async def get_diagnostics(
    controller: Controller,
    kind: Annotated[DiagnosticKind | None, Query()] = None,
) -> DiagnosticsResponse:
    """Return recent transport failures and dropped series, oldest first."""
    return DiagnosticsResponse(
        items=[
            DiagnosticItem(
                kind=d.kind.value,
                generation=d.generation,
                message=d.message,
                category=d.category,
                trace_id=d.trace_id,
                recorded_at=d.recorded_at,
            )
            for d in controller.diagnostics.entries(kind)
        ]
    )
