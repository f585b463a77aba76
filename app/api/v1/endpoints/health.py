"""Health check endpoint; used for liveness probes."""

from fastapi import APIRouter, Request

from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """Return ok status plus the overview panel's refresh state when it is running."""
    controller = getattr(request.app.state, "controller", None)
    if controller is None:
        return HealthResponse()
    return HealthResponse(generation=controller.generation, loading=controller.loading)
