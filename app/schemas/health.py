"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")
    generation: int = Field(default=0, description="Current refresh generation")
    loading: int = Field(default=0, description="Calls in flight for the current cycle")
