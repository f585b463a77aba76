"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies (no manual construction).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import health, overview, websocket as ws_endpoint

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(overview.router, prefix="/overview", tags=["overview"])
api_router.include_router(ws_endpoint.router, tags=["websocket"])
