"""API v1: overview panel, health, and WebSocket routes."""

from app.api.v1.router import api_router

__all__ = ["api_router"]
