"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the objects built in lifespan and stored on
app.state. Routes depend only on these, never on infrastructure directly.
"""

from __future__ import annotations

from fastapi import HTTPException, Request

from app.api.websocket.manager import ConnectionManager
from app.application.use_cases.refresh import RefreshController


def get_refresh_controller(request: Request) -> RefreshController:
    """Refresh controller for the overview panel (set in lifespan)."""
    controller = getattr(request.app.state, "controller", None)
    if controller is None:
        raise HTTPException(status_code=503, detail="Overview panel not initialized")
    return controller


def get_ws_manager(request: Request) -> ConnectionManager:
    """WebSocket connection manager (set in lifespan)."""
    manager = getattr(request.app.state, "ws_manager", None)
    if manager is None:
        raise HTTPException(status_code=503, detail="WebSocket manager not initialized")
    return manager
