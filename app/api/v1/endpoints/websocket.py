"""WebSocket endpoint: live chart updates and legend clicks for open panels.

Uses the ConnectionManager and RefreshController from app.state (set in
lifespan). On connect the panel receives the current chart; afterwards every
render is broadcast as a 'chart' message.

Client messages (JSON):
    {"type": "legend", "series_index": 0, "label": "dns", "visible": true}
    {"type": "refresh"}
"""

import json
from typing import Annotated, Any

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from app.api.v1.dependencies import get_ws_manager
from app.api.websocket.manager import ConnectionManager
from app.api.websocket.render_sink import chart_message
from app.domain.exceptions import OverviewException
from app.schemas.overview import LegendClickRequest, WebSocketStatusResponse
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _error(error_code: str, message: str) -> dict[str, Any]:
    return {"type": "error", "error": error_code, "message": message}


def _handle_message(controller, message: Any) -> dict[str, Any]:
    """Apply one client message and return the reply."""
    if not isinstance(message, dict):
        return _error("VALIDATION_ERROR", "Message must be a JSON object")
    kind = message.get("type")
    if kind == "legend":
        try:
            body = LegendClickRequest.model_validate(message)
        except ValidationError as e:
            return _error("VALIDATION_ERROR", f"Invalid legend message ({e.error_count()} errors)")
        try:
            visible = controller.on_legend_click(body.series_index, body.label, body.visible)
        except OverviewException as e:
            return _error(e.error_code, e.message)
        return {"type": "legend", "label": body.label, "visible": visible}
    if kind == "refresh":
        cycle = controller.request_refresh()
        return {
            "type": "refresh",
            "started": cycle is not None,
            "generation": controller.generation,
        }
    return _error("VALIDATION_ERROR", f"Unknown message type: {kind!r}")


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """Register the panel, send the current chart, then serve legend/refresh messages."""
    manager: ConnectionManager = websocket.app.state.ws_manager
    controller = websocket.app.state.controller
    await manager.connect(websocket)
    try:
        await manager.send(websocket, chart_message(controller.adapter.snapshot()))
        while True:
            text = await websocket.receive_text()
            try:
                message = json.loads(text)
            except json.JSONDecodeError:
                await websocket.send_json(_error("VALIDATION_ERROR", "Message must be JSON"))
                continue
            await websocket.send_json(_handle_message(controller, message))
    except WebSocketDisconnect:
        logger.debug("Overview panel disconnected")
    finally:
        await manager.disconnect(websocket)


@router.get("/ws/status", response_model=WebSocketStatusResponse)
async def websocket_status(
    manager: Annotated[ConnectionManager, Depends(get_ws_manager)],
) -> WebSocketStatusResponse:
    """Return the number of connected panels."""
    return WebSocketStatusResponse(total_connections=await manager.get_connection_count())
