"""WebSocket connection manager and chart render sink.

Used by the WebSocket endpoint and the refresh controller to push chart
updates to open panels.
"""

from app.api.websocket.manager import ConnectionManager
from app.api.websocket.render_sink import WebSocketRenderSink, chart_message

__all__ = ["ConnectionManager", "WebSocketRenderSink", "chart_message"]
