"""WebSocket connection manager.

Holds the open overview panels and broadcasts chart updates to them.
Use via app.state.ws_manager (set in lifespan).
"""

from __future__ import annotations

import asyncio
from typing import Any

from fastapi import WebSocket


class ConnectionManager:
    """Manages WebSocket connections of open overview panels.

    - connect/disconnect track the set of live connections.
    - broadcast sends to every connection and drops the ones that fail.
    - connection_count is lock-protected for concurrent access.
    """

    def __init__(self) -> None:
        """Initialize with no connections."""
        self._connections: set[WebSocket] = set()
        self._lock = asyncio.Lock()

    async def connect(self, websocket: WebSocket) -> None:
        """Accept and register a new connection.

        Args:
            websocket: The WebSocket instance to accept and track.
        """
        await websocket.accept()
        async with self._lock:
            self._connections.add(websocket)

    async def disconnect(self, websocket: WebSocket) -> None:
        """Remove a connection (call on disconnect). Unknown sockets are ignored."""
        async with self._lock:
            self._connections.discard(websocket)

    async def send(self, websocket: WebSocket, message: str | dict[str, Any]) -> None:
        """Send a message to one connection (e.g. the initial chart on connect)."""
        await self._send_to_list([websocket], message)

    async def broadcast(self, message: str | dict[str, Any]) -> None:
        """Send a message to all connected panels.

        Args:
            message: String or JSON-serializable dict to send.
        """
        async with self._lock:
            snapshot = list(self._connections)
        await self._send_to_list(snapshot, message)

    async def _send_to_list(
        self,
        connections: list[WebSocket],
        message: str | dict[str, Any],
    ) -> None:
        """Send message to a list of connections; remove dead ones under lock."""
        dead: list[WebSocket] = []
        for ws in connections:
            try:
                if isinstance(message, dict):
                    await ws.send_json(message)
                else:
                    await ws.send_text(message)
            except Exception:
                dead.append(ws)
        if dead:
            async with self._lock:
                for ws in dead:
                    self._connections.discard(ws)

    async def get_connection_count(self) -> int:
        """Return the number of active connections (lock-safe)."""
        async with self._lock:
            return len(self._connections)
