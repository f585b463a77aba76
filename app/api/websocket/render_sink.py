"""Render sink that pushes chart snapshots to connected panels over WebSocket."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from app.application.dtos.overview import ChartSnapshot

if TYPE_CHECKING:
    from app.api.websocket.manager import ConnectionManager

logger = logging.getLogger(__name__)


class WebSocketRenderSink:
    """Keeps the latest snapshot and broadcasts each one as a 'chart' message.

    render() is synchronous (called from inside a merge); the broadcast is
    scheduled on the running loop. Outside a loop only the latest snapshot
    is stored.
    """

    def __init__(self, manager: "ConnectionManager") -> None:
        self._manager = manager
        self._latest: ChartSnapshot | None = None
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def latest(self) -> ChartSnapshot | None:
        return self._latest

    def render(self, snapshot: ChartSnapshot) -> None:
        self._latest = snapshot
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        task = loop.create_task(self._manager.broadcast(chart_message(snapshot)))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """Wait for scheduled broadcasts (shutdown and tests)."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


def chart_message(snapshot: ChartSnapshot) -> dict:
    """WebSocket payload for one snapshot."""
    return {"type": "chart", **snapshot.to_dict()}
