"""WebSocket side: render sink broadcasts and client message handling."""

from unittest.mock import AsyncMock, MagicMock

from app.api.v1.endpoints.websocket import _handle_message
from app.api.websocket.manager import ConnectionManager
from app.api.websocket.render_sink import WebSocketRenderSink, chart_message
from app.application.dtos.overview import ChartOptions, ChartSnapshot, SeriesSnapshot
from app.domain.exceptions import SeriesNotFoundException


def _snapshot(generation: int = 1) -> ChartSnapshot:
    return ChartSnapshot(
        generation=generation,
        labels=(100, 200),
        series=(SeriesSnapshot(label="dns", values=(1, 2), hidden=False),),
        options=ChartOptions(),
    )


async def test_render_sink_broadcasts_chart_message() -> None:
    manager = MagicMock()
    manager.broadcast = AsyncMock()
    sink = WebSocketRenderSink(manager)

    sink.render(_snapshot(3))
    await sink.drain()

    assert sink.latest.generation == 3
    message = manager.broadcast.await_args.args[0]
    assert message["type"] == "chart"
    assert message["generation"] == 3
    assert message["labels"] == [100, 200]
    assert message["datasets"][0]["label"] == "dns"


def test_render_sink_outside_loop_keeps_latest() -> None:
    manager = MagicMock()
    sink = WebSocketRenderSink(manager)

    sink.render(_snapshot(2))

    assert sink.latest.generation == 2
    manager.broadcast.assert_not_called()


async def test_manager_drops_dead_connections() -> None:
    manager = ConnectionManager()
    alive = AsyncMock()
    dead = AsyncMock()
    dead.send_json.side_effect = RuntimeError("closed")
    await manager.connect(alive)
    await manager.connect(dead)

    await manager.broadcast(chart_message(_snapshot()))

    alive.send_json.assert_awaited_once()
    assert await manager.get_connection_count() == 1


def test_handle_legend_message() -> None:
    controller = MagicMock()
    controller.on_legend_click.return_value = False

    reply = _handle_message(
        controller, {"type": "legend", "series_index": 0, "label": "dns", "visible": True}
    )

    assert reply == {"type": "legend", "label": "dns", "visible": False}
    controller.on_legend_click.assert_called_once_with(0, "dns", True)


def test_handle_legend_unknown_series() -> None:
    controller = MagicMock()
    controller.on_legend_click.side_effect = SeriesNotFoundException(5, "dns")

    reply = _handle_message(
        controller, {"type": "legend", "series_index": 5, "label": "dns", "visible": True}
    )

    assert reply["type"] == "error"
    assert reply["error"] == "SERIES_NOT_FOUND"


def test_handle_invalid_messages() -> None:
    controller = MagicMock()

    assert _handle_message(controller, ["legend"])["error"] == "VALIDATION_ERROR"
    assert _handle_message(controller, {"type": "legend", "label": ""})["error"] == "VALIDATION_ERROR"
    assert _handle_message(controller, {"type": "zoom"})["error"] == "VALIDATION_ERROR"
    controller.on_legend_click.assert_not_called()


def test_handle_refresh_message() -> None:
    controller = MagicMock()
    controller.request_refresh.return_value = None
    controller.generation = 4

    reply = _handle_message(controller, {"type": "refresh"})

    assert reply == {"type": "refresh", "started": False, "generation": 4}
