"""Overview API: refresh, chart, time range, legend, diagnostics."""

from httpx import AsyncClient

from app.domain.exceptions import AggregationRequestException
from app.main import app


async def _settle() -> None:
    await app.state.controller.current_cycle.wait()


async def test_chart_is_empty_before_first_refresh(client: AsyncClient) -> None:
    response = await client.get("/api/v1/overview/chart")

    assert response.status_code == 200
    data = response.json()
    assert data["generation"] == 0
    assert data["labels"] == []
    assert data["datasets"] == []
    assert data["loading"] == 0
    assert data["time_range"] == "24h"


async def test_refresh_then_chart(client: AsyncClient) -> None:
    response = await client.post("/api/v1/overview/refresh")

    assert response.status_code == 202
    assert response.json()["started"] is True
    assert response.json()["generation"] == 1
    await _settle()

    data = (await client.get("/api/v1/overview/chart")).json()
    assert data["generation"] == 1
    assert data["interval"] == "15m"
    assert data["loading"] == 0
    assert data["labels"] == [100, 200]
    datasets = {d["label"]: d for d in data["datasets"]}
    assert set(datasets) == {"dns", "alert", "stats"}
    assert datasets["stats"]["hidden"] is True
    assert datasets["alert"]["data"] == [5, 7]
    assert data["options"]["title"] == "Events by Type Over Time"


async def test_second_refresh_while_loading_is_ignored(
    client: AsyncClient, api_fake_client
) -> None:
    api_fake_client.gate_histograms = True

    first = (await client.post("/api/v1/overview/refresh")).json()
    second = (await client.post("/api/v1/overview/refresh")).json()

    assert first["started"] is True
    assert second["started"] is False
    assert second["generation"] == first["generation"]
    assert len(api_fake_client.group_by_calls) == 1


async def test_time_range_change(client: AsyncClient, api_fake_client) -> None:
    response = await client.put("/api/v1/overview/time-range", json={"time_range": "7d"})

    assert response.status_code == 202
    assert response.json()["started"] is True
    await _settle()
    data = (await client.get("/api/v1/overview/chart")).json()
    assert data["time_range"] == "7d"
    assert data["interval"] == "3h"
    assert str(api_fake_client.histogram_calls[0].time_range) == "7d"


async def test_invalid_time_range_is_rejected(client: AsyncClient) -> None:
    response = await client.put("/api/v1/overview/time-range", json={"time_range": "soon"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert body["details"] == {"field": "time_range"}


async def test_legend_toggle_persists_across_refresh(client: AsyncClient) -> None:
    await client.post("/api/v1/overview/refresh")
    await _settle()
    labels = [d["label"] for d in (await client.get("/api/v1/overview/chart")).json()["datasets"]]
    index = labels.index("dns")

    response = await client.post(
        "/api/v1/overview/legend",
        json={"series_index": index, "label": "dns", "visible": True},
    )
    assert response.status_code == 200
    assert response.json() == {"label": "dns", "visible": False}

    await client.post("/api/v1/overview/refresh")
    await _settle()
    datasets = (await client.get("/api/v1/overview/chart")).json()["datasets"]
    assert {d["label"]: d["hidden"] for d in datasets}["dns"] is True

    visibility = (await client.get("/api/v1/overview/visibility")).json()["hidden"]
    assert visibility["dns"] is True
    assert visibility["stats"] is True


async def test_legend_unknown_series_returns_404(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/overview/legend",
        json={"series_index": 0, "label": "dns", "visible": True},
    )

    assert response.status_code == 404
    assert response.json()["error"] == "SERIES_NOT_FOUND"


async def test_legend_request_validation(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/overview/legend", json={"series_index": -1, "label": "dns", "visible": True}
    )

    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_diagnostics_list_failures(client: AsyncClient, api_fake_client) -> None:
    api_fake_client.histograms["alert"] = AggregationRequestException(
        "histogram_time", "HTTP 500", status_code=500
    )
    api_fake_client.histograms["stats"] = [(100, 1), (200, 1), (300, 1)]

    await client.post("/api/v1/overview/refresh")
    await _settle()

    items = (await client.get("/api/v1/overview/diagnostics")).json()["items"]
    assert sorted((i["kind"], i["category"]) for i in items) == [
        ("length_mismatch", "stats"),
        ("transport_failure", "alert"),
    ]
    failures = (
        await client.get("/api/v1/overview/diagnostics", params={"kind": "transport_failure"})
    ).json()["items"]
    assert [i["category"] for i in failures] == ["alert"]


async def test_websocket_status(client: AsyncClient) -> None:
    response = await client.get("/api/v1/ws/status")

    assert response.status_code == 200
    assert response.json() == {"total_connections": 0}
