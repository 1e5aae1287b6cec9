"""Tests for the Panels API (layout + stats endpoints)."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from champagne.config import DEFAULT_CORS_ORIGINS, AppSettings, get_settings
from champagne.schemas.panels import MAX_HOLE_COUNT
from main import app

STOCK_PANEL = {
    "length": 610,
    "width": 290,
    "border": 5,
    "show_border": False,
    "shuffle": False,
    "jitter": False,
    "max_radius": 20,
    "steps": [5, 5, 4, 6, 6],
}


def _settings(random_seed: int | None = None) -> AppSettings:
    return AppSettings(
        random_seed=random_seed,
        cors_origins=DEFAULT_CORS_ORIGINS,
        log_level="INFO",
        log_file=None,
    )


@pytest.fixture()
def client():
    app.dependency_overrides[get_settings] = lambda: _settings()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_layout_stock_panel(client: TestClient) -> None:
    response = client.post("/api/panels/layout", json=STOCK_PANEL)
    assert response.status_code == 200
    data = response.json()
    assert data["grid"] == {"columns": 7, "rows": 15}
    assert data["radii"] == [15, 10, 6, 0]
    assert data["pitch"] == 40
    assert data["warnings"] == []
    assert len(data["holes"]) == 105
    assert data["outer_rect"] == {"width": 290, "height": 610, "offset": [0, 0]}
    assert data["inner_rect"] is None

    first = data["holes"][0]
    assert first == {"column": 0, "row": 0, "x": 25, "y": 25, "radius": 15}
    assert [h["radius"] for h in data["holes"][:5]] == [15, 10, 6, 0, 15]

    stats = data["stats"]
    assert stats["total_hole_count"] == 105
    assert stats["total_open_percentage"] == 17
    assert [r["radius"] for r in stats["per_radius"]] == [15, 10, 6, 0]


def test_layout_show_border(client: TestClient) -> None:
    response = client.post("/api/panels/layout", json={**STOCK_PANEL, "show_border": True})
    assert response.status_code == 200
    assert response.json()["inner_rect"] == {"width": 280, "height": 600, "offset": [5, 5]}


def test_layout_defaults(client: TestClient) -> None:
    """Empty body uses the stock panel (shuffled)."""
    response = client.post("/api/panels/layout", json={})
    assert response.status_code == 200
    data = response.json()
    assert data["grid"] == {"columns": 7, "rows": 15}
    assert sorted(h["radius"] for h in data["holes"]) == sorted(
        h["radius"] for h in client.post("/api/panels/layout", json=STOCK_PANEL).json()["holes"]
    )


def test_layout_seed_reproducible(client: TestClient) -> None:
    body = {**STOCK_PANEL, "shuffle": True, "jitter": True, "seed": 11}
    a = client.post("/api/panels/layout", json=body).json()
    b = client.post("/api/panels/layout", json=body).json()
    assert a["holes"] == b["holes"]


def test_layout_settings_seed_reproducible(client: TestClient) -> None:
    """Without a request seed the configured CHAMPAGNE_RANDOM_SEED drives shuffle."""
    app.dependency_overrides[get_settings] = lambda: _settings(random_seed=99)
    body = {**STOCK_PANEL, "shuffle": True}
    a = client.post("/api/panels/layout", json=body).json()
    b = client.post("/api/panels/layout", json=body).json()
    assert a["holes"] == b["holes"]


def test_layout_degenerate_grid(client: TestClient) -> None:
    response = client.post(
        "/api/panels/layout",
        json={**STOCK_PANEL, "length": 30, "width": 100, "border": 0},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["holes"] == []
    assert data["grid"]["rows"] == 0
    assert data["warnings"] == ["degenerate_grid"]
    assert data["outer_rect"]["width"] == 100


def test_layout_invalid_schedule(client: TestClient) -> None:
    response = client.post("/api/panels/layout", json={**STOCK_PANEL, "steps": [25]})
    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["kind"] == "invalid_schedule"


@pytest.mark.parametrize(
    "overrides",
    [
        {"length": 0},
        {"width": -1},
        {"border": -1},
        {"max_radius": 0},
        {"steps": [5, -1]},
        {"unknown": 1},
        {"length": 2001},
        {"width": 1e7},
        {"border": 21},
        {"max_radius": 101},
        {"steps": [5, 21]},
        {"steps": [1] * 21},
    ],
)
def test_layout_rejects_invalid_params(client: TestClient, overrides: dict) -> None:
    response = client.post("/api/panels/layout", json={**STOCK_PANEL, **overrides})
    assert response.status_code == 422


def test_stats_endpoint_returns_notes(client: TestClient) -> None:
    response = client.post("/api/panels/stats", json=STOCK_PANEL)
    assert response.status_code == 200
    data = response.json()
    assert data["stats"]["total_open_percentage"] == 17
    assert data["notes"].startswith("**Pitch**: 40")
    assert "| | *15 x 7 =* **105** | | **17%** |" in data["notes"]


def test_stats_endpoint_invalid_schedule(client: TestClient) -> None:
    response = client.post("/api/panels/stats", json={**STOCK_PANEL, "steps": []})
    assert response.status_code == 422
    assert response.json()["detail"]["kind"] == "invalid_schedule"


def test_layout_rejects_oversized_grid(client: TestClient) -> None:
    """2000 x 2000 panel at 1 mm radius would be ~1M holes: rejected before layout."""
    response = client.post(
        "/api/panels/layout",
        json={**STOCK_PANEL, "length": 2000, "width": 2000, "border": 0, "max_radius": 1},
    )
    assert response.status_code == 422
    assert str(MAX_HOLE_COUNT) in response.text


def test_layout_accepts_largest_stock_grid(client: TestClient) -> None:
    """2000 x 2000 panel at 10 mm radius is exactly the hole limit."""
    response = client.post(
        "/api/panels/layout",
        json={**STOCK_PANEL, "length": 2000, "width": 2000, "border": 0, "max_radius": 10},
    )
    assert response.status_code == 200
    assert len(response.json()["holes"]) == MAX_HOLE_COUNT
