"""Teste de integração do app FastAPI (lifespan + rotas)."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from config.settings import get_base_settings, get_control_plane_settings


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("CONTROL_PLANE_ENABLED", "false")
    get_base_settings.cache_clear()
    get_control_plane_settings.cache_clear()

    from app.app import create_app

    with TestClient(create_app()) as test_client:
        yield test_client

    get_base_settings.cache_clear()
    get_control_plane_settings.cache_clear()


def test_lifespan_wires_state_and_routes(client: TestClient) -> None:
    assert client.get("/health").json()["status"] == "healthy"
    assert client.get("/ready").status_code == 200
    assert client.get("/applications").json() == {"list": []}


def test_push_then_list(client: TestClient) -> None:
    response = client.put("/subscriptions", json={"list": [{"subscriptionId": 1}]})
    assert response.json() == {"count": 1}
    assert client.get("/subscriptions").json()["list"][0]["subscriptionId"] == 1


def test_malformed_event_is_rejected(client: TestClient) -> None:
    response = client.post("/apis", content=b"{}")
    assert response.status_code == 400
