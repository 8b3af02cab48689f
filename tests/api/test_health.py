from __future__ import annotations

import inspect

from fastapi.testclient import TestClient

from badge_registry.api.health import health
from tests.conftest import ISSUER, auth


def test_health_returns_ok(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["checks"]["registry"] == "ok"
    assert data["badge_count"] == 0


def test_health_reports_badge_count(client: TestClient) -> None:
    client.post(
        "/v1/badges",
        json={"name": "n", "description": "d", "recipient": "A"},
        headers=auth(ISSUER),
    )
    assert client.get("/health").json()["badge_count"] == 1


def test_ready_returns_200(client: TestClient) -> None:
    resp = client.get("/ready")
    assert resp.status_code == 200


def test_health_runs_off_the_event_loop() -> None:
    # The registry lock blocks; FastAPI runs plain-def handlers in the threadpool.
    assert not inspect.iscoroutinefunction(health)
