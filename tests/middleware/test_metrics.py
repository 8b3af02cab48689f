"""Tests for Prometheus metrics.

prometheus-client uses a global registry and counters cannot be reset,
so every assertion is on the DELTA around the action under test.
"""

from __future__ import annotations

from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from tests.conftest import ISSUER, auth


def _get_sample(name: str, labels: dict | None = None) -> float:
    value = REGISTRY.get_sample_value(name, labels=labels or {})
    return value if value is not None else 0.0


def test_request_counter_increments(client: TestClient) -> None:
    labels = {"method": "GET", "endpoint": "/health", "status_code": "200"}
    before = _get_sample("http_requests_total", labels)
    client.get("/health")
    after = _get_sample("http_requests_total", labels)
    assert after - before >= 1


def test_request_duration_histogram_observes(client: TestClient) -> None:
    labels = {"method": "GET", "endpoint": "/health"}
    before = _get_sample("http_request_duration_seconds_count", labels)
    client.get("/health")
    after = _get_sample("http_request_duration_seconds_count", labels)
    assert after - before >= 1


def test_metrics_endpoint_not_self_instrumented(client: TestClient) -> None:
    labels = {"method": "GET", "endpoint": "/metrics", "status_code": "200"}
    before = _get_sample("http_requests_total", labels)
    client.get("/metrics")
    client.get("/metrics")
    assert _get_sample("http_requests_total", labels) == before


def test_registry_counters_track_outcomes(client: TestClient) -> None:
    issued = _get_sample("badges_issued_total")
    transferred = _get_sample("badges_transferred_total")
    denied_issue = _get_sample(
        "badge_operations_rejected_total",
        {"operation": "issue", "reason": "unauthorized"},
    )
    missing = _get_sample(
        "badge_operations_rejected_total",
        {"operation": "transfer", "reason": "not_found"},
    )

    body = {"name": "n", "description": "d", "recipient": "A"}
    client.post("/v1/badges", json=body, headers=auth(ISSUER))
    client.post("/v1/badges", json=body, headers=auth("C"))
    client.post("/v1/badges/1/transfer", json={"new_owner": "B"}, headers=auth("A"))
    client.post("/v1/badges/9/transfer", json={"new_owner": "B"}, headers=auth("A"))

    assert _get_sample("badges_issued_total") - issued == 1
    assert _get_sample("badges_transferred_total") - transferred == 1
    assert (
        _get_sample(
            "badge_operations_rejected_total",
            {"operation": "issue", "reason": "unauthorized"},
        )
        - denied_issue
        == 1
    )
    assert (
        _get_sample(
            "badge_operations_rejected_total",
            {"operation": "transfer", "reason": "not_found"},
        )
        - missing
        == 1
    )
    assert _get_sample("badge_count") == 1


def test_metrics_endpoint_returns_prometheus_format(client: TestClient) -> None:
    client.get("/health")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "http_requests_total" in resp.text
    assert "badges_issued_total" in resp.text
