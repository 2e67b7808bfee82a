from __future__ import annotations

import sys
from pathlib import Path

from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

import posm.api.routes.health as health_route
from posm.api.main import app


def test_live_health_endpoint() -> None:
    client = TestClient(app)
    response = client.get("/health/live")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers["x-request-id"]


def test_ready_health_endpoint_healthy_with_mocks(monkeypatch) -> None:
    monkeypatch.setattr(health_route, "ping_database", lambda: True)

    client = TestClient(app)
    response = client.get("/health/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_ready_health_endpoint_reports_database_down(monkeypatch) -> None:
    monkeypatch.setattr(health_route, "ping_database", lambda: False)

    client = TestClient(app)
    response = client.get("/health/ready")

    assert response.status_code == 503
    assert response.json() == {"status": "unavailable", "checks": {"database": False}}


def test_request_id_header_is_echoed_when_valid() -> None:
    client = TestClient(app)

    echoed = client.get("/health/live", headers={"X-Request-Id": "req-123"})
    replaced = client.get("/health/live", headers={"X-Request-Id": "bad id with spaces"})

    assert echoed.headers["x-request-id"] == "req-123"
    assert replaced.headers["x-request-id"] != "bad id with spaces"


def test_metrics_endpoint_exposes_prometheus_text() -> None:
    client = TestClient(app)
    client.get("/health/live")

    response = client.get("/metrics")

    assert response.status_code == 200
    assert "http_requests_total" in response.text
