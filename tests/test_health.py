"""Tests for health check endpoints."""

from fastapi.testclient import TestClient


def test_health_check(client: TestClient) -> None:
    """Test health endpoint returns OK status."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "OK"
    assert data["service"] == "fashion-catalog-api"
    assert "version" in data
    assert "timestamp" in data
    assert data["uptime"] >= 0


def test_readiness_check(client: TestClient) -> None:
    """Test readiness endpoint reports the database as reachable."""
    response = client.get("/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["database"] == "ok"


def test_health_is_not_under_api_prefix(client: TestClient) -> None:
    """Health lives at the root, not under the API prefix."""
    response = client.get("/api/v1/health")
    assert response.status_code == 404
