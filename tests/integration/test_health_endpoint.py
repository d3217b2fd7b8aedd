"""Integration tests for GET /health."""

from __future__ import annotations

from fastapi.testclient import TestClient


class TestHealth:
    def test_health_returns_200(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200

    def test_health_schema(self, client: TestClient) -> None:
        body = client.get("/health").json()
        assert body["status"] == "ok"
        assert body["version"] == "1.0.0"
        assert body["auth_enabled"] is False
        assert "uptime_seconds" in body

    def test_health_no_auth_required(self, authed_client: TestClient) -> None:
        response = authed_client.get("/health")
        assert response.status_code == 200
        assert response.json()["auth_enabled"] is True

    def test_versioned_health_alias(self, client: TestClient) -> None:
        response = client.get("/v1/health")
        assert response.status_code == 200
