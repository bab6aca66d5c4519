"""
Integration tests for health, readiness, metrics and schema endpoints.
"""

import pytest

from core.middleware.metrics import normalize_endpoint


@pytest.mark.django_db
@pytest.mark.integration
class TestOperationalEndpoints:
    """Tests for operational endpoints."""

    def test_health(self, client):
        response = client.get("/health/")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "activation-service"}

    def test_health_db(self, client):
        assert client.get("/health/db/").json()["database"] == "connected"

    def test_health_cache(self, client):
        assert client.get("/health/cache/").json()["cache"] == "connected"

    def test_ready(self, client):
        response = client.get("/ready/")

        assert response.status_code == 200
        assert response.json() == {"status": "ready", "checks": {"database": True, "cache": True}}

    def test_metrics_exposition(self, client):
        client.get("/health/")

        response = client.get("/metrics")

        assert response.status_code == 200
        assert b"http_requests_total" in response.content

    def test_correlation_id_is_echoed(self, client):
        response = client.get("/health/", HTTP_X_CORRELATION_ID="req-123")

        assert response["X-Correlation-ID"] == "req-123"

    def test_openapi_schema(self, client):
        response = client.get("/api/schema/", HTTP_ACCEPT="application/json")

        assert response.status_code == 200


class TestNormalizeEndpoint:
    """Tests for metric label normalisation."""

    def test_uuid_and_numbers_collapse(self):
        path = "/api/licenses/3f2b8c1e-1a2b-4c3d-8e9f-0a1b2c3d4e5f/revoke"
        assert normalize_endpoint(path) == "/api/licenses/{id}/revoke"
        assert normalize_endpoint("/api/items/42?x=1") == "/api/items/{id}"
