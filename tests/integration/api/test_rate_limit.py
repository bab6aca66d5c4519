"""
Integration tests for the public API rate limiter.
"""

import pytest
from django.test import RequestFactory

from core.middleware.rate_limit import client_ip


@pytest.fixture
def tight_limit(settings):
    settings.PUBLIC_LICENSE_RATE_LIMIT = 2
    return settings


def _validate(client, **headers):
    return client.post(
        "/api/v1/license/validate",
        {"machineId": "machine-a", "activationToken": "x" * 40},
        format="json",
        **headers,
    )


@pytest.mark.django_db
@pytest.mark.integration
class TestRateLimit:
    """Tests for RateLimitMiddleware."""

    def test_headers_on_allowed_request(self, api_client, tight_limit):
        response = _validate(api_client)

        assert response.status_code == 200
        assert response["X-RateLimit-Limit"] == "2"
        assert response["X-RateLimit-Remaining"] == "1"
        assert int(response["X-RateLimit-Reset"]) > 0

    def test_limit_exceeded(self, api_client, tight_limit):
        _validate(api_client)
        _validate(api_client)

        response = _validate(api_client)

        assert response.status_code == 429
        assert response.json() == {
            "success": False,
            "error": "Too many requests. Please try again later.",
        }
        assert int(response["Retry-After"]) >= 1
        assert response["X-RateLimit-Remaining"] == "0"

    def test_limit_is_per_client_ip(self, api_client, tight_limit):
        _validate(api_client, HTTP_X_FORWARDED_FOR="198.51.100.1")
        _validate(api_client, HTTP_X_FORWARDED_FOR="198.51.100.1")

        assert _validate(api_client, HTTP_X_FORWARDED_FOR="198.51.100.1").status_code == 429
        assert _validate(api_client, HTTP_X_FORWARDED_FOR="198.51.100.2").status_code == 200

    def test_dashboard_is_not_rate_limited(self, admin_client, tight_limit):
        for _ in range(4):
            response = admin_client.get("/api/apps")
            assert response.status_code == 200
        assert "X-RateLimit-Limit" not in response


class TestClientIp:
    """Tests for client IP extraction."""

    def test_forwarded_for_first_entry(self):
        request = RequestFactory().get("/", HTTP_X_FORWARDED_FOR=" 203.0.113.5 , 10.0.0.1")
        assert client_ip(request) == "203.0.113.5"

    def test_real_ip(self):
        request = RequestFactory().get("/", HTTP_X_REAL_IP="203.0.113.6")
        assert client_ip(request) == "203.0.113.6"

    def test_remote_addr(self):
        request = RequestFactory().get("/", REMOTE_ADDR="203.0.113.7")
        assert client_ip(request) == "203.0.113.7"

    def test_unknown(self):
        request = RequestFactory().get("/")
        request.META.pop("REMOTE_ADDR", None)
        assert client_ip(request) == "unknown"
