"""
Integration tests for the public license API.
"""

import pytest
from django.urls import reverse

from activations.infrastructure.models import ActivationLog
from core.infrastructure.tokens import b64url_encode


def _activate(client, license_key, machine_id, **extra):
    body = {"appName": "Widget", "licenseKey": license_key, "machineId": machine_id, "appVersion": "1.0.0"}
    body.update(extra)
    return client.post(reverse("license-activate"), body, format="json")


@pytest.mark.django_db
@pytest.mark.integration
class TestActivateEndpoint:
    """Tests for POST /api/v1/license/activate."""

    def test_activate_success(self, api_client, widget_license):
        response = _activate(api_client, widget_license.license_key, "machine-a")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["appName"] == "Widget"
        assert data["activationToken"].count(".") == 2
        assert data["tokenExpiresAt"]
        assert data["activationType"] == "pre_generated"
        assert data["maxActivations"] == 2
        assert data["usedActivations"] == 1
        assert data["remainingActivations"] == 1
        assert data["activation"]["machineId"] == "machine-a"
        assert data["activation"]["status"] == "active"
        assert data["license"]["id"] == str(widget_license.id)
        assert data["license"]["maxActivations"] == 2

    def test_activate_logs_client_context(self, api_client, widget_license):
        api_client.post(
            reverse("license-activate"),
            {
                "appName": "Widget",
                "licenseKey": widget_license.license_key,
                "machineId": "machine-a",
                "appVersion": "1.0.0",
            },
            format="json",
            HTTP_X_FORWARDED_FOR="203.0.113.7, 10.0.0.1",
            HTTP_USER_AGENT="widget-client/1.0",
        )

        entry = ActivationLog.objects.get()
        assert entry.ip_address == "203.0.113.7"
        assert entry.user_agent == "widget-client/1.0"

    def test_activate_limit_reached(self, api_client, issue_license):
        license = issue_license(max_activations=1)
        _activate(api_client, license.license_key, "machine-a")

        response = _activate(api_client, license.license_key, "machine-b")

        assert response.status_code == 409
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Activation limit reached"
        assert data["usedActivations"] == 1
        assert data["remainingActivations"] == 0

    def test_activate_unknown_key(self, api_client, widget_license):
        response = _activate(api_client, "ZZZZZ-ZZZZZ-ZZZZZ-ZZZZZ-ZZZZZ", "machine-a")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "License not found"}

    def test_activate_locked_to_other_machine(self, api_client, issue_license):
        license = issue_license(locked_machine_id="machine-a")

        response = _activate(api_client, license.license_key, "machine-b")

        assert response.status_code == 403
        assert response.json()["error"] == "License is locked to another machine"

    @pytest.mark.parametrize(
        "field,value",
        [
            ("licenseKey", "short"),
            ("machineId", "abc"),
            ("appVersion", ""),
            ("appName", "x"),
        ],
    )
    def test_activate_invalid_input(self, api_client, widget_license, field, value):
        response = _activate(api_client, widget_license.license_key, "machine-a", **{field: value})

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Invalid request"
        assert field in data["details"]


@pytest.mark.django_db
@pytest.mark.integration
class TestValidateEndpoint:
    """Tests for POST /api/v1/license/validate."""

    def test_validate_success(self, api_client, widget_license):
        token = _activate(api_client, widget_license.license_key, "machine-a").json()["activationToken"]

        response = api_client.post(
            reverse("license-validate"),
            {"appName": "Widget", "machineId": "machine-a", "activationToken": token},
            format="json",
        )

        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is True
        assert data["license"]["id"] == str(widget_license.id)
        assert data["activation"]["status"] == "active"
        assert data["usedActivations"] == 1

    def test_validate_rejection_is_200(self, api_client, widget_license):
        response = api_client.post(
            reverse("license-validate"),
            {"appName": "Widget", "machineId": "machine-a", "activationToken": "x" * 40},
            format="json",
        )

        assert response.status_code == 200
        assert response.json() == {"valid": False, "reason": "Invalid or expired activation token"}

    def test_validate_short_token(self, api_client):
        response = api_client.post(
            reverse("license-validate"),
            {"machineId": "machine-a", "activationToken": "short"},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["valid"] is False

    def test_validate_oversized_token(self, api_client):
        response = api_client.post(
            reverse("license-validate"),
            {"machineId": "machine-a", "activationToken": "x" * 5000},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["valid"] is False

    def test_validate_nested_header_is_rejected(self, api_client, widget_license):
        nested = b64url_encode(b"[" * 3000)
        response = api_client.post(
            reverse("license-validate"),
            {"appName": "Widget", "machineId": "machine-a", "activationToken": f"{nested}.e30.signature"},
            format="json",
        )

        assert response.status_code == 200
        assert response.json() == {"valid": False, "reason": "Invalid or expired activation token"}


@pytest.mark.django_db
@pytest.mark.integration
class TestDeactivateEndpoint:
    """Tests for POST /api/v1/license/deactivate."""

    def test_deactivate_then_validate(self, api_client, widget_license):
        token = _activate(api_client, widget_license.license_key, "machine-a").json()["activationToken"]
        body = {"appName": "Widget", "machineId": "machine-a", "activationToken": token}

        response = api_client.post(reverse("license-deactivate"), body, format="json")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "activationType": "pre_generated",
            "maxActivations": 2,
            "usedActivations": 0,
            "remainingActivations": 2,
        }

        validated = api_client.post(reverse("license-validate"), body, format="json").json()
        assert validated == {"valid": False, "reason": "Activation not active"}

    def test_deactivate_bad_token(self, api_client, widget_license):
        response = api_client.post(
            reverse("license-deactivate"),
            {"appName": "Widget", "machineId": "machine-a", "activationToken": "x" * 40},
            format="json",
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "reason": "Invalid or expired activation token"}
