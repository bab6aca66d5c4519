"""
Integration tests for the administrator dashboard API.
"""

import uuid

import pytest
from django.contrib.sessions.models import Session

from activations.infrastructure.models import Activation, ActivationLog
from catalog.infrastructure.models import App
from core.infrastructure.tokens import SessionTokenCodec, get_session_token_codec
from licenses.infrastructure.models import License


@pytest.mark.django_db
@pytest.mark.integration
class TestDashboardAuthentication:
    """Tests for the bearer session token check."""

    def test_missing_token(self, api_client):
        response = api_client.get("/api/licenses")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    def test_garbage_token(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Bearer not.a.token")

        assert api_client.get("/api/apps").status_code == 401

    def test_token_signed_with_other_secret(self, api_client, admin_user):
        token = SessionTokenCodec("another-secret-0123456789abcdefghijklmnop").issue(
            str(admin_user.pk), admin_user.email, "whatever"
        )
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

        assert api_client.get("/api/activations").status_code == 401

    def test_token_for_deleted_session(self, api_client, admin_token):
        Session.objects.all().delete()
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {admin_token}")

        response = api_client.get("/api/licenses")

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Session expired"

    def test_token_for_unknown_session(self, api_client, admin_user):
        token = get_session_token_codec().issue(str(admin_user.pk), admin_user.email, "no-such-session")
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

        assert api_client.get("/api/licenses").status_code == 401

    def test_valid_token(self, admin_client):
        assert admin_client.get("/api/licenses").status_code == 200

    def test_public_api_needs_no_token(self, api_client):
        response = api_client.post("/api/v1/license/validate", {}, format="json")

        assert response.status_code == 400


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseEndpoints:
    """Tests for /api/licenses."""

    def test_issue_creates_app_and_license(self, admin_client):
        response = admin_client.post(
            "/api/licenses",
            {"appName": "Widget", "maxActivations": 3, "metadata": {"customer": "acme"}},
            format="json",
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        license = data["license"]
        assert license["appName"] == "Widget"
        assert license["maxActivations"] == 3
        assert license["activeActivations"] == 0
        assert license["remainingActivations"] == 3
        assert license["activationType"] == "pre_generated"
        assert len(license["licenseKey"].split("-")) == 5
        assert App.objects.filter(name="Widget").exists()

    def test_issue_locked_license(self, admin_client):
        response = admin_client.post(
            "/api/licenses",
            {"appName": "Widget", "lockedMachineId": "machine-a"},
            format="json",
        )

        license = response.json()["license"]
        assert license["activationType"] == "machine_id_bound"
        assert license["metadata"] == {"lockedMachineId": "machine-a"}
        assert license["maxActivations"] == 1

    def test_issue_reuses_app_by_loose_name(self, admin_client):
        admin_client.post("/api/apps", {"name": "Widget Pro"}, format="json")

        response = admin_client.post("/api/licenses", {"appName": "widget-pro"}, format="json")

        assert response.json()["license"]["appName"] == "Widget Pro"
        assert App.objects.count() == 1

    def test_issue_rejects_seat_count_out_of_range(self, admin_client):
        response = admin_client.post(
            "/api/licenses", {"appName": "Widget", "maxActivations": 0}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_list_with_filter(self, admin_client, issue_license):
        issue_license(app_name="Widget Pro")
        issue_license(app_name="Gadget")

        all_rows = admin_client.get("/api/licenses").json()["licenses"]
        filtered = admin_client.get("/api/licenses", {"appName": "widget"}).json()["licenses"]

        assert len(all_rows) == 2
        assert [row["appName"] for row in filtered] == ["Widget Pro"]

    def test_get_update_delete(self, admin_client, widget_license):
        url = f"/api/licenses/{widget_license.id}"

        assert admin_client.get(url).json()["license"]["licenseKey"] == widget_license.license_key

        updated = admin_client.patch(url, {"maxActivations": 5, "status": "revoked"}, format="json")
        assert updated.status_code == 200
        assert updated.json()["license"]["maxActivations"] == 5
        assert updated.json()["license"]["status"] == "revoked"

        assert admin_client.delete(url).json() == {"success": True}
        assert not License.objects.filter(id=widget_license.id).exists()

    def test_get_missing_license(self, admin_client):
        response = admin_client.get(f"/api/licenses/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "LICENSE_NOT_FOUND"

    def test_invalid_status_value(self, admin_client, widget_license):
        response = admin_client.patch(
            f"/api/licenses/{widget_license.id}", {"status": "paused"}, format="json"
        )

        assert response.status_code == 400

    def test_revoke_and_reactivate(self, admin_client, widget_license):
        base = f"/api/licenses/{widget_license.id}"

        assert admin_client.patch(f"{base}/revoke").json() == {"success": True}
        assert License.objects.get(id=widget_license.id).status == "revoked"

        assert admin_client.patch(f"{base}/activate").json() == {"success": True}
        assert License.objects.get(id=widget_license.id).status == "active"


@pytest.mark.django_db
@pytest.mark.integration
class TestAppEndpoints:
    """Tests for /api/apps."""

    def test_create_is_idempotent_by_name(self, admin_client):
        first = admin_client.post("/api/apps", {"name": "Widget Pro"}, format="json").json()
        second = admin_client.post("/api/apps", {"name": "Widget Pro"}, format="json").json()

        assert first["success"] is True
        assert first["app"]["slug"] == "widget-pro"
        assert first["app"]["id"] == second["app"]["id"]
        assert len(admin_client.get("/api/apps").json()["apps"]) == 1

    def test_slug_collision_gets_suffix(self, admin_client):
        admin_client.post("/api/apps", {"name": "Widget Pro"}, format="json")

        other = admin_client.post("/api/apps", {"name": "widget pro!"}, format="json").json()["app"]

        assert other["slug"].startswith("widget-pro-")
        assert other["slug"] == f"widget-pro-{other['id'][:8]}"

    def test_rename_cascades(self, admin_client, widget_license, api_client):
        app = App.objects.get(name="Widget")
        admin_client.post(
            "/api/v1/license/activate",
            {
                "appName": "Widget",
                "licenseKey": widget_license.license_key,
                "machineId": "machine-a",
                "appVersion": "1.0.0",
            },
            format="json",
        )

        response = admin_client.patch(f"/api/apps/{app.id}", {"name": "Widget Pro"}, format="json")

        assert response.status_code == 200
        assert response.json()["app"]["name"] == "Widget Pro"
        assert License.objects.get(id=widget_license.id).app_name == "Widget Pro"
        assert Activation.objects.get().app_name == "Widget Pro"

    def test_rename_conflict(self, admin_client):
        admin_client.post("/api/apps", {"name": "Gadget"}, format="json")
        widget = admin_client.post("/api/apps", {"name": "Widget"}, format="json").json()["app"]

        response = admin_client.patch(f"/api/apps/{widget['id']}", {"name": "Gadget"}, format="json")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "APP_NAME_CONFLICT"

    def test_rename_onto_taken_slug(self, admin_client):
        admin_client.post("/api/apps", {"name": "Widget Pro"}, format="json")
        gadget = admin_client.post("/api/apps", {"name": "Gadget"}, format="json").json()["app"]

        response = admin_client.patch(f"/api/apps/{gadget['id']}", {"name": "widget pro!"}, format="json")

        assert response.status_code == 200
        assert response.json()["app"]["name"] == "widget pro!"
        assert response.json()["app"]["slug"] == f"widget-pro-{gadget['id'][:8]}"

    def test_status_change(self, admin_client):
        app = admin_client.post("/api/apps", {"name": "Widget"}, format="json").json()["app"]

        response = admin_client.patch(f"/api/apps/{app['id']}", {"status": "inactive"}, format="json")

        assert response.json()["app"]["status"] == "inactive"
        assert response.json()["app"]["name"] == "Widget"

    def test_delete_cascades(self, admin_client, widget_license):
        app = App.objects.get(name="Widget")
        admin_client.post(
            "/api/v1/license/activate",
            {
                "appName": "Widget",
                "licenseKey": widget_license.license_key,
                "machineId": "machine-a",
                "appVersion": "1.0.0",
            },
            format="json",
        )

        assert admin_client.delete(f"/api/apps/{app.id}").json() == {"success": True}
        assert not App.objects.exists()
        assert not License.objects.exists()
        assert not Activation.objects.exists()
        assert not ActivationLog.objects.exists()

    def test_missing_app(self, admin_client):
        response = admin_client.get(f"/api/apps/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "APP_NOT_FOUND"


@pytest.mark.django_db
@pytest.mark.integration
class TestActivationEndpoints:
    """Tests for /api/activations."""

    PENDING = {
        "appName": "Widget",
        "appVersion": "1.0.0",
        "licenseKey": "AAAAA-BBBBB-CCCCC-DDDDD-EEEEE",
        "machineId": "machine-a",
        "metadata": {"shopName": "Corner Shop"},
    }

    def test_create_pending_then_approve_and_revoke(self, admin_client):
        created = admin_client.post("/api/activations", self.PENDING, format="json")

        assert created.status_code == 200
        activation = created.json()["activation"]
        assert activation["status"] == "pending"
        assert activation["shopName"] == "Corner Shop"
        assert activation["activatedAt"] is None

        base = f"/api/activations/{activation['id']}"
        approved = admin_client.patch(f"{base}/approve")
        assert approved.json() == {"success": True, "message": "Activation approved"}
        assert Activation.objects.get(id=activation["id"]).status == "active"

        revoked = admin_client.patch(f"{base}/revoke")
        assert revoked.json() == {"success": True, "message": "Activation revoked"}

        detail = admin_client.get(base).json()
        assert detail["activation"]["status"] == "revoked"
        assert sorted(entry["action"] for entry in detail["logs"]) == ["approved", "created", "revoked"]

    def test_duplicate_pending(self, admin_client):
        admin_client.post("/api/activations", self.PENDING, format="json")

        response = admin_client.post("/api/activations", self.PENDING, format="json")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "ACTIVATION_EXISTS"

    def test_list_and_stats(self, admin_client):
        admin_client.post("/api/activations", self.PENDING, format="json")
        second = admin_client.post(
            "/api/activations", {**self.PENDING, "machineId": "machine-b"}, format="json"
        ).json()["activation"]
        admin_client.patch(f"/api/activations/{second['id']}/approve")

        assert len(admin_client.get("/api/activations").json()["activations"]) == 2
        assert admin_client.get("/api/activations/stats").json() == {
            "stats": {"total": 2, "active": 1, "pending": 1, "revoked": 0}
        }

    def test_missing_activation(self, admin_client):
        response = admin_client.patch(f"/api/activations/{uuid.uuid4()}/approve")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "ACTIVATION_NOT_FOUND"
