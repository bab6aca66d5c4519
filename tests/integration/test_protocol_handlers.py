"""
Integration tests for the activate, validate and deactivate handlers.
"""

from datetime import timedelta

import pytest
from asgiref.sync import async_to_sync
from django.conf import settings
from django.utils import timezone

from activations.application.commands.activation_commands import (
    ActivateLicenseCommand,
    DeactivateActivationCommand,
    ValidateActivationCommand,
)
from activations.application.handlers.activate_license_handler import ActivateLicenseHandler
from activations.application.handlers.deactivate_activation_handler import (
    DeactivateActivationHandler,
)
from activations.application.handlers.validate_activation_handler import (
    ValidateActivationHandler,
)
from activations.infrastructure.models import Activation as ActivationModel
from activations.infrastructure.models import ActivationLog as ActivationLogModel
from core.domain.value_objects import LicenseStatus
from core.infrastructure.tokens import get_activation_token_codec
from licenses.infrastructure.models import License as LicenseModel


@pytest.fixture
def protocol(app_repository, license_repository, activation_repository):
    """Sync wrappers around the three protocol handlers."""
    repos = {
        "app_repository": app_repository,
        "license_repository": license_repository,
        "activation_repository": activation_repository,
    }
    activate_handler = ActivateLicenseHandler(**repos)
    validate_handler = ValidateActivationHandler(**repos)
    deactivate_handler = DeactivateActivationHandler(**repos)

    class Protocol:
        @staticmethod
        def activate(license_key, machine_id, app_name="Widget", app_version="1.0.0", metadata=None):
            return async_to_sync(activate_handler.handle)(
                ActivateLicenseCommand(
                    license_key=license_key,
                    machine_id=machine_id,
                    app_version=app_version,
                    app_name=app_name,
                    metadata=metadata,
                )
            )

        @staticmethod
        def validate(token, machine_id, app_name="Widget"):
            return async_to_sync(validate_handler.handle)(
                ValidateActivationCommand(machine_id=machine_id, activation_token=token, app_name=app_name)
            )

        @staticmethod
        def deactivate(token, machine_id, app_name="Widget"):
            return async_to_sync(deactivate_handler.handle)(
                DeactivateActivationCommand(machine_id=machine_id, activation_token=token, app_name=app_name)
            )

    return Protocol


@pytest.mark.django_db
@pytest.mark.integration
class TestActivate:
    """Tests for ActivateLicenseHandler."""

    def test_seats_fill_then_conflict(self, protocol, widget_license):
        key = widget_license.license_key

        first = protocol.activate(key, "machine-a")
        second = protocol.activate(key, "machine-b")
        third = protocol.activate(key, "machine-c")

        assert first.success and second.success
        assert first.usage.used_activations == 1
        assert second.usage.used_activations == 2
        assert second.usage.remaining_activations == 0

        assert not third.success
        assert third.status_code == 409
        assert third.error == "Activation limit reached"
        assert third.usage.used_activations == 2
        assert third.usage.max_activations == 2

    def test_result_carries_token_bound_to_machine(self, protocol, widget_license):
        result = protocol.activate(widget_license.license_key, "machine-a")

        claims = get_activation_token_codec().read_claims(result.activation_token)
        assert claims.license_id == str(widget_license.id)
        assert claims.app_name == "Widget"
        assert claims.machine_id == "machine-a"
        assert result.token_expires_at == widget_license.expires_at
        assert result.status == "active"
        assert result.usage.activation_type == "pre_generated"
        assert not result.reactivated

    def test_reactivation_does_not_consume_a_seat(self, protocol, widget_license):
        key = widget_license.license_key
        first = protocol.activate(key, "machine-a")
        protocol.activate(key, "machine-b")

        again = protocol.activate(key, "machine-a", app_version="2.0.0")

        assert again.success
        assert again.reactivated
        assert again.activation_id == first.activation_id
        assert again.usage.used_activations == 2
        assert ActivationModel.objects.count() == 2

    def test_token_ttl_used_when_license_never_expires(self, protocol, issue_license):
        license = issue_license(app_name="Widget", max_activations=1)

        result = protocol.activate(license.license_key, "machine-a")

        expected = timezone.now() + timedelta(days=settings.ACTIVATION_TOKEN_TTL_DAYS)
        assert abs((result.token_expires_at - expected).total_seconds()) < 60

    def test_unknown_key(self, protocol, widget_license):
        result = protocol.activate("ZZZZZ-ZZZZZ-ZZZZZ-ZZZZZ-ZZZZZ", "machine-a")

        assert not result.success
        assert result.status_code == 404
        assert result.error == "License not found"
        assert result.usage is None

    def test_key_of_another_app_is_not_found(self, protocol, widget_license, issue_license):
        issue_license(app_name="Gadget")

        result = protocol.activate(widget_license.license_key, "machine-a", app_name="Gadget")

        assert result.status_code == 404

    def test_revoked_license(self, protocol, widget_license):
        LicenseModel.objects.filter(id=widget_license.id).update(status=LicenseStatus.REVOKED.value)

        result = protocol.activate(widget_license.license_key, "machine-a")

        assert result.status_code == 403
        assert result.error == "License is not active"

    def test_expired_license(self, protocol, issue_license):
        license = issue_license(expires_at=timezone.now() - timedelta(minutes=1))

        result = protocol.activate(license.license_key, "machine-a")

        assert result.status_code == 403
        assert result.error == "License expired"

    def test_machine_locked_license(self, protocol, issue_license):
        license = issue_license(locked_machine_id="machine-a")

        other = protocol.activate(license.license_key, "machine-b")
        owner = protocol.activate(license.license_key, "machine-a")

        assert other.status_code == 403
        assert other.error == "License is locked to another machine"
        assert owner.success
        assert owner.usage.activation_type == "machine_id_bound"

    def test_loose_app_identifier_resolves_to_canonical_name(self, protocol, issue_license):
        license = issue_license(app_name="Widget Pro")

        result = protocol.activate(license.license_key, "machine-a", app_name="widget-pro")

        assert result.success
        assert result.app_name == "Widget Pro"
        assert get_activation_token_codec().read_claims(result.activation_token).app_name == "Widget Pro"

    def test_default_app_name(self, protocol, issue_license):
        license = issue_license(app_name=settings.ACTIVATION_APP_NAME)

        result = protocol.activate(license.license_key, "machine-a", app_name=None)

        assert result.success
        assert result.app_name == settings.ACTIVATION_APP_NAME


@pytest.mark.django_db
@pytest.mark.integration
class TestValidate:
    """Tests for ValidateActivationHandler."""

    def test_valid_token(self, protocol, widget_license):
        activated = protocol.activate(widget_license.license_key, "machine-a")

        outcome = protocol.validate(activated.activation_token, "machine-a")

        assert outcome.valid
        assert outcome.license_id == widget_license.id
        assert outcome.activation_id == activated.activation_id
        assert outcome.activation_status == "active"
        assert outcome.usage.used_activations == 1

    def test_garbage_token(self, protocol, widget_license):
        outcome = protocol.validate("not-a-token-but-long-enough", "machine-a")

        assert not outcome.valid
        assert outcome.reason == "Invalid or expired activation token"

    def test_wrong_machine(self, protocol, widget_license):
        activated = protocol.activate(widget_license.license_key, "machine-a")

        outcome = protocol.validate(activated.activation_token, "machine-b")

        assert not outcome.valid
        assert outcome.reason == "Activation token does not match app or machine"

    def test_wrong_app(self, protocol, widget_license, issue_license):
        issue_license(app_name="Gadget")
        activated = protocol.activate(widget_license.license_key, "machine-a")

        outcome = protocol.validate(activated.activation_token, "machine-a", app_name="Gadget")

        assert outcome.reason == "Activation token does not match app or machine"

    def test_revoked_license_invalidates_live_token(self, protocol, widget_license):
        activated = protocol.activate(widget_license.license_key, "machine-a")
        LicenseModel.objects.filter(id=widget_license.id).update(status=LicenseStatus.REVOKED.value)

        outcome = protocol.validate(activated.activation_token, "machine-a")

        assert not outcome.valid
        assert outcome.reason == "License is not active"

    def test_deleted_license(self, protocol, widget_license, license_repository):
        activated = protocol.activate(widget_license.license_key, "machine-a")
        async_to_sync(license_repository.delete_cascading)(widget_license.id)

        outcome = protocol.validate(activated.activation_token, "machine-a")

        assert outcome.reason == "License is not active"


@pytest.mark.django_db
@pytest.mark.integration
class TestDeactivate:
    """Tests for DeactivateActivationHandler."""

    def test_deactivate_frees_seat(self, protocol, widget_license):
        key = widget_license.license_key
        first = protocol.activate(key, "machine-a")
        protocol.activate(key, "machine-b")
        assert not protocol.activate(key, "machine-c").success

        outcome = protocol.deactivate(first.activation_token, "machine-a")

        assert outcome.success
        assert outcome.usage.used_activations == 1
        assert protocol.activate(key, "machine-c").success

    def test_deactivated_token_no_longer_validates(self, protocol, widget_license):
        activated = protocol.activate(widget_license.license_key, "machine-a")
        protocol.deactivate(activated.activation_token, "machine-a")

        outcome = protocol.validate(activated.activation_token, "machine-a")

        assert not outcome.valid
        assert outcome.reason == "Activation not active"

    def test_row_is_kept_with_log(self, protocol, widget_license):
        activated = protocol.activate(widget_license.license_key, "machine-a")

        protocol.deactivate(activated.activation_token, "machine-a")

        row = ActivationModel.objects.get(id=activated.activation_id)
        assert row.status == "revoked"
        actions = set(ActivationLogModel.objects.filter(activation_id=row.id).values_list("action", flat=True))
        assert actions == {"activated", "deactivated"}

    def test_allowed_on_revoked_license(self, protocol, widget_license):
        activated = protocol.activate(widget_license.license_key, "machine-a")
        LicenseModel.objects.filter(id=widget_license.id).update(status=LicenseStatus.REVOKED.value)

        assert protocol.deactivate(activated.activation_token, "machine-a").success

    def test_invalid_token(self, protocol, widget_license):
        outcome = protocol.deactivate("not-a-token-but-long-enough", "machine-a")

        assert not outcome.success
        assert outcome.reason == "Invalid or expired activation token"

    def test_missing_activation(self, protocol, widget_license, activation_repository):
        activated = protocol.activate(widget_license.license_key, "machine-a")
        ActivationLogModel.objects.all().delete()
        ActivationModel.objects.all().delete()

        outcome = protocol.deactivate(activated.activation_token, "machine-a")

        assert outcome.reason == "Activation not found"

    def test_missing_license(self, protocol, widget_license, license_repository):
        activated = protocol.activate(widget_license.license_key, "machine-a")
        async_to_sync(license_repository.delete_cascading)(widget_license.id)

        outcome = protocol.deactivate(activated.activation_token, "machine-a")

        assert outcome.reason == "License not found"
