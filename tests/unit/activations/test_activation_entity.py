"""
Unit tests for the Activation entity and seat policy.
"""

import uuid
from datetime import timedelta

import pytest

from activations.domain.activation import Activation
from activations.domain.activation_log import ActivationLogEntry, RequestContext
from activations.domain.services import SeatManager, token_expiry
from core.domain.events import utc_now
from core.domain.exceptions import MachineLockMismatchError, SeatLimitExceededError
from core.domain.value_objects import (
    ActivationAction,
    ActivationStatus,
    ActivationTriple,
    SeatUsage,
)
from licenses.domain.license import License

TRIPLE = ActivationTriple("Widget", "AAAAA-BBBBB-CCCCC-DDDDD-EEEEE", "machine-1")
TRIPLE_ID = uuid.uuid4()


class TestActivationEntity:
    """Tests for Activation domain entity."""

    def test_create_active(self):
        activation = Activation.create(
            triple=TRIPLE, app_version="1.0.0", metadata={"shopName": "Corner Shop"}
        )

        assert activation.status == ActivationStatus.ACTIVE
        assert activation.activated_at is not None
        assert activation.shop_name == "Corner Shop"
        assert activation.triple == TRIPLE
        assert activation.is_active

    def test_create_pending_has_no_activation_time(self):
        activation = Activation.create(
            triple=TRIPLE, app_version="1.0.0", status=ActivationStatus.PENDING
        )

        assert activation.activated_at is None
        assert not activation.is_active

    def test_reactivate_keeps_metadata_when_none_sent(self):
        activation = Activation.create(
            triple=TRIPLE, app_version="1.0.0", metadata={"shopName": "Corner Shop"}
        ).revoke()

        again = activation.reactivate("2.0.0")

        assert again.status == ActivationStatus.ACTIVE
        assert again.app_version == "2.0.0"
        assert again.metadata == {"shopName": "Corner Shop"}
        assert again.shop_name == "Corner Shop"
        assert again.id == activation.id

    def test_reactivate_replaces_metadata(self):
        activation = Activation.create(
            triple=TRIPLE, app_version="1.0.0", metadata={"shopName": "Corner Shop"}
        )

        again = activation.reactivate("1.0.1", metadata={"os": "linux"})

        assert again.metadata == {"os": "linux"}
        assert again.shop_name is None

    def test_approve_and_revoke(self):
        pending = Activation.create(triple=TRIPLE, app_version="1.0.0", status=ActivationStatus.PENDING)

        approved = pending.approve()
        assert approved.status == ActivationStatus.ACTIVE
        assert approved.activated_at is not None

        assert approved.revoke().status == ActivationStatus.REVOKED

    def test_triple_requires_parts(self):
        with pytest.raises(ValueError):
            ActivationTriple("Widget", "", "machine-1")


class TestActivationLogEntry:
    """Tests for audit log entries."""

    def test_record_copies_context(self):
        entry = ActivationLogEntry.record(
            TRIPLE_ID,
            ActivationAction.ACTIVATED,
            RequestContext(ip_address="203.0.113.9", user_agent="client/1.0"),
            metadata={"appVersion": "1.0.0"},
        )

        assert entry.action == ActivationAction.ACTIVATED
        assert entry.ip_address == "203.0.113.9"
        assert entry.user_agent == "client/1.0"

    def test_record_without_context(self):
        entry = ActivationLogEntry.record(TRIPLE_ID, ActivationAction.REVOKED)

        assert entry.ip_address is None
        assert entry.user_agent is None


class TestSeatManager:
    """Tests for SeatManager domain service."""

    def test_free_seat(self):
        assert SeatManager.has_seat(None, active_count=1, max_activations=2)

    def test_full_license(self):
        assert not SeatManager.has_seat(None, active_count=2, max_activations=2)
        with pytest.raises(SeatLimitExceededError):
            SeatManager.ensure_seat(None, active_count=2, max_activations=2)

    def test_existing_row_reuses_its_seat_even_when_full(self):
        existing = Activation.create(triple=TRIPLE, app_version="1.0.0").revoke()
        assert SeatManager.has_seat(existing, active_count=5, max_activations=2)

    def test_machine_lock(self):
        license = License.create(app_name="Widget", license_key="K", locked_machine_id="machine-1")

        SeatManager.ensure_machine_allowed(license, "machine-1")
        with pytest.raises(MachineLockMismatchError):
            SeatManager.ensure_machine_allowed(license, "machine-2")

    def test_token_expiry_follows_license(self):
        expires_at = utc_now() + timedelta(days=3)
        license = License.create(app_name="Widget", license_key="K", expires_at=expires_at)

        assert token_expiry(license, utc_now(), ttl_days=30) == expires_at

    def test_token_expiry_falls_back_to_ttl(self):
        now = utc_now()
        license = License.create(app_name="Widget", license_key="K")

        assert token_expiry(license, now, ttl_days=30) == now + timedelta(days=30)


class TestSeatUsage:
    """Tests for SeatUsage value object."""

    def test_remaining_never_negative(self):
        assert SeatUsage(max_activations=1, used_activations=3).remaining_activations == 0
        assert SeatUsage(max_activations=3, used_activations=1).remaining_activations == 2
