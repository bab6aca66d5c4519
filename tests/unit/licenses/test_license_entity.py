"""
Unit tests for the License entity and key generation.
"""

from datetime import timedelta

import pytest

from core.domain.events import utc_now
from core.domain.exceptions import LicenseExpiredError, LicenseNotActiveError
from core.domain.value_objects import ActivationType, LicenseStatus
from licenses.domain.license import License
from licenses.domain.license_key import (
    KEY_ALPHABET,
    generate_license_key,
    generate_suffixed_license_key,
)
from licenses.domain.services import LicenseKeyGenerator


class TestLicenseEntity:
    """Tests for License domain entity."""

    def test_create_defaults(self):
        license = License.create(app_name="Widget", license_key="AAAAA-BBBBB-CCCCC-DDDDD-EEEEE")

        assert license.status == LicenseStatus.ACTIVE
        assert license.max_activations == 1
        assert license.metadata is None
        assert license.activation_type == ActivationType.PRE_GENERATED
        assert license.locked_machine_id is None

    @pytest.mark.parametrize("value", [None, 0, -3])
    def test_seat_count_floor_is_one(self, value):
        license = License.create(app_name="Widget", license_key="K", max_activations=value)
        assert license.max_activations == 1

    def test_locked_machine_goes_into_metadata(self):
        license = License.create(
            app_name="Widget",
            license_key="K",
            locked_machine_id="  machine-1  ",
            metadata={"customer": "acme"},
        )

        assert license.metadata == {"customer": "acme", "lockedMachineId": "machine-1"}
        assert license.locked_machine_id == "machine-1"
        assert license.activation_type == ActivationType.MACHINE_ID_BOUND

    def test_admits_machine(self):
        pinned = License.create(app_name="Widget", license_key="K", locked_machine_id="machine-1")
        pool = License.create(app_name="Widget", license_key="K")

        assert pinned.admits_machine("machine-1")
        assert not pinned.admits_machine("machine-2")
        assert pool.admits_machine("anything")

    def test_ensure_usable_revoked(self):
        license = License.create(app_name="Widget", license_key="K").with_status(LicenseStatus.REVOKED)
        with pytest.raises(LicenseNotActiveError):
            license.ensure_usable()

    def test_ensure_usable_expired(self):
        license = License.create(
            app_name="Widget", license_key="K", expires_at=utc_now() - timedelta(seconds=1)
        )
        with pytest.raises(LicenseExpiredError):
            license.ensure_usable()

    def test_ensure_usable_without_expiry(self):
        License.create(app_name="Widget", license_key="K").ensure_usable()

    def test_with_limits(self):
        license = License.create(app_name="Widget", license_key="K", max_activations=3)

        lowered = license.with_limits(max_activations=1)
        assert lowered.max_activations == 1
        assert lowered.status == LicenseStatus.ACTIVE

        revoked = license.with_limits(status=LicenseStatus.REVOKED)
        assert revoked.max_activations == 3
        assert revoked.status == LicenseStatus.REVOKED

    def test_validation(self):
        with pytest.raises(ValueError, match="App name is required"):
            License.create(app_name="", license_key="K")


class TestLicenseKey:
    """Tests for key generation."""

    def test_key_shape(self):
        key = generate_license_key()
        groups = key.split("-")

        assert len(groups) == 5
        assert all(len(group) == 5 for group in groups)
        assert set(key.replace("-", "")) <= set(KEY_ALPHABET)

    def test_no_lookalike_characters(self):
        assert not set("IO01") & set(KEY_ALPHABET)

    def test_suffixed_key_shape(self):
        key = generate_suffixed_license_key()

        groups = key.split("-")
        assert len(groups) == 6
        assert len(groups[-1]) == 4
        assert set(groups[-1]) <= set("0123456789ABCDEF")


class StubLicenseRepository:
    """Answers key_exists from a fixed list of outcomes."""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0

    async def key_exists(self, app_name, license_key):
        self.calls += 1
        return self.outcomes.pop(0)


@pytest.mark.asyncio
class TestLicenseKeyGenerator:
    """Tests for unique key generation."""

    async def test_first_free_key_is_used(self):
        repo = StubLicenseRepository([True, False])

        key = await LicenseKeyGenerator.unique_key("Widget", repo)

        assert repo.calls == 2
        assert len(key.split("-")) == 5

    async def test_suffix_after_five_collisions(self):
        repo = StubLicenseRepository([True] * 5)

        key = await LicenseKeyGenerator.unique_key("Widget", repo)

        assert repo.calls == 5
        assert len(key.split("-")) == 6
