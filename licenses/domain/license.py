"""
License domain entity.

This is the core domain entity representing a license.
It contains business logic and is independent of infrastructure.
"""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Dict, Optional

from core.domain.events import utc_now
from core.domain.exceptions import LicenseExpiredError, LicenseNotActiveError
from core.domain.value_objects import ActivationType, LicenseStatus

LOCKED_MACHINE_KEY = "lockedMachineId"


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    Grants up to ``max_activations`` concurrently active machines for
    one app. A ``lockedMachineId`` entry in ``metadata`` pins the
    license to a single machine.
    """

    id: uuid.UUID
    app_name: str
    license_key: str
    status: LicenseStatus
    max_activations: int
    expires_at: Optional[datetime]
    metadata: Optional[Dict[str, Any]]
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate license entity."""
        if not self.app_name:
            raise ValueError("App name is required")
        if not self.license_key:
            raise ValueError("License key is required")
        if self.max_activations < 1:
            raise ValueError("Max activations must be at least 1")

    @classmethod
    def create(
        cls,
        app_name: str,
        license_key: str,
        max_activations: Optional[int] = 1,
        locked_machine_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        expires_at: Optional[datetime] = None,
        license_id: Optional[uuid.UUID] = None,
    ) -> "License":
        """
        Create a new active License entity.

        Args:
            app_name: Canonical app name
            license_key: Generated key, unique within the app
            max_activations: Seat count; missing or below 1 becomes 1
            locked_machine_id: Optional machine to pin the license to
            metadata: Optional free-form metadata
            expires_at: Optional expiry
            license_id: Optional UUID (generated if not provided)

        Returns:
            License entity instance
        """
        merged = dict(metadata) if isinstance(metadata, dict) else {}
        locked = (locked_machine_id or "").strip()
        if locked:
            merged[LOCKED_MACHINE_KEY] = locked

        now = utc_now()
        return cls(
            id=license_id or uuid.uuid4(),
            app_name=app_name,
            license_key=license_key,
            status=LicenseStatus.ACTIVE,
            max_activations=max(1, max_activations or 1),
            expires_at=expires_at,
            metadata=merged or None,
            created_at=now,
            updated_at=now,
        )

    @property
    def locked_machine_id(self) -> Optional[str]:
        """Machine the license is pinned to, if any."""
        if not isinstance(self.metadata, dict):
            return None
        value = self.metadata.get(LOCKED_MACHINE_KEY)
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    @property
    def activation_type(self) -> ActivationType:
        if self.locked_machine_id:
            return ActivationType.MACHINE_ID_BOUND
        return ActivationType.PRE_GENERATED

    def admits_machine(self, machine_id: str) -> bool:
        """A pinned license admits only its machine; a pool admits any."""
        locked = self.locked_machine_id
        return locked is None or locked == machine_id

    def is_expired(self, current_time: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at < (current_time or utc_now())

    def ensure_usable(self, current_time: Optional[datetime] = None) -> None:
        """
        Check the license can back an activation right now.

        Raises:
            LicenseNotActiveError: If the license is revoked
            LicenseExpiredError: If the license is past its expiry
        """
        if self.status != LicenseStatus.ACTIVE:
            raise LicenseNotActiveError()
        if self.is_expired(current_time):
            raise LicenseExpiredError()

    def with_status(self, status: LicenseStatus) -> "License":
        """Return a copy with a new status."""
        return replace(self, status=status, updated_at=utc_now())

    def with_limits(
        self,
        max_activations: Optional[int] = None,
        status: Optional[LicenseStatus] = None,
    ) -> "License":
        """
        Return a copy with new seat count and/or status.

        Existing activations above a lowered limit are left alone; the
        limit is enforced on the next activation.
        """
        return replace(
            self,
            max_activations=max(1, max_activations or self.max_activations),
            status=status or self.status,
            updated_at=utc_now(),
        )
