"""
Activation domain entity.

This is the core domain entity representing a license activation.
It contains business logic and is independent of infrastructure.
"""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Dict, Optional

from core.domain.events import utc_now
from core.domain.value_objects import ActivationStatus, ActivationTriple


def shop_name_from(metadata: Optional[Dict[str, Any]]) -> Optional[str]:
    """Pull ``shopName`` out of client metadata."""
    if not isinstance(metadata, dict):
        return None
    value = metadata.get("shopName")
    if isinstance(value, str) and value:
        return value
    return None


@dataclass(frozen=True)
class Activation:
    """
    Activation domain entity.

    One row per (app, license key, machine). Repeated activations of the
    same machine update the row in place instead of adding another.
    """

    id: uuid.UUID
    app_name: str
    app_version: str
    license_key: str
    machine_id: str
    shop_name: Optional[str]
    status: ActivationStatus
    activated_at: Optional[datetime]
    expires_at: Optional[datetime]
    metadata: Optional[Dict[str, Any]]
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate activation entity."""
        if not self.app_name:
            raise ValueError("App name is required")
        if not self.license_key:
            raise ValueError("License key is required")
        if not self.machine_id:
            raise ValueError("Machine ID is required")

    @classmethod
    def create(
        cls,
        triple: ActivationTriple,
        app_version: str,
        status: ActivationStatus = ActivationStatus.ACTIVE,
        metadata: Optional[Dict[str, Any]] = None,
        expires_at: Optional[datetime] = None,
        shop_name: Optional[str] = None,
        activation_id: Optional[uuid.UUID] = None,
    ) -> "Activation":
        """
        Create a new Activation entity.

        Args:
            triple: (app name, license key, machine id)
            app_version: Client application version
            status: ACTIVE for public activation, PENDING for the admin path
            metadata: Optional client metadata
            expires_at: Mirrors the license expiry
            shop_name: Overrides ``metadata.shopName``
            activation_id: Optional UUID (generated if not provided)

        Returns:
            Activation entity instance
        """
        now = utc_now()
        return cls(
            id=activation_id or uuid.uuid4(),
            app_name=triple.app_name,
            app_version=app_version,
            license_key=triple.license_key,
            machine_id=triple.machine_id,
            shop_name=shop_name or shop_name_from(metadata),
            status=status,
            activated_at=now if status == ActivationStatus.ACTIVE else None,
            expires_at=expires_at,
            metadata=metadata or None,
            created_at=now,
            updated_at=now,
        )

    @property
    def triple(self) -> ActivationTriple:
        return ActivationTriple(self.app_name, self.license_key, self.machine_id)

    @property
    def is_active(self) -> bool:
        return self.status == ActivationStatus.ACTIVE

    def reactivate(
        self,
        app_version: str,
        metadata: Optional[Dict[str, Any]] = None,
        expires_at: Optional[datetime] = None,
    ) -> "Activation":
        """
        Return a copy refreshed by a repeated activate call.

        Metadata (and the shop name derived from it) is replaced only
        when the client sends new metadata.
        """
        now = utc_now()
        if metadata:
            next_metadata, next_shop = metadata, shop_name_from(metadata)
        else:
            next_metadata, next_shop = self.metadata, self.shop_name
        return replace(
            self,
            app_version=app_version,
            shop_name=next_shop,
            status=ActivationStatus.ACTIVE,
            metadata=next_metadata,
            activated_at=now,
            expires_at=expires_at,
            updated_at=now,
        )

    def approve(self) -> "Activation":
        """Return an active copy of a pending or revoked activation."""
        now = utc_now()
        return replace(self, status=ActivationStatus.ACTIVE, activated_at=now, updated_at=now)

    def revoke(self) -> "Activation":
        """Return a revoked copy; the row is kept for the audit trail."""
        return replace(self, status=ActivationStatus.REVOKED, updated_at=utc_now())
