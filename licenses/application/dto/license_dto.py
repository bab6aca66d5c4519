"""
License DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from licenses.domain.license import License
from licenses.ports.license_repository import LicenseWithUsage


@dataclass
class LicenseDTO:
    """DTO for license information."""

    id: uuid.UUID
    app_name: str
    license_key: str
    status: str
    max_activations: int
    activation_type: str
    expires_at: Optional[datetime]
    metadata: Optional[Dict[str, Any]]
    created_at: datetime
    updated_at: datetime
    active_activations: Optional[int] = None
    remaining_activations: Optional[int] = None

    @classmethod
    def from_entity(cls, license: License) -> "LicenseDTO":
        return cls(
            id=license.id,
            app_name=license.app_name,
            license_key=license.license_key,
            status=license.status.value,
            max_activations=license.max_activations,
            activation_type=license.activation_type.value,
            expires_at=license.expires_at,
            metadata=license.metadata,
            created_at=license.created_at,
            updated_at=license.updated_at,
        )

    @classmethod
    def with_usage(cls, item: LicenseWithUsage) -> "LicenseDTO":
        """DTO decorated with active and remaining seat counts."""
        dto = cls.from_entity(item.license)
        dto.active_activations = item.active_activations
        dto.remaining_activations = item.remaining_activations
        return dto
