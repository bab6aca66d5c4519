"""
App DTOs for API responses.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict

from catalog.domain.app import App


@dataclass
class AppDTO:
    """DTO for app information."""

    id: uuid.UUID
    name: str
    slug: str
    status: str
    created_at: datetime
    updated_at: datetime
    metadata: Dict = field(default_factory=dict)

    @classmethod
    def from_entity(cls, app: App) -> "AppDTO":
        return cls(
            id=app.id,
            name=app.name,
            slug=app.slug,
            status=app.status.value,
            created_at=app.created_at,
            updated_at=app.updated_at,
            metadata=app.metadata,
        )
