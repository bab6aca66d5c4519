"""
App domain entity.

An app is a product licenses are issued for. Licenses and activations
refer to it by name, so a rename has to cascade.
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Dict, Optional

from catalog.domain.identifiers import slugify
from core.domain.events import utc_now
from core.domain.value_objects import AppStatus

NAME_MAX_LENGTH = 120


def slug_for(name: str, app_id: uuid.UUID) -> str:
    """Slug for a name, falling back to ``app-<first 8 of id>``."""
    return slugify(name) or f"app-{str(app_id)[:8]}"


@dataclass(frozen=True)
class App:
    """App domain entity."""

    id: uuid.UUID
    name: str
    slug: str
    status: AppStatus
    created_at: datetime
    updated_at: datetime
    metadata: Dict = field(default_factory=dict)

    def __post_init__(self):
        """Validate app entity."""
        if not self.name or not self.name.strip():
            raise ValueError("App name is required")
        if len(self.name) > NAME_MAX_LENGTH:
            raise ValueError("App name too long")
        if not self.slug:
            raise ValueError("App slug is required")

    @classmethod
    def create(
        cls,
        name: str,
        metadata: Optional[Dict] = None,
        app_id: Optional[uuid.UUID] = None,
    ) -> "App":
        """
        Create a new active App entity.

        Args:
            name: Display name (trimmed)
            metadata: Optional metadata
            app_id: Optional UUID (generated if not provided)

        Returns:
            App entity instance
        """
        app_id = app_id or uuid.uuid4()
        normalized = (name or "").strip()
        now = utc_now()
        return cls(
            id=app_id,
            name=normalized,
            slug=slug_for(normalized, app_id) if normalized else "",
            status=AppStatus.ACTIVE,
            created_at=now,
            updated_at=now,
            metadata=metadata or {},
        )

    def update(self, name: Optional[str] = None, status: Optional[AppStatus] = None) -> "App":
        """
        Return a copy with a new name and/or status.

        A blank name keeps the current one; the slug follows the name.
        """
        next_name = (name or "").strip() or self.name
        next_slug = slugify(next_name) or self.slug
        return replace(
            self,
            name=next_name,
            slug=next_slug,
            status=status or self.status,
            updated_at=utc_now(),
        )

    def with_id_suffix(self) -> "App":
        """Return a copy whose slug ends in the first 8 characters of the id."""
        return replace(self, slug=f"{self.slug[:111]}-{str(self.id)[:8]}")

    @property
    def is_active(self) -> bool:
        return self.status == AppStatus.ACTIVE
