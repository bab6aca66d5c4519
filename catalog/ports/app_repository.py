"""
App repository port (interface).

This defines the contract for app persistence operations.
Implementations are in the infrastructure layer.
"""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from catalog.domain.app import App
from core.domain.value_objects import AppStatus


@dataclass
class CascadeResult:
    """Rows touched by a cascading rename or delete."""

    licenses: int = 0
    activations: int = 0
    activation_logs: int = 0


@dataclass(frozen=True)
class AppUpdate:
    """An app as stored after an update and the name it had before."""

    app: App
    previous_name: str
    cascade: CascadeResult

    @property
    def renamed(self) -> bool:
        return self.app.name != self.previous_name


class AppRepository(ABC):
    """
    Abstract repository for App entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(self, app: App) -> App:
        """
        Insert or update an app row (no cascade).

        Args:
            app: App entity to save

        Returns:
            Saved app entity
        """

    @abstractmethod
    async def find_by_id(self, app_id: uuid.UUID) -> Optional[App]:
        """Find an app by ID."""

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[App]:
        """Find an app by its exact (trimmed) name."""

    @abstractmethod
    async def find_by_identifier(self, identifier: str) -> Optional[App]:
        """
        Resolve a loosely typed identifier to an app.

        Args:
            identifier: Name, slug or a variant of either

        Returns:
            App entity or None if nothing matches
        """

    @abstractmethod
    async def list_all(self) -> List[App]:
        """List apps ordered by name."""

    @abstractmethod
    async def update_cascading(
        self,
        app_id: uuid.UUID,
        name: Optional[str] = None,
        status: Optional[AppStatus] = None,
    ) -> Optional[AppUpdate]:
        """
        Rename and/or change the status of an app, atomically.

        The app row is locked and its stored name is the one licenses and
        activations are moved away from. A slug already used by another
        app gets the id suffix.

        Args:
            app_id: App UUID
            name: New name (blank keeps the current one)
            status: New status

        Returns:
            AppUpdate, or None if the app does not exist

        Raises:
            AppNameConflictError: If another app already has the new name
        """

    @abstractmethod
    async def delete_cascading(self, app: App) -> CascadeResult:
        """
        Delete an app with its activation logs, activations and licenses, atomically.

        Returns:
            Counts of rows deleted
        """
