"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from core.domain.value_objects import LicenseStatus
from licenses.domain.license import License


@dataclass(frozen=True)
class LicenseWithUsage:
    """A license decorated with its live seat usage."""

    license: License
    active_activations: int

    @property
    def remaining_activations(self) -> int:
        return max(self.license.max_activations - self.active_activations, 0)


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(self, license: License) -> License:
        """
        Save a license entity.

        Args:
            license: License entity to save

        Returns:
            Saved license entity
        """

    @abstractmethod
    async def update_limits(
        self,
        license_id: uuid.UUID,
        max_activations: Optional[int] = None,
        status: Optional[LicenseStatus] = None,
    ) -> Optional[License]:
        """
        Change seat count and/or status of a stored license.

        Only those columns and ``updated_at`` are written, so a concurrent
        app rename keeps its ``app_name``.

        Returns:
            License after the change, or None if it does not exist
        """

    @abstractmethod
    async def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License UUID

        Returns:
            License entity or None if not found
        """

    @abstractmethod
    async def find_by_app_and_key(self, app_name: str, license_key: str) -> Optional[License]:
        """
        Find a license by app name and key.

        Args:
            app_name: Canonical app name
            license_key: License key

        Returns:
            License entity or None if not found
        """

    @abstractmethod
    async def key_exists(self, app_name: str, license_key: str) -> bool:
        """Check whether a key is already used within an app."""

    @abstractmethod
    async def list_with_usage(self, app_name_filter: Optional[str] = None) -> List[LicenseWithUsage]:
        """
        List licenses with active activation counts.

        Args:
            app_name_filter: Case-insensitive substring of the app name

        Returns:
            Licenses, newest first
        """

    @abstractmethod
    async def get_with_usage(self, license_id: uuid.UUID) -> Optional[LicenseWithUsage]:
        """Find one license with its active activation count."""

    @abstractmethod
    async def delete_cascading(self, license_id: uuid.UUID) -> Optional[int]:
        """
        Delete a license with its activation logs and activations, atomically.

        Args:
            license_id: License UUID

        Returns:
            Number of activations deleted, or None if the license does not exist
        """
