"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""

from licenses.domain.license_key import (
    UNIQUE_KEY_ATTEMPTS,
    generate_license_key,
    generate_suffixed_license_key,
)
from licenses.ports.license_repository import LicenseRepository


class LicenseKeyGenerator:
    """Domain service for license key generation."""

    @staticmethod
    async def unique_key(app_name: str, repository: LicenseRepository) -> str:
        """
        Generate a key not yet used within an app.

        After five colliding attempts a random hex group is appended
        instead of retrying further; the ``(app_name, license_key)``
        unique constraint still guards the insert.

        Args:
            app_name: Canonical app name
            repository: License repository

        Returns:
            License key string
        """
        for _ in range(UNIQUE_KEY_ATTEMPTS):
            candidate = generate_license_key()
            if not await repository.key_exists(app_name, candidate):
                return candidate
        return generate_suffixed_license_key()
