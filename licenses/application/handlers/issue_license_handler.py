"""
IssueLicenseHandler.

Handles the issue license command.
"""

import logging

from catalog.application.services.app_resolver import AppResolver
from catalog.ports.app_repository import AppRepository
from core.infrastructure.events import event_bus
from licenses.application.commands.license_commands import IssueLicenseCommand
from licenses.application.dto.license_dto import LicenseDTO
from licenses.domain.events import LicenseIssued
from licenses.domain.license import License
from licenses.domain.services import LicenseKeyGenerator
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class IssueLicenseHandler:
    """Handler for IssueLicenseCommand."""

    def __init__(self, app_repository: AppRepository, license_repository: LicenseRepository):
        """Initialize handler with repositories."""
        self.app_resolver = AppResolver(app_repository)
        self.license_repository = license_repository

    async def handle(self, command: IssueLicenseCommand) -> LicenseDTO:
        """
        Handle issue license command.

        Args:
            command: IssueLicenseCommand

        Returns:
            LicenseDTO of the new license with full seat availability

        Raises:
            AppNotRegisteredError: If the app name is empty
        """
        app = await self.app_resolver.resolve_or_create(command.app_name)

        license_key = await LicenseKeyGenerator.unique_key(app.name, self.license_repository)
        license = License.create(
            app_name=app.name,
            license_key=license_key,
            max_activations=command.max_activations,
            locked_machine_id=command.locked_machine_id,
            metadata=command.metadata,
            expires_at=command.expires_at,
        )
        saved = await self.license_repository.save(license)

        logger.info(
            "License issued",
            extra={
                "license_id": str(saved.id),
                "app_name": saved.app_name,
                "max_activations": saved.max_activations,
                "activation_type": saved.activation_type.value,
            },
        )
        await event_bus.publish(
            LicenseIssued(
                license_id=saved.id,
                app_name=saved.app_name,
                max_activations=saved.max_activations,
                activation_type=saved.activation_type.value,
            )
        )

        dto = LicenseDTO.from_entity(saved)
        dto.active_activations = 0
        dto.remaining_activations = saved.max_activations
        return dto
