"""
License administration handlers.

Handles seat-count and status edits, deletion and the usage-decorated
read side used by the dashboard.
"""

from typing import List

from core.domain.exceptions import LicenseNotFoundError
from core.domain.value_objects import LicenseStatus
from core.infrastructure.events import event_bus
from licenses.application.commands.license_commands import (
    DeleteLicenseCommand,
    UpdateLicenseCommand,
)
from licenses.application.dto.license_dto import LicenseDTO
from licenses.application.queries.license_queries import GetLicenseQuery, ListLicensesQuery
from licenses.domain.events import LicenseDeleted, LicenseStatusChanged
from licenses.ports.license_repository import LicenseRepository


class UpdateLicenseHandler:
    """
    Handler for UpdateLicenseCommand.

    No check against current usage is made: a lowered limit is enforced
    on the next activation, not by revoking existing ones.
    """

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, command: UpdateLicenseCommand) -> LicenseDTO:
        """
        Handle update license command.

        Args:
            command: UpdateLicenseCommand

        Returns:
            LicenseDTO after the update

        Raises:
            LicenseNotFoundError: If license not found
        """
        saved = await self.license_repository.update_limits(
            command.license_id,
            max_activations=command.max_activations,
            status=command.status,
        )
        if not saved:
            raise LicenseNotFoundError()

        await event_bus.publish(
            LicenseStatusChanged(
                license_id=saved.id,
                status=saved.status.value,
                max_activations=saved.max_activations,
            )
        )
        return LicenseDTO.from_entity(saved)

    async def set_status(self, license_id, status: LicenseStatus) -> LicenseDTO:
        """Shortcut for the revoke and re-activate endpoints."""
        return await self.handle(UpdateLicenseCommand(license_id=license_id, status=status))


class DeleteLicenseHandler:
    """Handler for DeleteLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, command: DeleteLicenseCommand) -> int:
        """
        Handle delete license command.

        Returns:
            Number of activations deleted with the license

        Raises:
            LicenseNotFoundError: If license not found
        """
        license = await self.license_repository.find_by_id(command.license_id)
        if not license:
            raise LicenseNotFoundError()

        deleted = await self.license_repository.delete_cascading(license.id)
        if deleted is None:
            raise LicenseNotFoundError()

        await event_bus.publish(
            LicenseDeleted(license_id=license.id, app_name=license.app_name, activations_deleted=deleted)
        )
        return deleted


class ListLicensesHandler:
    """Handler for ListLicensesQuery."""

    def __init__(self, license_repository: LicenseRepository):
        self.license_repository = license_repository

    async def handle(self, query: ListLicensesQuery) -> List[LicenseDTO]:
        items = await self.license_repository.list_with_usage(query.app_name)
        return [LicenseDTO.with_usage(item) for item in items]


class GetLicenseHandler:
    """Handler for GetLicenseQuery."""

    def __init__(self, license_repository: LicenseRepository):
        self.license_repository = license_repository

    async def handle(self, query: GetLicenseQuery) -> LicenseDTO:
        """
        Raises:
            LicenseNotFoundError: If license not found
        """
        item = await self.license_repository.get_with_usage(query.license_id)
        if not item:
            raise LicenseNotFoundError()
        return LicenseDTO.with_usage(item)
