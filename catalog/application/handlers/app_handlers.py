"""
App catalog handlers.

Handle create, rename and delete of apps. Renames and deletes cascade
to licenses and activations inside the repository transaction.
"""

import logging
import uuid
from typing import List, Tuple

from catalog.application.commands.app_commands import (
    CreateAppCommand,
    DeleteAppCommand,
    UpdateAppCommand,
)
from catalog.application.dto.app_dto import AppDTO
from catalog.domain.app import App
from catalog.domain.events import AppCreated, AppDeleted, AppRenamed
from catalog.ports.app_repository import AppRepository, CascadeResult
from core.domain.exceptions import AppNotFoundError
from core.infrastructure.events import event_bus

logger = logging.getLogger(__name__)


class CreateAppHandler:
    """Handler for CreateAppCommand."""

    def __init__(self, app_repository: AppRepository):
        """Initialize handler with repository."""
        self.app_repository = app_repository

    async def create(self, command: CreateAppCommand) -> Tuple[App, bool]:
        """
        Return the app named ``command.name``, creating it if needed.

        Returns:
            (app, created) tuple
        """
        name = (command.name or "").strip()
        existing = await self.app_repository.find_by_name(name)
        if existing:
            return existing, False

        app = App.create(name=name, metadata=command.metadata)
        taken = {other.slug for other in await self.app_repository.list_all()}
        if app.slug in taken:
            app = app.with_id_suffix()

        saved = await self.app_repository.save(app)
        await event_bus.publish(AppCreated(app_id=saved.id, name=saved.name))
        return saved, True

    async def handle(self, command: CreateAppCommand) -> AppDTO:
        """
        Handle create app command.

        Args:
            command: CreateAppCommand

        Returns:
            AppDTO of the new or already existing app
        """
        app, _ = await self.create(command)
        return AppDTO.from_entity(app)


class UpdateAppHandler:
    """Handler for UpdateAppCommand."""

    def __init__(self, app_repository: AppRepository):
        """Initialize handler with repository."""
        self.app_repository = app_repository

    async def handle(self, command: UpdateAppCommand) -> AppDTO:
        """
        Handle update app command.

        Args:
            command: UpdateAppCommand

        Returns:
            AppDTO after the update

        Raises:
            AppNotFoundError: If app not found
            AppNameConflictError: If another app already has the new name
        """
        change = await self.app_repository.update_cascading(
            command.app_id, name=command.name, status=command.status
        )
        if not change:
            raise AppNotFoundError()

        if change.renamed:
            logger.info(
                "App renamed",
                extra={
                    "app_id": str(change.app.id),
                    "old_name": change.previous_name,
                    "new_name": change.app.name,
                    "licenses_updated": change.cascade.licenses,
                    "activations_updated": change.cascade.activations,
                },
            )
            await event_bus.publish(
                AppRenamed(
                    app_id=change.app.id,
                    old_name=change.previous_name,
                    new_name=change.app.name,
                    licenses_updated=change.cascade.licenses,
                    activations_updated=change.cascade.activations,
                )
            )

        return AppDTO.from_entity(change.app)


class DeleteAppHandler:
    """Handler for DeleteAppCommand."""

    def __init__(self, app_repository: AppRepository):
        """Initialize handler with repository."""
        self.app_repository = app_repository

    async def handle(self, command: DeleteAppCommand) -> CascadeResult:
        """
        Handle delete app command.

        Raises:
            AppNotFoundError: If app not found
        """
        app = await self.app_repository.find_by_id(command.app_id)
        if not app:
            raise AppNotFoundError()

        result = await self.app_repository.delete_cascading(app)
        await event_bus.publish(
            AppDeleted(
                app_id=app.id,
                name=app.name,
                licenses_deleted=result.licenses,
                activations_deleted=result.activations,
            )
        )
        return result


class AppQueryHandler:
    """Read side of the catalog."""

    def __init__(self, app_repository: AppRepository):
        self.app_repository = app_repository

    async def list_apps(self) -> List[AppDTO]:
        apps = await self.app_repository.list_all()
        return [AppDTO.from_entity(app) for app in apps]

    async def get_app(self, app_id: uuid.UUID) -> AppDTO:
        """
        Raises:
            AppNotFoundError: If app not found
        """
        app = await self.app_repository.find_by_id(app_id)
        if not app:
            raise AppNotFoundError()
        return AppDTO.from_entity(app)
