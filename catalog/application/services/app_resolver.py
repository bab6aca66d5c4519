"""
App resolution service.

Maps the app identifier a client or administrator typed to the
canonical app name stored on licenses and activations.
"""

from typing import Optional

from catalog.application.commands.app_commands import CreateAppCommand
from catalog.application.handlers.app_handlers import CreateAppHandler
from catalog.domain.app import App
from catalog.ports.app_repository import AppRepository
from core.domain.exceptions import AppNotRegisteredError


class AppResolver:
    """Resolve identifiers against the app catalog."""

    def __init__(self, app_repository: AppRepository):
        self.app_repository = app_repository

    async def canonical_name(self, identifier: Optional[str]) -> str:
        """
        Canonical app name for an identifier.

        Falls back to the trimmed input when no app matches, so that
        licenses stored under a name absent from the catalog still work.
        """
        normalized = (identifier or "").strip()
        app = await self.app_repository.find_by_identifier(normalized)
        return app.name if app else normalized

    async def resolve_or_create(self, identifier: Optional[str]) -> App:
        """
        App for an identifier, creating it by name when nothing matches.

        Raises:
            AppNotRegisteredError: If the identifier is empty
        """
        normalized = (identifier or "").strip()
        if not normalized:
            raise AppNotRegisteredError()

        app = await self.app_repository.find_by_identifier(normalized)
        if app:
            return app

        app, _ = await CreateAppHandler(self.app_repository).create(CreateAppCommand(name=normalized))
        return app
