"""
Activation administration handlers.

Pending activations, approval and revocation by an administrator,
plus the ledger read side used by the dashboard.
"""

from typing import List

from activations.application.commands.activation_commands import (
    ChangeActivationStatusCommand,
    CreatePendingActivationCommand,
)
from activations.application.dto.activation_dto import (
    ActivationDetailDTO,
    ActivationDTO,
    ActivationLogDTO,
    ActivationStatsDTO,
)
from activations.application.queries.activation_queries import GetActivationQuery
from activations.domain.activation import Activation
from activations.domain.events import ActivationStatusChanged
from activations.ports.activation_repository import ActivationRepository
from core.domain.exceptions import ActivationExistsError, ActivationNotFoundError
from core.domain.value_objects import ActivationAction, ActivationStatus, ActivationTriple
from core.infrastructure.events import event_bus


class CreatePendingActivationHandler:
    """Handler for CreatePendingActivationCommand."""

    def __init__(self, activation_repository: ActivationRepository):
        """Initialize handler with repository."""
        self.activation_repository = activation_repository

    async def handle(self, command: CreatePendingActivationCommand) -> ActivationDTO:
        """
        Handle create pending activation command.

        Args:
            command: CreatePendingActivationCommand

        Returns:
            ActivationDTO of the pending row

        Raises:
            ActivationExistsError: If the machine already has a row for the license
        """
        triple = ActivationTriple(command.app_name.strip(), command.license_key, command.machine_id)
        if await self.activation_repository.find_by_triple(triple):
            raise ActivationExistsError()

        activation = Activation.create(
            triple=triple,
            app_version=command.app_version,
            status=ActivationStatus.PENDING,
            metadata=command.metadata,
        )
        saved = await self.activation_repository.create_pending(activation, command.context)

        await event_bus.publish(
            ActivationStatusChanged(
                activation_id=saved.id,
                status=saved.status.value,
                action=ActivationAction.CREATED.value,
            )
        )
        return ActivationDTO.from_entity(saved)


class ChangeActivationStatusHandler:
    """Approve or revoke an activation, one log entry per change."""

    def __init__(self, activation_repository: ActivationRepository):
        """Initialize handler with repository."""
        self.activation_repository = activation_repository

    async def approve(self, command: ChangeActivationStatusCommand) -> ActivationDTO:
        """
        Move an activation to active and refresh ``activated_at``.

        Raises:
            ActivationNotFoundError: If activation not found
        """
        activation = await self._get(command)
        return await self._apply(command, activation.approve(), ActivationAction.APPROVED)

    async def revoke(self, command: ChangeActivationStatusCommand) -> ActivationDTO:
        """
        Move an activation to revoked.

        Raises:
            ActivationNotFoundError: If activation not found
        """
        activation = await self._get(command)
        return await self._apply(command, activation.revoke(), ActivationAction.REVOKED)

    async def _get(self, command: ChangeActivationStatusCommand) -> Activation:
        activation = await self.activation_repository.find_by_id(command.activation_id)
        if not activation:
            raise ActivationNotFoundError()
        return activation

    async def _apply(
        self,
        command: ChangeActivationStatusCommand,
        activation: Activation,
        action: ActivationAction,
    ) -> ActivationDTO:
        saved = await self.activation_repository.transition(activation, action, context=command.context)
        await event_bus.publish(
            ActivationStatusChanged(
                activation_id=saved.id, status=saved.status.value, action=action.value
            )
        )
        return ActivationDTO.from_entity(saved)


class ActivationQueryHandler:
    """Read side of the activation ledger."""

    def __init__(self, activation_repository: ActivationRepository):
        self.activation_repository = activation_repository

    async def list_activations(self) -> List[ActivationDTO]:
        activations = await self.activation_repository.list_all()
        return [ActivationDTO.from_entity(activation) for activation in activations]

    async def get_activation(self, query: GetActivationQuery) -> ActivationDetailDTO:
        """
        Raises:
            ActivationNotFoundError: If activation not found
        """
        activation = await self.activation_repository.find_by_id(query.activation_id)
        if not activation:
            raise ActivationNotFoundError()
        logs = await self.activation_repository.find_logs(activation.id)
        return ActivationDetailDTO(
            activation=ActivationDTO.from_entity(activation),
            logs=[ActivationLogDTO.from_entry(entry) for entry in logs],
        )

    async def stats(self) -> ActivationStatsDTO:
        return ActivationStatsDTO.from_stats(await self.activation_repository.stats())
