"""
DeactivateActivationHandler.

Handler for giving a seat back with the activation token.
"""

import logging
from typing import Optional

from django.conf import settings

from activations.application.commands.activation_commands import DeactivateActivationCommand
from activations.application.dto.activation_dto import DeactivationOutcome, SeatUsageDTO
from activations.application.handlers.token_context import TokenContextResolver
from activations.domain.events import ActivationDeactivated
from activations.ports.activation_repository import ActivationRepository
from catalog.ports.app_repository import AppRepository
from core.domain.exceptions import (
    ActivationNotFoundError,
    DomainException,
    LicenseNotFoundError,
)
from core.domain.value_objects import ActivationAction, ActivationTriple
from core.infrastructure.events import event_bus
from core.infrastructure.tokens import ActivationTokenCodec
from core.metrics import deactivations_total
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class DeactivateActivationHandler:
    """
    Handler for DeactivateActivationCommand.

    The row is revoked, not deleted, and a ``deactivated`` log entry is
    written. A revoked or expired license does not block deactivation.
    """

    def __init__(
        self,
        app_repository: AppRepository,
        license_repository: LicenseRepository,
        activation_repository: ActivationRepository,
        token_codec: Optional[ActivationTokenCodec] = None,
    ):
        """Initialize handler with repositories."""
        self.token_context = TokenContextResolver(app_repository, token_codec)
        self.license_repository = license_repository
        self.activation_repository = activation_repository

    async def handle(self, command: DeactivateActivationCommand) -> DeactivationOutcome:
        """
        Handle deactivate activation command.

        Args:
            command: DeactivateActivationCommand

        Returns:
            DeactivationOutcome with the seat usage afterwards
        """
        try:
            claims = await self.token_context.verify(
                command.activation_token,
                command.app_name or settings.ACTIVATION_APP_NAME,
                command.machine_id,
            )

            license = await self.license_repository.find_by_id(claims.license_id)
            if not license:
                raise LicenseNotFoundError()

            activation = await self.activation_repository.find_by_triple(
                ActivationTriple(claims.app_name, license.license_key, claims.machine_id)
            )
            if not activation:
                raise ActivationNotFoundError()

            await self.activation_repository.transition(
                activation.revoke(), ActivationAction.DEACTIVATED, context=command.context
            )
        except DomainException as e:
            deactivations_total.labels(result=e.code).inc()
            logger.info(
                "Deactivation rejected",
                extra={"machine_id": command.machine_id, "reason": e.code},
            )
            return DeactivationOutcome.rejected(e.message)

        used = await self.activation_repository.count_active(claims.app_name, license.license_key)

        deactivations_total.labels(result="ok").inc()
        await event_bus.publish(
            ActivationDeactivated(
                activation_id=activation.id,
                license_id=license.id,
                app_name=claims.app_name,
                machine_id=claims.machine_id,
            )
        )

        return DeactivationOutcome(
            success=True,
            usage=SeatUsageDTO(
                activation_type=license.activation_type.value,
                max_activations=license.max_activations,
                used_activations=used,
            ),
        )
