"""
ValidateActivationHandler.

Handler for checking an activation token against live state.
"""

import logging
from typing import Optional

from django.conf import settings

from activations.application.commands.activation_commands import ValidateActivationCommand
from activations.application.dto.activation_dto import SeatUsageDTO, ValidationOutcome
from activations.application.handlers.token_context import TokenContextResolver
from activations.ports.activation_repository import ActivationRepository
from catalog.ports.app_repository import AppRepository
from core.domain.exceptions import (
    ActivationNotActiveError,
    DomainException,
    LicenseNotActiveError,
)
from core.domain.value_objects import ActivationTriple, LicenseStatus
from core.infrastructure.tokens import ActivationTokenCodec
from core.metrics import validations_total
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class ValidateActivationHandler:
    """
    Handler for ValidateActivationCommand.

    The token only names the (license, app, machine) binding; every
    check reads the registry and ledger again.
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

    async def handle(self, command: ValidateActivationCommand) -> ValidationOutcome:
        """
        Handle validate activation command.

        Args:
            command: ValidateActivationCommand

        Returns:
            ValidationOutcome, valid or with the rejection reason
        """
        try:
            claims = await self.token_context.verify(
                command.activation_token,
                command.app_name or settings.ACTIVATION_APP_NAME,
                command.machine_id,
            )

            license = await self.license_repository.find_by_id(claims.license_id)
            if not license or license.status != LicenseStatus.ACTIVE:
                raise LicenseNotActiveError()
            license.ensure_usable()

            activation = await self.activation_repository.find_by_triple(
                ActivationTriple(claims.app_name, license.license_key, claims.machine_id)
            )
            if not activation or not activation.is_active:
                raise ActivationNotActiveError()
        except DomainException as e:
            validations_total.labels(result=e.code).inc()
            logger.info(
                "Validation rejected",
                extra={"machine_id": command.machine_id, "reason": e.code},
            )
            return ValidationOutcome.rejected(e.message)

        used = await self.activation_repository.count_active(claims.app_name, license.license_key)
        validations_total.labels(result="ok").inc()

        return ValidationOutcome(
            valid=True,
            license_id=license.id,
            app_name=license.app_name,
            license_expires_at=license.expires_at,
            activation_id=activation.id,
            activation_status=activation.status.value,
            activation_expires_at=activation.expires_at,
            usage=SeatUsageDTO(
                activation_type=license.activation_type.value,
                max_activations=license.max_activations,
                used_activations=used,
            ),
        )
