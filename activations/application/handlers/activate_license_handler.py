"""
ActivateLicenseHandler.

Handler for activating a license on a machine.
"""

import logging
from typing import Optional, Union

from django.conf import settings

from activations.application.commands.activation_commands import ActivateLicenseCommand
from activations.application.dto.activation_dto import (
    ActivationFailure,
    ActivationResult,
    SeatUsageDTO,
)
from activations.domain.events import LicenseActivated
from activations.domain.services import SeatManager, token_expiry
from activations.ports.activation_repository import ActivationRepository
from catalog.application.services.app_resolver import AppResolver
from catalog.ports.app_repository import AppRepository
from core.domain.events import utc_now
from core.domain.exceptions import (
    DomainException,
    LicenseNotFoundError,
    SeatLimitExceededError,
)
from core.domain.value_objects import ActivationTriple
from core.infrastructure.events import event_bus
from core.infrastructure.tokens import ActivationTokenCodec, get_activation_token_codec
from core.metrics import activation_attempts_total
from licenses.domain.license import License
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class ActivateLicenseHandler:
    """Handler for ActivateLicenseCommand."""

    def __init__(
        self,
        app_repository: AppRepository,
        license_repository: LicenseRepository,
        activation_repository: ActivationRepository,
        token_codec: Optional[ActivationTokenCodec] = None,
    ):
        """Initialize handler with repositories."""
        self.app_resolver = AppResolver(app_repository)
        self.license_repository = license_repository
        self.activation_repository = activation_repository
        self.token_codec = token_codec or get_activation_token_codec()

    async def handle(
        self, command: ActivateLicenseCommand
    ) -> Union[ActivationResult, ActivationFailure]:
        """
        Handle activate license command.

        Args:
            command: ActivateLicenseCommand

        Returns:
            ActivationResult with a fresh token, or ActivationFailure
        """
        app_name = await self.app_resolver.canonical_name(
            command.app_name or settings.ACTIVATION_APP_NAME
        )
        license = None
        try:
            license = await self.license_repository.find_by_app_and_key(
                app_name, command.license_key
            )
            if not license:
                raise LicenseNotFoundError()

            license.ensure_usable()
            SeatManager.ensure_machine_allowed(license, command.machine_id)

            claim = await self.activation_repository.claim_seat(
                license,
                ActivationTriple(app_name, command.license_key, command.machine_id),
                command.app_version,
                metadata=command.metadata,
                context=command.context,
            )
        except DomainException as e:
            activation_attempts_total.labels(result=e.code).inc()
            logger.info(
                "Activation rejected",
                extra={"app_name": app_name, "machine_id": command.machine_id, "reason": e.code},
            )
            return ActivationFailure(
                status_code=e.status_code,
                error=e.message,
                code=e.code,
                usage=await self._usage_on_conflict(e, license),
            )

        expires_at = token_expiry(license, utc_now(), settings.ACTIVATION_TOKEN_TTL_DAYS)
        token = self.token_codec.issue(
            license_id=str(license.id),
            app_name=app_name,
            machine_id=command.machine_id,
            expires_at=expires_at,
        )

        activation_attempts_total.labels(result="ok").inc()
        await event_bus.publish(
            LicenseActivated(
                activation_id=claim.activation.id,
                license_id=license.id,
                app_name=app_name,
                machine_id=command.machine_id,
                reactivated=claim.reactivated,
                used_activations=claim.used_activations,
            )
        )

        return ActivationResult(
            activation_token=token,
            token_expires_at=expires_at,
            activation_id=claim.activation.id,
            app_name=app_name,
            machine_id=command.machine_id,
            status=claim.activation.status.value,
            license_id=license.id,
            license_expires_at=license.expires_at,
            usage=SeatUsageDTO(
                activation_type=license.activation_type.value,
                max_activations=license.max_activations,
                used_activations=claim.used_activations,
            ),
            reactivated=claim.reactivated,
        )

    async def _usage_on_conflict(
        self, error: DomainException, license: Optional[License]
    ) -> Optional[SeatUsageDTO]:
        """Seat usage to report alongside a seat-limit rejection."""
        if not isinstance(error, SeatLimitExceededError) or license is None:
            return None
        used = await self.activation_repository.count_active(license.app_name, license.license_key)
        return SeatUsageDTO(
            activation_type=license.activation_type.value,
            max_activations=license.max_activations,
            used_activations=used,
        )
