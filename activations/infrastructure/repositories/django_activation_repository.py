"""
Django implementation of ActivationRepository port.

This adapter converts between domain entities and Django ORM models.
"""

import uuid
from typing import Any, Dict, List, Optional

from asgiref.sync import sync_to_async
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import Count, Q

from activations.domain.activation import Activation
from activations.domain.activation_log import ActivationLogEntry, RequestContext
from activations.domain.services import SeatManager
from activations.infrastructure.models import Activation as ActivationModel
from activations.infrastructure.models import ActivationLog as ActivationLogModel
from activations.ports.activation_repository import (
    ActivationRepository,
    ActivationStats,
    SeatClaim,
)
from core.domain.exceptions import (
    ActivationExistsError,
    ActivationNotFoundError,
    LicenseNotFoundError,
)
from core.domain.value_objects import (
    ActivationAction,
    ActivationStatus,
    ActivationTriple,
)
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel


class DjangoActivationRepository(ActivationRepository):
    """
    Django ORM implementation of ActivationRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Runs each state change and its log entry in one transaction
    """

    def _to_domain(self, model: ActivationModel) -> Activation:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Activation model

        Returns:
            Activation domain entity
        """
        return Activation(
            id=model.id,
            app_name=model.app_name,
            app_version=model.app_version,
            license_key=model.license_key,
            machine_id=model.machine_id,
            shop_name=model.shop_name,
            status=ActivationStatus(model.status),
            activated_at=model.activated_at,
            expires_at=model.expires_at,
            metadata=model.metadata,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _log_to_domain(self, model: ActivationLogModel) -> ActivationLogEntry:
        return ActivationLogEntry(
            id=model.id,
            activation_id=model.activation_id,
            action=ActivationAction(model.action),
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            metadata=model.metadata,
            created_at=model.created_at,
        )

    def _write(self, activation: Activation) -> ActivationModel:
        """Insert or update the row for an activation entity."""
        # pylint: disable=no-member
        model, _ = ActivationModel.objects.update_or_create(
            id=activation.id,
            defaults={
                "app_name": activation.app_name,
                "app_version": activation.app_version,
                "license_key": activation.license_key,
                "machine_id": activation.machine_id,
                "shop_name": activation.shop_name,
                "status": activation.status.value,
                "activated_at": activation.activated_at,
                "expires_at": activation.expires_at,
                "metadata": activation.metadata,
                "created_at": activation.created_at,
                "updated_at": activation.updated_at,
            },
        )
        return model

    def _append_log(self, entry: ActivationLogEntry) -> None:
        # pylint: disable=no-member
        ActivationLogModel.objects.create(
            id=entry.id,
            activation_id=entry.activation_id,
            action=entry.action.value,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            metadata=entry.metadata,
            created_at=entry.created_at,
        )

    def _count_active_sync(self, app_name: str, license_key: str) -> int:
        return ActivationModel.objects.filter(  # pylint: disable=no-member
            app_name=app_name,
            license_key=license_key,
            status=ActivationStatus.ACTIVE.value,
        ).count()

    async def find_by_id(self, activation_id: uuid.UUID) -> Optional[Activation]:
        """
        Find an activation by ID.

        Args:
            activation_id: Activation UUID

        Returns:
            Activation entity or None if not found
        """
        try:
            # pylint: disable=no-member
            model = await sync_to_async(ActivationModel.objects.get)(id=activation_id)
            return self._to_domain(model)
        except (ActivationModel.DoesNotExist, ValidationError):  # pylint: disable=no-member
            return None

    async def find_by_triple(self, triple: ActivationTriple) -> Optional[Activation]:
        """
        Find the activation of one machine under one license.

        Args:
            triple: (app name, license key, machine id)

        Returns:
            Activation entity or None if not found
        """
        try:
            # pylint: disable=no-member
            model = await sync_to_async(ActivationModel.objects.get)(
                app_name=triple.app_name,
                license_key=triple.license_key,
                machine_id=triple.machine_id,
            )
            return self._to_domain(model)
        except (ActivationModel.DoesNotExist, ValidationError):  # pylint: disable=no-member
            return None

    async def count_active(self, app_name: str, license_key: str) -> int:
        """Count activations of a license whose status is exactly ACTIVE."""
        return await sync_to_async(self._count_active_sync)(app_name, license_key)

    def _claim_seat_sync(
        self,
        license: License,
        triple: ActivationTriple,
        app_version: str,
        metadata: Optional[Dict[str, Any]],
        context: Optional[RequestContext],
    ) -> SeatClaim:
        with transaction.atomic():
            # Row lock on the license serialises concurrent claims for it.
            # pylint: disable=no-member
            locked = (
                LicenseModel.objects.select_for_update()
                .filter(id=license.id)
                .values("max_activations")
                .first()
            )
            if locked is None:
                raise LicenseNotFoundError()

            existing_model = ActivationModel.objects.select_for_update().filter(
                app_name=triple.app_name,
                license_key=triple.license_key,
                machine_id=triple.machine_id,
            ).first()
            existing = self._to_domain(existing_model) if existing_model else None

            active_count = self._count_active_sync(triple.app_name, triple.license_key)
            SeatManager.ensure_seat(existing, active_count, locked["max_activations"])

            if existing:
                activation = existing.reactivate(app_version, metadata, license.expires_at)
                action = ActivationAction.REACTIVATED
            else:
                activation = Activation.create(
                    triple=triple,
                    app_version=app_version,
                    metadata=metadata,
                    expires_at=license.expires_at,
                )
                action = ActivationAction.ACTIVATED

            self._write(activation)
            self._append_log(
                ActivationLogEntry.record(
                    activation.id, action, context, metadata={"appVersion": app_version}
                )
            )
            used = self._count_active_sync(triple.app_name, triple.license_key)

        return SeatClaim(activation=activation, reactivated=existing is not None, used_activations=used)

    async def claim_seat(
        self,
        license: License,
        triple: ActivationTriple,
        app_version: str,
        metadata: Optional[Dict[str, Any]] = None,
        context: Optional[RequestContext] = None,
    ) -> SeatClaim:
        """
        Activate a machine under a license, serialised per license.

        Raises:
            SeatLimitExceededError: If no seat is free
            LicenseNotFoundError: If the license was deleted meanwhile
        """
        return await sync_to_async(self._claim_seat_sync)(
            license, triple, app_version, metadata, context
        )

    def _create_pending_sync(
        self, activation: Activation, context: Optional[RequestContext]
    ) -> Activation:
        try:
            with transaction.atomic():
                # pylint: disable=no-member
                ActivationModel.objects.create(
                    id=activation.id,
                    app_name=activation.app_name,
                    app_version=activation.app_version,
                    license_key=activation.license_key,
                    machine_id=activation.machine_id,
                    shop_name=activation.shop_name,
                    status=activation.status.value,
                    activated_at=activation.activated_at,
                    expires_at=activation.expires_at,
                    metadata=activation.metadata,
                    created_at=activation.created_at,
                    updated_at=activation.updated_at,
                )
                self._append_log(
                    ActivationLogEntry.record(
                        activation.id,
                        ActivationAction.CREATED,
                        context,
                        metadata={"appVersion": activation.app_version},
                    )
                )
        except IntegrityError:
            raise ActivationExistsError() from None
        return activation

    async def create_pending(
        self, activation: Activation, context: Optional[RequestContext] = None
    ) -> Activation:
        """
        Insert a PENDING activation with a ``created`` log entry.

        Raises:
            ActivationExistsError: If the triple already has a row
        """
        return await sync_to_async(self._create_pending_sync)(activation, context)

    def _transition_sync(
        self,
        activation: Activation,
        action: ActivationAction,
        context: Optional[RequestContext],
        metadata: Optional[Dict[str, Any]],
    ) -> Activation:
        with transaction.atomic():
            # pylint: disable=no-member
            model = ActivationModel.objects.select_for_update().filter(id=activation.id).first()
            if model is None:
                raise ActivationNotFoundError()
            model.status = activation.status.value
            model.activated_at = activation.activated_at
            model.updated_at = activation.updated_at
            model.save(update_fields=["status", "activated_at", "updated_at"])
            self._append_log(ActivationLogEntry.record(activation.id, action, context, metadata))
        return self._to_domain(model)

    async def transition(
        self,
        activation: Activation,
        action: ActivationAction,
        context: Optional[RequestContext] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Activation:
        """
        Persist a status change with exactly one log entry, atomically.

        Only status, ``activated_at`` and ``updated_at`` are written; the
        rest of the row is left as stored.

        Raises:
            ActivationNotFoundError: If the row no longer exists
        """
        return await sync_to_async(self._transition_sync)(activation, action, context, metadata)

    async def list_all(self) -> List[Activation]:
        """List activations, newest first."""
        models = await sync_to_async(
            lambda: list(ActivationModel.objects.order_by("-created_at"))  # pylint: disable=no-member
        )()
        return [self._to_domain(model) for model in models]

    async def find_logs(self, activation_id: uuid.UUID) -> List[ActivationLogEntry]:
        """List log entries of an activation, newest first."""
        models = await sync_to_async(
            lambda: list(
                ActivationLogModel.objects.filter(  # pylint: disable=no-member
                    activation_id=activation_id
                ).order_by("-created_at")
            )
        )()
        return [self._log_to_domain(model) for model in models]

    async def stats(self) -> ActivationStats:
        """Count activations by status."""
        counts = await sync_to_async(
            lambda: ActivationModel.objects.aggregate(  # pylint: disable=no-member
                total=Count("id"),
                active=Count("id", filter=Q(status=ActivationStatus.ACTIVE.value)),
                pending=Count("id", filter=Q(status=ActivationStatus.PENDING.value)),
                revoked=Count("id", filter=Q(status=ActivationStatus.REVOKED.value)),
            )
        )()
        return ActivationStats(
            total=counts["total"],
            active=counts["active"],
            pending=counts["pending"],
            revoked=counts["revoked"],
        )
