"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""

import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Count, IntegerField, OuterRef, Subquery, Value
from django.db.models.functions import Coalesce

from activations.infrastructure.models import Activation as ActivationModel
from activations.infrastructure.models import ActivationLog as ActivationLogModel
from core.domain.value_objects import ActivationStatus, LicenseStatus
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import LicenseRepository, LicenseWithUsage


def _active_count_subquery():
    """Correlated count of ACTIVE activations for each license row."""
    active = (
        ActivationModel.objects.filter(  # pylint: disable=no-member
            app_name=OuterRef("app_name"),
            license_key=OuterRef("license_key"),
            status=ActivationStatus.ACTIVE.value,
        )
        .order_by()
        .values("license_key")
        .annotate(total=Count("id"))
        .values("total")
    )
    return Coalesce(Subquery(active, output_field=IntegerField()), Value(0))


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        return License(
            id=model.id,
            app_name=model.app_name,
            license_key=model.license_key,
            status=LicenseStatus(model.status),
            max_activations=model.max_activations,
            expires_at=model.expires_at,
            metadata=model.metadata,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _with_usage(self, model: LicenseModel) -> LicenseWithUsage:
        return LicenseWithUsage(license=self._to_domain(model), active_activations=model.active_count)

    @sync_to_async
    def save(self, license: License) -> License:
        """
        Save a license entity.

        Args:
            license: License entity to save

        Returns:
            Saved license entity
        """
        # pylint: disable=no-member
        model, _ = LicenseModel.objects.update_or_create(
            id=license.id,
            defaults={
                "app_name": license.app_name,
                "license_key": license.license_key,
                "status": license.status.value,
                "max_activations": license.max_activations,
                "expires_at": license.expires_at,
                "metadata": license.metadata,
                "created_at": license.created_at,
                "updated_at": license.updated_at,
            },
        )
        return self._to_domain(model)

    @sync_to_async
    def update_limits(
        self,
        license_id: uuid.UUID,
        max_activations: Optional[int] = None,
        status: Optional[LicenseStatus] = None,
    ) -> Optional[License]:
        """
        Change seat count and/or status of a stored license.

        Returns:
            License after the change, or None if it does not exist
        """
        # pylint: disable=no-member
        with transaction.atomic():
            model = LicenseModel.objects.select_for_update().filter(id=license_id).first()
            if model is None:
                return None
            updated = self._to_domain(model).with_limits(
                max_activations=max_activations, status=status
            )
            model.max_activations = updated.max_activations
            model.status = updated.status.value
            model.updated_at = updated.updated_at
            model.save(update_fields=["max_activations", "status", "updated_at"])
        return self._to_domain(model)

    async def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License UUID

        Returns:
            License entity or None if not found
        """
        try:
            # pylint: disable=no-member
            model = await sync_to_async(LicenseModel.objects.get)(id=license_id)
            return self._to_domain(model)
        except (LicenseModel.DoesNotExist, ValidationError):  # pylint: disable=no-member
            return None

    async def find_by_app_and_key(self, app_name: str, license_key: str) -> Optional[License]:
        """
        Find a license by app name and key.

        Args:
            app_name: Canonical app name
            license_key: License key

        Returns:
            License entity or None if not found
        """
        try:
            # pylint: disable=no-member
            model = await sync_to_async(LicenseModel.objects.get)(
                app_name=app_name, license_key=license_key
            )
            return self._to_domain(model)
        except LicenseModel.DoesNotExist:  # pylint: disable=no-member
            return None

    async def key_exists(self, app_name: str, license_key: str) -> bool:
        """Check whether a key is already used within an app."""
        return await sync_to_async(
            lambda: LicenseModel.objects.filter(  # pylint: disable=no-member
                app_name=app_name, license_key=license_key
            ).exists()
        )()

    @sync_to_async
    def list_with_usage(self, app_name_filter: Optional[str] = None) -> List[LicenseWithUsage]:
        """
        List licenses with active activation counts.

        Args:
            app_name_filter: Case-insensitive substring of the app name

        Returns:
            Licenses, newest first
        """
        # pylint: disable=no-member
        queryset = LicenseModel.objects.annotate(active_count=_active_count_subquery())
        needle = (app_name_filter or "").strip()
        if needle:
            queryset = queryset.filter(app_name__icontains=needle)
        return [self._with_usage(model) for model in queryset.order_by("-created_at")]

    @sync_to_async
    def get_with_usage(self, license_id: uuid.UUID) -> Optional[LicenseWithUsage]:
        """Find one license with its active activation count."""
        # pylint: disable=no-member
        model = (
            LicenseModel.objects.annotate(active_count=_active_count_subquery())
            .filter(id=license_id)
            .first()
        )
        return self._with_usage(model) if model else None

    @sync_to_async
    def delete_cascading(self, license_id: uuid.UUID) -> Optional[int]:
        """
        Delete a license with its activation logs and activations, atomically.

        Args:
            license_id: License UUID

        Returns:
            Number of activations deleted, or None if the license does not exist
        """
        # pylint: disable=no-member
        with transaction.atomic():
            model = LicenseModel.objects.select_for_update().filter(id=license_id).first()
            if model is None:
                return None
            activations = ActivationModel.objects.filter(
                app_name=model.app_name, license_key=model.license_key
            )
            ActivationLogModel.objects.filter(activation__in=activations).delete()
            deleted, _ = activations.delete()
            model.delete()
        return deleted
