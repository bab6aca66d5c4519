"""
Django implementation of AppRepository port.

This adapter converts between domain entities and Django ORM models
and owns the rename and delete cascades.
"""

import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.utils import timezone

from activations.infrastructure.models import Activation as ActivationModel
from activations.infrastructure.models import ActivationLog as ActivationLogModel
from catalog.domain.app import App
from catalog.domain.identifiers import resolve_identifier
from catalog.infrastructure.models import App as AppModel
from catalog.ports.app_repository import AppRepository, AppUpdate, CascadeResult
from core.domain.exceptions import AppNameConflictError
from core.domain.value_objects import AppStatus
from licenses.infrastructure.models import License as LicenseModel


class DjangoAppRepository(AppRepository):
    """Django ORM implementation of AppRepository."""

    def _to_domain(self, model: AppModel) -> App:
        """
        Convert Django model to domain entity.

        Args:
            model: Django App model

        Returns:
            App domain entity
        """
        return App(
            id=model.id,
            name=model.name,
            slug=model.slug,
            status=AppStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
            metadata=model.metadata or {},
        )

    def _write(self, app: App) -> AppModel:
        # pylint: disable=no-member
        model, _ = AppModel.objects.update_or_create(
            id=app.id,
            defaults={
                "name": app.name,
                "slug": app.slug,
                "status": app.status.value,
                "metadata": app.metadata,
            },
        )
        return model

    async def save(self, app: App) -> App:
        """
        Insert or update an app row (no cascade).

        Args:
            app: App entity to save

        Returns:
            Saved app entity
        """
        model = await sync_to_async(self._write)(app)
        return self._to_domain(model)

    async def find_by_id(self, app_id: uuid.UUID) -> Optional[App]:
        """Find an app by ID."""
        try:
            # pylint: disable=no-member
            model = await sync_to_async(AppModel.objects.get)(id=app_id)
            return self._to_domain(model)
        except (AppModel.DoesNotExist, ValidationError):  # pylint: disable=no-member
            return None

    async def find_by_name(self, name: str) -> Optional[App]:
        """Find an app by its exact (trimmed) name."""
        try:
            # pylint: disable=no-member
            model = await sync_to_async(AppModel.objects.get)(name=(name or "").strip())
            return self._to_domain(model)
        except AppModel.DoesNotExist:  # pylint: disable=no-member
            return None

    async def find_by_identifier(self, identifier: str) -> Optional[App]:
        """
        Resolve a loosely typed identifier to an app.

        The catalog is small, so candidates are matched in Python.
        """
        apps = await self.list_all()
        return resolve_identifier(identifier, apps, lambda app: app.name, lambda app: app.slug)

    async def list_all(self) -> List[App]:
        """List apps ordered by name."""
        models = await sync_to_async(
            lambda: list(AppModel.objects.order_by("name"))  # pylint: disable=no-member
        )()
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def update_cascading(
        self,
        app_id: uuid.UUID,
        name: Optional[str] = None,
        status: Optional[AppStatus] = None,
    ) -> Optional[AppUpdate]:
        """
        Rename and/or change the status of an app, moving licenses and
        activations from the stored name to the new one, atomically.
        """
        result = CascadeResult()
        # pylint: disable=no-member
        try:
            with transaction.atomic():
                model = AppModel.objects.select_for_update().filter(id=app_id).first()
                if model is None:
                    return None
                current = self._to_domain(model)
                updated = current.update(name=name, status=status)
                others = AppModel.objects.exclude(id=app_id)
                if updated.name != current.name and others.filter(name=updated.name).exists():
                    raise AppNameConflictError()
                if others.filter(slug=updated.slug).exists():
                    updated = updated.with_id_suffix()

                model.name = updated.name
                model.slug = updated.slug
                model.status = updated.status.value
                model.save(update_fields=["name", "slug", "status", "updated_at"])

                if updated.name != current.name:
                    now = timezone.now()
                    result.licenses = LicenseModel.objects.filter(app_name=current.name).update(
                        app_name=updated.name, updated_at=now
                    )
                    result.activations = ActivationModel.objects.filter(
                        app_name=current.name
                    ).update(app_name=updated.name, updated_at=now)
        except IntegrityError:
            raise AppNameConflictError() from None
        return AppUpdate(app=self._to_domain(model), previous_name=current.name, cascade=result)

    @sync_to_async
    def delete_cascading(self, app: App) -> CascadeResult:
        """Delete an app with its activation logs, activations and licenses, atomically."""
        result = CascadeResult()
        with transaction.atomic():
            # pylint: disable=no-member
            model = AppModel.objects.select_for_update().filter(id=app.id).first()
            if model is None:
                return result
            activations = ActivationModel.objects.filter(app_name=model.name)
            result.activation_logs, _ = ActivationLogModel.objects.filter(
                activation__in=activations
            ).delete()
            result.activations, _ = activations.delete()
            result.licenses, _ = LicenseModel.objects.filter(app_name=model.name).delete()
            model.delete()
        return result
