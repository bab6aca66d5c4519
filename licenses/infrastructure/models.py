"""
License Django ORM model.

This is the infrastructure layer model for licenses.
Domain entities are in licenses.domain.license.
"""

import uuid

from django.db import models


class License(models.Model):
    """
    A license key issued for one app.

    Activations refer to a license by ``(app_name, license_key)`` rather
    than by foreign key, so renaming an app rewrites both tables.
    """

    STATUS_CHOICES = [
        ("active", "Active"),
        ("revoked", "Revoked"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    app_name = models.CharField(max_length=120, db_index=True)
    license_key = models.CharField(max_length=64)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="active")
    max_activations = models.PositiveIntegerField(default=1, help_text="Maximum concurrent activations")
    expires_at = models.DateTimeField(null=True, blank=True)
    metadata = models.JSONField(null=True, blank=True, help_text="May carry lockedMachineId")
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        app_label = "licenses"
        db_table = "licenses"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["app_name", "license_key"], name="licenses_app_name_license_key_uniq"
            ),
        ]
        indexes = [
            models.Index(fields=["status"], name="licenses_status_idx"),
        ]

    def __str__(self):
        return f"{self.app_name} / {self.license_key}"
