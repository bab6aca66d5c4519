"""
Activation and ActivationLog Django ORM models.

This is the infrastructure layer model for activations.
Domain entities are in activations.domain.
"""

import uuid

from django.db import models


class Activation(models.Model):
    """
    One machine's use of a license.

    Consumes a seat while its status is ``active``.
    """

    STATUS_CHOICES = [
        ("pending", "Pending"),
        ("active", "Active"),
        ("revoked", "Revoked"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    app_name = models.CharField(max_length=120)
    app_version = models.CharField(max_length=64)
    license_key = models.CharField(max_length=128)
    machine_id = models.CharField(max_length=256)
    shop_name = models.CharField(max_length=255, null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending")
    activated_at = models.DateTimeField(null=True, blank=True)
    expires_at = models.DateTimeField(null=True, blank=True)
    metadata = models.JSONField(null=True, blank=True)
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        app_label = "activations"
        db_table = "activations"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["app_name", "license_key", "machine_id"],
                name="activations_app_key_machine_uniq",
            ),
        ]
        indexes = [
            models.Index(
                fields=["app_name", "license_key", "status"], name="activations_seat_count_idx"
            ),
        ]

    def __str__(self):
        return f"{self.app_name} / {self.license_key} @ {self.machine_id}"


class ActivationLog(models.Model):
    """Immutable audit trail of activation state changes."""

    ACTION_CHOICES = [
        ("activated", "Activated"),
        ("reactivated", "Reactivated"),
        ("created", "Created"),
        ("approved", "Approved"),
        ("revoked", "Revoked"),
        ("deactivated", "Deactivated"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    activation = models.ForeignKey(Activation, on_delete=models.CASCADE, related_name="logs")
    action = models.CharField(max_length=20, choices=ACTION_CHOICES)
    ip_address = models.CharField(max_length=64, null=True, blank=True)
    user_agent = models.TextField(null=True, blank=True)
    metadata = models.JSONField(null=True, blank=True)
    created_at = models.DateTimeField()

    class Meta:
        app_label = "activations"
        db_table = "activation_logs"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["activation", "created_at"], name="activation_logs_lookup_idx"),
        ]

    def __str__(self):
        return f"{self.action} - {self.activation_id}"
