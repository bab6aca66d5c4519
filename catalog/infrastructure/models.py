"""
App Django ORM model.

This is the infrastructure layer model for the app catalog.
Domain entities are in catalog.domain.app.
"""

import uuid

from django.db import models


class App(models.Model):
    """An application licenses are issued for."""

    STATUS_CHOICES = [
        ("active", "Active"),
        ("inactive", "Inactive"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=120, unique=True, help_text="Display name, referenced by licenses")
    slug = models.CharField(max_length=120, unique=True, help_text="URL-safe identifier")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="active")
    metadata = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "catalog"
        db_table = "apps"
        ordering = ["name"]

    def __str__(self):
        return self.name
