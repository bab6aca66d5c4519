"""
Django admin configuration for licenses app.
"""
from django.contrib import admin
from django.utils.html import format_html

from activations.infrastructure.models import Activation
from licenses.infrastructure.models import License


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """Admin interface for License model."""

    list_display = [
        "license_key",
        "app_name",
        "status_display",
        "max_activations",
        "seats_used",
        "expires_at",
        "created_at",
    ]
    list_filter = ["status", "app_name", "expires_at", "created_at"]
    search_fields = ["license_key", "app_name"]
    readonly_fields = [
        "id",
        "app_name",
        "license_key",
        "created_at",
        "updated_at",
        "seats_used",
    ]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "app_name", "license_key", "status"),
            },
        ),
        (
            "Seat Configuration",
            {
                "fields": ("max_activations", "seats_used", "metadata"),
            },
        ),
        (
            "Expiration",
            {
                "fields": ("expires_at",),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def status_display(self, obj):
        """Display status with color coding."""
        color = "green" if obj.status == "active" else "red"
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color,
            obj.status.upper(),
        )

    status_display.short_description = "Status"

    def seats_used(self, obj):
        """Display number of active activations."""
        return Activation.objects.filter(  # pylint: disable=no-member
            app_name=obj.app_name, license_key=obj.license_key, status="active"
        ).count()

    seats_used.short_description = "Seats Used"
