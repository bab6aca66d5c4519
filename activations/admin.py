"""
Django admin configuration for activations app.
"""

from django.contrib import admin
from django.utils.html import format_html

from activations.infrastructure.models import Activation, ActivationLog


class ActivationLogInline(admin.TabularInline):
    """Read-only audit trail shown under an activation."""

    model = ActivationLog
    extra = 0
    can_delete = False
    readonly_fields = ["action", "ip_address", "user_agent", "metadata", "created_at"]

    def has_add_permission(self, request, obj=None):
        """Audit logs are read-only."""
        return False


@admin.register(Activation)
class ActivationAdmin(admin.ModelAdmin):
    """
    Admin interface for Activation model.

    Status changes go through the dashboard API so that each one is
    logged; rows are read-only here.
    """

    list_display = [
        "app_name",
        "license_key",
        "machine_id_display",
        "status_display",
        "activated_at",
        "created_at",
    ]
    list_filter = ["status", "app_name", "activated_at", "created_at"]
    search_fields = ["license_key", "machine_id", "shop_name", "app_name"]
    readonly_fields = [
        "id",
        "app_name",
        "app_version",
        "license_key",
        "machine_id",
        "shop_name",
        "status",
        "activated_at",
        "expires_at",
        "metadata",
        "created_at",
        "updated_at",
    ]
    inlines = [ActivationLogInline]

    def machine_id_display(self, obj):
        """Display machine id with truncation."""
        if len(obj.machine_id) > 50:
            return format_html(
                '<span title="{}">{}</span>',
                obj.machine_id,
                obj.machine_id[:47] + "...",
            )
        return obj.machine_id

    machine_id_display.short_description = "Machine"

    def status_display(self, obj):
        """Display status with color."""
        colors = {"active": "green", "pending": "orange", "revoked": "red"}
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            colors.get(obj.status, "black"),
            obj.status.upper(),
        )

    status_display.short_description = "Status"
