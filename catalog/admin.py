"""
Django admin configuration for catalog app.
"""

from django.contrib import admin

from catalog.infrastructure.models import App


@admin.register(App)
class AppAdmin(admin.ModelAdmin):
    """
    Admin interface for App model.

    Names are read-only here: a rename must cascade to licenses and
    activations, which only the dashboard API does.
    """

    list_display = ["name", "slug", "status", "created_at"]
    list_filter = ["status", "created_at"]
    search_fields = ["name", "slug"]
    readonly_fields = ["id", "name", "slug", "created_at", "updated_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "name", "slug", "status", "metadata"),
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
