"""Model registry entry point for the catalog app."""

from catalog.infrastructure.models import App  # noqa: F401
