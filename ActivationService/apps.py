"""
App configuration for the License Activation Service.
"""

import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class ActivationServiceConfig(AppConfig):
    """Wires tracing and domain event subscribers once apps are loaded."""

    name = "ActivationService"
    verbose_name = "License Activation Service"

    def ready(self):
        """Called when Django starts."""
        from core.infrastructure.event_handlers import register_event_handlers
        from core.instrumentation import setup_opentelemetry
        import core.schema_extensions  # noqa: F401

        setup_opentelemetry()
        register_event_handlers()
        logger.debug("Observability setup complete")
