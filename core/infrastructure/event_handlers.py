"""
Event handlers for domain events.

These handlers process domain events for side effects: structured
audit log lines and business metrics.
"""

import logging

from activations.domain.events import (
    ActivationDeactivated,
    ActivationStatusChanged,
    LicenseActivated,
)
from catalog.domain.events import AppCreated, AppDeleted, AppRenamed
from core.domain.events import DomainEvent, EventHandler
from core.metrics import (
    activation_status_changes_total,
    license_status_changes_total,
    licenses_issued_total,
)
from licenses.domain.events import LicenseDeleted, LicenseIssued, LicenseStatusChanged

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("core.audit")

AUDITED_EVENTS = (
    AppCreated,
    AppRenamed,
    AppDeleted,
    LicenseIssued,
    LicenseStatusChanged,
    LicenseDeleted,
    LicenseActivated,
    ActivationDeactivated,
    ActivationStatusChanged,
)


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Writes every domain event as one structured log line.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        audit_logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra=event.to_dict(),
        )


class MetricsEventHandler(EventHandler):
    """Event handler that counts state changes in Prometheus."""

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for metrics.

        Args:
            event: Domain event
        """
        if isinstance(event, LicenseIssued):
            licenses_issued_total.labels(
                app_name=event.app_name, activation_type=event.activation_type
            ).inc()
        elif isinstance(event, LicenseStatusChanged):
            license_status_changes_total.labels(status=event.status).inc()
        elif isinstance(event, ActivationStatusChanged):
            activation_status_changes_total.labels(status=event.status).inc()
        elif isinstance(event, ActivationDeactivated):
            activation_status_changes_total.labels(status="revoked").inc()


# Register event handlers
def register_event_handlers():
    """Register all event handlers with the event bus."""
    from core.infrastructure.events import event_bus

    audit_handler = AuditLogEventHandler()
    metrics_handler = MetricsEventHandler()

    for event_type in AUDITED_EVENTS:
        event_bus.subscribe(event_type, audit_handler)

    event_bus.subscribe(LicenseIssued, metrics_handler)
    event_bus.subscribe(LicenseStatusChanged, metrics_handler)
    event_bus.subscribe(ActivationStatusChanged, metrics_handler)
    event_bus.subscribe(ActivationDeactivated, metrics_handler)

    logger.info("Event handlers registered")
