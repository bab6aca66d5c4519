"""
Activation domain events.

Domain events represent something that happened in the activation domain.
"""

import uuid

from core.domain.events import DomainEvent, event_header


class LicenseActivated(DomainEvent):
    """Event raised when a machine activates (or re-activates) a license."""

    def __init__(
        self,
        activation_id: uuid.UUID,
        license_id: uuid.UUID,
        app_name: str,
        machine_id: str,
        reactivated: bool,
        used_activations: int,
    ):
        """
        Initialize LicenseActivated event.

        Args:
            activation_id: Activation UUID
            license_id: License UUID
            app_name: Canonical app name
            machine_id: Client machine
            reactivated: True if an existing row was reused
            used_activations: Active seats after the activation
        """
        super().__init__(**event_header(activation_id, "LicenseActivated"))
        self.activation_id = activation_id
        self.license_id = license_id
        self.app_name = app_name
        self.machine_id = machine_id
        self.reactivated = reactivated
        self.used_activations = used_activations

    def payload(self):
        return {
            "license_id": str(self.license_id),
            "app_name": self.app_name,
            "machine_id": self.machine_id,
            "reactivated": self.reactivated,
            "used_activations": self.used_activations,
        }


class ActivationDeactivated(DomainEvent):
    """Event raised when a client gives its seat back."""

    def __init__(self, activation_id: uuid.UUID, license_id: uuid.UUID, app_name: str, machine_id: str):
        super().__init__(**event_header(activation_id, "ActivationDeactivated"))
        self.activation_id = activation_id
        self.license_id = license_id
        self.app_name = app_name
        self.machine_id = machine_id

    def payload(self):
        return {
            "license_id": str(self.license_id),
            "app_name": self.app_name,
            "machine_id": self.machine_id,
        }


class ActivationStatusChanged(DomainEvent):
    """Event raised when an administrator creates, approves or revokes an activation."""

    def __init__(self, activation_id: uuid.UUID, status: str, action: str):
        super().__init__(**event_header(activation_id, "ActivationStatusChanged"))
        self.activation_id = activation_id
        self.status = status
        self.action = action

    def payload(self):
        return {"status": self.status, "action": self.action}
