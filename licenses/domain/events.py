"""
License domain events.

Domain events represent something that happened in the license domain.
"""

import uuid

from core.domain.events import DomainEvent, event_header


class LicenseIssued(DomainEvent):
    """Event raised when a license is issued."""

    def __init__(self, license_id: uuid.UUID, app_name: str, max_activations: int, activation_type: str):
        """
        Initialize LicenseIssued event.

        Args:
            license_id: License UUID
            app_name: Canonical app name
            max_activations: Seat count
            activation_type: machine_id_bound or pre_generated
        """
        super().__init__(**event_header(license_id, "LicenseIssued"))
        self.license_id = license_id
        self.app_name = app_name
        self.max_activations = max_activations
        self.activation_type = activation_type

    def payload(self):
        return {
            "app_name": self.app_name,
            "max_activations": self.max_activations,
            "activation_type": self.activation_type,
        }


class LicenseStatusChanged(DomainEvent):
    """Event raised when a license's status or seat count is edited."""

    def __init__(self, license_id: uuid.UUID, status: str, max_activations: int):
        super().__init__(**event_header(license_id, "LicenseStatusChanged"))
        self.license_id = license_id
        self.status = status
        self.max_activations = max_activations

    def payload(self):
        return {"status": self.status, "max_activations": self.max_activations}


class LicenseDeleted(DomainEvent):
    """Event raised when a license and its activations are deleted."""

    def __init__(self, license_id: uuid.UUID, app_name: str, activations_deleted: int):
        super().__init__(**event_header(license_id, "LicenseDeleted"))
        self.license_id = license_id
        self.app_name = app_name
        self.activations_deleted = activations_deleted

    def payload(self):
        return {"app_name": self.app_name, "activations_deleted": self.activations_deleted}
