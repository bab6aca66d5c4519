"""
Catalog domain events.
"""

import uuid

from core.domain.events import DomainEvent, event_header


class AppCreated(DomainEvent):
    """Event raised when an app is added to the catalog."""

    def __init__(self, app_id: uuid.UUID, name: str):
        super().__init__(**event_header(app_id, "AppCreated"))
        self.app_id = app_id
        self.name = name

    def payload(self):
        return {"app_name": self.name}


class AppRenamed(DomainEvent):
    """Event raised when an app rename has cascaded to licenses and activations."""

    def __init__(
        self,
        app_id: uuid.UUID,
        old_name: str,
        new_name: str,
        licenses_updated: int,
        activations_updated: int,
    ):
        super().__init__(**event_header(app_id, "AppRenamed"))
        self.app_id = app_id
        self.old_name = old_name
        self.new_name = new_name
        self.licenses_updated = licenses_updated
        self.activations_updated = activations_updated

    def payload(self):
        return {
            "old_name": self.old_name,
            "new_name": self.new_name,
            "licenses_updated": self.licenses_updated,
            "activations_updated": self.activations_updated,
        }


class AppDeleted(DomainEvent):
    """Event raised when an app and everything issued for it is deleted."""

    def __init__(self, app_id: uuid.UUID, name: str, licenses_deleted: int, activations_deleted: int):
        super().__init__(**event_header(app_id, "AppDeleted"))
        self.app_id = app_id
        self.name = name
        self.licenses_deleted = licenses_deleted
        self.activations_deleted = activations_deleted

    def payload(self):
        return {
            "app_name": self.name,
            "licenses_deleted": self.licenses_deleted,
            "activations_deleted": self.activations_deleted,
        }
