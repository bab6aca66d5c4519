"""
App catalog commands.
"""

import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional

from core.domain.value_objects import AppStatus


@dataclass
class CreateAppCommand:
    """Command to add an app to the catalog (idempotent by name)."""

    name: str
    metadata: Dict = field(default_factory=dict)


@dataclass
class UpdateAppCommand:
    """
    Command to rename an app and/or change its status.

    A rename cascades to every license and activation of the app.
    """

    app_id: uuid.UUID
    name: Optional[str] = None
    status: Optional[AppStatus] = None


@dataclass
class DeleteAppCommand:
    """Command to delete an app with its licenses and activations."""

    app_id: uuid.UUID
