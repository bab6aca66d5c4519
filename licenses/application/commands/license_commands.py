"""
License registry commands.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from core.domain.value_objects import LicenseStatus


@dataclass
class IssueLicenseCommand:
    """
    Command to issue a license for an app.

    The app is resolved through the catalog and created by name when
    no app matches.
    """

    app_name: str
    max_activations: int = 1
    locked_machine_id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    expires_at: Optional[datetime] = None


@dataclass
class UpdateLicenseCommand:
    """Command to change a license's seat count and/or status."""

    license_id: uuid.UUID
    max_activations: Optional[int] = None
    status: Optional[LicenseStatus] = None


@dataclass
class DeleteLicenseCommand:
    """Command to delete a license together with its activations."""

    license_id: uuid.UUID
