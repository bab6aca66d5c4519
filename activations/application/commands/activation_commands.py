"""
Activation protocol and administration commands.
"""

import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional

from activations.domain.activation_log import RequestContext


@dataclass
class ActivateLicenseCommand:
    """
    Command to activate a license on a machine.

    ``app_name`` is optional; the configured default app is used when
    the client omits it.
    """

    license_key: str
    machine_id: str
    app_version: str
    app_name: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    context: Optional[RequestContext] = None


@dataclass
class ValidateActivationCommand:
    """Command to check an activation token against live state."""

    machine_id: str
    activation_token: str
    app_name: Optional[str] = None


@dataclass
class DeactivateActivationCommand:
    """Command to give a seat back using the activation token."""

    machine_id: str
    activation_token: str
    app_name: Optional[str] = None
    context: Optional[RequestContext] = None


@dataclass
class CreatePendingActivationCommand:
    """Command to create a pending activation for later approval."""

    app_name: str
    app_version: str
    license_key: str
    machine_id: str
    metadata: Optional[Dict[str, Any]] = None
    context: Optional[RequestContext] = None


@dataclass
class ChangeActivationStatusCommand:
    """Command to approve or revoke an activation."""

    activation_id: uuid.UUID
    context: Optional[RequestContext] = None
