"""
Activation log entry.

Append-only record of each state change of an activation.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from core.domain.events import utc_now
from core.domain.value_objects import ActivationAction


@dataclass(frozen=True)
class RequestContext:
    """Who asked for a state change."""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


@dataclass(frozen=True)
class ActivationLogEntry:
    """Immutable audit log entry."""

    id: uuid.UUID
    activation_id: uuid.UUID
    action: ActivationAction
    ip_address: Optional[str]
    user_agent: Optional[str]
    metadata: Optional[Dict[str, Any]]
    created_at: datetime = field(default_factory=utc_now)

    @classmethod
    def record(
        cls,
        activation_id: uuid.UUID,
        action: ActivationAction,
        context: Optional[RequestContext] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "ActivationLogEntry":
        context = context or RequestContext()
        return cls(
            id=uuid.uuid4(),
            activation_id=activation_id,
            action=action,
            ip_address=context.ip_address,
            user_agent=context.user_agent,
            metadata=metadata,
        )
