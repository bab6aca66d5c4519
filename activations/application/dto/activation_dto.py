"""
Activation DTOs for API responses.

The protocol handlers return outcome DTOs instead of raising, so the
views branch on values.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from activations.domain.activation import Activation
from activations.domain.activation_log import ActivationLogEntry
from activations.ports.activation_repository import ActivationStats


@dataclass
class SeatUsageDTO:
    """Seat usage of a license after an operation."""

    activation_type: str
    max_activations: int
    used_activations: int

    @property
    def remaining_activations(self) -> int:
        return max(self.max_activations - self.used_activations, 0)


@dataclass
class ActivationResult:
    """Successful activate outcome."""

    activation_token: str
    token_expires_at: datetime
    activation_id: uuid.UUID
    app_name: str
    machine_id: str
    status: str
    license_id: uuid.UUID
    license_expires_at: Optional[datetime]
    usage: SeatUsageDTO
    reactivated: bool = False

    success = True


@dataclass
class ActivationFailure:
    """Rejected activate outcome with the HTTP status to report."""

    status_code: int
    error: str
    code: str
    usage: Optional[SeatUsageDTO] = None

    success = False


@dataclass
class ValidationOutcome:
    """Validate outcome; ``reason`` is set when ``valid`` is False."""

    valid: bool
    reason: Optional[str] = None
    license_id: Optional[uuid.UUID] = None
    app_name: Optional[str] = None
    license_expires_at: Optional[datetime] = None
    activation_id: Optional[uuid.UUID] = None
    activation_status: Optional[str] = None
    activation_expires_at: Optional[datetime] = None
    usage: Optional[SeatUsageDTO] = None

    @classmethod
    def rejected(cls, reason: str) -> "ValidationOutcome":
        return cls(valid=False, reason=reason)


@dataclass
class DeactivationOutcome:
    """Deactivate outcome; ``reason`` is set on failure."""

    success: bool
    reason: Optional[str] = None
    usage: Optional[SeatUsageDTO] = None

    @classmethod
    def rejected(cls, reason: str) -> "DeactivationOutcome":
        return cls(success=False, reason=reason)


@dataclass
class ActivationDTO:
    """DTO for activation information."""

    id: uuid.UUID
    app_name: str
    app_version: str
    license_key: str
    machine_id: str
    shop_name: Optional[str]
    status: str
    activated_at: Optional[datetime]
    expires_at: Optional[datetime]
    metadata: Optional[Dict[str, Any]]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, activation: Activation) -> "ActivationDTO":
        return cls(
            id=activation.id,
            app_name=activation.app_name,
            app_version=activation.app_version,
            license_key=activation.license_key,
            machine_id=activation.machine_id,
            shop_name=activation.shop_name,
            status=activation.status.value,
            activated_at=activation.activated_at,
            expires_at=activation.expires_at,
            metadata=activation.metadata,
            created_at=activation.created_at,
            updated_at=activation.updated_at,
        )


@dataclass
class ActivationLogDTO:
    """DTO for an audit log entry."""

    id: uuid.UUID
    activation_id: uuid.UUID
    action: str
    ip_address: Optional[str]
    user_agent: Optional[str]
    metadata: Optional[Dict[str, Any]]
    created_at: datetime

    @classmethod
    def from_entry(cls, entry: ActivationLogEntry) -> "ActivationLogDTO":
        return cls(
            id=entry.id,
            activation_id=entry.activation_id,
            action=entry.action.value,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            metadata=entry.metadata,
            created_at=entry.created_at,
        )


@dataclass
class ActivationDetailDTO:
    """DTO for one activation with its log, newest entry first."""

    activation: ActivationDTO
    logs: List[ActivationLogDTO] = field(default_factory=list)


@dataclass
class ActivationStatsDTO:
    """DTO for ledger statistics."""

    total: int
    active: int
    pending: int
    revoked: int

    @classmethod
    def from_stats(cls, stats: ActivationStats) -> "ActivationStatsDTO":
        return cls(total=stats.total, active=stats.active, pending=stats.pending, revoked=stats.revoked)
