"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


class LicenseStatus(Enum):
    """License status value object."""

    ACTIVE = "active"
    REVOKED = "revoked"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class ActivationStatus(Enum):
    """Activation status value object."""

    PENDING = "pending"
    ACTIVE = "active"
    REVOKED = "revoked"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class AppStatus(Enum):
    """App status value object."""

    ACTIVE = "active"
    INACTIVE = "inactive"

    def __str__(self) -> str:
        return self.value


class ActivationAction(Enum):
    """Audit log actions recorded against an activation."""

    ACTIVATED = "activated"
    REACTIVATED = "reactivated"
    CREATED = "created"
    APPROVED = "approved"
    REVOKED = "revoked"
    DEACTIVATED = "deactivated"

    def __str__(self) -> str:
        return self.value


class ActivationType(Enum):
    """How a license hands out its seats."""

    MACHINE_ID_BOUND = "machine_id_bound"
    PRE_GENERATED = "pre_generated"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ActivationTriple(ValueObject):
    """Identity of one activation row: (app, license key, machine)."""

    app_name: str
    license_key: str
    machine_id: str

    def __post_init__(self):
        """Validate triple parts."""
        if not self.app_name or not self.license_key or not self.machine_id:
            raise ValueError("App name, license key and machine ID are required")


@dataclass(frozen=True)
class SeatUsage(ValueObject):
    """Seat usage of a license at a point in time."""

    max_activations: int
    used_activations: int

    @property
    def remaining_activations(self) -> int:
        """Return free seats, never negative."""
        return max(self.max_activations - self.used_activations, 0)
