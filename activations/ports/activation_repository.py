"""
Activation repository port (interface).

This defines the contract for activation persistence operations.
Implementations are in the infrastructure layer.
"""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from activations.domain.activation import Activation
from activations.domain.activation_log import ActivationLogEntry, RequestContext
from core.domain.value_objects import ActivationAction, ActivationTriple
from licenses.domain.license import License


@dataclass(frozen=True)
class SeatClaim:
    """Outcome of a successful seat claim."""

    activation: Activation
    reactivated: bool
    used_activations: int


@dataclass(frozen=True)
class ActivationStats:
    """Ledger-wide counts by status."""

    total: int
    active: int
    pending: int
    revoked: int


class ActivationRepository(ABC):
    """
    Abstract repository for Activation entities and their audit log.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def find_by_id(self, activation_id: uuid.UUID) -> Optional[Activation]:
        """
        Find an activation by ID.

        Args:
            activation_id: Activation UUID

        Returns:
            Activation entity or None if not found
        """

    @abstractmethod
    async def find_by_triple(self, triple: ActivationTriple) -> Optional[Activation]:
        """
        Find the activation of one machine under one license.

        Args:
            triple: (app name, license key, machine id)

        Returns:
            Activation entity or None if not found
        """

    @abstractmethod
    async def count_active(self, app_name: str, license_key: str) -> int:
        """Count activations of a license whose status is exactly ACTIVE."""

    @abstractmethod
    async def claim_seat(
        self,
        license: License,
        triple: ActivationTriple,
        app_version: str,
        metadata: Optional[Dict[str, Any]] = None,
        context: Optional[RequestContext] = None,
    ) -> SeatClaim:
        """
        Activate a machine under a license, serialised per license.

        Checks seat availability, upserts the row to ACTIVE and appends an
        ``activated`` or ``reactivated`` log entry in one transaction.

        Raises:
            SeatLimitExceededError: If no seat is free
        """

    @abstractmethod
    async def create_pending(
        self, activation: Activation, context: Optional[RequestContext] = None
    ) -> Activation:
        """
        Insert a PENDING activation with a ``created`` log entry.

        Raises:
            ActivationExistsError: If the triple already has a row
        """

    @abstractmethod
    async def transition(
        self,
        activation: Activation,
        action: ActivationAction,
        context: Optional[RequestContext] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Activation:
        """
        Persist a status change with exactly one log entry, atomically.

        Only the status fields of ``activation`` are written; the stored
        row supplies everything else.

        Args:
            activation: Activation after the change
            action: Log action
            context: Requesting client
            metadata: Log entry metadata

        Returns:
            Activation as stored after the change

        Raises:
            ActivationNotFoundError: If the row no longer exists
        """

    @abstractmethod
    async def list_all(self) -> List[Activation]:
        """List activations, newest first."""

    @abstractmethod
    async def find_logs(self, activation_id: uuid.UUID) -> List[ActivationLogEntry]:
        """List log entries of an activation, newest first."""

    @abstractmethod
    async def stats(self) -> ActivationStats:
        """Count activations by status."""
