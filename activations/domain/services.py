"""
Activation domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""

from datetime import datetime, timedelta
from typing import Optional

from activations.domain.activation import Activation
from core.domain.exceptions import MachineLockMismatchError, SeatLimitExceededError
from licenses.domain.license import License


class SeatManager:
    """Domain service for license seat policy."""

    @staticmethod
    def has_seat(existing: Optional[Activation], active_count: int, max_activations: int) -> bool:
        """
        Check whether an activate call may proceed.

        A machine that already has a row for the license reuses it, so it
        needs no free seat whatever that row's status is.

        Args:
            existing: Row for the same (app, key, machine), if any
            active_count: Rows of the license currently ACTIVE
            max_activations: License seat count

        Returns:
            True if the activation may be granted
        """
        return existing is not None or active_count < max_activations

    @staticmethod
    def ensure_seat(existing: Optional[Activation], active_count: int, max_activations: int) -> None:
        """
        Raises:
            SeatLimitExceededError: If no seat is free
        """
        if not SeatManager.has_seat(existing, active_count, max_activations):
            raise SeatLimitExceededError()

    @staticmethod
    def ensure_machine_allowed(license: License, machine_id: str) -> None:
        """
        Raises:
            MachineLockMismatchError: If the license is pinned to another machine
        """
        if not license.admits_machine(machine_id):
            raise MachineLockMismatchError()


def token_expiry(license: License, now: datetime, ttl_days: int) -> datetime:
    """An activation token lives until the license expires, else ``ttl_days``."""
    return license.expires_at or now + timedelta(days=ttl_days)
