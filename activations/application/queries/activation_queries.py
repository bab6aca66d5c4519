"""
Activation ledger queries.
"""

import uuid
from dataclasses import dataclass


@dataclass
class GetActivationQuery:
    """Query for one activation and its audit log."""

    activation_id: uuid.UUID
