"""
License registry queries.
"""

import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class ListLicensesQuery:
    """Query for licenses, optionally filtered by app name substring."""

    app_name: Optional[str] = None


@dataclass
class GetLicenseQuery:
    """Query for one license with its seat usage."""

    license_id: uuid.UUID
