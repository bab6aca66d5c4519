"""
Domain events base classes.

Domain events record that something happened to a license, an
activation or an app. Subscribers on the event bus turn them into
audit log lines and metrics.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict
from uuid import UUID, uuid4


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DomainEvent(ABC):
    """
    Base class for all domain events.

    Subclasses pass the aggregate id to ``__init__`` and attach their
    own attributes afterwards; ``payload()`` lists those attributes.
    """

    event_id: UUID
    occurred_at: datetime
    aggregate_id: str
    event_type: str

    def __init_subclass__(cls, **kwargs):
        """Automatically set event_type for subclasses."""
        super().__init_subclass__(**kwargs)
        cls.event_type = cls.__name__

    def payload(self) -> Dict[str, Any]:
        """Event-specific attributes, JSON friendly."""
        return {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_id": str(self.event_id),
            "occurred_at": self.occurred_at.isoformat(),
            "aggregate_id": self.aggregate_id,
            "event_type": self.event_type,
            **self.payload(),
        }


def event_header(aggregate_id: Any, event_type: str) -> Dict[str, Any]:
    """Keyword arguments for ``DomainEvent.__init__``."""
    return {
        "event_id": uuid4(),
        "occurred_at": utc_now(),
        "aggregate_id": str(aggregate_id),
        "event_type": event_type,
    }


class EventHandler(ABC):
    """Base class for event handlers."""

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        """
        Handle a domain event.

        Args:
            event: The domain event to handle
        """


class EventBus(ABC):
    """Abstract event bus for publishing and subscribing to domain events."""

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event.

        Args:
            event: The domain event to publish
        """

    @abstractmethod
    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        """
        Subscribe to a domain event type.

        Args:
            event_type: The type of event to subscribe to
            handler: The handler to call when event is published
        """
