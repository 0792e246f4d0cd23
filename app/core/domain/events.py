"""
Base Domain Event Classes for Domain-Driven Design

Domain Events represent significant business occurrences that domain experts
care about. Aggregates record them as a side effect of their operations; the
persistence boundary pulls them after a successful write and hands them to a
publisher.
"""

import logging
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, Callable, Coroutine
from uuid import UUID, uuid4

from app.core.domain.entities import utc_now

logger = logging.getLogger(__name__)

_BASE_FIELDS = frozenset({"event_id", "occurred_at", "aggregate_id"})


def _serialize(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    return value


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """
    Base class for all domain events.

    Domain events are immutable records of something that happened
    in the domain. Subclasses add their payload as dataclass fields.

    Example:
        ```python
        @dataclass(frozen=True, kw_only=True)
        class OrderPlaced(DomainEvent):
            order_id: str
            total: Decimal
        ```
    """

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=utc_now)
    aggregate_id: str | None = None

    @property
    def event_type(self) -> str:
        """Get the event type name (class name)."""
        return self.__class__.__name__

    @property
    def payload(self) -> dict[str, Any]:
        """Subclass-specific event data."""
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name not in _BASE_FIELDS}

    def to_dict(self) -> dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_id": str(self.event_id),
            "event_type": self.event_type,
            "occurred_at": self.occurred_at.isoformat(),
            "aggregate_id": self.aggregate_id,
            "payload": {key: _serialize(value) for key, value in self.payload.items()},
        }


# Type aliases for event handlers
EventHandler = Callable[[DomainEvent], Coroutine[Any, Any, None]]


class DomainEventPublisher:
    """
    Simple in-memory domain event publisher.

    Handlers are async callables keyed by event type name. A failing handler
    is logged and does not stop delivery to the remaining handlers.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: Type of event to subscribe to
            handler: Async handler function
        """
        self._handlers.setdefault(event_type.__name__, []).append(handler)

    def handlers_for(self, event_type: type[DomainEvent]) -> list[EventHandler]:
        return list(self._handlers.get(event_type.__name__, []))

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event to all subscribers.

        Args:
            event: Event to publish
        """
        event_name = event.event_type
        logger.debug(f"Publishing domain event: {event_name} ({event.event_id})")

        for handler in self._handlers.get(event_name, []):
            try:
                await handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event_name}: {e}")

        logger.info(f"Domain event published: {event_name} at {event.occurred_at.isoformat()}")

    async def publish_all(self, events: list[DomainEvent]) -> None:
        """
        Publish multiple events in order.

        Args:
            events: List of events to publish
        """
        if not events:
            logger.debug("No domain events to publish")
            return

        for event in events:
            await self.publish(event)
        logger.info(f"Published {len(events)} domain events")

    def clear_handlers(self) -> None:
        """Clear all event handlers (useful for testing)."""
        self._handlers.clear()


# Process-wide default publisher
domain_event_publisher = DomainEventPublisher()


def event_handler(event_type: type[DomainEvent], publisher: DomainEventPublisher | None = None):
    """
    Decorator to register a coroutine as an event handler.

    Example:
        ```python
        @event_handler(CustomerCreated)
        async def send_welcome(event: CustomerCreated):
            ...
        ```
    """

    def decorator(func: EventHandler) -> EventHandler:
        (publisher or domain_event_publisher).subscribe(event_type, func)
        return func

    return decorator
