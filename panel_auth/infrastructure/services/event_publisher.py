"""Event Publisher Infrastructure Service.

This service provides the concrete implementation of the domain event
publishing interface, enabling the domain layer to publish events without
coupling to infrastructure concerns.
"""

import asyncio
from typing import Awaitable, Callable, List, Optional, Type

import structlog

from panel_auth.domain.events.password_reset_events import BaseDomainEvent
from panel_auth.domain.interfaces.services import IEventPublisher

logger = structlog.get_logger(__name__)

EventSubscriber = Callable[[BaseDomainEvent], Awaitable[None]]


class InMemoryEventPublisher(IEventPublisher):
    """In-memory event publisher.

    Events are recorded for inspection and handed to subscribers in
    registration order. A failing subscriber is logged and does not stop
    the others.
    """

    def __init__(self):
        """Initialize event publisher with in-memory storage."""
        self._published_events: List[BaseDomainEvent] = []
        self._subscribers: List[EventSubscriber] = []

        logger.info("InMemoryEventPublisher initialized")

    async def publish(self, event: BaseDomainEvent) -> None:
        """Publish a single domain event.

        Args:
            event: Domain event to publish
        """
        self._published_events.append(event)

        for subscriber in self._subscribers:
            try:
                await subscriber(event)
            except Exception as e:
                logger.error(
                    "Event subscriber failed",
                    event_type=type(event).__name__,
                    subscriber=getattr(subscriber, "__qualname__", repr(subscriber)),
                    error=str(e),
                )

        logger.info(
            "Domain event published",
            event_type=type(event).__name__,
            user_id=event.user_id,
            correlation_id=event.correlation_id,
            occurred_at=event.occurred_at.isoformat(),
        )

    async def publish_many(self, events: List[BaseDomainEvent]) -> None:
        """Publish multiple domain events.

        Args:
            events: List of domain events to publish
        """
        if not events:
            return

        await asyncio.gather(*(self.publish(event) for event in events))

        logger.info(
            "Multiple domain events published",
            event_count=len(events),
            event_types=[type(e).__name__ for e in events],
        )

    def add_subscriber(self, callback: EventSubscriber) -> None:
        """Add event subscriber callback.

        Args:
            callback: Async function to call when events are published
        """
        self._subscribers.append(callback)
        logger.debug("Event subscriber added")

    def get_published_events(
        self,
        event_type: Optional[Type[BaseDomainEvent]] = None,
        user_id: Optional[int] = None,
    ) -> List[BaseDomainEvent]:
        """Get published events with optional filtering.

        Args:
            event_type: Filter by event class
            user_id: Filter by user ID

        Returns:
            List[BaseDomainEvent]: Filtered list of published events
        """
        events = self._published_events

        if event_type is not None:
            events = [e for e in events if isinstance(e, event_type)]

        if user_id is not None:
            events = [e for e in events if e.user_id == user_id]

        return list(events)

    def clear_published_events(self) -> None:
        """Clear all stored published events."""
        event_count = len(self._published_events)
        self._published_events.clear()
        logger.debug("Published events cleared", event_count=event_count)
