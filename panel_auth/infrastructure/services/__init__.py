"""Infrastructure implementations of the domain service interfaces."""

from .event_publisher import InMemoryEventPublisher
from .notification_sink import FlashNotificationSink
from .page_state_store import InMemoryPageStateStore
from .rate_limiter import InMemoryRateLimiter

__all__ = [
    "FlashNotificationSink",
    "InMemoryEventPublisher",
    "InMemoryPageStateStore",
    "InMemoryRateLimiter",
]
