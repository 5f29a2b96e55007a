"""In-memory rate limiter.

Fixed-window attempt counters keyed by actor/action. Suitable for a single
process; a multi-process deployment should provide an ``IRateLimiter``
backed by shared storage.
"""

import time
from typing import Callable, Optional

import structlog

from panel_auth.domain.interfaces.services import IRateLimiter
from panel_auth.domain.value_objects.rate_limit import RateLimitState, RateLimitWindow

logger = structlog.get_logger(__name__)


class InMemoryRateLimiter(IRateLimiter):
    """Rate limiter keeping its windows in process memory."""

    def __init__(
        self,
        rate_limit_state: Optional[RateLimitState] = None,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize rate limiter.

        Args:
            rate_limit_state: Optional existing state (for testing/injection)
            clock: Source of the current time in epoch seconds
        """
        self._state = rate_limit_state if rate_limit_state is not None else RateLimitState()
        self._clock = clock
        logger.info("InMemoryRateLimiter initialized")

    async def hit(self, key: str, decay_seconds: int = 60) -> int:
        now = self._clock()
        self._state.cleanup_expired_windows(now)
        window = self._state.get_window(key, now) or RateLimitWindow.open(key, now, decay_seconds)
        window = window.record_attempt()
        self._state.set_window(window)

        logger.debug("Rate limit attempt recorded", key=key, attempts=window.attempts)
        return window.attempts

    async def attempts(self, key: str) -> int:
        window = self._state.get_window(key, self._clock())
        return window.attempts if window else 0

    async def too_many_attempts(self, key: str, max_attempts: int) -> bool:
        return await self.attempts(key) >= max_attempts

    async def available_in(self, key: str) -> int:
        now = self._clock()
        window = self._state.get_window(key, now)
        return window.seconds_until_reset(now) if window else 0

    async def clear(self, key: str) -> None:
        self._state.forget(key)

    async def cleanup_expired_windows(self) -> int:
        """Drop closed windows. ``hit`` already does this before recording."""
        cleaned_count = self._state.cleanup_expired_windows(self._clock())
        logger.info("Rate limit cleanup completed", cleaned_count=cleaned_count)
        return cleaned_count
