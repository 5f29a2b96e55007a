"""Rate Limiting Value Objects for domain modeling.

These value objects encapsulate fixed-window attempt counting: the first
attempt opens a window of ``decay_seconds``; attempts inside the window are
counted; once it closes the count starts over.
"""

import math
from dataclasses import dataclass, replace
from typing import Dict, Optional


@dataclass(frozen=True)
class RateLimitWindow:
    """Rate limiting window value object.

    Attributes:
        key: Actor/action key this window applies to
        attempts: Attempts recorded inside the window
        opened_at: Epoch seconds of the first attempt
        decay_seconds: Length of the window
    """

    key: str
    attempts: int
    opened_at: float
    decay_seconds: int

    def __post_init__(self) -> None:
        """Validate rate limit configuration."""
        if self.decay_seconds <= 0:
            raise ValueError("Rate limit window duration must be positive")

        if self.attempts < 0:
            raise ValueError("Attempts cannot be negative")

    @classmethod
    def open(cls, key: str, now: float, decay_seconds: int) -> "RateLimitWindow":
        return cls(key=key, attempts=0, opened_at=now, decay_seconds=decay_seconds)

    @property
    def resets_at(self) -> float:
        return self.opened_at + self.decay_seconds

    def is_expired(self, now: float) -> bool:
        return now >= self.resets_at

    def record_attempt(self) -> "RateLimitWindow":
        """Return a new window with one more attempt counted."""
        return replace(self, attempts=self.attempts + 1)

    def seconds_until_reset(self, now: float) -> int:
        """Whole seconds until the window closes, never negative."""
        return max(0, math.ceil(self.resets_at - now))


class RateLimitState:
    """Mutable state holder for rate limiting windows across keys.

    This is a mutable container, separate from the immutable value objects,
    to handle the stateful nature of rate limiting.
    """

    def __init__(self):
        """Initialize empty rate limit state."""
        self._windows: Dict[str, RateLimitWindow] = {}

    def get_window(self, key: str, now: float) -> Optional[RateLimitWindow]:
        """Get the live window for a key, dropping it if it has expired."""
        window = self._windows.get(key)
        if window is not None and window.is_expired(now):
            del self._windows[key]
            return None
        return window

    def set_window(self, window: RateLimitWindow) -> None:
        self._windows[window.key] = window

    def forget(self, key: str) -> None:
        self._windows.pop(key, None)

    def cleanup_expired_windows(self, now: float) -> int:
        """Clean up expired windows and return how many were removed."""
        expired = [key for key, window in self._windows.items() if window.is_expired(now)]
        for key in expired:
            del self._windows[key]
        return len(expired)

    def __len__(self) -> int:
        return len(self._windows)
