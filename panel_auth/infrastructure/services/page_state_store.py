"""In-memory store of mounted page state.

Holds the authoritative copy of each mounted ``ResetAttempt`` between the
page load and its submission, so locked values never round-trip through the
client.
"""

import secrets
import time
from typing import Callable, Dict, Optional, Tuple

import structlog

from panel_auth.domain.entities.reset_attempt import ResetAttempt
from panel_auth.domain.interfaces.services import IPageStateStore

logger = structlog.get_logger(__name__)


class InMemoryPageStateStore(IPageStateStore):
    """Page state kept in process memory with a time-to-live."""

    def __init__(self, ttl_seconds: int = 3600, clock: Callable[[], float] = time.time):
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._pages: Dict[str, Tuple[float, ResetAttempt]] = {}

    async def put(self, attempt: ResetAttempt) -> str:
        self._purge()
        page_id = secrets.token_urlsafe(24)
        self._pages[page_id] = (self._clock() + self._ttl_seconds, attempt)
        return page_id

    async def get(self, page_id: str) -> Optional[ResetAttempt]:
        entry = self._pages.get(page_id)
        if entry is None:
            return None
        expires_at, attempt = entry
        if self._clock() >= expires_at:
            del self._pages[page_id]
            logger.info("Page state expired", page_id_prefix=page_id[:6])
            return None
        return attempt

    async def forget(self, page_id: str) -> None:
        self._pages.pop(page_id, None)

    def _purge(self) -> None:
        now = self._clock()
        for page_id in [pid for pid, (expires_at, _) in self._pages.items() if now >= expires_at]:
            del self._pages[page_id]
