"""Notification sink collecting messages for the current response."""

from typing import List

import structlog

from panel_auth.domain.interfaces.services import INotificationSink
from panel_auth.domain.value_objects.notification import Notification

logger = structlog.get_logger(__name__)


class FlashNotificationSink(INotificationSink):
    """Keeps notifications until the response that displays them pulls them."""

    def __init__(self):
        self._pending: List[Notification] = []

    def send(self, notification: Notification) -> None:
        self._pending.append(notification)
        logger.debug("Notification queued", status=notification.status.value)

    def pull(self) -> List[Notification]:
        pending, self._pending = self._pending, []
        return pending
