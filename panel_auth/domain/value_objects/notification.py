"""Notification value objects.

A notification is the user-facing feedback a page emits after an action:
a translated title and a severity the host renders as colour and icon.
"""

from dataclasses import dataclass
from enum import Enum


class NotificationStatus(str, Enum):
    """Severity of a notification."""

    SUCCESS = "success"
    DANGER = "danger"


@dataclass(frozen=True)
class Notification:
    """A single message shown to the end user.

    Attributes:
        title: Translated message text
        status: Severity used by the host to style the message
    """

    title: str
    status: NotificationStatus

    @classmethod
    def success(cls, title: str) -> "Notification":
        return cls(title=title, status=NotificationStatus.SUCCESS)

    @classmethod
    def danger(cls, title: str) -> "Notification":
        return cls(title=title, status=NotificationStatus.DANGER)

    def to_dict(self) -> dict:
        return {"title": self.title, "status": self.status.value}
