from __future__ import annotations

"""Response models returned by the reset password page."""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from panel_auth.domain.value_objects.notification import Notification


class NotificationSchema(BaseModel):
    """A single notification as shown to the user."""

    title: str
    status: Literal["success", "danger"]

    @classmethod
    def from_domain(cls, notification: Notification) -> "NotificationSchema":
        return cls(**notification.to_dict())


class ResetPasswordPageResponse(BaseModel):
    """Mounted page: the state handle plus what a host needs to render it."""

    page_id: str = Field(..., description="Handle of the server-side page state")
    email: Optional[str] = None
    title: str
    heading: str
    submit_label: str
    form: List[Dict[str, Any]]


class ResetPasswordResultResponse(BaseModel):
    """Outcome of one submission of the reset form."""

    status: Literal["reset", "throttled", "rejected"]
    redirect_to: Optional[str] = None
    notifications: List[NotificationSchema] = Field(default_factory=list)
