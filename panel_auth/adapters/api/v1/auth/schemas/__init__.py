from __future__ import annotations

"""Reset password API schemas package.

Re-exports the public models so routes and tests can import them from
``panel_auth.adapters.api.v1.auth.schemas``.
"""

# flake8: noqa: F401 – re-export

from .requests import ResetPasswordSubmitRequest
from .responses import (
    NotificationSchema,
    ResetPasswordPageResponse,
    ResetPasswordResultResponse,
)

__all__ = [
    "ResetPasswordSubmitRequest",
    "NotificationSchema",
    "ResetPasswordPageResponse",
    "ResetPasswordResultResponse",
]
