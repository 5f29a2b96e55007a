"""Panel and password reset settings.
"""

import logging

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class AuthSettings(BaseSettings):
    """Defines settings for the panel routes and the password reset workflow.

    Security Note:
        - RESET_PASSWORD_MAX_ATTEMPTS bounds how many reset submissions a
          single client may make per RESET_PASSWORD_DECAY_SECONDS window.
        - BCRYPT_WORK_FACTOR below 10 is only acceptable in test environments.
    """

    # Panel routing
    PANEL_PATH: str = "/admin"
    PANEL_HOME_URL: str = "/admin"
    PANEL_LOGIN_URL: str = "/admin/login"

    # Reset submission throttling
    RESET_PASSWORD_MAX_ATTEMPTS: int = Field(default=2, ge=1)
    RESET_PASSWORD_DECAY_SECONDS: int = Field(default=60, ge=1)

    # Reset token lifetime
    PASSWORD_RESET_EXPIRE_MINUTES: int = Field(default=60, ge=1)

    # Credential hashing
    BCRYPT_WORK_FACTOR: int = Field(default=12, ge=4, le=31)
    REMEMBER_TOKEN_LENGTH: int = Field(default=60, ge=16)

    # Mounted page state lifetime
    PAGE_STATE_TTL_SECONDS: int = Field(default=3600, ge=1)

    @model_validator(mode="after")
    def _normalize_panel_path(self) -> "AuthSettings":
        """Ensures PANEL_PATH has a leading slash and no trailing slash."""
        path = "/" + self.PANEL_PATH.strip("/")
        if path != self.PANEL_PATH:
            logger.info(f"Normalized PANEL_PATH from {self.PANEL_PATH!r} to {path!r}")
            self.PANEL_PATH = path
        return self
