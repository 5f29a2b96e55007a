from __future__ import annotations

"""Centralized, structured exception hierarchy for the panel auth pages.

Each exception carries a machine-readable `code` for programmatic error
handling and a human-readable `message` for logging and user feedback.

The hierarchy is designed to:
- Provide clear, specific errors for the reset page failure scenarios.
- Support internationalization (i18n) for user-facing messages.
- Map cleanly to HTTP status codes in the API layer.
"""

import math
from typing import Dict, Final, List

from panel_auth.utils.i18n import get_translated_message

__all__: Final = [
    "PanelAuthError",
    "ValidationError",
    "FormValidationError",
    "LockedPropertyError",
    "TooManyRequestsError",
    "PageExpiredError",
    "DatabaseError",
]


class PanelAuthError(Exception):
    """Base exception class for all custom errors in the application.

    Attributes:
        message (str): A human-readable error message, suitable for logging.
                       This message can be translated.
        code (str): A unique, machine-readable error code for identifying
                    the type of error programmatically.
    """

    message: str
    code: str = "generic_error"

    def __init__(self, message: str, code: str = "generic_error"):
        self.message = message
        self.code = code
        Exception.__init__(self, self.message)

    # A concise, structured representation used by loggers & FastAPI handlers.
    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Validation errors (typically map to 422 Unprocessable Entity)
# ---------------------------------------------------------------------------


class ValidationError(PanelAuthError):
    """Raised for general data validation failures."""

    def __init__(self, message: str, code: str = "validation_error"):
        super().__init__(message, code)


class FormValidationError(ValidationError):
    """Raised by a form when its state fails the declared field rules.

    Attributes:
        errors: Translated messages keyed by field name.
    """

    def __init__(
        self,
        errors: Dict[str, List[str]],
        message: str | None = None,
        code: str = "form_validation_error",
    ):
        self.errors = errors
        if message is None:
            message = next(
                (messages[0] for messages in errors.values() if messages),
                "validation_error",
            )
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Page state errors
# ---------------------------------------------------------------------------


class LockedPropertyError(PanelAuthError):
    """Raised when a client tries to change a field locked at mount.

    Maps to a `403 Forbidden` HTTP status code.
    """

    def __init__(self, property_name: str, code: str = "locked_property"):
        self.property_name = property_name
        super().__init__(
            get_translated_message("locked_property", property=property_name), code
        )


class PageExpiredError(PanelAuthError):
    """Raised when a submission references page state that no longer exists.

    Maps to a `419 Page Expired` HTTP status code.
    """

    def __init__(self, message: str | None = None, code: str = "page_expired"):
        super().__init__(message or get_translated_message("page_expired"), code)


# ---------------------------------------------------------------------------
# Rate limiting
# ---------------------------------------------------------------------------


class TooManyRequestsError(PanelAuthError):
    """Raised when an actor has spent its attempt budget for an action.

    Attributes:
        seconds_until_available (int): Seconds before the next attempt is accepted.
        minutes_until_available (int): The same wait, rounded up to whole minutes.
    """

    def __init__(self, seconds_until_available: int, code: str = "too_many_requests"):
        self.seconds_until_available = seconds_until_available
        self.minutes_until_available = math.ceil(seconds_until_available / 60)
        super().__init__(
            get_translated_message("too_many_requests", seconds=seconds_until_available),
            code,
        )



# ---------------------------------------------------------------------------
# Persistence errors (typically map to 500 Server Error)
# ---------------------------------------------------------------------------


class DatabaseError(PanelAuthError):
    """Raised for low-level database interaction errors.

    This exception wraps underlying driver errors, abstracting away
    implementation details. It maps to a `500 Internal Server Error`.
    """

    def __init__(self, message: str, code: str = "database_error"):
        super().__init__(message, code)
