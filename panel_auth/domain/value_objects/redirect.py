"""Navigation results returned by page handlers."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Redirect:
    """Instruction to send the browser elsewhere instead of rendering."""

    url: str
    status_code: int = 303


@dataclass(frozen=True)
class PasswordResetResponse(Redirect):
    """Returned after a successful reset; the host sends the user to log in."""
