"""Authentication context passed explicitly to page handlers."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AuthContext:
    """Who is making the request, as resolved by the host.

    Attributes:
        is_authenticated: Whether the request carries a logged-in session
        user_id: Authenticated user's ID, when the host exposes one
        intended_url: Where the user was heading before being sent to an
            auth page, if the host recorded it
    """

    is_authenticated: bool = False
    user_id: Optional[int] = None
    intended_url: Optional[str] = None

    @classmethod
    def guest(cls) -> "AuthContext":
        return cls()
