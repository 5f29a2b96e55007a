"""Capability interface for records whose password can be reset."""

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class Resettable(Protocol):
    """A user record the password reset broker can operate on.

    Any persisted account type qualifies as long as it can name the address
    resets are sent to and accept a forced update of its credential columns.
    """

    id: Optional[int]

    def get_email_for_password_reset(self) -> str:
        ...

    def force_fill(self, **attributes: Any) -> "Resettable":
        ...
