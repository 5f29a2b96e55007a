"""Reset attempt page state.

A ``ResetAttempt`` holds everything the reset page knows between mount and
submission. ``email`` and ``token`` are locked once the page is mounted: the
server copy is authoritative and any later write is treated as tampering.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, FrozenSet, Mapping, Optional

from panel_auth.core.exceptions import LockedPropertyError


@dataclass
class ResetAttempt:
    """Request-scoped state of one password reset page.

    Attributes:
        email: Address the reset is for, locked after mount
        token: Opaque reset token, locked after mount
        password: New password typed by the user
        password_confirmation: Confirmation of the new password, never sent on
        language: Language messages are rendered in
    """

    email: Optional[str] = None
    token: Optional[str] = None
    password: str = ""
    password_confirmation: str = ""
    language: str = "en"
    _locked: bool = field(default=False, init=False, repr=False, compare=False)

    LOCKED_FIELDS: ClassVar[FrozenSet[str]] = frozenset({"email", "token"})
    INPUT_FIELDS: ClassVar[Dict[str, str]] = {
        "password": "password",
        "passwordConfirmation": "password_confirmation",
        "password_confirmation": "password_confirmation",
    }

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self.LOCKED_FIELDS and getattr(self, "_locked", False):
            raise LockedPropertyError(name)
        super().__setattr__(name, value)

    def lock(self) -> None:
        """Freeze ``email`` and ``token`` for the rest of the page lifetime."""
        self._locked = True

    @property
    def is_locked(self) -> bool:
        return self._locked

    def fill(self, data: Mapping[str, Any]) -> None:
        """Apply user input to the attempt.

        Locked fields may be resubmitted unchanged, as hidden inputs are;
        any other value raises.

        Raises:
            LockedPropertyError: If a locked field is given a different value.
        """
        for key, value in data.items():
            if key in self.LOCKED_FIELDS:
                if value != getattr(self, key):
                    setattr(self, key, value)
                continue
            attribute = self.INPUT_FIELDS.get(key)
            if attribute is not None:
                setattr(self, attribute, "" if value is None else str(value))

    def clear_input(self) -> None:
        self.password = ""
        self.password_confirmation = ""
