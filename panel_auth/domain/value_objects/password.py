"""Password rule value object.

The rule encapsulates the password strength requirements the reset form
enforces before a new password is hashed.
"""

import re
from dataclasses import dataclass
from typing import ClassVar, List

from panel_auth.utils.i18n import get_translated_message


@dataclass(frozen=True)
class PasswordRule:
    """Password complexity rule used by the reset form.

    Attributes:
        min_length: Minimum number of characters
        max_length: Maximum number of characters
        mixed_case: Require both an uppercase and a lowercase letter
        numbers: Require at least one digit
        symbols: Require at least one special character
    """

    min_length: int = 8
    max_length: int = 128
    mixed_case: bool = True
    numbers: bool = True
    symbols: bool = True

    SPECIAL_CHARS: ClassVar[str] = "!@#$%^&*()_+-=[]{}|;:,.<>?~`'\"\\/"

    @classmethod
    def default(cls) -> "PasswordRule":
        """The panel's default password rule."""
        return cls()

    def errors(self, value: str, attribute: str = "password", language: str = "en") -> List[str]:
        """Check a candidate password against the rule.

        Args:
            value: Raw password string
            attribute: Field name substituted into messages
            language: Language code for messages

        Returns:
            List[str]: Translated failure messages, empty when the password passes
        """
        failures: List[str] = []

        if len(value) < self.min_length:
            failures.append(get_translated_message(
                "validation.password.min", language, attribute=attribute, min=self.min_length
            ))
        if len(value) > self.max_length:
            failures.append(get_translated_message(
                "validation.password.max", language, attribute=attribute, max=self.max_length
            ))
        if self.mixed_case and not (re.search(r"[A-Z]", value) and re.search(r"[a-z]", value)):
            failures.append(get_translated_message(
                "validation.password.mixed", language, attribute=attribute
            ))
        if self.numbers and not re.search(r"\d", value):
            failures.append(get_translated_message(
                "validation.password.numbers", language, attribute=attribute
            ))
        if self.symbols and not any(char in self.SPECIAL_CHARS for char in value):
            failures.append(get_translated_message(
                "validation.password.symbols", language, attribute=attribute
            ))

        return failures
