from __future__ import annotations

"""Request-payload Pydantic models for the reset password page."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ResetPasswordSubmitRequest(BaseModel):
    """Payload expected by ``POST /password-reset/reset/{page_id}``.

    ``email`` and ``token`` are accepted only so that a client echoing them
    back unchanged keeps working; the server copies are authoritative.
    Missing passwords are left to the form rules so that the client gets
    translated, per-field messages.
    """

    model_config = ConfigDict(populate_by_name=True)

    password: str = Field("", examples=["N3w-Str0ng!pass"])
    password_confirmation: str = Field(
        "", alias="passwordConfirmation", examples=["N3w-Str0ng!pass"]
    )
    email: Optional[str] = Field(None, examples=["admin@example.com"])
    token: Optional[str] = Field(None, examples=["5f1c9a..."])

    def to_form_input(self) -> dict:
        """Fields the client actually sent, keyed the way the form names them."""
        return self.model_dump(by_alias=True, exclude_unset=True)
