"""Reset password form.

The form declares the three fields of the reset page and enforces their
rules before the workflow is allowed to touch the password broker:

- ``email``: display only. Disabled fields are not dehydrated, so the value
  never comes back from the client.
- ``password``: required, must satisfy the password rule and equal the
  confirmation.
- ``passwordConfirmation``: required, used for comparison only.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import structlog

from panel_auth.core.exceptions import FormValidationError
from panel_auth.domain.entities.reset_attempt import ResetAttempt
from panel_auth.domain.interfaces.services import IForm
from panel_auth.domain.value_objects.password import PasswordRule
from panel_auth.utils.i18n import get_translated_message

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class FormField:
    """Declarative description of one form input."""

    name: str
    attribute: str
    label_key: str
    input_type: str = "text"
    required: bool = False
    disabled: bool = False
    dehydrated: bool = True
    autofocus: bool = False
    same_as: Optional[str] = None
    rule: Optional[PasswordRule] = None
    validation_attribute_key: Optional[str] = None


class ResetPasswordForm(IForm):
    """Form bound to a ``ResetAttempt``."""

    def __init__(self, rule: Optional[PasswordRule] = None):
        self._rule = rule or PasswordRule.default()
        self._attempt: Optional[ResetAttempt] = None
        self.fields: List[FormField] = [
            FormField(
                name="email",
                attribute="email",
                label_key="reset_password.fields.email.label",
                input_type="email",
                disabled=True,
                dehydrated=False,
                autofocus=True,
            ),
            FormField(
                name="password",
                attribute="password",
                label_key="reset_password.fields.password.label",
                input_type="password",
                required=True,
                same_as="passwordConfirmation",
                rule=self._rule,
                validation_attribute_key="reset_password.fields.password.validation_attribute",
            ),
            FormField(
                name="passwordConfirmation",
                attribute="password_confirmation",
                label_key="reset_password.fields.password_confirmation.label",
                input_type="password",
                required=True,
                dehydrated=False,
            ),
        ]

    def fill(self, attempt: ResetAttempt) -> None:
        self._attempt = attempt

    @property
    def attempt(self) -> ResetAttempt:
        if self._attempt is None:
            raise RuntimeError("ResetPasswordForm used before fill()")
        return self._attempt

    def _field(self, name: str) -> FormField:
        return next(f for f in self.fields if f.name == name)

    def _value(self, form_field: FormField) -> Any:
        return getattr(self.attempt, form_field.attribute)

    def _label(self, form_field: FormField, language: str) -> str:
        key = form_field.validation_attribute_key or form_field.label_key
        return get_translated_message(key, language)

    def validate(self) -> Dict[str, List[str]]:
        """Run every field rule and collect failures keyed by field name."""
        language = self.attempt.language
        errors: Dict[str, List[str]] = {}

        for form_field in self.fields:
            if form_field.disabled:
                continue

            value = self._value(form_field)
            attribute = self._label(form_field, language)
            messages: List[str] = []

            if form_field.required and not value:
                messages.append(
                    get_translated_message("validation.required", language, attribute=attribute)
                )
            else:
                if form_field.rule is not None:
                    messages.extend(form_field.rule.errors(value, attribute, language))
                if form_field.same_as is not None:
                    other = self._value(self._field(form_field.same_as))
                    if value != other:
                        messages.append(
                            get_translated_message("validation.same", language, attribute=attribute)
                        )

            if messages:
                errors[form_field.name] = messages

        return errors

    def get_state(self) -> Dict[str, Any]:
        errors = self.validate()
        if errors:
            logger.info("Reset password form rejected", fields=sorted(errors))
            raise FormValidationError(errors)

        return {
            form_field.name: self._value(form_field)
            for form_field in self.fields
            if form_field.dehydrated and not form_field.disabled
        }

    def describe(self) -> List[Dict[str, Any]]:
        language = self.attempt.language if self._attempt is not None else "en"
        described = []
        for form_field in self.fields:
            entry = {
                "name": form_field.name,
                "label": get_translated_message(form_field.label_key, language),
                "type": form_field.input_type,
                "required": form_field.required,
                "disabled": form_field.disabled,
                "autofocus": form_field.autofocus,
            }
            if form_field.input_type != "password" and self._attempt is not None:
                entry["value"] = self._value(form_field)
            described.append(entry)
        return described
