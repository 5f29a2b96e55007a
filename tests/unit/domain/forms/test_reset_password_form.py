"""Unit tests for the reset password form."""

import pytest

from panel_auth.core.exceptions import FormValidationError
from panel_auth.domain.entities.reset_attempt import ResetAttempt
from panel_auth.domain.forms import ResetPasswordForm

STRONG = "N3w-Str0ng!pass"


@pytest.fixture
def attempt():
    attempt = ResetAttempt(email="admin@example.com", token="t" * 64)
    attempt.lock()
    return attempt


@pytest.fixture
def form(attempt):
    form = ResetPasswordForm()
    form.fill(attempt)
    return form


class TestResetPasswordFormValidation:
    """Validation runs before any state leaves the form."""

    def test_valid_state_contains_only_password(self, form, attempt):
        # Arrange
        attempt.fill({"password": STRONG, "passwordConfirmation": STRONG})

        # Act
        state = form.get_state()

        # Assert
        assert state == {"password": STRONG}

    def test_missing_fields_are_required(self, form):
        with pytest.raises(FormValidationError) as exc_info:
            form.get_state()

        errors = exc_info.value.errors
        assert set(errors) == {"password", "passwordConfirmation"}
        assert errors["password"] == ["The password field is required."]

    def test_mismatched_confirmation(self, form, attempt):
        attempt.fill({"password": STRONG, "passwordConfirmation": STRONG + "x"})

        with pytest.raises(FormValidationError) as exc_info:
            form.get_state()

        assert exc_info.value.errors == {
            "password": ["The password does not match the confirmation."]
        }

    def test_weak_password(self, form, attempt):
        attempt.fill({"password": "weak", "passwordConfirmation": "weak"})

        with pytest.raises(FormValidationError) as exc_info:
            form.get_state()

        assert "password" in exc_info.value.errors
        assert "passwordConfirmation" not in exc_info.value.errors
        assert exc_info.value.code == "form_validation_error"

    def test_email_is_never_validated_or_dehydrated(self):
        # Arrange
        attempt_without_email = ResetAttempt(token="t" * 64)
        attempt_without_email.lock()
        form = ResetPasswordForm()
        form.fill(attempt_without_email)
        attempt_without_email.fill({"password": STRONG, "passwordConfirmation": STRONG})

        # Act
        state = form.get_state()

        # Assert
        assert "email" not in state

    def test_messages_follow_attempt_language(self):
        attempt = ResetAttempt(email="a@example.com", token="t", language="es")
        form = ResetPasswordForm()
        form.fill(attempt)

        with pytest.raises(FormValidationError) as exc_info:
            form.get_state()

        assert "obligatorio" in exc_info.value.errors["password"][0]

    def test_use_before_fill_is_an_error(self):
        with pytest.raises(RuntimeError):
            ResetPasswordForm().get_state()


class TestResetPasswordFormDescribe:
    """The schema is exposed as data for the host to render."""

    def test_describe_fields(self, form):
        fields = {entry["name"]: entry for entry in form.describe()}

        assert list(fields) == ["email", "password", "passwordConfirmation"]
        assert fields["email"]["disabled"] is True
        assert fields["email"]["autofocus"] is True
        assert fields["email"]["value"] == "admin@example.com"
        assert fields["password"]["type"] == "password"
        assert fields["password"]["required"] is True
        assert fields["passwordConfirmation"]["label"] == "Confirm password"

    def test_describe_never_exposes_passwords(self, form, attempt):
        attempt.fill({"password": STRONG, "passwordConfirmation": STRONG})

        for entry in form.describe():
            assert entry.get("value") != STRONG
