"""Declarative page forms."""

from .reset_password_form import FormField, ResetPasswordForm

__all__ = ["FormField", "ResetPasswordForm"]
