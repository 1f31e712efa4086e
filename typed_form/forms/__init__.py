"""Typed form state and validation."""

from typed_form.forms.controller import FormController, FormState, FormStatus
from typed_form.forms.validators import (
    at_least,
    build_validator,
    is_valid_credit_card,
    is_valid_email,
    is_valid_password,
    is_valid_phone_number,
    is_valid_url,
    matches,
    required,
    satisfies,
)

__all__ = [
    "FormController",
    "FormState",
    "FormStatus",
    "at_least",
    "build_validator",
    "is_valid_credit_card",
    "is_valid_email",
    "is_valid_password",
    "is_valid_phone_number",
    "is_valid_url",
    "matches",
    "required",
    "satisfies",
]
