"""Typed form state controller.

Holds the values, errors and touched flags of a single form. Every change
is funneled through field-level coercion before it is stored. Validation and
submission are caller-supplied callables; the controller never raises on
invalid input and reports validation failures only through `errors`.
"""

import logging
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from typed_form.coercion import (
    FieldType,
    coerce_value,
    parse_field_types,
    preserve_numeric_string,
)

logger = logging.getLogger(__name__)

FormErrors = dict[str, str]
Validate = Callable[[dict[str, Any]], Mapping[str, str]]
OnSubmit = Callable[[dict[str, Any]], Any]


class FormStatus(str, Enum):
    """Lifecycle status of a form."""

    CLEAN = "clean"  # No changes since creation or reset
    EDITING = "editing"
    VALIDATING = "validating"  # Validator running
    SUBMITTING = "submitting"  # on_submit running


class FormState(BaseModel):
    """Snapshot of a form's state."""

    values: dict[str, Any]
    errors: FormErrors = Field(default_factory=dict)
    touched: set[str] = Field(default_factory=set)
    is_submitting: bool = False
    status: FormStatus = FormStatus.CLEAN


class FormController:
    """State container for one form with per-field type coercion.

    Error clearing is asymmetric: only handle_change removes a field's
    error. handle_blur adds an error for the blurred field but never
    removes one, and handle_submit replaces the whole error map.

    handle_submit has no in-flight guard. Calling it twice calls on_submit
    twice.
    """

    def __init__(
        self,
        initial_values: dict[str, Any],
        on_submit: OnSubmit,
        validate: Validate | None = None,
        field_types: Mapping[str, FieldType | str] | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            initial_values: Starting field values. Never mutated; reset_form
                restores this exact object.
            on_submit: Called with the current values when a submit passes
                validation. Not awaited.
            validate: Optional callable returning field -> error message for
                the given values. An empty result means the form is valid.
            field_types: Optional mapping of field name -> declared type.
                Fields without a declared type are inferred from the value.

        Raises:
            FieldTypeError: If field_types names an unknown type.
        """
        self.initial_values = initial_values
        self.on_submit = on_submit
        self.validate = validate
        self.field_types = parse_field_types(field_types or {})

        self.values: dict[str, Any] = initial_values
        self.errors: FormErrors = {}
        self.touched: set[str] = set()
        self.is_submitting = False
        self.status = FormStatus.CLEAN

    @property
    def state(self) -> FormState:
        """A copy of the current form state."""
        return FormState(
            values=dict(self.values),
            errors=dict(self.errors),
            touched=set(self.touched),
            is_submitting=self.is_submitting,
            status=self.status,
        )

    def coerce(self, name: str, raw_value: Any) -> Any:
        """Coerce a raw input value according to the field's declared type.

        Undeclared fields turn numbers into strings and store everything else
        unchanged. Fields declared auto are stored unchanged.
        """
        field_type = self.field_types.get(name)

        if field_type is None:
            is_number = isinstance(raw_value, (int, float)) and not isinstance(raw_value, bool)
            return preserve_numeric_string(raw_value) if is_number else raw_value

        return coerce_value(raw_value, field_type)

    def handle_change(self, name: str, raw_value: Any) -> None:
        """Store a new value for a field and clear its error."""
        value = self.coerce(name, raw_value)
        self.values = {**self.values, name: value}
        self.status = FormStatus.EDITING

        # Optimistic clear; the field is re-validated on blur or submit
        if self.errors.get(name):
            self.errors = {k: v for k, v in self.errors.items() if k != name}

    def handle_blur(self, name: str) -> None:
        """Mark a field touched and report its validation error, if any."""
        self.touched.add(name)

        if self.validate is None:
            return

        previous_status = self.status
        self.status = FormStatus.VALIDATING
        try:
            field_errors = self.validate(self.values)
        finally:
            self.status = previous_status

        message = field_errors.get(name)
        if message:
            self.errors = {**self.errors, name: message}

    def handle_submit(self) -> bool:
        """Validate the form and call on_submit if it is valid.

        Returns:
            True if on_submit was called.
        """
        if self.validate is not None:
            self.status = FormStatus.VALIDATING
            try:
                form_errors = dict(self.validate(self.values))
            finally:
                self.status = FormStatus.EDITING

            self.errors = form_errors
            self.touched |= set(self.values)

            if form_errors:
                logger.debug("Submit blocked by errors on: %s", ", ".join(sorted(form_errors)))
                return False

        self.is_submitting = True
        self.status = FormStatus.SUBMITTING
        try:
            self.on_submit(self.values)
        finally:
            self.is_submitting = False
            self.status = FormStatus.EDITING

        return True

    def reset_form(self) -> None:
        """Restore the initial values and clear errors and touched fields."""
        self.values = self.initial_values
        self.errors = {}
        self.touched = set()
        self.is_submitting = False
        self.status = FormStatus.CLEAN
