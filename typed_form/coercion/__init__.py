"""Type coercion for single values and field type maps."""

from typed_form.coercion.types import FieldType, FieldTypeError, parse_field_types
from typed_form.coercion.values import (
    coerce_value,
    ensure_number,
    ensure_string,
    preserve_numeric_string,
    to_boolean,
    to_number,
    to_text,
)

__all__ = [
    "FieldType",
    "FieldTypeError",
    "coerce_value",
    "ensure_number",
    "ensure_string",
    "parse_field_types",
    "preserve_numeric_string",
    "to_boolean",
    "to_number",
    "to_text",
]
