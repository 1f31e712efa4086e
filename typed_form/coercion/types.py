"""Field type declarations and field type map parsing."""

from collections.abc import Mapping
from enum import Enum


class FieldTypeError(ValueError):
    """Raised when a field type map names an unknown type."""

    pass


class FieldType(str, Enum):
    """Declared primitive type of a field."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    AUTO = "auto"  # Stored as received


def parse_field_types(field_types: Mapping[str, FieldType | str]) -> dict[str, FieldType]:
    """Parse a field type map into FieldType values.

    Args:
        field_types: Mapping of field name to type name or FieldType.

    Returns:
        A new dict of field name -> FieldType.

    Raises:
        FieldTypeError: If a type name is not one of string, number,
            boolean or auto.
    """
    parsed: dict[str, FieldType] = {}

    for field, declared in field_types.items():
        try:
            parsed[field] = FieldType(declared)
        except ValueError as e:
            valid_types = [t.value for t in FieldType]
            raise FieldTypeError(
                f"Unknown field type {declared!r} for field {field!r}. "
                f"Valid types: {valid_types}"
            ) from e

    return parsed
