"""Registry for loading field type specifications."""

from typed_form.registry.field_types import (
    DEFAULT_SCHEMA_PATH,
    FieldTypeRegistry,
    SpecNotFoundError,
    SpecValidationError,
)
from typed_form.registry.models import FieldTypeSpec

__all__ = [
    "DEFAULT_SCHEMA_PATH",
    "FieldTypeRegistry",
    "FieldTypeSpec",
    "SpecNotFoundError",
    "SpecValidationError",
]
