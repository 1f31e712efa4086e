"""Pydantic models for field type specifications."""

from typing import Literal

from pydantic import BaseModel, Field

from typed_form.coercion import FieldType


class FieldTypeSpec(BaseModel):
    """A versioned field type map for one endpoint or form."""

    type: Literal["field_type_spec"]
    spec_id: str
    version: str
    name: str
    description: str | None = None
    fields: dict[str, FieldType] = Field(default_factory=dict)

    def get_field_type(self, field: str) -> FieldType | None:
        """Get the declared type of a field."""
        return self.fields.get(field)
