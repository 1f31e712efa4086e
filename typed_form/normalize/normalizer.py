"""Normalizer for decoded API payloads.

Applies field-level coercion to JSON-decoded payloads so that values with
ambiguous wire typing (a zip code sent as a bare number, a flag sent as 0/1)
are corrected before reaching application code. Normalization is shallow:
nested objects and lists are never visited.

Malformed input is not an error. Anything that is not a mapping (or, for the
array form, a list) is returned unchanged.
"""

import logging
import math
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from typed_form.coercion import FieldType, coerce_value, parse_field_types

logger = logging.getLogger(__name__)


class CoercionRecord(BaseModel):
    """A single field coercion applied to a payload."""

    field: str
    field_type: FieldType
    original: Any
    value: Any
    changed: bool


class NormalizationResult(BaseModel):
    """Result of normalizing one payload."""

    payload: Any
    records: list[CoercionRecord] = Field(default_factory=list)
    absent_fields: list[str] = Field(default_factory=list)

    @property
    def changed_fields(self) -> list[str]:
        """Fields whose value or type was changed by coercion."""
        return [record.field for record in self.records if record.changed]


def _is_changed(original: Any, value: Any) -> bool:
    if type(original) is not type(value):
        return True
    if isinstance(value, float) and math.isnan(original) and math.isnan(value):
        return False
    return original != value


def _known_field_types(field_types: Mapping[str, FieldType | str]) -> dict[str, FieldType]:
    """Parse a field type map, dropping entries with unknown type names."""
    known: dict[str, FieldType] = {}
    for field, declared in field_types.items():
        try:
            known[field] = FieldType(declared)
        except ValueError:
            logger.debug("Ignoring unknown field type %r for field %r", declared, field)
    return known


def _normalize(
    payload: Mapping[str, Any],
    field_types: Mapping[str, FieldType],
    records: list[CoercionRecord] | None = None,
    absent_fields: list[str] | None = None,
) -> dict[str, Any]:
    result = dict(payload)

    for field, field_type in field_types.items():
        if field not in result:
            if absent_fields is not None:
                absent_fields.append(field)
            continue

        original = result[field]
        result[field] = coerce_value(original, field_type)

        if records is not None:
            records.append(
                CoercionRecord(
                    field=field,
                    field_type=field_type,
                    original=original,
                    value=result[field],
                    changed=_is_changed(original, result[field]),
                )
            )

    return result


def process_api_response(payload: Any, field_types: Mapping[str, FieldType | str]) -> Any:
    """Coerce the declared fields of a single payload.

    Args:
        payload: A JSON-decoded object. Anything else is returned as-is.
        field_types: Mapping of field name -> expected type. Entries naming
            an unknown type are ignored.

    Returns:
        A shallow copy of the payload with declared fields coerced. Declared
        fields missing from the payload are not added.
    """
    if not isinstance(payload, Mapping):
        return payload

    return _normalize(payload, _known_field_types(field_types))


def process_api_response_array(
    payloads: Any,
    field_types: Mapping[str, FieldType | str],
) -> Any:
    """Coerce the declared fields of every payload in a list.

    Args:
        payloads: A list of JSON-decoded objects. Anything else is returned as-is.
        field_types: Mapping of field name -> expected type. Entries naming
            an unknown type are ignored.

    Returns:
        A new list with process_api_response applied to each element.
    """
    if not isinstance(payloads, list):
        return payloads

    parsed = _known_field_types(field_types)
    return [
        _normalize(item, parsed) if isinstance(item, Mapping) else item
        for item in payloads
    ]


class Normalizer:
    """Normalizes payloads against a fixed field type map.

    Same coercion rules as process_api_response, with a record of every
    coercion applied and of declared fields the payload did not carry.
    """

    def __init__(self, field_types: Mapping[str, FieldType | str]) -> None:
        """Initialize the normalizer.

        Args:
            field_types: Mapping of field name -> expected type.

        Raises:
            FieldTypeError: If the map names an unknown type.
        """
        self.field_types = parse_field_types(field_types)

    def normalize(self, payload: Any) -> NormalizationResult:
        """Normalize a single payload.

        Non-mapping payloads are returned unchanged with no records.
        """
        if not isinstance(payload, Mapping):
            logger.debug("Skipping non-object payload of type %s", type(payload).__name__)
            return NormalizationResult(payload=payload)

        records: list[CoercionRecord] = []
        absent_fields: list[str] = []
        normalized = _normalize(payload, self.field_types, records, absent_fields)

        changed = [record.field for record in records if record.changed]
        if changed:
            logger.debug("Coerced fields: %s", ", ".join(changed))

        return NormalizationResult(
            payload=normalized,
            records=records,
            absent_fields=absent_fields,
        )

    def normalize_many(self, payloads: list[Any]) -> list[NormalizationResult]:
        """Normalize each payload in a list independently."""
        return [self.normalize(payload) for payload in payloads]
