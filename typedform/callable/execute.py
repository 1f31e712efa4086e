"""Execute interface for the typedform callable protocol.

Normalizes payloads in-process and returns a CallableResult dict.
"""

from __future__ import annotations

import logging
from typing import Any

from typed_form.normalize import Normalizer
from typed_form.registry import DEFAULT_SCHEMA_PATH, FieldTypeRegistry
from typedform.callable.result import CallableResult, NormalizationStats
from typedform.config import get_field_type_registry_path

logger = logging.getLogger(__name__)


def _resolve_field_types(params: dict[str, Any]) -> dict[str, Any]:
    field_types = params.get("field_types")
    if field_types is not None:
        if not isinstance(field_types, dict):
            raise ValueError("'field_types' must be a mapping of field name to type")
        return field_types

    spec_id = params.get("spec_id")
    if not spec_id:
        raise ValueError("Either 'field_types' or 'spec_id' is required in params")

    config = params.get("config", {})
    registry = FieldTypeRegistry(
        get_field_type_registry_path(config.get("registry_path")),
        schema_path=DEFAULT_SCHEMA_PATH,
    )
    spec_version = params.get("spec_version")
    if spec_version:
        spec = registry.get(spec_id, spec_version)
    else:
        spec = registry.get_latest(spec_id)

    logger.debug("Using field type spec %s@%s", spec.spec_id, spec.version)
    return spec.fields


def execute(params: dict[str, Any]) -> dict[str, Any]:
    """Normalize payloads against a field type map.

    Args:
        params: Dictionary containing:
            - items: dict | list - A payload or list of payloads.
            - field_types: dict - Field name -> type map, or
            - spec_id: str - Field type spec to load from the registry.
            - spec_version: str - Specific spec version (default: latest).
            - config: dict - Optional overrides:
                - registry_path: str - Field type registry path.

    Returns:
        CallableResult dict with schema_version, items and stats.

    Raises:
        ValueError: If required parameters are missing or malformed.
        FieldTypeError: If the field type map names an unknown type.
        SpecNotFoundError: If the spec is not in the registry.
    """
    if "items" not in params:
        raise ValueError("'items' is required in params")

    items = params["items"]
    if isinstance(items, dict):
        payloads = [items]
    elif isinstance(items, list):
        payloads = items
    else:
        raise ValueError("'items' must be a payload dict or a list of payloads")

    normalizer = Normalizer(_resolve_field_types(params))
    results = normalizer.normalize_many(payloads)

    stats = NormalizationStats(input=len(payloads), output=len(results))
    for payload, result in zip(payloads, results):
        if not isinstance(payload, dict):
            stats.skipped += 1
        stats.coerced_fields += len(result.changed_fields)

    return CallableResult.inline([r.payload for r in results], stats).to_dict()
