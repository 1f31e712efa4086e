"""Field type registry for loading and caching field type specifications."""

import json
import logging
from pathlib import Path

import jsonschema

from typed_form.registry.models import FieldTypeSpec

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_PATH = Path(__file__).with_name("field_type_spec.schema.json")


class SpecNotFoundError(Exception):
    """Raised when a field type specification is not found."""

    pass


class SpecValidationError(Exception):
    """Raised when a field type specification fails validation."""

    pass


def _version_key(version: str) -> tuple[int, ...]:
    """Sort key for dotted numeric versions ("1.10.0" after "1.9.0")."""
    try:
        return tuple(int(part) for part in version.split("."))
    except ValueError:
        return ()


class FieldTypeRegistry:
    """Registry for loading and caching field type specifications.

    Loads specs from a directory structure:
        <registry_path>/specs/<spec_id>/<version>.json

    Where version uses dashes instead of dots (e.g., 1-0-0.json for 1.0.0).
    """

    def __init__(
        self,
        registry_path: Path | str,
        schema_path: Path | str | None = None,
    ) -> None:
        """Initialize the field type registry.

        Args:
            registry_path: Path to the field type registry directory.
            schema_path: Optional path to the field_type_spec schema for
                validation. DEFAULT_SCHEMA_PATH is the packaged schema.
        """
        self.registry_path = Path(registry_path)
        self.specs_path = self.registry_path / "specs"
        self._cache: dict[tuple[str, str], FieldTypeSpec] = {}
        self._schema: dict | None = None

        if schema_path:
            with open(schema_path) as f:
                self._schema = json.load(f)

    def _get_spec_path(self, spec_id: str, version: str) -> Path:
        filename = version.replace(".", "-") + ".json"
        return self.specs_path / spec_id / filename

    def get(self, spec_id: str, version: str) -> FieldTypeSpec:
        """Get a field type specification by ID and version.

        Args:
            spec_id: The spec identifier (e.g., 'contact').
            version: The version string (e.g., '1.0.0').

        Returns:
            The loaded FieldTypeSpec.

        Raises:
            SpecNotFoundError: If the spec file doesn't exist.
            SpecValidationError: If the spec fails schema or model validation.
        """
        cache_key = (spec_id, version)
        if cache_key in self._cache:
            return self._cache[cache_key]

        spec_path = self._get_spec_path(spec_id, version)
        if not spec_path.exists():
            raise SpecNotFoundError(
                f"Field type spec not found: {spec_id}@{version} "
                f"(expected at {spec_path})"
            )

        with open(spec_path) as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise SpecValidationError(
                    f"Field type spec {spec_id}@{version} is not valid JSON: {e}"
                ) from e

        if self._schema:
            try:
                jsonschema.validate(data, self._schema)
            except jsonschema.ValidationError as e:
                raise SpecValidationError(
                    f"Field type spec validation failed for {spec_id}@{version}: {e.message}"
                ) from e

        try:
            spec = FieldTypeSpec.model_validate(data)
        except ValueError as e:
            raise SpecValidationError(
                f"Field type spec {spec_id}@{version} is invalid: {e}"
            ) from e

        logger.debug("Loaded field type spec %s@%s from %s", spec_id, version, spec_path)
        self._cache[cache_key] = spec
        return spec

    def list_specs(self) -> list[str]:
        """List all available spec IDs."""
        if not self.specs_path.exists():
            return []
        return sorted(d.name for d in self.specs_path.iterdir() if d.is_dir())

    def list_versions(self, spec_id: str) -> list[str]:
        """List all available versions for a spec, oldest first."""
        spec_dir = self.specs_path / spec_id
        if not spec_dir.exists():
            return []
        versions = [f.stem.replace("-", ".") for f in spec_dir.glob("*.json")]
        return sorted(versions, key=_version_key)

    def get_latest(self, spec_id: str) -> FieldTypeSpec:
        """Get the latest version of a spec.

        Raises:
            SpecNotFoundError: If no versions exist.
        """
        versions = self.list_versions(spec_id)
        if not versions:
            raise SpecNotFoundError(f"No versions found for field type spec: {spec_id}")
        return self.get(spec_id, versions[-1])
