"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from typed_form.registry import DEFAULT_SCHEMA_PATH


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def registry_path(project_root: Path) -> Path:
    """Return the sample field type registry path."""
    return project_root / "field-type-registry"


@pytest.fixture
def schema_path() -> Path:
    """Return the packaged field type spec schema path."""
    return DEFAULT_SCHEMA_PATH


@pytest.fixture
def contact_field_types() -> dict[str, str]:
    """Field types for a contact payload."""
    return {
        "id": "string",
        "name": "string",
        "phoneNumber": "string",
        "age": "number",
        "zipCode": "string",
        "isActive": "boolean",
    }


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point TYPEDFORM_HOME at a temp dir and clear the registry override."""
    home = tmp_path / "typedform-home"
    monkeypatch.setenv("TYPEDFORM_HOME", str(home))
    monkeypatch.delenv("TYPEDFORM_FIELD_TYPE_REGISTRY", raising=False)
    return home
