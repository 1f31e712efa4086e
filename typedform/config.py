"""Global configuration for typedform.

Layout under the home directory (default ~/.config/typedform):

    config.yaml
    registry/field-type-registry/specs/<spec_id>/<version>.json
"""

import os
from pathlib import Path
from typing import Any

import yaml

HOME_ENV_VAR = "TYPEDFORM_HOME"
REGISTRY_ENV_VAR = "TYPEDFORM_FIELD_TYPE_REGISTRY"
REGISTRY_CONFIG_KEY = "default_field_type_registry_path"


class ConfigError(Exception):
    """Raised when the global config file is malformed."""

    pass


def get_typedform_home() -> Path:
    """Return the typedform home directory."""
    env_home = os.environ.get(HOME_ENV_VAR)
    if env_home:
        return Path(env_home).expanduser()
    return Path.home() / ".config" / "typedform"


def get_config_path() -> Path:
    return get_typedform_home() / "config.yaml"


def get_registry_root() -> Path:
    return get_typedform_home() / "registry"


def load_global_config() -> dict[str, Any]:
    """Load config.yaml from the home directory.

    Returns:
        The config mapping, or an empty dict if the file does not exist.

    Raises:
        ConfigError: If the file does not contain a mapping.
    """
    config_path = get_config_path()
    if not config_path.exists():
        return {}

    with open(config_path) as f:
        config = yaml.safe_load(f)

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(f"Config at {config_path} must be a mapping")
    return config


def get_field_type_registry_path(override: Path | str | None = None) -> Path:
    """Resolve the field type registry path.

    Order: explicit override, TYPEDFORM_FIELD_TYPE_REGISTRY, the
    default_field_type_registry_path config key, then the registry under
    the home directory.
    """
    if override:
        return Path(override)

    env_path = os.environ.get(REGISTRY_ENV_VAR)
    if env_path:
        return Path(env_path)

    config_path = load_global_config().get(REGISTRY_CONFIG_KEY)
    if config_path:
        return Path(config_path)

    return get_registry_root() / "field-type-registry"
