"""YAML configuration loader with inheritance support.

Supports:
- Loading YAML config files
- Config inheritance via 'extends' key
- Deep merging of nested config
- Environment override of the MongoDB URI
"""

import os
from pathlib import Path
from typing import Any

import yaml

from . import LoggingConfig, MenuConfig, StorageConfig, TracklogConfig
from .profiles import Profile, get_profile_path

MONGODB_URI_ENV = "TRACKLOG_MONGODB_URI"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    Values from override take precedence. Nested dicts are merged recursively.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml_with_inheritance(path: Path) -> dict[str, Any]:
    """Load YAML file with inheritance support.

    If the file contains an 'extends' key, the base config is loaded first
    and merged with the current config.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        config = yaml.safe_load(f) or {}

    if "extends" in config:
        base_name = config.pop("extends")
        base_path = path.parent / base_name
        base_config = load_yaml_with_inheritance(base_path)
        config = deep_merge(base_config, config)

    return config


def dict_to_config(data: dict[str, Any]) -> TracklogConfig:
    """Convert raw dict to typed TracklogConfig dataclass."""
    root = data.get("tracklog", {}) or {}

    # YAML sections may be present but empty
    def safe_get(key: str) -> dict[str, Any]:
        value = root.get(key, {})
        return value if value is not None else {}

    storage = StorageConfig(**safe_get("storage"))
    env_uri = os.environ.get(MONGODB_URI_ENV)
    if env_uri:
        storage.uri = env_uri

    return TracklogConfig(
        storage=storage,
        logging=LoggingConfig(**safe_get("logging")),
        menu=MenuConfig(**safe_get("menu")),
    )


class YAMLConfigLoader:
    """YAML configuration loader implementation."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize loader with optional config directory.

        Args:
            config_dir: Directory containing profile files.
                        Defaults to 'config' relative to project root.
        """
        self._config_dir = config_dir

    def load(self, path: Path) -> TracklogConfig:
        """Load configuration from file path."""
        raw_config = load_yaml_with_inheritance(path)
        return dict_to_config(raw_config)

    def load_profile(self, profile: str | None = None) -> TracklogConfig:
        """Load configuration by profile name.

        Args:
            profile: Profile name (dev, prod, test), or None to detect it
                     from TRACKLOG_PROFILE

        Raises:
            ValueError: If the profile name is unknown
        """
        selected = Profile(profile) if profile is not None else None
        return self.load(get_profile_path(selected, self._config_dir))


def load_config(
    path: str | Path | None = None,
    profile: str | None = None,
    config_dir: Path | None = None,
) -> TracklogConfig:
    """Load tracklog configuration.

    Args:
        path: Direct path to config file (takes precedence)
        profile: Profile name ('dev', 'prod', 'test') if path not given,
                 otherwise detected from TRACKLOG_PROFILE
        config_dir: Directory holding profile files

    Returns:
        Parsed TracklogConfig

    Examples:
        >>> config = load_config(profile="dev")
        >>> config = load_config(path="/path/to/config.yaml")
    """
    loader = YAMLConfigLoader(config_dir)

    if path is not None:
        return loader.load(Path(path))
    return loader.load_profile(profile)


__all__ = [
    "MONGODB_URI_ENV",
    "YAMLConfigLoader",
    "deep_merge",
    "dict_to_config",
    "load_config",
    "load_yaml_with_inheritance",
]
