"""Configuration management for the CLI."""

import os
from pathlib import Path
from typing import Any

import yaml

from tmplsearch.exceptions import ConfigError


class Config:
    """Configuration management for the CLI application."""

    @staticmethod
    def from_file(path: Path) -> dict[str, Any]:
        """Load configuration from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(str(path), f"invalid YAML: {e}")
        except OSError as e:
            raise ConfigError(str(path), str(e))

        if not isinstance(data, dict):
            raise ConfigError(str(path), "expected a mapping at top level")
        return data

    @staticmethod
    def get_config_paths() -> list[Path]:
        """Get the default configuration file paths to check."""
        xdg_config_home = Path(
            os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
        )
        return [
            xdg_config_home / "tmplsearch" / "config.yaml",
            Path(".tmplsearch.yaml"),
        ]

    @staticmethod
    def merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
        """Merge multiple configuration dictionaries."""
        result: dict[str, Any] = {}
        for config in configs:
            result = _deep_merge(result, config)
        return result


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from files and environment variables.

    Args:
        path: Explicit configuration file, merged after the default paths

    Returns:
        Merged configuration

    Raises:
        ConfigError: If the explicit configuration file is invalid
    """
    config: dict[str, Any] = {}

    # Default paths are optional, so a broken one is skipped
    for default_path in Config.get_config_paths():
        if default_path.exists():
            try:
                config = Config.merge_configs(config, Config.from_file(default_path))
            except ConfigError:
                continue

    if path is not None:
        config = Config.merge_configs(config, Config.from_file(path))

    env_overrides = {}
    if settings_dir := os.environ.get("TMPLSEARCH_SETTINGS_DIR"):
        env_overrides["settings_dir"] = settings_dir
    if language := os.environ.get("TMPLSEARCH_DEFAULT_LANGUAGE"):
        env_overrides["default_language"] = language

    return Config.merge_configs(config, env_overrides)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
