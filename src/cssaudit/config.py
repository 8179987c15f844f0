"""Configuration loading for css-audit.

Settings come from ``[tool.cssaudit]`` in pyproject.toml and from a
``cssaudit.json`` file; the JSON file extends and overrides pyproject.
"""

import json
from pathlib import Path

import tomli

from cssaudit.errors import ConfigurationError

CONFIG_FILE = "cssaudit.json"

LIST_KEYS = ("ignore_patterns", "exclude")


def load_config(config_path: Path) -> dict:
    """Load a cssaudit.json configuration file."""
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Config file not found: {config_path}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_path} must contain a JSON object")
    return data


def load_pyproject_config(project_root: Path) -> dict:
    """Load the [tool.cssaudit] table from pyproject.toml, if present."""
    pyproject_path = project_root / "pyproject.toml"
    if not pyproject_path.is_file():
        return {}

    try:
        with open(pyproject_path, "rb") as f:
            data = tomli.load(f)
    except tomli.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {pyproject_path}: {e}") from e

    section = data.get("tool", {}).get("cssaudit", {})
    if not isinstance(section, dict):
        raise ConfigurationError(f"[tool.cssaudit] in {pyproject_path} must be a table")
    return section


def merge_config(base: dict, override: dict) -> dict:
    """Merge two configs: list settings are concatenated, others replaced."""
    merged = dict(base)
    for key, value in override.items():
        if key in LIST_KEYS and key in merged:
            merged[key] = list(_get_list(merged, key)) + list(_get_list(override, key))
        else:
            merged[key] = value
    return merged


def resolve_config(project_root: Path, config_path: Path | None = None) -> dict:
    """Build the effective configuration for a project.

    Args:
        project_root: Root directory of the analyzed project.
        config_path: Explicit JSON config. Defaults to ``<root>/cssaudit.json``
            when that file exists.
    """
    config = load_pyproject_config(project_root)

    if config_path is None:
        default_path = project_root / CONFIG_FILE
        if default_path.is_file():
            config_path = default_path

    if config_path is not None:
        config = merge_config(config, load_config(config_path))

    return config


def _get_list(config: dict, key: str) -> list[str]:
    value = config.get(key, [])
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigurationError(f"'{key}' must be a list of strings")
    return value


def get_ignore_patterns(config: dict) -> list[str]:
    """Get class-name ignore patterns (regular expressions) from config."""
    return _get_list(config, "ignore_patterns")


def get_excludes(config: dict) -> list[str]:
    """Get gitignore-style path exclude patterns from config."""
    return _get_list(config, "exclude")


def get_max_workers(config: dict) -> int | None:
    """Get the number of files extracted in parallel."""
    value = config.get("max_workers")
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigurationError("'max_workers' must be a positive integer")
    return value


def frameworks_enabled(config: dict) -> bool:
    """Check if framework class detection (e.g. Tailwind) is enabled."""
    value = config.get("frameworks", True)
    if not isinstance(value, bool):
        raise ConfigurationError("'frameworks' must be true or false")
    return value
