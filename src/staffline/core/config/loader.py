"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < project config < env vars
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from staffline.core.lanes import INVALID_POLICIES

from .models import StafflineConfig

logger = logging.getLogger(__name__)

# Global cache to avoid reloading config multiple times per invocation
_config_cache: StafflineConfig | None = None


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """
    Get path to user configuration file.

    Returns:
        Path to ~/.config/staffline/config.json (or XDG equivalent)
    """
    return get_xdg_config_home() / "staffline" / "config.json"


def get_project_config_path(cwd: Path | None = None) -> Path:
    """
    Get path to project configuration file.

    Args:
        cwd: Working directory to search from (defaults to current directory)

    Returns:
        Path to .staffline.json in the project root
    """
    if cwd is None:
        cwd = Path.cwd()
    return cwd / ".staffline.json"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Values in `override` take precedence over values in `base`.
    Nested dicts are merged, not replaced.

    Example:
        >>> deep_merge({"a": 1, "b": {"x": 10}}, {"b": {"y": 20}})
        {'a': 1, 'b': {'x': 10, 'y': 20}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON as dict, or None if file doesn't exist or can't be parsed
    """
    if not path.exists():
        return None

    try:
        with path.open() as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
            return None
    except (json.JSONDecodeError, OSError) as e:
        # Config should never stop the tool from starting
        logger.warning("Failed to parse config at %s: %s", path, e)
        return None


def _set(result: dict[str, Any], section: str, key: str, value: Any) -> None:
    result[section] = {**result.get(section, {}), key: value}


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        STAFFLINE_STORE_PATH - overrides store.path
        STAFFLINE_ON_INVALID - overrides lanes.on_invalid
        STAFFLINE_ROW_HEIGHT - overrides timeline.row_unit_height
        STAFFLINE_DEFAULT_VIEW - overrides timeline.default_view

    Invalid values are ignored with a warning.

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()

    if store_path := os.environ.get("STAFFLINE_STORE_PATH"):
        _set(result, "store", "path", store_path)

    if policy := os.environ.get("STAFFLINE_ON_INVALID"):
        policy = policy.strip().lower()
        if policy in INVALID_POLICIES:
            _set(result, "lanes", "on_invalid", policy)
        else:
            logger.warning("Invalid STAFFLINE_ON_INVALID value '%s', ignoring", policy)

    if row_height_str := os.environ.get("STAFFLINE_ROW_HEIGHT"):
        try:
            row_height = int(row_height_str)
        except ValueError:
            logger.warning("Invalid STAFFLINE_ROW_HEIGHT value '%s', ignoring", row_height_str)
        else:
            if row_height < 1:
                logger.warning("STAFFLINE_ROW_HEIGHT must be >= 1, got %d, ignoring", row_height)
            else:
                _set(result, "timeline", "row_unit_height", row_height)

    if view := os.environ.get("STAFFLINE_DEFAULT_VIEW"):
        view = view.strip().lower()
        if view in ("week", "full"):
            _set(result, "timeline", "default_view", view)
        else:
            logger.warning("Invalid STAFFLINE_DEFAULT_VIEW value '%s', ignoring", view)

    return result


def get_default_config() -> dict[str, Any]:
    """
    Get hardcoded default configuration.

    Returns:
        Dictionary with default configuration values
    """
    return {
        "timeline": {
            "row_unit_height": 40,
            "row_padding": 20,
            "bar_offset": 4,
            "week_lead_days": 1,
            "default_color": "#3B82F6",
            "default_view": "week",
        },
        "lanes": {"on_invalid": "reject"},
        "store": {"path": "staffline.json"},
    }


def load_config(project_dir: Path | None = None, use_cache: bool = True) -> StafflineConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (STAFFLINE_*)
        2. Project config (.staffline.json)
        3. User config (~/.config/staffline/config.json)
        4. Hardcoded defaults

    Args:
        project_dir: Project directory to load .staffline.json from (defaults to cwd)
        use_cache: If True, return cached config from previous load

    Returns:
        Validated StafflineConfig instance

    Raises:
        ValidationError: If the merged config fails Pydantic validation
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged = get_default_config()

    if user_config := load_json_file(get_user_config_path()):
        merged = deep_merge(merged, user_config)

    if project_config := load_json_file(get_project_config_path(project_dir)):
        merged = deep_merge(merged, project_config)

    merged = apply_env_overrides(merged)

    config = StafflineConfig(**merged)
    _config_cache = config

    return config


def clear_cache() -> None:
    """
    Clear the cached configuration.

    Useful for testing or when config files change during execution.
    """
    global _config_cache
    _config_cache = None
