"""Configuration loader for UI options and fixed constants."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

# Configuration directory
CONFIG_DIR = Path(__file__).parent


def load_config(config_name: str) -> Dict[str, Any]:
    """Load a configuration file by name.

    Args:
        config_name: Name of the config file (without .json extension)

    Returns:
        Dictionary containing the configuration

    Raises:
        FileNotFoundError: If the configuration file doesn't exist
        json.JSONDecodeError: If the configuration file is invalid JSON

    Example:
        >>> config = load_config('options')
        >>> config['conversion_rates']['INR']
        0.043
    """
    config_path = CONFIG_DIR / f"{config_name}.json"

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return json.load(f)


@lru_cache(maxsize=None)
def get_options() -> Dict[str, Any]:
    """Get the dropdown options and fixed constants used across the app.

    The result is cached for the life of the process; callers must not
    mutate it.
    """
    return load_config('options')


def get_config_value(config_name: str, *keys: str, default: Any = None) -> Any:
    """Get a nested configuration value by key path.

    Args:
        config_name: Name of the config file
        *keys: Path to the nested value (e.g., 'auth', 'lockout_seconds')
        default: Default value if key path doesn't exist

    Returns:
        The configuration value at the specified path, or default if not found

    Example:
        >>> get_config_value('options', 'auth', 'min_password_length')
        6
    """
    try:
        value: Any = get_options() if config_name == 'options' else load_config(config_name)
        for key in keys:
            value = value[key]
        return value
    except (KeyError, TypeError, FileNotFoundError):
        return default


def month_names() -> List[str]:
    return list(get_options()['months'])


def conversion_rates() -> Dict[str, float]:
    return {k: float(v) for k, v in get_options()['conversion_rates'].items()}
