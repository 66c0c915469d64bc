"""Settings and constants for the finance tracker."""

from .defaults import (
    CONFIG_DIR,
    conversion_rates,
    get_config_value,
    get_options,
    load_config,
    month_names,
)

__all__ = [
    'CONFIG_DIR',
    'conversion_rates',
    'get_config_value',
    'get_options',
    'load_config',
    'month_names',
]
