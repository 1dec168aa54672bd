"""Type utilities for configuration processing.

This module provides utilities for type conversion and validation in
configuration files.
"""

from .exceptions import ConfigError


def force_list(val) -> list:
    """
    Ensure the value is a list.
    """
    return list(val) if isinstance(val, (list, tuple)) else [val]


def force_str_list(key, val) -> list:
    """
    Ensure the value is a non-empty list of strings, raise ConfigError
    otherwise.
    """
    values = force_list(val)
    if len(values) == 0 or any(v is None or isinstance(v, dict) for v in values):
        raise ConfigError(
            f"Value `{val}` for key `{expand_key(key)}` must be a name or a list of names"
        )
    return [str(v) for v in values]


def force_bool(key, value) -> bool:
    """
    Accept YAML booleans and the usual yes/no spellings.
    """
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("yes", "true", "on", "1"):
        return True
    if text in ("no", "false", "off", "0"):
        return False
    raise ConfigError(
        f"Could not convert value `{value}` for key `{expand_key(key)}` to true/false"
    )


def expand_key(key) -> str:
    """
    Expand config key for display.
    """
    return str(key).replace("_", " ").lower()
