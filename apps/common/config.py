"""
Environment helpers used by projecthub.settings.
"""
import os
from typing import List, Optional

_TRUE_VALUES = ('true', '1', 'yes', 'on')


def get_env_list(key: str, default: str = '') -> List[str]:
    """
    Read a comma-separated environment variable as a list of non-empty strings.
    """
    value = os.environ.get(key, default)
    return [item.strip() for item in value.split(',') if item.strip()]


def get_env_bool(key: str, default: bool = False) -> bool:
    """
    Read an environment variable as a boolean ('true', '1', 'yes', 'on').
    """
    value = os.environ.get(key)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def get_env_int(key: str, default: int = 0, minimum: Optional[int] = 1) -> int:
    """
    Read an environment variable as an integer.

    Args:
        key: Environment variable key
        default: Value used when the variable is unset or not a number
        minimum: Values below this fall back to the default (None disables the check)

    Returns:
        Integer value
    """
    try:
        value = int(os.environ.get(key, str(default)))
    except ValueError:
        return default
    if minimum is not None and value < minimum:
        return default
    return value
