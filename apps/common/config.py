"""
Environment helpers used by settings.py.

Values come from the process environment, which settings.py seeds from
the project's .env file via python-dotenv.
"""
import os
from typing import List, Optional
from urllib.parse import quote


def get_env_str(key: str, default: str = '') -> str:
    """
    Get environment variable as a stripped string.

    Blank values fall back to the default, so ``EMAIL_FROM=`` in a .env file
    behaves the same as leaving the key out.
    """
    value = os.environ.get(key, '').strip()
    return value or default


def get_env_list(key: str, default: str = '') -> List[str]:
    """
    Get environment variable as a comma-separated list.

    Args:
        key: Environment variable key
        default: Default value if key is not set

    Returns:
        List of strings
    """
    value = os.environ.get(key, default)
    return [item.strip() for item in value.split(',') if item.strip()]


def get_env_bool(key: str, default: bool = False) -> bool:
    """
    Get environment variable as boolean.

    Args:
        key: Environment variable key
        default: Default value if key is not set

    Returns:
        Boolean value
    """
    value = os.environ.get(key, str(default)).lower()
    return value in ('true', '1', 'yes', 'on')


def get_env_int(key: str, default: int = 0) -> int:
    """
    Get environment variable as integer.

    Args:
        key: Environment variable key
        default: Default value if key is not set

    Returns:
        Integer value
    """
    try:
        return int(os.environ.get(key, str(default)))
    except ValueError:
        return default


def build_redis_url(host: str, port: int, password: Optional[str] = None, db: int = 0) -> str:
    """Compose a redis:// URL from the separate REDIS_* settings."""
    auth = f":{quote(password, safe='')}@" if password else ''
    return f"redis://{auth}{host}:{port}/{db}"
