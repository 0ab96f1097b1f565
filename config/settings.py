"""Environment-backed settings.

Values come from the process environment, optionally seeded from a ``.env``
file at the project root.
"""

import logging
import os

import pendulum
from dotenv import load_dotenv

from config.constants import (
    DEFAULT_CACHE_TTL,
    DEFAULT_LOG_LEVEL,
    DEFAULT_REQUEST_TIMEOUT,
    PROXY_URL,
)
from config.paths import ENV_FILE

logger = logging.getLogger(__name__)

env_path = ENV_FILE

load_dotenv(env_path)


def exists() -> bool:
    """Check whether a .env file is present.

    Returns:
        True if the .env file exists, False otherwise.
    """
    return env_path.exists()


def get(key: str, default: str | None = None) -> str | None:
    """Get a configuration value.

    Args:
        key: Environment variable name.
        default: Value returned when the variable is not set.

    Returns:
        The variable's value or the default.
    """
    return os.environ.get(key, default)


def get_required(key: str) -> str:
    """Get a configuration value that must be present.

    Args:
        key: Environment variable name.

    Returns:
        The variable's value.

    Raises:
        ValueError: If the variable is not set or empty.
    """
    value = os.environ.get(key)
    if not value:
        raise ValueError(f"Required environment variable {key} is not set")
    return value


def get_request_timeout() -> float:
    """Get the per-fetch timeout in seconds."""
    raw = get("LIVEFEED_REQUEST_TIMEOUT")
    if raw is None or not raw.strip():
        return DEFAULT_REQUEST_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        logger.warning(
            f"Invalid LIVEFEED_REQUEST_TIMEOUT '{raw}', "
            f"using {DEFAULT_REQUEST_TIMEOUT}"
        )
        return DEFAULT_REQUEST_TIMEOUT
    if timeout <= 0:
        logger.warning(
            f"Non-positive LIVEFEED_REQUEST_TIMEOUT '{raw}', "
            f"using {DEFAULT_REQUEST_TIMEOUT}"
        )
        return DEFAULT_REQUEST_TIMEOUT
    return timeout


def get_cache_ttl() -> int:
    """Get the cache time-to-live in seconds."""
    raw = get("LIVEFEED_CACHE_TTL")
    if raw is None or not raw.strip():
        return DEFAULT_CACHE_TTL
    raw = raw.strip()
    if not raw.isdigit() or int(raw) == 0:
        logger.warning(
            f"Invalid LIVEFEED_CACHE_TTL '{raw}', using {DEFAULT_CACHE_TTL}"
        )
        return DEFAULT_CACHE_TTL
    return int(raw)


def get_proxy_url() -> str:
    """Get the relay prefix used by the proxied sources."""
    return get("LIVEFEED_PROXY_URL") or PROXY_URL


def get_timezone() -> str:
    """Get the timezone name used for "today" and listing dates.

    Falls back to the machine's local timezone.
    """
    return get("LIVEFEED_TIMEZONE") or pendulum.local_timezone().name


def get_log_level() -> str:
    """Get the log level name for the command line entry point."""
    return (get("LIVEFEED_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()


def as_dict() -> dict[str, str]:
    """Collect the raw configuration values for validation.

    Only variables that are actually set are included, so validation
    reports problems with explicit overrides and ignores defaults.
    """
    keys = (
        "LIVEFEED_REQUEST_TIMEOUT",
        "LIVEFEED_CACHE_TTL",
        "LIVEFEED_PROXY_URL",
        "LIVEFEED_TIMEZONE",
        "LIVEFEED_LOG_LEVEL",
    )
    return {key: os.environ[key] for key in keys if os.environ.get(key)}
