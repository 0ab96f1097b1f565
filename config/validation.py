"""Configuration validation utilities."""

import logging
from typing import Any
from urllib.parse import urlparse

import pendulum

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def validate_request_timeout(timeout: str) -> bool:
    """Validate request timeout is a positive number of seconds.

    Args:
        timeout: Timeout value to validate.

    Returns:
        True if timeout is a positive number, False otherwise.
    """
    try:
        return float(timeout) > 0
    except ValueError:
        return False


def validate_cache_ttl(ttl: str) -> bool:
    """Validate cache TTL is a positive integer.

    Args:
        ttl: TTL value in seconds to validate.

    Returns:
        True if TTL is a positive integer, False otherwise.
    """
    if not ttl.isdigit():
        return False

    return int(ttl) > 0


def validate_proxy_url(url: str) -> bool:
    """Validate proxy URL is an absolute http(s) URL.

    Args:
        url: Relay prefix to validate.

    Returns:
        True if the URL has an http(s) scheme and a host, False otherwise.
    """
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def validate_timezone(name: str) -> bool:
    """Validate timezone name is known to pendulum.

    Args:
        name: IANA timezone name.

    Returns:
        True if pendulum can load the timezone, False otherwise.
    """
    try:
        pendulum.timezone(name)
    except Exception:
        return False
    return True


def validate_log_level(level: str) -> bool:
    """Validate log level is a standard logging level name."""
    return level.upper() in LOG_LEVELS


def validate_config(config: dict[str, Any]) -> list[str]:
    """Validate all configuration values.

    Only keys present in ``config`` are checked; absent keys mean the
    built-in defaults apply.

    Args:
        config: Dictionary of configuration key-value pairs.

    Returns:
        List of validation error messages (empty if all valid).

    Example:
        >>> errors = validate_config({"LIVEFEED_CACHE_TTL": "abc"})
        >>> errors
        ['LIVEFEED_CACHE_TTL must be a positive integer (seconds)']
    """
    errors = []

    if "LIVEFEED_REQUEST_TIMEOUT" in config and not validate_request_timeout(
        config["LIVEFEED_REQUEST_TIMEOUT"]
    ):
        errors.append(
            "LIVEFEED_REQUEST_TIMEOUT must be a positive number (seconds)"
        )

    if "LIVEFEED_CACHE_TTL" in config and not validate_cache_ttl(
        config["LIVEFEED_CACHE_TTL"]
    ):
        errors.append("LIVEFEED_CACHE_TTL must be a positive integer (seconds)")

    if "LIVEFEED_PROXY_URL" in config and not validate_proxy_url(
        config["LIVEFEED_PROXY_URL"]
    ):
        errors.append("LIVEFEED_PROXY_URL must be an absolute http(s) URL")

    if "LIVEFEED_TIMEZONE" in config and not validate_timezone(
        config["LIVEFEED_TIMEZONE"]
    ):
        errors.append(
            f"LIVEFEED_TIMEZONE '{config['LIVEFEED_TIMEZONE']}' "
            "is not a known timezone"
        )

    if "LIVEFEED_LOG_LEVEL" in config and not validate_log_level(
        config["LIVEFEED_LOG_LEVEL"]
    ):
        errors.append(f"LIVEFEED_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")

    if errors:
        logger.error(f"Configuration validation failed: {errors}")
    else:
        logger.info("Configuration validation passed")

    return errors
