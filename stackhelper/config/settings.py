"""
Runtime Configuration

All settings are read from environment variables once, at import time.
Unset variables fall back to defaults suitable for local development.

Includes:
- Database URL and SQL echo flag
- Pagination bounds
- Logging level and optional log file
- Development server bind address
"""
import os
import logging
from dataclasses import dataclass
from typing import Optional

from stackhelper.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "STACKHELPER_"


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(f"{ENV_PREFIX}{key}", default)


def env_flag(key: str, default: bool = False) -> bool:
    """
    Read a boolean flag from the environment.

    Returns:
        True if the variable is set to 'true', '1' or 'yes' (case-insensitive)
    """
    raw = _env(key)
    if raw is None:
        return default
    return raw.strip().lower() in ('true', '1', 'yes')


def env_int(key: str, default: int) -> int:
    """Read an integer from the environment, failing loudly on garbage."""
    raw = _env(key)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(
            f"{ENV_PREFIX}{key} must be an integer, got {raw!r}",
            missing_keys=[f"{ENV_PREFIX}{key}"]
        )


@dataclass(frozen=True)
class Settings:
    """Immutable snapshot of the process configuration."""

    database_url: str
    db_echo: bool
    default_page_size: int
    max_page_size: int
    log_level: str
    log_file: Optional[str]
    host: str
    port: int


def load_settings() -> Settings:
    """
    Build a Settings snapshot from the current environment.

    Raises:
        ConfigurationError: If a numeric value cannot be parsed or the
            pagination bounds are inconsistent
    """
    default_page_size = env_int('DEFAULT_PAGE_SIZE', 20)
    max_page_size = env_int('MAX_PAGE_SIZE', 1000)
    if default_page_size < 1 or max_page_size < default_page_size:
        raise ConfigurationError(
            f"Invalid page sizes: default={default_page_size}, max={max_page_size}"
        )

    return Settings(
        database_url=_env('DATABASE_URL', 'sqlite:///./stackhelper.db'),
        db_echo=env_flag('DB_ECHO'),
        default_page_size=default_page_size,
        max_page_size=max_page_size,
        log_level=_env('LOG_LEVEL', 'INFO').upper(),
        log_file=_env('LOG_FILE') or None,
        host=_env('HOST', '0.0.0.0'),
        port=env_int('PORT', 8888),
    )


settings = load_settings()
