"""Settings for cognito-login.

Settings are read from COGNITO_LOGIN_* environment variables and can be
overridden from the command line.

Usage:
    from cognito_login.config import get_settings

    settings = get_settings()
    print(settings.env_dir)
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Constants ---

DEFAULT_ENV_DIR = Path(".")
DEFAULT_LOG_LEVEL = "WARNING"


class LoginSettings(BaseSettings):
    """Top-level settings loaded from environment variables.

    Attributes:
        env_dir: Directory holding .env, .env.staging and .env.production.
        log_level: Logging level name used when --verbose is not given.
    """

    env_dir: Path = DEFAULT_ENV_DIR
    log_level: str = DEFAULT_LOG_LEVEL

    model_config = SettingsConfigDict(
        env_prefix="COGNITO_LOGIN_",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level '{value}'")
        return level


@lru_cache(maxsize=1)
def get_settings() -> LoginSettings:
    """Get the cached settings instance.

    Use clear_settings_cache() to force a reload.
    """
    return LoginSettings()


def clear_settings_cache() -> None:
    """Clear the cached settings, forcing reload on next get_settings()."""
    get_settings.cache_clear()
