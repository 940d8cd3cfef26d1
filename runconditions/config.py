"""Configuration settings for run conditions."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from runconditions.constants import AI_DIR


class Settings(BaseSettings):
    """Settings loaded from RUNCOND_* environment variables or a .env file.

    - RUNCOND_USER_SPACE: base of the user space (defaults to the home dir)
    - RUNCOND_LOG_LEVEL: level of the package logger
    - RUNCOND_LOG_DIR: where rotating log files go (defaults to user space)
    - RUNCOND_LOG_RETENTION_DAYS: age at which old log files are pruned
    """

    model_config = SettingsConfigDict(
        env_prefix="RUNCOND_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    user_space: Optional[Path] = None
    log_level: str = "DEBUG"
    console_log_level: str = "WARNING"
    log_dir: Optional[Path] = None
    file_logging: bool = True
    log_retention_days: int = 30


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def get_user_space() -> Path:
    """Get user space base directory, not including the .ai folder."""
    user_space = get_settings().user_space
    if user_space:
        return Path(user_space).expanduser()
    return Path.home()


def get_user_ai_path() -> Path:
    """Get .ai directory in user space (e.g., ~/.ai)."""
    return get_user_space() / AI_DIR


def get_log_dir() -> Path:
    log_dir = get_settings().log_dir
    if log_dir:
        return Path(log_dir).expanduser()
    return get_user_ai_path() / "logs"
