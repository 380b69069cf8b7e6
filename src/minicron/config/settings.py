"""Pydantic-based settings loaded entirely from environment variables.

All configuration is read from ``.env`` (or real env vars). Every field has
a sensible default; only ``SSH_HOST`` must be set (or passed on the command
line) before anything touches a remote host.

Usage::

    from minicron.config import get_settings
    settings = get_settings()
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration — every field maps to an UPPER_SNAKE env var."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        env_ignore_empty=True,
    )

    # -- SSH ----------------------------------------------------------------
    ssh_host: str = ""
    ssh_port: int = 22
    ssh_user: str = "root"
    ssh_password: str = ""
    ssh_key_file: str = ""
    ssh_connect_timeout: float = 15
    ssh_command_timeout: float = 30
    ssh_strict_host_keys: bool = False

    # -- Crontab ------------------------------------------------------------
    crontab_path: str = "/etc/crontab"

    # -- General ------------------------------------------------------------
    log_level: str = "INFO"

    @field_validator("crontab_path")
    @classmethod
    def require_absolute_path(cls, value: str) -> str:
        """The staged file is created next to the crontab, so the path must be absolute."""
        if not value.startswith("/"):
            msg = f"CRONTAB_PATH must be an absolute path, got '{value}'"
            raise ValueError(msg)
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton Settings instance.

    Call ``get_settings.cache_clear()`` in tests to reset.
    """
    return Settings()
