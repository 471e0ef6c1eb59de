"""Application settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. BANKSYNC_ENV_FILE environment variable (path to .env file)
3. config/.env.dev - local development
4. config/.env - production/Docker

Uses pydantic-settings for automatic type coercion and validation.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / ".git").is_dir():
            return parent
        if parent == Path("/app"):
            return parent

    return Path(__file__).resolve().parents[2]


def get_config_dir() -> Path:
    """Get the config directory path."""
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. BANKSYNC_ENV_FILE env var (full path)
    2. config/.env.dev (local development)
    3. config/.env (production)
    """
    env_file_path = os.environ.get("BANKSYNC_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    config_dir = get_config_dir()

    dev_env = config_dir / ".env.dev"
    if dev_env.exists():
        return dev_env

    prod_env = config_dir / ".env"
    if prod_env.exists():
        return prod_env

    return None


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Values are loaded from:
    1. OS environment variables (highest priority)
    2. .env file (config/.env.dev or config/.env)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Secrets (MUST be set - the app fails without these)
    postgres_password: SecretStr
    gocardless_secret_id: SecretStr
    gocardless_secret_key: SecretStr

    # Application
    app_name: str = "banksync"
    debug: bool = False

    # Database (POSTGRES_ prefix)
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_db: str = "banksync"

    # Aggregator (GOCARDLESS_ prefix)
    gocardless_base_url: str = "https://bankaccountdata.gocardless.com/api/v2"
    gocardless_timeout: float = 30.0
    gocardless_user_language: str = "DA"
    gocardless_redirect_url: str = "http://localhost:3000/bank/callback"
    gocardless_reference_prefix: str = "banksync"
    gocardless_country: str = "DK"

    # Sync pacing and windows (SYNC_ prefix)
    sync_call_delay_seconds: float = 1.0
    sync_account_delay_seconds: float = 2.0
    sync_backfill_days: int = 90
    sync_overlap_days: int = 1
    sync_stale_after_hours: int = 6
    sync_history_limit: int = 5

    # Accounts
    default_currency: str = "DKK"

    # Logging (LOG_ prefix)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, v: object) -> str:
        return str(v).upper() if v else "INFO"

    @field_validator("sync_call_delay_seconds", "sync_account_delay_seconds")
    @classmethod
    def _validate_delay(cls, v: float) -> float:
        if v < 0:
            msg = "Sync delays cannot be negative"
            raise ValueError(msg)
        return v

    # Computed properties
    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        """Construct the database URL from components."""
        return (
            f"postgresql+asyncpg://{self.postgres_user}:"
            f"{self.postgres_password.get_secret_value()}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings.

    Required fields (postgres_password, gocardless_secret_id,
    gocardless_secret_key) must be provided via environment variables or
    .env file.
    """
    return Settings()  # type: ignore[call-arg]  # pydantic-settings loads from env


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
