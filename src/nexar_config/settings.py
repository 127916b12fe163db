"""Client settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. NEXAR_ENV_FILE environment variable (absolute path to .env file)
3. config/.env.dev - local development
4. config/.env - production

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

    return Path(__file__).resolve().parents[2]


def get_config_dir() -> Path:
    """Get the config directory path."""
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. NEXAR_ENV_FILE env var (full path)
    2. config/.env.dev (local development)
    3. config/.env (production)
    """
    env_file_path = os.environ.get("NEXAR_ENV_FILE")
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
    """Client configuration loaded from environment variables.

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

    # Hosted service (MUST be set - client fails without these)
    remote_url: str
    remote_anon_key: SecretStr
    remote_timeout: float = 10.0

    # Privileges
    bootstrap_admin_email: str = "admin@nexar.ro"

    # Storage buckets
    listing_images_bucket: str = "listing-images"
    profile_images_bucket: str = "profile-images"
    upload_cache_control: str = "3600"

    # Listings: "active" publishes immediately, "pending" waits for moderation
    listing_initial_status: Literal["pending", "active"] = "active"

    # Auth
    password_reset_redirect_url: str = "http://localhost:5173/auth/reset-password"

    # Local persisted state (session cache entry and auth session)
    session_file: Path = Path.home() / ".nexar" / "session.json"

    # Logging (LOG_ prefix)
    log_level: str = "INFO"

    @field_validator("remote_url", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, v: object) -> str:
        return str(v).rstrip("/")

    @field_validator("bootstrap_admin_email", mode="before")
    @classmethod
    def _normalize_admin_email(cls, v: object) -> str:
        return str(v).strip().lower()

    # Computed properties
    @computed_field  # type: ignore[prop-decorator]
    @property
    def rest_url(self) -> str:
        """Base URL of the row storage API."""
        return f"{self.remote_url}/rest/v1"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def auth_url(self) -> str:
        """Base URL of the authentication API."""
        return f"{self.remote_url}/auth/v1"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def storage_url(self) -> str:
        """Base URL of the blob storage API."""
        return f"{self.remote_url}/storage/v1"


@lru_cache()
def get_settings() -> Settings:
    """Return cached client settings.

    Required fields (remote_url, remote_anon_key) must be provided via
    environment variables or .env file.
    """
    return Settings()  # type: ignore[call-arg]  # pydantic-settings loads from env


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
