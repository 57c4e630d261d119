"""core/config.py — Application configuration via Pydantic BaseSettings.

Loads environment variables from .env (and the OS environment).
Import `settings` from this module wherever configuration is needed.

Usage:
    from core.config import settings

    db_url = settings.database_url
    if settings.is_production:
        ...
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# .env lives in the project root (one level above backend/)
_ENV_FILE = Path(__file__).parent.parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite:///./admin_tools.db"
    auto_create_schema: bool = True

    # Application
    environment: str = "development"
    service_name: str = "admin-tools"
    log_level: str = "DEBUG"
    log_file: Optional[str] = None

    # CORS — list of allowed origins for the admin frontend
    allowed_origins: list[str] = [
        "http://localhost:5173",   # Vite dev server
        "http://localhost:3000",   # CRA fallback
    ]

    # Security (pepper for API key hashes)
    api_key_pepper: SecretStr = SecretStr("change-me")

    # A request after this much inactivity counts as a new sign-in
    sign_in_window_minutes: int = Field(default=30, ge=1)

    # Listings
    listing_default_page_size: int = Field(default=20, ge=1)
    listing_max_page_size: int = Field(default=100, ge=1)

    @field_validator("log_level", mode="before")
    @classmethod
    def _uppercase_log_level(cls, v: str) -> str:
        return v.upper()

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


# Singleton — import this everywhere
settings = Settings()
