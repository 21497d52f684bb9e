"""Configuration management for GuestGate.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded at application
startup and is immutable during runtime.
"""

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_ACCESS_CODES = {
    "admin": "MASTER_FLORIPA",
    "staff": "EQUIPE_2025",
    "reception": "RECEPCAO_EVENTO",
}


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables and .env files.
    All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GUESTGATE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "GuestGate"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False
    api_prefix: str = "/api/v1"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./gg_data/guestgate.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    db_echo: bool = False
    db_sqlite_foreign_keys: bool = True

    # Security Settings
    secret_key: str = Field(
        default="change-me-in-production-use-openssl-rand-hex-32",
        description="Secret key for JWT token signing",
    )
    access_token_expire_minutes: int = 60
    password_min_length: int = 8

    # CORS Settings
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default=["http://localhost:3000", "http://localhost:5173", "http://localhost:8080"]
    )
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = Field(default=["*"])
    cors_allow_headers: list[str] = Field(default=["*"])

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Access Control Settings
    default_access_codes: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_ACCESS_CODES),
        description="Registration codes seeded per role when the store is empty",
    )
    bootstrap_admin_emails: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Identities granted the admin role at startup while no admin exists",
    )
    signup_collapse_failures: bool = Field(
        default=True,
        description="Report 'already assigned' exactly like 'invalid code' on signup",
    )

    @field_validator("cors_origins", "bootstrap_admin_emails", mode="before")
    @classmethod
    def parse_comma_separated(cls, v: str | list[str]) -> list[str]:
        """Parse comma-separated strings into lists."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("default_access_codes")
    @classmethod
    def validate_access_codes(cls, v: dict[str, str]) -> dict[str, str]:
        """Every role needs a non-empty, distinct default code."""
        missing = set(DEFAULT_ACCESS_CODES) - set(v)
        if missing:
            raise ValueError(f"Missing default access codes for: {', '.join(sorted(missing))}")
        unknown = set(v) - set(DEFAULT_ACCESS_CODES)
        if unknown:
            raise ValueError(f"Unknown roles in default access codes: {', '.join(sorted(unknown))}")
        if any(not code or not code.strip() for code in v.values()):
            raise ValueError("Default access codes must not be empty")
        if any(code != code.strip() for code in v.values()):
            raise ValueError("Default access codes must not start or end with whitespace")
        if len(set(v.values())) != len(v):
            raise ValueError("Default access codes must be distinct per role")
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"

    @model_validator(mode="after")
    def validate_sqlite_workers(self) -> "Settings":
        """Validate that SQLite is not used with multiple workers."""
        if self.workers > 1 and self.database_url.startswith("sqlite"):
            raise ValueError(
                "SQLite does not support multiple worker processes. "
                f"Requested {self.workers} workers, but SQLite requires workers=1. "
                "Either use --workers 1 or switch to PostgreSQL."
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
