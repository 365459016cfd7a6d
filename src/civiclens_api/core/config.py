"""Settings for the API process and the CLI, read from the environment or ``.env``."""

import re

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_SCHEMA_PATTERN = re.compile(r"^[a-z_][a-z0-9_]{0,62}$")


class Settings(BaseSettings):
    """CivicLens configuration. Only ``DATABASE_URL`` and ``JWT_SECRET_KEY`` are required."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage
    database_url: str = Field(description="Async SQLAlchemy URL (postgresql+asyncpg://... in production)")
    database_schema: str | None = Field(
        default=None,
        description="PostgreSQL schema to run in, for per-branch environments (e.g. pr_42)",
    )

    # Identity
    jwt_secret_key: str = Field(min_length=32, description="HMAC key for access and refresh tokens")
    jwt_algorithm: str = Field(default="HS256")
    jwt_access_token_expire_minutes: int = Field(default=30, gt=0)
    jwt_refresh_token_expire_days: int = Field(default=7, gt=0)

    # Photos are uploaded to object storage elsewhere; only their URLs are kept
    photo_public_base_url: str = Field(
        default="",
        description="Prefix turning a stored object key into a public photo URL",
    )

    # Moderation exports written by the CLI when no --output is given
    export_dir: str = Field(default="./exports")

    # Logging
    log_level: str = Field(default="INFO")
    log_dir: str | None = Field(default=None, description="Enables the rotating file sink when set")

    # HTTP
    api_v1_prefix: str = Field(default="/api/v1")
    cors_origins: str = Field(default="", description="Comma-separated allowed origins")
    cors_origin_regex: str = Field(default="")
    rate_limit_per_minute: int = Field(
        default=120,
        gt=0,
        description="Ratings, comments and other writes allowed per client IP per minute",
    )
    environment: str = Field(default="production", description="Reported by /info")

    @field_validator("database_schema")
    @classmethod
    def validate_database_schema(cls, v: str | None) -> str | None:
        if v is not None and not _SCHEMA_PATTERN.match(v):
            msg = f"Invalid database_schema: must match {_SCHEMA_PATTERN.pattern}"
            raise ValueError(msg)
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.strip().upper()

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def photo_url_for(self, object_key: str) -> str:
        """Public URL for an uploaded photo.

        Absolute URLs, and any key when no base URL is configured, are
        returned unchanged.
        """
        if object_key.startswith(("http://", "https://")) or not self.photo_public_base_url:
            return object_key
        return self.photo_public_base_url.rstrip("/") + "/" + object_key.lstrip("/")


def get_settings() -> Settings:
    """Load settings afresh from the environment."""
    return Settings()  # type: ignore[call-arg]
