"""Application configuration module.

This module contains settings for the short-link service, loaded from
environment variables with appropriate defaults, and the explicit
configuration object handed to the code assigner.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Short code constraints shared by generation and validation
SHORT_CODE_MIN_LENGTH = 4
SHORT_CODE_MAX_LENGTH = 20
SHORT_CODE_CHARS = (
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "0123456789"
    "_-"
)


class EnvironmentType(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """Application settings loaded from environment variables with defaults.

    Settings are loaded from environment variables, with fallback to
    values in .env file if present, and finally to the default values
    specified here.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment setting
    ENVIRONMENT: EnvironmentType = EnvironmentType.DEVELOPMENT

    # App Information
    APP_NAME: str = "Short Link Service"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Maps long URLs to short, time-limited codes"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    DEBUG: bool = False

    # Used for generating short URLs
    BASE_URL: str = "http://localhost:5000"
    API_PREFIX: str = "/api"

    # CORS settings
    CORS_ORIGINS: Union[List[str], str] = ["*"]

    # Short code and expiry configuration
    GENERATED_CODE_LENGTH: int = 7
    DEFAULT_EXPIRATION_MINUTES: float = 30

    # Database settings. DATABASE_URL wins over the POSTGRES_* components.
    DATABASE_URL: Optional[str] = None
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "shortlink"

    # Pool settings (ignored for SQLite URLs)
    POSTGRES_POOL_SIZE: int = 20
    POSTGRES_POOL_MAX_OVERFLOW: int = 10
    POSTGRES_POOL_TIMEOUT: int = 30
    POSTGRES_POOL_RECYCLE: int = 300
    DB_ECHO: bool = False
    DB_CREATE_TABLES: bool = True  # Create missing tables on startup

    # Logging configuration
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_FILENAME: str = "app.log"
    LOG_TO_FILE: bool = True
    LOG_ROTATION: str = "10 MB"
    LOG_RETENTION: str = "7 days"
    LOG_FORMAT: str = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {message}"
    LOG_JSON: bool = True
    REQUEST_LOGGING_ENABLED: bool = True

    # Validators
    @field_validator("DATABASE_URL", mode="before")
    def empty_database_url(cls, v: Any) -> Optional[str]:
        """Treat an empty DATABASE_URL as unset."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return v

    @field_validator("CORS_ORIGINS")
    def validate_list_or_string(cls, v: Union[List[str], str]) -> List[str]:
        """Convert comma-separated string to list if needed."""
        if isinstance(v, str):
            if not v.strip():
                return []
            if v == "*":
                return ["*"]
            return [item.strip() for item in v.split(",")]
        return v

    @field_validator("GENERATED_CODE_LENGTH")
    def validate_code_length(cls, v: int) -> int:
        if not SHORT_CODE_MIN_LENGTH <= v <= SHORT_CODE_MAX_LENGTH:
            raise ValueError(
                f"GENERATED_CODE_LENGTH must be between {SHORT_CODE_MIN_LENGTH} "
                f"and {SHORT_CODE_MAX_LENGTH}"
            )
        return v

    @field_validator("DEFAULT_EXPIRATION_MINUTES")
    def validate_default_expiration(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("DEFAULT_EXPIRATION_MINUTES must be positive")
        return v

    # Computed fields
    @computed_field
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """Construct the SQLAlchemy database URI from settings or use override."""
        if self.DATABASE_URL:
            return self.DATABASE_URL

        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )


class ShortenerConfig(BaseModel):
    """Configuration passed explicitly to the code assigner."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    default_expiration_minutes: float = Field(default=30, gt=0)
    generated_code_length: int = Field(
        default=7, ge=SHORT_CODE_MIN_LENGTH, le=SHORT_CODE_MAX_LENGTH
    )

    @classmethod
    def from_settings(cls, app_settings: Settings) -> "ShortenerConfig":
        return cls(
            base_url=app_settings.BASE_URL,
            default_expiration_minutes=app_settings.DEFAULT_EXPIRATION_MINUTES,
            generated_code_length=app_settings.GENERATED_CODE_LENGTH,
        )

    def build_short_url(self, short_code: str) -> str:
        """Join the base URL and a short code without doubling the slash."""
        return f"{self.base_url.rstrip('/')}/{short_code}"


# Create a singleton instance of the settings
settings = Settings()
