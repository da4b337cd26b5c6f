"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables (and .env when present)
- Centralizes config values (Mongo URL, port, body limit, etc.)
- Validates configuration on startup
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, Literal

from app.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # MongoDB
    MONGO_URL: Optional[str] = Field(
        default=None,
        description="MongoDB connection URI (required)"
    )
    MONGODB_DB_NAME: str = Field(
        default="tvt_db",
        description="MongoDB database name"
    )

    # Server
    HOST: str = Field(
        default="0.0.0.0",
        description="Bind address for the HTTP server"
    )
    PORT: int = Field(
        default=8000,
        description="Listening port"
    )

    # HTTP
    API_PREFIX: str = Field(
        default="/api",
        description="API route prefix"
    )
    MAX_BODY_BYTES: int = Field(
        default=10 * 1024 * 1024,
        description="Maximum accepted request body size (screenshots are sent inline)"
    )
    CORS_ORIGINS: list = Field(
        default=["*"],
        description="Allowed CORS origins"
    )
    SLOW_REQUEST_SECONDS: float = Field(
        default=5.0,
        description="Requests slower than this are logged as warnings"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    @field_validator("API_PREFIX")
    @classmethod
    def normalize_api_prefix(cls, v: str) -> str:
        """Leading slash, no trailing slash ("" disables the prefix)."""
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = "/" + v
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


# Global settings instance
settings = Settings()


def validate_settings(config: Optional[Settings] = None) -> bool:
    """
    Validates critical settings on application startup.
    Raises ConfigurationError if any required setting is missing or invalid.
    """
    config = config or settings
    errors = []

    if not config.MONGO_URL or not config.MONGO_URL.strip():
        errors.append("MONGO_URL is required")

    if config.MAX_BODY_BYTES <= 0:
        errors.append("MAX_BODY_BYTES must be positive")

    if errors:
        raise ConfigurationError(
            f"Configuration validation failed: {', '.join(errors)}",
            details=errors
        )

    return True
