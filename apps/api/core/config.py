"""Centralized application configuration via Pydantic Settings.

Loads all env vars into a typed Settings instance. Every setting has a
default, so the API boots with no environment at all.
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server
    HOST: str = Field(default="0.0.0.0", description="Bind address for uvicorn")
    PORT: int = Field(default=3000, description="Listen port for uvicorn")

    # CORS
    ALLOWED_ORIGINS: str = Field(
        default="*",
        description="Comma-separated allowed origins for CORS",
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Python log level")
    ENVIRONMENT: str = Field(
        default="development",
        description="Runtime environment: development, staging, production",
    )

    # App
    APP_VERSION: str = Field(default="1.0.0", description="API version tag")
    SOURCE_TAG: str = Field(
        default="SMS_BANK_READER",
        description="Source tag stamped on every transactions envelope",
    )
    DEFAULT_CURRENCY: str = Field(default="INR", description="Currency for stored transactions")

    # Optional fixed key registered at startup (local demos)
    DEMO_API_KEY: str = Field(default="", description="Pre-registered demo API key")
    DEMO_KEY_NAME: str = Field(default="Demo Key", description="Name for the demo API key")

    @property
    def allowed_origins(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    @property
    def log_level(self) -> str:
        return self.LOG_LEVEL

    @property
    def json_logs(self) -> bool:
        return self.ENVIRONMENT == "production"

    model_config = {"env_file": ".env", "extra": "ignore"}


def get_settings() -> Settings:
    """Factory for Settings — allows test override."""
    return Settings()
