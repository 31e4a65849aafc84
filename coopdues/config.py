"""Application configuration from environment variables."""

from typing import Optional

from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        default="sqlite:///./coopdues.db",
        description="SQLAlchemy database URL",
    )
    database_echo: bool = Field(default=False, description="Log SQL queries")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: str = Field(default="logs/server.log", description="Path to log file")

    # Formatting
    locale: str = Field(default="tr_TR", description="Babel locale for amounts and dates")

    # API
    api_title: str = Field(default="Coopdues API", description="API title")
    api_version: str = Field(default="0.1.0", description="API version")
    host: str = Field(default="127.0.0.1", description="Bind address for the API server")
    port: int = Field(default=8000, description="Port for the API server")


# Lazy loader so .env is read after load_dotenv() has run
_settings_instance: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


__all__ = ["Settings", "get_settings"]
