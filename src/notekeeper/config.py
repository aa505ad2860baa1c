"""
App configuration - using pydantic settings for env vars
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """App settings - loads from .env file"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # basic app stuff
    app_name: str = Field(default="NoteKeeper API")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)  # set to True for dev

    # server config
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    reload: bool = Field(default=False)
    api_prefix: str = Field(default="/api", description="Prefix for every API router")

    # DB settings
    database_url: str = Field(default="sqlite+aiosqlite:///./notekeeper.db")
    database_echo: bool = Field(default=False)  # useful for debugging

    # JWT
    secret_key: str = Field(
        default="your-secret-key-change-in-production", description="JWT signing key"
    )
    algorithm: str = Field(default="HS256", description="JWT algorithm")
    token_expire_days: int = Field(default=7, description="Identity token lifetime in days")

    # Passwords
    password_hash_rounds: int = Field(default=10, description="bcrypt cost factor")

    # CORS
    cors_origins: list[str] = Field(default=["*"], description="CORS allowed origins")
    cors_allow_credentials: bool = Field(default=False, description="CORS allow credentials")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_dir: Optional[str] = Field(
        default=None, description="Directory for rotating log files, disabled when unset"
    )

    # Environment
    environment: str = Field(default="development", description="Environment name")


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings."""
    return settings
