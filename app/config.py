"""
Configuration module for environment variables.
"""
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = Field(
        default="sqlite:///./tasks.db",
        description="SQLAlchemy connection URL"
    )

    # Authentication
    jwt_secret: str = Field(
        default="change-me",
        description="Secret used to sign bearer tokens (HS256)"
    )
    token_expires_in: str = Field(
        default="1h",
        description="Token lifetime: seconds or a number suffixed with s, m, h or d"
    )
    bcrypt_rounds: int = Field(
        default=12,
        description="bcrypt cost factor, never below 10"
    )

    # Server
    port: int = Field(default=3000)
    cors_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins"
    )

    # Rate limiting
    rate_limit_window_ms: int = Field(
        default=60000,
        description="Rate-limit window in milliseconds"
    )
    rate_limit_max: int = Field(
        default=100,
        description="Maximum requests per client address inside one window"
    )

    # Application Settings
    app_env: str = Field(default="development")
    log_level: str = Field(default="INFO")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are loaded only once.
    """
    return Settings()


# Convenience function for direct access
settings = get_settings()
