#!/usr/bin/env python3
"""Application configuration using Pydantic settings."""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra='ignore'
    )

    # Database
    database_url: str
    db_pool_size: int = 5
    db_max_overflow: int = 10

    # API Server
    api_v1_prefix: str = "/api/v1"
    service_port: int = Field(default=8000, validation_alias='HTTP_PORT')
    workers: int = 1
    debug: bool = False

    # App Info
    app_name: str = "Game Panel"
    app_description: str = "Service option management for the game panel"
    docs_url: str = "/docs"

    # CORS
    cors_origins: str = "*"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(',') if origin.strip()]


# Global settings instance
settings = Settings()
