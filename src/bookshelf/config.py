"""
Configuration management for the Bookshelf GraphQL API
"""

from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Upstream REST API (proxy mode). The bare API_URL variable is honoured as well.
    api_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("bookshelf_api_url", "api_url"),
    )

    # Backing store: 'memory' or 'rest'. Unset means rest when api_url is configured.
    store_backend: Literal["memory", "rest"] | None = None

    # Delete contract: True fails on unknown ids, False returns null.
    # Unset means strict for the rest backend and lenient for memory.
    strict_delete: bool | None = None

    # Populate the in-memory store with sample data on startup
    seed_demo_data: bool = False

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 4000
    api_reload: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]

    # Environment
    environment: str = "development"  # 'development', 'staging', 'production'
    debug: bool = True
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "BOOKSHELF_"
        case_sensitive = False
        populate_by_name = True
        extra = "ignore"

    @property
    def resolved_store_backend(self) -> str:
        if self.store_backend:
            return self.store_backend
        return "rest" if self.api_url else "memory"


# Global settings instance
settings = Settings()
