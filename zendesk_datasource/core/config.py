"""Application configuration using Pydantic Settings.

Environment variables are loaded with the ZENDESK_DS_ prefix, optionally
from a local ``.env`` file.
"""

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service configuration
    service_name: str = "zendesk-datasource"
    port: int = 8090
    environment: str = Field(default="development", description="Runtime environment")
    log_level: str = Field(default="INFO", description="Logging level")

    # Zendesk connection
    zendesk_subdomain: str = Field(
        default="",
        description="Zendesk subdomain, e.g. 'acme' for acme.zendesk.com",
    )
    zendesk_email: str = Field(default="", description="Agent email used for token auth")
    zendesk_api_token: SecretStr = Field(
        default=SecretStr(""),
        description="Zendesk API token",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Upstream request timeout",
    )

    # Cache configuration
    cache_strategy: str = Field(default="ttl", description="Cache strategy: ttl or lru")
    cache_default_ttl_seconds: float = Field(
        default=300.0,
        description="Default cache entry lifetime",
    )
    cache_max_size: int = Field(default=1000, ge=1, description="Cache capacity")
    cache_cleanup_interval_seconds: float = Field(
        default=600.0,
        gt=0,
        description="Background expiry sweep period",
    )
    cache_key_prefix: str = Field(default="zendesk:", description="Cache key namespace")

    # Batch queries
    batch_task_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Per sub-query deadline for batch queries (None disables)",
    )

    model_config = SettingsConfigDict(
        env_prefix="ZENDESK_DS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Application settings singleton
    """
    return Settings()
