"""
Shared configuration management for the token gate services.
"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Used when SECRET_KEY is unset. Guessable on purpose; startup warns about it.
FALLBACK_SECRET_KEY = "secret_key"


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="allow",
        populate_by_name=True,
    )

    # Environment
    env: str = Field(default="local", validation_alias=AliasChoices("ACCESS_ENV", "env"))
    log_level: str = Field(default="info", validation_alias=AliasChoices("ACCESS_LOG_LEVEL", "log_level"))

    # Security
    secret_key: Optional[str] = Field(default=None, validation_alias=AliasChoices("SECRET_KEY", "secret_key"))
    token_lifetime_minutes: int = Field(
        default=60,
        ge=1,
        validation_alias=AliasChoices("ACCESS_TOKEN_LIFETIME_MINUTES", "token_lifetime_minutes"),
    )
    token_endpoint_enabled: bool = Field(
        default=True,
        validation_alias=AliasChoices("ACCESS_TOKEN_ENDPOINT_ENABLED", "token_endpoint_enabled"),
    )


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str
    port: int
    host: str = "127.0.0.1"

    def __init__(self, service_name: str, port: int, **kwargs):
        super().__init__(service_name=service_name, port=port, **kwargs)


def get_config(service_name: str, port: int, **overrides) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name, port=port, **overrides)
