"""
Shared configuration management for the Catalog Gateway services.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="GATEWAY_",
        env_file=".env",
        case_sensitive=False,
        extra="allow",
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Bearer tokens
    jwt_secret: str = Field(default="catalog-gateway-dev-secret")
    jwt_algorithm: str = Field(default="HS256")
    jwt_expires_in_seconds: int = Field(default=86400, gt=0)

    # Internal services
    auth_service_url: str = Field(default="http://localhost:3001")

    # Upstream catalog
    upstream_catalog_url: str = Field(default="https://fakestoreapi.com")
    upstream_timeout_seconds: float = Field(default=10.0, gt=0)

    # Product cache
    cache_ttl_seconds: float = Field(default=300.0, gt=0)
    brl_conversion_rate: float = Field(default=5.5, gt=0)


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str
    port: int
    host: str = "0.0.0.0"

    def __init__(self, service_name: str, port: int, **kwargs):
        super().__init__(service_name=service_name, port=port, **kwargs)


def get_config(service_name: str, port: int, **overrides) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name, port=port, **overrides)
