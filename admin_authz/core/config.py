"""
Configuration management using Pydantic Settings.

Type-safe configuration loaded from environment variables. Covers the
relationship store connection, the authorization switch and the sizing of
the entitlement worker pool.

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables
- Type validation via Pydantic

Usage:
    from admin_authz.core.config import get_settings

    settings = get_settings()
    if settings.authorization_enabled:
        ...
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from admin_authz.core.constants import (
    POOL_QUEUE_SIZE_DEFAULT,
    POOL_SHUTDOWN_TIMEOUT_DEFAULT,
    STORE_TIMEOUT_DEFAULT,
)
from admin_authz.core.enums import Environment


class Settings(BaseSettings):
    """
    Application settings (flat structure).

    Configuration precedence:
        1. Environment variables
        2. Default values (only for non-sensitive config)
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Application metadata
    app_name: str = Field(
        default="identity-admin-authz",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )

    # Relationship store (OpenFGA)
    openfga_api_scheme: str = Field(
        default="http",
        description="Scheme of the OpenFGA API (http or https)",
    )
    openfga_api_host: str = Field(
        default="localhost:8080",
        description="Host (and port) of the OpenFGA API",
    )
    openfga_api_token: str = Field(
        default="",
        description="Pre-shared API token for the OpenFGA API",
    )
    openfga_store_id: str = Field(
        default="",
        description="OpenFGA store holding the relationship tuples",
    )
    openfga_authorization_model_id: str = Field(
        default="",
        description="Authorization model id; empty means the latest model of the store",
    )
    openfga_request_timeout_seconds: float = Field(
        default=STORE_TIMEOUT_DEFAULT,
        description="Timeout of a single OpenFGA HTTP call",
    )

    # Authorization switch and entitlement pool
    authorization_enabled: bool = Field(
        default=False,
        description="Enforce authorization; when false a noop store client is used",
    )
    authorization_workers_total: int = Field(
        default=150,
        description="Number of workers dispatching entitlement writes",
    )
    authorization_queue_size: int = Field(
        default=POOL_QUEUE_SIZE_DEFAULT,
        description="Capacity of the entitlement task queue",
    )
    authorization_submit_timeout_seconds: float = Field(
        default=2.0,
        description="Longest a request waits for room in a saturated queue",
    )
    authorization_task_timeout_seconds: float = Field(
        default=10.0,
        description="Deadline of a single background entitlement task",
    )
    authorization_shutdown_timeout_seconds: float = Field(
        default=POOL_SHUTDOWN_TIMEOUT_DEFAULT,
        description="Grace period for draining entitlement tasks on shutdown",
    )

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("authorization_workers_total", "authorization_queue_size")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """
        Pool sizing values must be at least one.

        Raises:
            ValueError: If the value is lower than 1.
        """
        if v < 1:
            raise ValueError("pool sizing values must be >= 1")
        return v

    @field_validator("openfga_api_scheme")
    @classmethod
    def validate_scheme(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("http", "https"):
            raise ValueError("openfga_api_scheme must be http or https")
        return v

    @field_validator("openfga_api_host")
    @classmethod
    def strip_host(cls, v: str) -> str:
        return v.strip().rstrip("/")

    @property
    def openfga_api_url(self) -> str:
        """Base URL of the OpenFGA API."""
        return f"{self.openfga_api_scheme}://{self.openfga_api_host}"

    @property
    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance (loaded once per process).

    Returns:
        Settings: Cached settings instance.
    """
    return Settings()
