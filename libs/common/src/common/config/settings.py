"""Catalog Service Configuration Settings."""

import os
from enum import Enum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .provider_config import (
    AppListConfig,
    SteamSpyConfig,
    StoreConfig,
    WikidataConfig,
)
from .service_config import ServiceConfig


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


def get_environment() -> Environment:
    """Detect environment from APP_ENV variable.

    Defaults to development when APP_ENV is unset.

    Returns:
        Environment: Detected environment based on APP_ENV.

    Raises:
        ValueError: If APP_ENV contains an invalid value.
    """
    env_str = os.getenv("APP_ENV", "development").lower()

    match env_str:
        case "production":
            return Environment.PRODUCTION
        case "staging":
            return Environment.STAGING
        case "development":
            return Environment.DEVELOPMENT
        case _:
            raise ValueError(
                f"Invalid APP_ENV value '{env_str}'. "
                "Must be one of: development, staging, production"
            )


class Settings(BaseSettings):
    """Catalog service settings with validation and type safety.

    Nested sections are addressable from the environment with a double
    underscore, e.g. ``STEAMSPY__MAX_REQUESTS=2`` or ``SERVICE__LOG_LEVEL=DEBUG``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # ============================================================================
    # ENVIRONMENT & APPLICATION
    # ============================================================================

    environment: Environment = Field(
        default_factory=get_environment,
        description="Application environment (development/staging/production)",
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    # ============================================================================
    # SERVICE
    # ============================================================================

    service: ServiceConfig = Field(default_factory=ServiceConfig)

    # ============================================================================
    # UPSTREAM PROVIDERS
    # ============================================================================

    store: StoreConfig = Field(
        default_factory=StoreConfig,
        description="Steam Store appdetails (primary provider)",
    )
    steamspy: SteamSpyConfig = Field(
        default_factory=SteamSpyConfig,
        description="SteamSpy statistics and tags (secondary provider)",
    )
    wikidata: WikidataConfig = Field(
        default_factory=WikidataConfig,
        description="Wikidata company website lookups",
    )
    applist: AppListConfig = Field(
        default_factory=AppListConfig,
        description="Steam Web API app list used for name search",
    )
    steam_api_key: str | None = Field(
        default=None, description="Steam Web API key for the app list endpoint"
    )

    # ============================================================================
    # LIFECYCLE & VALIDATION
    # ============================================================================

    def model_post_init(self, __context) -> None:
        """Apply environment-specific overrides after initialization."""
        self.apply_environment_settings()

    def apply_environment_settings(self) -> None:
        """Apply environment-specific settings with smart defaults.

        DEVELOPMENT:
            - Sets debug=True, log_level=DEBUG as defaults
            - Respects user-provided values

        STAGING:
            - Sets debug=True, log_level=INFO as defaults
            - Respects user-provided values

        PRODUCTION (ENFORCED):
            - ALWAYS enforces debug=False, log_level=WARNING
        """
        if self.environment == Environment.DEVELOPMENT:
            if os.getenv("DEBUG") is None:
                self.debug = True
            if os.getenv("SERVICE__LOG_LEVEL") is None:
                self.service.log_level = "DEBUG"

        elif self.environment == Environment.STAGING:
            if os.getenv("DEBUG") is None:
                self.debug = True
            if os.getenv("SERVICE__LOG_LEVEL") is None:
                self.service.log_level = "INFO"

        elif self.environment == Environment.PRODUCTION:
            self.debug = False
            self.service.log_level = "WARNING"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
