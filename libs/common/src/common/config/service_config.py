"""Service-level configuration."""

from pydantic import BaseModel, Field, field_validator, model_validator


class ServiceConfig(BaseModel):
    """Configuration for the catalog service API and runtime settings."""

    # Host & Port
    catalog_service_host: str = Field(
        default="0.0.0.0", description="Catalog service host address"
    )
    catalog_service_port: int = Field(
        default=8000, ge=1, le=65535, description="Catalog service port"
    )

    # API Metadata
    api_title: str = Field(default="Steamer Catalog Service", description="API title")
    api_version: str = Field(default="1.0.0", description="API version")
    api_description: str = Field(
        default="Aggregates Steam Store and SteamSpy records into one catalog entry per app",
        description="API description",
    )

    # Request Limits
    max_batch_size: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Maximum appids accepted by the batch endpoint",
    )
    max_stream_size: int = Field(
        default=5000,
        ge=1,
        description="Maximum appids accepted by one streaming request",
    )
    default_search_limit: int = Field(
        default=50, ge=1, description="Default number of search hits returned"
    )
    max_search_limit: int = Field(
        default=200, ge=1, le=1000, description="Maximum search results limit"
    )
    request_timeout: int = Field(
        default=30, ge=1, le=300, description="Upstream request timeout in seconds"
    )
    user_agent: str = Field(
        default="steamer-catalog/1.0", description="User-Agent sent to providers"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )

    # CORS
    allowed_origins: list[str] = Field(
        default=["*"], description="Allowed CORS origins"
    )
    allowed_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    allowed_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @model_validator(mode="after")
    def validate_search_limits(self) -> "ServiceConfig":
        """Ensure default_search_limit does not exceed max_search_limit."""
        if self.default_search_limit > self.max_search_limit:
            raise ValueError(
                f"default_search_limit ({self.default_search_limit}) must not exceed "
                f"max_search_limit ({self.max_search_limit})"
            )
        return self
