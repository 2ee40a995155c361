"""Per-provider rate budget and cache configuration.

Each upstream provider gets its own request budget (token bucket of
``max_requests`` per ``window_seconds``) and its own response cache. The
budgets differ by orders of magnitude, so they are configured independently.
"""

from pydantic import BaseModel, Field, field_validator


class ProviderConfig(BaseModel):
    """Rate limit, cache and endpoint settings for one upstream provider."""

    enabled: bool = Field(default=True, description="Whether the provider is used")
    base_url: str = Field(..., description="Provider API base URL")
    max_requests: int = Field(
        ..., ge=1, description="Token bucket capacity (requests per window)"
    )
    window_seconds: float = Field(
        ..., gt=0, description="Token bucket refill window in seconds"
    )
    cache_capacity: int = Field(
        default=10000, ge=1, description="Maximum cached positive responses"
    )
    cache_ttl_seconds: int = Field(
        default=1800, description="Cache TTL for positive responses in seconds"
    )

    @field_validator("cache_ttl_seconds")
    @classmethod
    def validate_cache_ttl(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Cache TTL must be non-negative")
        return v


class StoreConfig(ProviderConfig):
    """Steam Store appdetails: roughly 200 requests per 5 minutes per IP."""

    base_url: str = Field(
        default="https://store.steampowered.com", description="Store API base URL"
    )
    max_requests: int = Field(default=180, ge=1)
    window_seconds: float = Field(default=300, gt=0)
    cache_capacity: int = Field(default=10000, ge=1)
    cache_ttl_seconds: int = Field(default=30 * 60)


class SteamSpyConfig(ProviderConfig):
    """SteamSpy: a scarce budget, far below the store's."""

    base_url: str = Field(default="https://steamspy.com", description="SteamSpy base URL")
    max_requests: int = Field(default=4, ge=1)
    window_seconds: float = Field(default=60, gt=0)
    cache_capacity: int = Field(default=5000, ge=1)
    cache_ttl_seconds: int = Field(default=6 * 60 * 60)


class WikidataConfig(ProviderConfig):
    """Wikidata lookups for developer/publisher official websites."""

    base_url: str = Field(default="https://www.wikidata.org", description="Wikidata base URL")
    max_requests: int = Field(default=30, ge=1)
    window_seconds: float = Field(default=10, gt=0)
    cache_capacity: int = Field(default=2000, ge=1)
    cache_ttl_seconds: int = Field(default=24 * 60 * 60)


class AppListConfig(ProviderConfig):
    """Full Steam app list: one large payload refreshed daily."""

    base_url: str = Field(
        default="https://api.steampowered.com", description="Steam Web API base URL"
    )
    max_requests: int = Field(default=10, ge=1)
    window_seconds: float = Field(default=60, gt=0)
    cache_capacity: int = Field(default=1, ge=1)
    cache_ttl_seconds: int = Field(default=24 * 60 * 60)
