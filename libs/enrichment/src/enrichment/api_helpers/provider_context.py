"""Process-wide shared state for one upstream provider.

A `ProviderContext` bundles the provider's rate limiter and response cache.
Exactly one context per provider is built at process start and handed to
every client instance, so all concurrent requests share one budget and one
cache per provider.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from common.config import ProviderConfig
from http_cache import ExpiringCache

from enrichment.api_helpers.rate_limiter import TokenBucketRateLimiter


@dataclass(slots=True)
class ProviderContext:
    """Limiter, cache and endpoint shared by all clients of one provider."""

    name: str
    base_url: str
    limiter: TokenBucketRateLimiter
    cache: ExpiringCache[Any]
    cache_ttl_seconds: float
    enabled: bool = field(default=True)

    @classmethod
    def from_config(cls, name: str, config: ProviderConfig) -> ProviderContext:
        """Build a context from provider configuration.

        Args:
            name: Provider name used in logs and errors.
            config: Budget, cache and endpoint settings.

        Returns:
            A new context owning a fresh limiter and cache.
        """
        return cls(
            name=name,
            base_url=config.base_url.rstrip("/"),
            limiter=TokenBucketRateLimiter(
                config.max_requests, config.window_seconds, name=name
            ),
            cache=ExpiringCache(
                config.cache_capacity, config.cache_ttl_seconds, name=f"{name}-cache"
            ),
            cache_ttl_seconds=config.cache_ttl_seconds,
            enabled=config.enabled,
        )
