"""Base HTTP client for rate-limited, cached catalog providers.

This module provides the shared fetch contract used by every provider:
- Serving positive results from the provider's cache (hits never touch the limiter).
- Applying the provider's shared, pre-request rate limiter on a miss.
- Performing the HTTP GET and decoding JSON.
- Validating the payload into a typed model and caching only positive results.

Transport failures, non-success statuses, malformed payloads and "unknown
item" answers all surface as ``None`` from `fetch` and are never cached, so a
later call can retry them.
"""

from __future__ import annotations

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

import aiohttp
from pydantic import ValidationError

from enrichment.api_helpers.provider_context import ProviderContext
from enrichment.exceptions import (
    ProviderError,
    UpstreamMalformedError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)

K = TypeVar("K")
M = TypeVar("M")


class ProviderClient(ABC, Generic[K, M]):
    """HTTP client for one upstream provider.

    Subclasses implement `_download` (the network calls, made through
    `_get_json`) and `_parse` (payload to model, or None for an unknown item).

    Args:
        session: An aiohttp-style session that supports ``session.get(...)``
            returning an async context manager. Shared across providers.
        context: The provider's process-wide limiter and cache.
        timeout_seconds: Total request timeout passed to ``session.get``.
    """

    def __init__(
        self,
        *,
        session: Any,
        context: ProviderContext,
        timeout_seconds: float = 10.0,
    ) -> None:
        self._session = session
        self._context = context
        self._timeout = aiohttp.ClientTimeout(total=float(timeout_seconds))

    @property
    def name(self) -> str:
        return self._context.name

    @property
    def context(self) -> ProviderContext:
        return self._context

    def _cache_key(self, key: K) -> str:
        return str(key)

    @abstractmethod
    async def _download(self, key: K) -> Any:
        """Fetch the raw JSON payload for `key` via `_get_json`."""

    @abstractmethod
    def _parse(self, key: K, payload: Any) -> M | None:
        """Turn a decoded payload into a model, or None if the provider reports it unknown.

        May raise `pydantic.ValidationError` or `UpstreamMalformedError`.
        """

    async def fetch(self, key: K) -> M | None:
        """Return the provider's record for `key`, or None.

        Steps, in order: cache lookup, limiter acquire, network call, parse,
        cache store. Only parseable positive results are cached.

        Args:
            key: Provider lookup key (an appid or a company name).

        Returns:
            The validated model, or None when the item is unknown or the
            provider failed.
        """
        if not self._context.enabled:
            return None

        cache_key = self._cache_key(key)
        cached = self._context.cache.get(cache_key)
        if cached is not None:
            logger.debug("%s cache hit for %s", self.name, cache_key)
            return cached

        try:
            payload = await self._download(key)
            result = self._parse(key, payload)
        except ValidationError as e:
            logger.warning(
                "%s: malformed payload for %s (%d validation errors)",
                self.name,
                cache_key,
                e.error_count(),
            )
            return None
        except ProviderError as e:
            logger.warning("%s lookup failed for %s: %s", self.name, cache_key, e)
            return None

        if result is None:
            logger.debug("%s reports %s as unknown", self.name, cache_key)
            return None

        self._context.cache.set(cache_key, result, self._context.cache_ttl_seconds)
        return result

    async def _get_json(
        self,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        context: ProviderContext | None = None,
    ) -> Any:
        """GET a URL under a provider's rate limit and decode the JSON body.

        Args:
            url: Absolute URL to fetch.
            params: Optional query string parameters.
            headers: Optional per-request headers.
            context: Budget to draw from. Defaults to this client's context.

        Returns:
            The decoded JSON document.

        Raises:
            UpstreamUnavailableError: On transport failure or a non-200 status.
            UpstreamMalformedError: If the body is not valid JSON.
        """
        ctx = context or self._context
        await ctx.limiter.acquire()
        try:
            async with self._session.get(
                url, params=params, headers=headers, timeout=self._timeout
            ) as response:
                if response.status != 200:
                    raise UpstreamUnavailableError(ctx.name, status=response.status)
                try:
                    return await response.json(content_type=None)
                except (aiohttp.ContentTypeError, json.JSONDecodeError, ValueError) as e:
                    raise UpstreamMalformedError(ctx.name, "invalid JSON body") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise UpstreamUnavailableError(ctx.name, reason=type(e).__name__) from e
