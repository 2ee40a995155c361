"""Steam Store client (primary provider).

Fetches per-app details from ``/api/appdetails`` and the full app list from
the Steam Web API. Both endpoints share no budget: the app list has its own
context because it is one large payload refreshed at most once a day.
"""

import logging
from typing import Any

from common.models import AppListEntry
from common.models.provider_models import (
    StoreAppDetails,
    StoreAppDetailsEnvelope,
    StoreAppListResponse,
)
from pydantic import ValidationError

from enrichment.api_helpers.provider_client import ProviderClient
from enrichment.api_helpers.provider_context import ProviderContext
from enrichment.exceptions import UpstreamMalformedError

logger = logging.getLogger(__name__)

APP_LIST_CACHE_KEY = "applist"


class StoreClient(ProviderClient[int, StoreAppDetails]):
    """Client for Steam Store appdetails and the public app list.

    Args:
        session: Shared aiohttp session.
        context: Store appdetails limiter and cache.
        applist_context: Optional limiter and cache for `get_app_list`.
        api_key: Optional Steam Web API key sent with app list requests.
        timeout_seconds: Total request timeout.
    """

    def __init__(
        self,
        *,
        session: Any,
        context: ProviderContext,
        applist_context: ProviderContext | None = None,
        api_key: str | None = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        super().__init__(session=session, context=context, timeout_seconds=timeout_seconds)
        self._applist_context = applist_context
        self._api_key = api_key

    @property
    def applist_context(self) -> ProviderContext | None:
        return self._applist_context

    async def _download(self, key: int) -> Any:
        return await self._get_json(
            f"{self._context.base_url}/api/appdetails",
            params={"appids": str(key)},
            headers={"Accept-Language": "en"},
        )

    def _parse(self, key: int, payload: Any) -> StoreAppDetails | None:
        if not isinstance(payload, dict):
            raise UpstreamMalformedError(self.name, "expected a JSON object")

        raw = payload.get(str(key))
        if raw is None:
            return None

        envelope = StoreAppDetailsEnvelope.model_validate(raw)
        if not envelope.success or envelope.data is None:
            return None
        return envelope.data

    async def get_app_list(self) -> list[AppListEntry]:
        """Return every app with a non-blank name.

        The result is cached in the app list context. Failures propagate as
        `ProviderError` since there is no per-item fallback for this call.

        Raises:
            UpstreamUnavailableError: On transport failure or non-200.
            UpstreamMalformedError: If the payload cannot be parsed.
            RuntimeError: If no app list context was configured.
        """
        ctx = self._applist_context
        if ctx is None:
            raise RuntimeError("StoreClient was built without an app list context")

        cached = ctx.cache.get(APP_LIST_CACHE_KEY)
        if cached is not None:
            return cached

        params = {"key": self._api_key} if self._api_key else None
        payload = await self._get_json(
            f"{ctx.base_url}/ISteamApps/GetAppList/v2/", params=params, context=ctx
        )

        try:
            parsed = StoreAppListResponse.model_validate(payload)
        except ValidationError as e:
            raise UpstreamMalformedError(ctx.name, "unexpected app list shape") from e

        entries = [
            AppListEntry(appid=app.appid, name=app.name)
            for app in parsed.applist.apps
            if app.name.strip()
        ]
        logger.info("Loaded Steam app list: %d named apps", len(entries))
        ctx.cache.set(APP_LIST_CACHE_KEY, entries, ctx.cache_ttl_seconds)
        return entries
