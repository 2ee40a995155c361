"""
Main programmatic enrichment pipeline.
Drives app ids through the Store and SteamSpy clients, merges the results and
emits a lazy stream of record, progress and done events.
"""

import asyncio
import logging
import time
from collections.abc import AsyncIterator, Awaitable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

import aiohttp
from common.config import Settings
from common.models import NormalizedRecord
from common.models.provider_models import SteamSpyAppData, StoreAppDetails

from enrichment.api_helpers.company_website_helper import CompanyWebsiteResolver
from enrichment.api_helpers.provider_context import ProviderContext
from enrichment.api_helpers.steamspy_client import SteamSpyClient
from enrichment.api_helpers.store_client import StoreClient
from enrichment.normalization import (
    merge_steamspy_into_record,
    normalize_steamspy_data,
    normalize_store_details,
)

from .events import (
    DoneEvent,
    EnrichmentEvent,
    ProgressEvent,
    RecordEvent,
    WebsitesEvent,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ItemState(str, Enum):
    """Outcome of resolving one app id."""

    MERGED = "merged"
    PRIMARY_ONLY = "primary_only"
    SECONDARY_ONLY = "secondary_only"
    NOT_FOUND = "not_found"


@dataclass(slots=True)
class ItemResult:
    """Resolved state for one app id, with the raw payloads that produced it."""

    appid: int
    state: ItemState
    record: NormalizedRecord | None = None
    store_details: StoreAppDetails | None = None
    steamspy_data: SteamSpyAppData | None = None

    @property
    def ok(self) -> bool:
        return self.record is not None


@dataclass(slots=True)
class EnrichmentProgress:
    """Cumulative counters for one run. Counters only ever increase."""

    total: int
    completed: int = 0
    failed: int = 0

    def advance(self, *, ok: bool) -> None:
        self.completed += 1
        if not ok:
            self.failed += 1


@dataclass(slots=True)
class BatchResult:
    """Result of a non-streaming batch fetch."""

    total: int
    records: list[NormalizedRecord] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def fetched(self) -> int:
        return len(self.records)


class EnrichmentOrchestrator:
    """
    Per-app fetch/merge orchestration over the shared provider clients.

    Apps are processed one at a time in input order; the Store and SteamSpy
    lookups for a single app run concurrently. Every client shares its
    provider's process-wide limiter and cache, so concurrent runs draw from
    one budget per provider.

    Args:
        store: Primary provider client.
        steamspy: Secondary provider client.
        websites: Optional company website resolver. When omitted, website
            fields are left unset and no ``websites`` events are emitted.
    """

    def __init__(
        self,
        *,
        store: StoreClient,
        steamspy: SteamSpyClient,
        websites: CompanyWebsiteResolver | None = None,
    ) -> None:
        self.store = store
        self.steamspy = steamspy
        self.websites = websites

    async def _guarded(self, provider: str, appid: int, coro: Awaitable[T | None]) -> T | None:
        """Await a provider lookup, folding unexpected errors into a miss."""
        try:
            return await coro
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Unexpected %s failure for app %s", provider, appid)
            return None

    async def _no_stats(self) -> None:
        return None

    async def resolve(self, appid: int, *, with_stats: bool) -> ItemResult:
        """
        Resolve one app id through both providers.

        The Store lookup and (when `with_stats` is set) the SteamSpy lookup are
        issued as two concurrent tasks and joined before merging.

        Parameters:
            appid (int): Steam app id.
            with_stats (bool): Also query SteamSpy for tags and usage statistics.

        Returns:
            ItemResult: The classified outcome. ``record`` is set unless both
            providers missed.
        """
        details, spy = await asyncio.gather(
            self._guarded("store", appid, self.store.fetch(appid)),
            self._guarded("steamspy", appid, self.steamspy.fetch(appid))
            if with_stats
            else self._no_stats(),
        )

        if details is not None:
            record = normalize_store_details(details)
            if spy is not None:
                return ItemResult(
                    appid,
                    ItemState.MERGED,
                    merge_steamspy_into_record(record, spy),
                    details,
                    spy,
                )
            return ItemResult(appid, ItemState.PRIMARY_ONLY, record, details)

        if spy is not None:
            return ItemResult(
                appid, ItemState.SECONDARY_ONLY, normalize_steamspy_data(spy), None, spy
            )

        return ItemResult(appid, ItemState.NOT_FOUND)

    async def _with_websites(
        self, record: NormalizedRecord, result: ItemResult
    ) -> NormalizedRecord:
        """Add the Store website and Wikidata company websites to `record`."""
        update: dict[str, Any] = {}

        if result.store_details is not None and result.store_details.website:
            update["website_url"] = result.store_details.website.strip() or None

        if self.websites is not None:
            dev = record.developers[0] if record.developers else None
            pub = record.publishers[0] if record.publishers else None
            if dev or pub:
                pair = await self._guarded(
                    "wikidata", result.appid, self.websites.resolve_pair(dev, pub)
                )
                if pair is not None:
                    update["developer_website"], update["publisher_website"] = pair

        return record.model_copy(update=update) if update else record

    async def _fallback_websites(
        self, appid: int, names: Mapping[str, Any] | None
    ) -> WebsitesEvent | None:
        """Resolve websites from caller-supplied names for an app with no record."""
        if self.websites is None or not names:
            return None
        hint = names.get(str(appid)) or names.get(appid)
        if not isinstance(hint, Mapping):
            return None

        dev = hint.get("developer") or None
        pub = hint.get("publisher") or None
        if not (dev or pub):
            return None

        pair = await self._guarded("wikidata", appid, self.websites.resolve_pair(dev, pub))
        if pair is None or not any(pair):
            return None
        return WebsitesEvent(appid=appid, developer_website=pair[0], publisher_website=pair[1])

    async def stream(
        self,
        appids: Sequence[int],
        *,
        with_stats: bool,
        cancel: asyncio.Event | None = None,
        names: Mapping[str, Any] | None = None,
    ) -> AsyncIterator[EnrichmentEvent]:
        """
        Resolve app ids in order, yielding events as each one completes.

        Per app: an optional ``app`` (or ``websites``) event, then exactly one
        ``progress`` event. After the last app, one ``done`` event. If `cancel`
        is set, it is checked before each app; once observed, the stream ends
        without further network calls or events, and without ``done``.

        Parameters:
            appids (Sequence[int]): Validated app ids, processed in order.
            with_stats (bool): Also query SteamSpy.
            cancel (Optional[asyncio.Event]): Cooperative cancellation signal.
            names (Optional[Mapping]): ``{"<appid>": {"developer", "publisher"}}``
                hints used for website lookup when no record is found.

        Yields:
            EnrichmentEvent: Record, websites, progress and done events.
        """
        progress = EnrichmentProgress(total=len(appids))
        start_time = time.time()
        logger.info("Starting enrichment run for %d apps (stats=%s)", progress.total, with_stats)

        for appid in appids:
            if cancel is not None and cancel.is_set():
                logger.info(
                    "Enrichment run cancelled after %d/%d apps",
                    progress.completed,
                    progress.total,
                )
                return

            result = await self.resolve(appid, with_stats=with_stats)
            if result.record is not None:
                record = await self._with_websites(result.record, result)
                yield RecordEvent(appid=appid, entry=record)
            else:
                websites_event = await self._fallback_websites(appid, names)
                if websites_event is not None:
                    yield websites_event

            progress.advance(ok=result.ok)
            yield ProgressEvent(
                completed=progress.completed,
                total=progress.total,
                failed=progress.failed,
            )

        logger.info(
            "Enrichment run finished: %d completed, %d failed in %.2fs",
            progress.completed,
            progress.failed,
            time.time() - start_time,
        )
        yield DoneEvent(completed=progress.completed, failed=progress.failed)

    async def fetch_batch(self, appids: Sequence[int], *, with_stats: bool) -> BatchResult:
        """Resolve app ids in order and collect records plus per-app error strings."""
        batch = BatchResult(total=len(appids))
        for appid in appids:
            result = await self.resolve(appid, with_stats=with_stats)
            if result.record is not None:
                batch.records.append(result.record)
            else:
                batch.errors.append(f"App {appid}: not found")
        logger.info("Batch fetch: %d/%d apps resolved", batch.fetched, batch.total)
        return batch

    async def fetch_one(self, appid: int, *, with_stats: bool) -> NormalizedRecord | None:
        """Resolve a single app id, returning its record or None."""
        result = await self.resolve(appid, with_stats=with_stats)
        return result.record


def create_http_session(settings: Settings) -> aiohttp.ClientSession:
    """Create the one outbound HTTP session shared by every provider client."""
    return aiohttp.ClientSession(
        timeout=aiohttp.ClientTimeout(total=settings.service.request_timeout),
        headers={"User-Agent": settings.service.user_agent},
    )


def build_orchestrator(session: Any, settings: Settings) -> EnrichmentOrchestrator:
    """
    Build provider contexts, clients and the orchestrator from settings.

    Call once per process: each provider context created here owns the
    limiter and cache every later request shares.

    Parameters:
        session: Shared aiohttp session.
        settings (Settings): Resolved application settings.

    Returns:
        EnrichmentOrchestrator: Ready to serve requests.
    """
    timeout = settings.service.request_timeout
    store = StoreClient(
        session=session,
        context=ProviderContext.from_config("store", settings.store),
        applist_context=ProviderContext.from_config("applist", settings.applist),
        api_key=settings.steam_api_key,
        timeout_seconds=timeout,
    )
    steamspy = SteamSpyClient(
        session=session,
        context=ProviderContext.from_config("steamspy", settings.steamspy),
        timeout_seconds=timeout,
    )
    websites = None
    if settings.wikidata.enabled:
        websites = CompanyWebsiteResolver(
            session=session,
            context=ProviderContext.from_config("wikidata", settings.wikidata),
            timeout_seconds=timeout,
        )

    logger.info(
        "Providers ready: store %d/%ss, steamspy %d/%ss, wikidata %s",
        settings.store.max_requests,
        settings.store.window_seconds,
        settings.steamspy.max_requests,
        settings.steamspy.window_seconds,
        "enabled" if websites else "disabled",
    )
    return EnrichmentOrchestrator(store=store, steamspy=steamspy, websites=websites)
