"""Build runtime dependencies for catalog_service.

This module defines the runtime container and startup factory used by
catalog_service. One runtime exists per process: it owns the outbound HTTP
session and the provider contexts (limiters and caches) that every request
shares.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import aiohttp
from common.config import Settings
from enrichment.api_helpers.provider_context import ProviderContext
from enrichment.programmatic.enrichment_pipeline import (
    EnrichmentOrchestrator,
    build_orchestrator,
    create_http_session,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CatalogRuntime:
    """Runtime dependencies owned by catalog_service."""

    settings: Settings
    session: aiohttp.ClientSession
    orchestrator: EnrichmentOrchestrator

    def provider_contexts(self) -> dict[str, ProviderContext]:
        """Return every configured provider context keyed by provider name."""
        contexts = [
            self.orchestrator.store.context,
            self.orchestrator.steamspy.context,
        ]
        applist = self.orchestrator.store.applist_context
        if applist is not None:
            contexts.append(applist)
        if self.orchestrator.websites is not None:
            contexts.append(self.orchestrator.websites.context)
        return {ctx.name: ctx for ctx in contexts}


async def build_runtime(settings: Settings) -> CatalogRuntime:
    """Initialize runtime state for catalog_service.

    Args:
        settings: Resolved application settings.

    Returns:
        Runtime values used by route handlers.
    """
    session = create_http_session(settings)
    orchestrator = build_orchestrator(session, settings)
    return CatalogRuntime(settings=settings, session=session, orchestrator=orchestrator)


async def close_runtime(runtime: CatalogRuntime) -> None:
    """Release the runtime's outbound HTTP session."""
    if not runtime.session.closed:
        await runtime.session.close()
        logger.info("Outbound HTTP session closed")
