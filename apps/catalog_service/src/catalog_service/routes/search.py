"""App name search over the Steam app list."""

import logging
from typing import Any

from enrichment.normalization import minimal_record
from enrichment.programmatic.app_search import rank_apps
from enrichment.programmatic.validation import clamp_limit
from fastapi import APIRouter, Depends, Query

from ..dependencies import get_runtime
from ..runtime import CatalogRuntime
from .shared import translate_errors

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def search_apps(
    q: str = Query("", description="Case-insensitive name query"),
    limit: int | None = Query(None, description="Maximum hits (capped)"),
    details: bool = Query(False, description="Resolve each hit through the Store"),
    runtime: CatalogRuntime = Depends(get_runtime),
) -> dict[str, Any]:
    """Search app names: exact matches first, then prefixes, then substrings.

    Without ``details`` each hit is an identity-only record. With ``details``
    every hit is resolved through the Store, in rank order.

    Raises:
        HTTPException: 400 for a blank query, 502 if the app list is unavailable.
    """
    service = runtime.settings.service
    max_hits = clamp_limit(
        limit, default=service.default_search_limit, maximum=service.max_search_limit
    )

    with translate_errors():
        apps = await runtime.orchestrator.store.get_app_list()
        hits = rank_apps(apps, q, max_hits)

    if not details:
        return {
            "data": [minimal_record(app.appid, app.name).to_wire() for app in hits],
            "meta": {"total": len(hits)},
        }

    batch = await runtime.orchestrator.fetch_batch(
        [app.appid for app in hits], with_stats=False
    )
    return {
        "data": [record.to_wire() for record in batch.records],
        "meta": {"total": batch.fetched, "errors": batch.errors},
    }
