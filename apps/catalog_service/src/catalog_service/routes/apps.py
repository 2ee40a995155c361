"""Batch and single-app lookup endpoints."""

import logging
from typing import Any

from enrichment.programmatic.validation import parse_app_id, parse_app_id_csv
from fastapi import APIRouter, Depends, HTTPException, Query

from ..dependencies import get_runtime
from ..runtime import CatalogRuntime
from .shared import translate_errors

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def get_apps(
    ids: str = Query("", description="Comma-separated appids"),
    steamspy: bool = Query(False, description="Merge SteamSpy tags and statistics"),
    runtime: CatalogRuntime = Depends(get_runtime),
) -> dict[str, Any]:
    """Resolve up to ``service.max_batch_size`` apps in request order.

    Args:
        ids: Comma-separated appids.
        steamspy: Also query SteamSpy for each app.
        runtime: Injected runtime.

    Returns:
        ``{"data": [record, ...], "meta": {"total", "fetched", "errors"}}``

    Raises:
        HTTPException: 400 on a missing, oversized or malformed id list.
    """
    with translate_errors():
        app_ids = parse_app_id_csv(
            ids, max_items=runtime.settings.service.max_batch_size
        )

    batch = await runtime.orchestrator.fetch_batch(app_ids, with_stats=steamspy)
    return {
        "data": [record.to_wire() for record in batch.records],
        "meta": {
            "total": batch.total,
            "fetched": batch.fetched,
            "errors": batch.errors,
        },
    }


@router.get("/{appid}")
async def get_app(
    appid: str,
    steamspy: bool = Query(True, description="Merge SteamSpy tags and statistics"),
    runtime: CatalogRuntime = Depends(get_runtime),
) -> dict[str, Any]:
    """Resolve one app.

    Raises:
        HTTPException: 400 for an invalid appid, 404 if no provider knows it.
    """
    with translate_errors():
        app_id = parse_app_id(appid)

    record = await runtime.orchestrator.fetch_one(app_id, with_stats=steamspy)
    if record is None:
        raise HTTPException(status_code=404, detail="App not found")
    return {"data": record.to_wire()}
