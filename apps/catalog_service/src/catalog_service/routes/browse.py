"""SteamSpy bulk listing endpoint."""

import logging
from typing import Any

from enrichment.normalization import normalize_steamspy_data
from fastapi import APIRouter, Depends, Query

from ..dependencies import get_runtime
from ..runtime import CatalogRuntime
from .shared import translate_errors

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def browse_apps(
    mode: str = Query("", description="top100in2weeks, top100forever, genre or tag"),
    value: str | None = Query(None, description="Genre or tag name"),
    runtime: CatalogRuntime = Depends(get_runtime),
) -> dict[str, Any]:
    """Return a SteamSpy listing normalized to SteamSpy-only records.

    Listings are not cached; each call spends one SteamSpy request.

    Raises:
        HTTPException: 400 for an invalid mode or missing value, 502 if
            SteamSpy fails.
    """
    with translate_errors():
        listing = await runtime.orchestrator.steamspy.fetch_bulk(mode, value)

    entries = [normalize_steamspy_data(data).to_wire() for data in listing]
    return {"data": entries, "meta": {"total": len(entries)}}
