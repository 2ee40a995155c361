"""Full Steam app list endpoint."""

from typing import Any

from fastapi import APIRouter, Depends

from ..dependencies import get_runtime
from ..runtime import CatalogRuntime
from .shared import translate_errors

router = APIRouter()


@router.get("")
async def get_app_list(
    runtime: CatalogRuntime = Depends(get_runtime),
) -> dict[str, Any]:
    """Return every named Steam app (cached for a day).

    Raises:
        HTTPException: 502 if the app list cannot be fetched.
    """
    with translate_errors():
        apps = await runtime.orchestrator.store.get_app_list()
    return {
        "data": [app.model_dump() for app in apps],
        "meta": {"total": len(apps)},
    }
