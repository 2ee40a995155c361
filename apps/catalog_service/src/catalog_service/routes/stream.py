"""Streaming enrichment endpoint (server-sent events)."""

import asyncio
import logging
from collections.abc import AsyncGenerator

from enrichment.programmatic.events import format_sse_event
from enrichment.programmatic.validation import parse_app_ids
from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, ConfigDict, Field

from ..dependencies import get_runtime
from ..runtime import CatalogRuntime
from .shared import translate_errors

logger = logging.getLogger(__name__)

router = APIRouter()


class CompanyNames(BaseModel):
    """Developer/publisher hint for apps the Store cannot resolve."""

    developer: str | None = None
    publisher: str | None = None


class StreamRequest(BaseModel):
    """Request body for a streaming enrichment run."""

    model_config = ConfigDict(populate_by_name=True)

    ids: list[int | str] = Field(..., description="Appids to resolve, in order")
    with_tags: bool = Field(
        default=False,
        alias="withTags",
        description="Also query SteamSpy for tags and statistics",
    )
    names: dict[str, CompanyNames] = Field(
        default_factory=dict,
        description="Per-appid company names used for website lookup on a miss",
    )


@router.post("/stream")
async def stream_apps(
    body: StreamRequest,
    request: Request,
    runtime: CatalogRuntime = Depends(get_runtime),
) -> StreamingResponse:
    """Resolve apps one at a time, streaming each result as it completes.

    Event kinds: ``app``, ``websites``, ``progress`` and a terminal ``done``.
    A client disconnect stops the run before the next app; no ``done`` is
    sent in that case.

    Raises:
        HTTPException: 400 on an empty, oversized or malformed id list.
    """
    with translate_errors():
        app_ids = parse_app_ids(
            body.ids, max_items=runtime.settings.service.max_stream_size
        )

    names = {key: value.model_dump() for key, value in body.names.items()}
    cancel = asyncio.Event()

    async def event_generator() -> AsyncGenerator[str, None]:
        try:
            async for event in runtime.orchestrator.stream(
                app_ids, with_stats=body.with_tags, cancel=cancel, names=names
            ):
                yield format_sse_event(event)
                if not cancel.is_set() and await request.is_disconnected():
                    logger.info("Client disconnected; cancelling enrichment run")
                    cancel.set()
        finally:
            cancel.set()

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
