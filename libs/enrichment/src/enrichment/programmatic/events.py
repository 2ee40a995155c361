"""Streaming events emitted by an enrichment run, plus SSE framing."""

import json
from enum import Enum
from typing import Any, Literal

from common.models import NormalizedRecord
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class EventType(str, Enum):
    """Kinds of events in an enrichment stream."""

    APP = "app"
    PROGRESS = "progress"
    DONE = "done"
    WEBSITES = "websites"


class _Event(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class RecordEvent(_Event):
    """A normalized record for one identifier."""

    type: Literal[EventType.APP] = EventType.APP
    appid: int
    entry: NormalizedRecord


class ProgressEvent(_Event):
    """Cumulative counts after one identifier was processed."""

    type: Literal[EventType.PROGRESS] = EventType.PROGRESS
    completed: int
    total: int
    failed: int


class DoneEvent(_Event):
    """Terminal event of a run that was not cancelled."""

    type: Literal[EventType.DONE] = EventType.DONE
    completed: int
    failed: int


class WebsitesEvent(_Event):
    """Company websites found for an identifier that produced no record."""

    type: Literal[EventType.WEBSITES] = EventType.WEBSITES
    appid: int
    developer_website: str | None = None
    publisher_website: str | None = None


EnrichmentEvent = RecordEvent | ProgressEvent | DoneEvent | WebsitesEvent


def format_sse_event(event: EnrichmentEvent) -> str:
    """Frame an event as a server-sent event (``event:`` line plus JSON ``data:``)."""
    json_data = json.dumps(event.to_wire())
    return f"event: {event.type.value}\ndata: {json_data}\n\n"
