"""
Event resources.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, ClassVar, NotRequired, TypedDict, cast

from pydantic import BaseModel, ConfigDict, Field

from eventline.resources.base import (
    PAGINATION_QUERY_FIELDS,
    ClientFn,
    Id,
    ListResponse,
    Pagination,
    QueryField,
    path_segment,
    with_query,
)


class Event(TypedDict):
    id: Id
    org_id: Id
    trigger_id: NotRequired[Id]
    command_id: NotRequired[Id]
    creation_time: str
    event_time: str
    name: str
    data: dict[str, Any]


class ListEventsRequest(Pagination):
    """List events, optionally filtered by pipeline, connector or event name."""

    pipeline_id: Id | None = None
    connector: str | None = None
    name: str | None = None

    query_fields: ClassVar[tuple[QueryField, ...]] = (
        *PAGINATION_QUERY_FIELDS,
        QueryField("pipeline_id", "pipeline_id"),
        QueryField("connector", "connector"),
        QueryField("name", "name"),
    )


ListEventsResponse = ListResponse[Event]


class GetEventRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Id


GetEventResponse = Event


class CreateEventRequest(BaseModel):
    """Create a custom event.

    ``event_time`` defaults to the time the request is sent.
    """

    model_config = ConfigDict(frozen=True)

    connector: str
    name: str
    data: dict[str, Any] = Field(default_factory=dict)
    event_time: datetime | str | None = None


CreateEventResponse = Event


def format_time(value: datetime) -> str:
    """Format a datetime as an RFC 3339 UTC timestamp with milliseconds."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


async def list_events(client: ClientFn, request: ListEventsRequest) -> ListEventsResponse:
    """List events."""
    path = with_query("/v0/events", request.to_query())
    return cast(ListEventsResponse, await client("GET", path))


async def get_event(client: ClientFn, request: GetEventRequest) -> GetEventResponse:
    """Fetch an event by id."""
    return cast(GetEventResponse, await client("GET", f"/v0/events/id/{path_segment(request.id)}"))


async def create_event(client: ClientFn, request: CreateEventRequest) -> CreateEventResponse:
    """Create an event and let matching triggers instantiate their pipelines."""
    event_time = request.event_time
    if event_time is None:
        event_time = datetime.now(timezone.utc)
    if isinstance(event_time, datetime):
        event_time = format_time(event_time)

    body = json.dumps(
        {
            "event_time": event_time,
            "connector": request.connector,
            "name": request.name,
            "data": request.data,
        }
    )
    return cast(CreateEventResponse, await client("POST", "/v0/events", body))
