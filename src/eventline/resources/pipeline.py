"""
Pipeline resources and the pipeline scratchpad.

The scratchpad is a key-value store attached to a running pipeline and
shared by all its tasks.
"""

from __future__ import annotations

from typing import Any, Literal, TypedDict, cast

from pydantic import BaseModel, ConfigDict

from eventline.resources.base import ClientFn, Id, ListResponse, Pagination, path_segment, with_query

PipelineStatus = Literal["created", "started", "aborted", "successful", "failed"]


class Pipeline(TypedDict):
    id: Id
    event_id: Id
    org_id: Id
    project_id: Id
    trigger_id: Id
    name: str
    concurrent: bool
    creation_time: str
    start_time: str
    end_time: str
    status: PipelineStatus


class ListPipelinesRequest(Pagination):
    pass


ListPipelinesResponse = ListResponse[Pipeline]


class GetPipelineRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Id


GetPipelineResponse = Pipeline


class GetScratchpadRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Id


GetScratchpadResponse = dict[str, str]


class DeleteScratchpadRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Id


class GetScratchpadEntryRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Id
    key: str


GetScratchpadEntryResponse = str


class SetScratchpadEntryRequest(BaseModel):
    """Store ``value`` under ``key``; the value is sent as the raw request body."""

    model_config = ConfigDict(frozen=True)

    id: Id
    key: str
    value: str


class DeleteScratchpadEntryRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Id
    key: str


def _pipeline_path(pipeline_id: Id) -> str:
    return f"/v0/pipelines/id/{path_segment(pipeline_id)}"


def _scratchpad_path(pipeline_id: Id, key: str | None = None) -> str:
    path = f"{_pipeline_path(pipeline_id)}/scratchpad"
    if key is not None:
        path = f"{path}/key/{path_segment(key)}"
    return path


async def list_pipelines(client: ClientFn, request: ListPipelinesRequest) -> ListPipelinesResponse:
    """List pipelines of the current project."""
    path = with_query("/v0/pipelines", request.to_query())
    return cast(ListPipelinesResponse, await client("GET", path))


async def get_pipeline(client: ClientFn, request: GetPipelineRequest) -> GetPipelineResponse:
    """Fetch a pipeline by id."""
    return cast(GetPipelineResponse, await client("GET", _pipeline_path(request.id)))


async def get_scratchpad(client: ClientFn, request: GetScratchpadRequest) -> GetScratchpadResponse:
    """Fetch every entry of a pipeline scratchpad."""
    return cast(GetScratchpadResponse, await client("GET", _scratchpad_path(request.id)))


async def delete_scratchpad(client: ClientFn, request: DeleteScratchpadRequest) -> Any:
    """Delete every entry of a pipeline scratchpad."""
    return await client("DELETE", _scratchpad_path(request.id))


async def get_scratchpad_entry(
    client: ClientFn, request: GetScratchpadEntryRequest
) -> GetScratchpadEntryResponse:
    """Fetch the value stored under a scratchpad key."""
    return cast(GetScratchpadEntryResponse, await client("GET", _scratchpad_path(request.id, request.key)))


async def set_scratchpad_entry(client: ClientFn, request: SetScratchpadEntryRequest) -> Any:
    """Store a value under a scratchpad key, replacing any previous value."""
    return await client("PUT", _scratchpad_path(request.id, request.key), request.value)


async def delete_scratchpad_entry(client: ClientFn, request: DeleteScratchpadEntryRequest) -> Any:
    """Delete a scratchpad key."""
    return await client("DELETE", _scratchpad_path(request.id, request.key))
