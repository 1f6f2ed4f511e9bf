"""
Project resources.
"""

from __future__ import annotations

import json
from typing import Any, ClassVar, Literal, TypedDict, cast

from pydantic import BaseModel, ConfigDict, Field

from eventline.resources.base import (
    ClientFn,
    Id,
    ListResponse,
    QueryField,
    QueryRequest,
    path_segment,
    with_query,
)


class Project(TypedDict):
    id: Id
    name: str
    org_id: Id


class ListProjectsRequest(QueryRequest):
    after: Id | None = None
    size: int | None = Field(default=None, ge=1)

    query_fields: ClassVar[tuple[QueryField, ...]] = (
        QueryField("after", "after"),
        QueryField("size", "size"),
    )


ListProjectsResponse = ListResponse[Project]


class GetProjectRequest(BaseModel):
    """Fetch a project by id, or by name when ``by`` is "name"."""

    model_config = ConfigDict(frozen=True)

    id: str
    by: Literal["id", "name"] = "id"


GetProjectResponse = Project


class CreateProjectRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str


CreateProjectResponse = Project


class UpdateProjectRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Id
    project: CreateProjectRequest


UpdateProjectResponse = Project


class DeleteProjectRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Id


DeleteProjectResponse = dict[str, Any]


def _project_body(project: CreateProjectRequest) -> str:
    return json.dumps({"name": project.name})


async def list_projects(client: ClientFn, request: ListProjectsRequest) -> ListProjectsResponse:
    """List the projects of the organization."""
    path = with_query("/v0/projects", request.to_query())
    return cast(ListProjectsResponse, await client("GET", path))


async def get_project(client: ClientFn, request: GetProjectRequest) -> GetProjectResponse:
    """Fetch a project by id or name."""
    path = f"/v0/projects/{request.by}/{path_segment(request.id)}"
    return cast(GetProjectResponse, await client("GET", path))


async def create_project(client: ClientFn, request: CreateProjectRequest) -> CreateProjectResponse:
    """Create a project."""
    return cast(CreateProjectResponse, await client("POST", "/v0/projects", _project_body(request)))


async def update_project(client: ClientFn, request: UpdateProjectRequest) -> UpdateProjectResponse:
    """Replace the definition of a project."""
    path = f"/v0/projects/id/{path_segment(request.id)}"
    return cast(UpdateProjectResponse, await client("PUT", path, _project_body(request.project)))


async def delete_project(client: ClientFn, request: DeleteProjectRequest) -> DeleteProjectResponse:
    """Delete a project."""
    path = f"/v0/projects/id/{path_segment(request.id)}"
    return cast(DeleteProjectResponse, await client("DELETE", path))
