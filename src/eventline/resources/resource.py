"""
Generic resources: commands, pipelines, tasks and triggers.

Resources are the definitions deployed to a project. Each one carries a
typed ``spec.data`` payload depending on its ``spec.type``.
"""

from __future__ import annotations

from typing import Any, ClassVar, Generic, Literal, NotRequired, TypedDict, TypeVar, cast

from pydantic import BaseModel, ConfigDict

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

T = TypeVar("T")

ResourceType = Literal["command", "pipeline", "task", "trigger"]
ParameterType = Literal["string", "number", "boolean"]


class ResourceSpec(TypedDict, Generic[T]):
    """Definition of a resource.

    Attributes:
        type: Resource type
        version: Version of the resource type schema
        name: Name of the resource
        description: Short description
        data: Data specific to the resource type
    """

    type: ResourceType
    version: Literal[1]
    name: str
    description: NotRequired[str]
    data: T


class Resource(TypedDict, Generic[T]):
    id: Id
    org_id: Id
    project_id: Id
    disabled: bool
    creation_time: str
    update_time: str
    spec: ResourceSpec[T]


class Parameter(TypedDict):
    """A command or task parameter.

    Attributes:
        name: Unique name of the parameter
        type: Data type
        values: Valid values, for string parameters only
        default: Value used when the parameter is not provided; parameters
            without a default are mandatory
        description: Description of the parameter
        environment: Environment variable set to the parameter value in
            instantiated pipelines
    """

    name: str
    type: ParameterType
    values: NotRequired[list[str]]
    default: NotRequired[Any]
    description: NotRequired[str]
    environment: NotRequired[str]


class Command(TypedDict):
    parameters: list[Parameter]
    pipelines: list[str]


class PipelineTask(TypedDict):
    """A task reference inside a pipeline definition.

    Attributes:
        name: Name of the task in this pipeline
        label: Description of the task
        task: Name of the task resource
        parameters: Parameters passed to the task
        dependencies: Tasks which must complete before this one
        on_failure: Pipeline behavior when the task does not succeed
        nb_instances: Number of instances of the task
        nb_retries: Number of retries on failure
        retry_delay: Seconds to wait before a retry
    """

    name: NotRequired[str]
    label: NotRequired[str]
    task: str
    parameters: NotRequired[dict[str, Any]]
    dependencies: NotRequired[list[str]]
    on_failure: NotRequired[Literal["abort", "continue"]]
    nb_instances: NotRequired[int]
    nb_retries: NotRequired[int]
    retry_delay: NotRequired[int]


class PipelineDefinition(TypedDict):
    concurrent: NotRequired[bool]
    tasks: list[PipelineTask]


class ExtraContainer(TypedDict):
    name: str
    image: str
    command: NotRequired[str]
    arguments: NotRequired[list[str]]
    environment: dict[str, str]


class ContainerParameters(TypedDict):
    image: str
    host_type: NotRequired[Literal["small", "medium", "large"]]
    registry_identities: NotRequired[list[str]]
    extra_containers: NotRequired[list[ExtraContainer]]


class TaskRuntime(TypedDict):
    name: Literal["container"]
    parameters: ContainerParameters


class TaskStep(TypedDict):
    """A step of a task; exactly one of command, code or source is set."""

    label: NotRequired[str]
    command: NotRequired[str]
    code: NotRequired[str]
    source: NotRequired[str]
    arguments: NotRequired[str]


class Task(TypedDict):
    runtime: TaskRuntime
    steps: list[TaskStep]
    environment: NotRequired[dict[str, str]]
    identities: NotRequired[list[str]]
    parameters: NotRequired[list[Parameter]]


class Trigger(TypedDict):
    connector: str
    event: str
    identity: NotRequired[str]
    parameters: NotRequired[dict[str, Any]]
    pipelines: list[str]


class ListResourcesRequest(Pagination):
    type: ResourceType | None = None

    query_fields: ClassVar[tuple[QueryField, ...]] = (
        *PAGINATION_QUERY_FIELDS,
        QueryField("type", "type"),
    )


ListResourcesResponse = ListResponse[Resource[Any]]


class GetResourceRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Id


GetResourceResponse = Resource[Any]


async def list_resources(client: ClientFn, request: ListResourcesRequest) -> ListResourcesResponse:
    """List the resources of the current project, optionally of a single type."""
    path = with_query("/v0/resources", request.to_query())
    return cast(ListResourcesResponse, await client("GET", path))


async def get_resource(client: ClientFn, request: GetResourceRequest) -> GetResourceResponse:
    """Fetch a resource by id."""
    return cast(GetResourceResponse, await client("GET", f"/v0/resources/id/{path_segment(request.id)}"))
