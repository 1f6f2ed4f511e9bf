"""资源接口：将类型化请求映射到传输层调用。

Resource call wrappers for the Eventline API.

Every wrapper takes a client callable and a typed request, derives the
verb, path and body, and returns the decoded response unchanged.
"""

from eventline.resources.account import (
    Account,
    AccountSettings,
    GetAccountRequest,
    GetCurrentAccountRequest,
    ListAccountsRequest,
    get_account,
    get_current_account,
    list_accounts,
)
from eventline.resources.base import (
    ClientFn,
    Cursor,
    ListResponse,
    Pagination,
    QueryField,
    QueryRequest,
    build_query,
    with_query,
)
from eventline.resources.event import (
    CreateEventRequest,
    Event,
    GetEventRequest,
    ListEventsRequest,
    create_event,
    get_event,
    list_events,
)
from eventline.resources.organization import (
    GetOrganizationRequest,
    Organization,
    get_organization,
)
from eventline.resources.pipeline import (
    DeleteScratchpadEntryRequest,
    DeleteScratchpadRequest,
    GetPipelineRequest,
    GetScratchpadEntryRequest,
    GetScratchpadRequest,
    ListPipelinesRequest,
    Pipeline,
    SetScratchpadEntryRequest,
    delete_scratchpad,
    delete_scratchpad_entry,
    get_pipeline,
    get_scratchpad,
    get_scratchpad_entry,
    list_pipelines,
    set_scratchpad_entry,
)
from eventline.resources.project import (
    CreateProjectRequest,
    DeleteProjectRequest,
    GetProjectRequest,
    ListProjectsRequest,
    Project,
    UpdateProjectRequest,
    create_project,
    delete_project,
    get_project,
    list_projects,
    update_project,
)
from eventline.resources.resource import (
    Command,
    GetResourceRequest,
    ListResourcesRequest,
    Parameter,
    PipelineDefinition,
    PipelineTask,
    Resource,
    ResourceSpec,
    ResourceType,
    Task,
    TaskRuntime,
    TaskStep,
    Trigger,
    get_resource,
    list_resources,
)

__all__ = [
    # Base
    "ClientFn",
    "Cursor",
    "ListResponse",
    "Pagination",
    "QueryField",
    "QueryRequest",
    "build_query",
    "with_query",
    # Accounts
    "Account",
    "AccountSettings",
    "GetAccountRequest",
    "GetCurrentAccountRequest",
    "ListAccountsRequest",
    "get_account",
    "get_current_account",
    "list_accounts",
    # Events
    "CreateEventRequest",
    "Event",
    "GetEventRequest",
    "ListEventsRequest",
    "create_event",
    "get_event",
    "list_events",
    # Organization
    "GetOrganizationRequest",
    "Organization",
    "get_organization",
    # Pipelines
    "DeleteScratchpadEntryRequest",
    "DeleteScratchpadRequest",
    "GetPipelineRequest",
    "GetScratchpadEntryRequest",
    "GetScratchpadRequest",
    "ListPipelinesRequest",
    "Pipeline",
    "SetScratchpadEntryRequest",
    "delete_scratchpad",
    "delete_scratchpad_entry",
    "get_pipeline",
    "get_scratchpad",
    "get_scratchpad_entry",
    "list_pipelines",
    "set_scratchpad_entry",
    # Projects
    "CreateProjectRequest",
    "DeleteProjectRequest",
    "GetProjectRequest",
    "ListProjectsRequest",
    "Project",
    "UpdateProjectRequest",
    "create_project",
    "delete_project",
    "get_project",
    "list_projects",
    "update_project",
    # Resources
    "Command",
    "GetResourceRequest",
    "ListResourcesRequest",
    "Parameter",
    "PipelineDefinition",
    "PipelineTask",
    "Resource",
    "ResourceSpec",
    "ResourceType",
    "Task",
    "TaskRuntime",
    "TaskStep",
    "Trigger",
    "get_resource",
    "list_resources",
]
