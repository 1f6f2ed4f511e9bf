"""Eventline 官方 Python SDK：固定证书的 API 客户端与资源接口。

eventline: Python SDK for the Eventline workflow-automation platform.

Build a client once, then pass it to the resource call wrappers:

    >>> from eventline.resources import GetAccountRequest, get_account
    >>> client = create_client(project_id="42")
    >>> account = await get_account(client, GetAccountRequest(id="42"))
"""
from __future__ import annotations

from eventline.context import (
    Context,
    is_launched_by_command,
    is_launched_by_event,
    load_context,
)
from eventline.environment import (
    get_current_pipeline_id,
    get_current_project_id,
    get_current_project_name,
    get_current_task_id,
    is_executed_in_eventline,
)
from eventline.errors import ContextError, ErrorCode, EventlineError, RequestError
from eventline.transport import (
    PUBLIC_KEY_PIN_SET,
    Client,
    ClientOptions,
    create_client,
)

__version__ = "0.1.0"

__all__ = [
    # Transport
    "Client",
    "ClientOptions",
    "PUBLIC_KEY_PIN_SET",
    "create_client",
    # Errors
    "ContextError",
    "ErrorCode",
    "EventlineError",
    "RequestError",
    # Task context
    "Context",
    "is_launched_by_command",
    "is_launched_by_event",
    "load_context",
    # Environment
    "get_current_pipeline_id",
    "get_current_project_id",
    "get_current_project_name",
    "get_current_task_id",
    "is_executed_in_eventline",
    # Version
    "__version__",
]
