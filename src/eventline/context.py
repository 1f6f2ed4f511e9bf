"""
Task execution context.

Inside a running Eventline task, the platform writes a JSON document
describing the current execution. This module loads and decodes it.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from eventline.errors import ContextError

DEFAULT_CONTEXT_PATH = "/eventline/task/context"


class Context(BaseModel):
    """Execution context of a task.

    Attributes:
        event: Event which caused the pipeline to be instantiated
        task_parameters: Parameters passed to the task by the pipeline
        instance_id: Instance number, from 1 to the number of instances
        identities: Identities listed in the task, by name
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    event: dict[str, Any]
    task_parameters: dict[str, Any] = Field(default_factory=dict)
    instance_id: int = 1
    identities: dict[str, Any] = Field(default_factory=dict)


def load_context(path: str | Path = DEFAULT_CONTEXT_PATH) -> Context:
    """Load and decode the task context file.

    Args:
        path: Location of the context file

    Returns:
        Decoded context

    Raises:
        ContextError: If the file cannot be read or decoded
    """
    location = str(path)
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ContextError(f"cannot read context file: {e}", path=location) from e

    try:
        return Context.model_validate(json.loads(content))
    except json.JSONDecodeError as e:
        raise ContextError(f"invalid context file: {e}", path=location) from e
    except ValidationError as e:
        raise ContextError(f"invalid context: {e}", path=location) from e


def is_launched_by_command(ctx: Context) -> bool:
    """Return True when the pipeline was instantiated by a command."""
    return ctx.event.get("trigger_id") is None


def is_launched_by_event(ctx: Context) -> bool:
    """Return True when the pipeline was instantiated by a trigger event."""
    return ctx.event.get("command_id") is None
