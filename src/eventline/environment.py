"""
Accessors for the environment of a running Eventline task.
"""

from __future__ import annotations

import os


def is_executed_in_eventline() -> bool:
    """Return True when called from a task executed by Eventline."""
    return os.getenv("EVENTLINE") == "true"


def get_current_project_id() -> str | None:
    """Return the id of the project the task runs in."""
    return os.getenv("EVENTLINE_PROJECT_ID")


def get_current_project_name() -> str | None:
    """Return the name of the project the task runs in."""
    return os.getenv("EVENTLINE_PROJECT_NAME")


def get_current_pipeline_id() -> str | None:
    """Return the id of the current pipeline."""
    return os.getenv("EVENTLINE_PIPELINE_ID")


def get_current_task_id() -> str | None:
    """Return the id of the current task."""
    return os.getenv("EVENTLINE_TASK_ID")
