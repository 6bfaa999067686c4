"""Asana task shapes and the tool's output model."""

from __future__ import annotations

from typing import Any

from pydantic import AnyUrl, BaseModel, Field, TypeAdapter, field_validator

_URL = TypeAdapter(AnyUrl)


class AsanaUser(BaseModel):
    name: str
    gid: str


class AsanaProject(BaseModel):
    name: str
    gid: str


class AsanaTask(BaseModel):
    """A single Asana task as returned with our opt_fields."""

    gid: str = Field(description="Global ID of the Asana task.")
    name: str = Field(description="Name of the task.")
    due_on: str | None = Field(default=None, description="Due date (YYYY-MM-DD), if set.")
    permalink_url: str = Field(description="Permanent URL to the task in Asana.")
    assignee: AsanaUser | None = None
    projects: list[AsanaProject] | None = None

    @field_validator("permalink_url")
    @classmethod
    def _check_url(cls, v: str) -> str:
        # keep the string as sent; AnyUrl would normalise it
        _URL.validate_python(v)
        return v


class TasksDueToday(BaseModel):
    """Result of the get_my_tasks_due_today tool."""

    # camelCase is the tool's wire schema
    tasksFound: int = Field(ge=0, description="Number of Asana tasks found due today.")
    summary: str = Field(description="A human-readable summary of the tasks or a status message.")


_TASK_LIST = TypeAdapter(list[AsanaTask])


def parse_tasks(data: Any) -> list[AsanaTask]:
    """Validate a whole task array. Raises pydantic.ValidationError if any item is malformed."""
    return _TASK_LIST.validate_python(data)
