"""Schemas for self-owned and group-assigned tasks."""

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from taskboard.schemas.common import (
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    normalize_email,
    normalize_required_text,
)

STATUS_MAX_LENGTH = 64


class TaskFields(BaseModel):
    """Editable task fields shared by create and full update."""

    name_task: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    dead_line: date | None = None
    status: str = Field(..., min_length=1, max_length=STATUS_MAX_LENGTH)
    category: str | None = Field(default=None, max_length=NAME_MAX_LENGTH)

    @field_validator("name_task")
    @classmethod
    def validate_name_task(cls, v: str) -> str:
        return normalize_required_text(v, "name_task")

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        return normalize_required_text(v, "status")


class TaskCreateRequest(TaskFields):
    """
    Body for POST /record/tasks.

    email is optional: the owner is always the authenticated user, and a
    different email is rejected.
    """

    email: str | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return None if v is None else normalize_email(v)


class TaskUpdateRequest(TaskCreateRequest):
    """Full-field update for PUT /edit/tasks/{id}."""


class TaskStatusRequest(BaseModel):
    status: str = Field(..., min_length=1, max_length=STATUS_MAX_LENGTH)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        return normalize_required_text(v, "status")


class GroupTaskCreateRequest(TaskFields):
    """Body for POST /record/user/task: assign a task to a member of groupName."""

    email: str = Field(..., description="Assignee email; must be a member of the group")
    groupName: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    status: str = Field(default="pending", min_length=1, max_length=STATUS_MAX_LENGTH)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("groupName")
    @classmethod
    def validate_group_name(cls, v: str) -> str:
        return normalize_required_text(v, "groupName")


class TaskOut(BaseModel):
    id: str
    name_task: str
    description: str | None = None
    dead_line: date | None = None
    status: str
    category: str | None = None
    email: str | None = None
    assigned_to: str | None = None
    group: str | None = None
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class TaskCreatedResponse(BaseModel):
    message: str
    taskId: str
