"""Schemas for groups and membership changes."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from taskboard.schemas.common import (
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    normalize_email,
    normalize_required_text,
)

MAX_MEMBERS_PER_REQUEST = 500


def _normalize_members(values: list[str]) -> list[str]:
    """Normalize each email and drop duplicates, keeping first-seen order."""
    seen: dict[str, None] = {}
    for value in values:
        seen.setdefault(normalize_email(value), None)
    return list(seen)


class GroupCreateRequest(BaseModel):
    """
    Body for POST /create/groups.

    created_by is optional and must match the authenticated user when sent.
    """

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    created_by: str | None = None
    members: list[str] = Field(default_factory=list, max_length=MAX_MEMBERS_PER_REQUEST)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return normalize_required_text(v, "name")

    @field_validator("created_by")
    @classmethod
    def validate_created_by(cls, v: str | None) -> str | None:
        return None if v is None else normalize_email(v)

    @field_validator("members")
    @classmethod
    def validate_members(cls, v: list[str]) -> list[str]:
        return _normalize_members(v)


class AddMembersRequest(BaseModel):
    """Body for PUT /groups/add-users."""

    groupName: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    members: list[str] = Field(..., min_length=1, max_length=MAX_MEMBERS_PER_REQUEST)

    @field_validator("groupName")
    @classmethod
    def validate_group_name(cls, v: str) -> str:
        return normalize_required_text(v, "groupName")

    @field_validator("members")
    @classmethod
    def validate_members(cls, v: list[str]) -> list[str]:
        return _normalize_members(v)


class GroupOut(BaseModel):
    id: str
    name: str
    description: str | None = None
    created_by: str
    members: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
