"""Schemas for user listing and administration."""

from datetime import datetime
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, field_validator

from taskboard.schemas.common import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    normalize_email,
    normalize_required_text,
)

Role = Literal["employee", "admin"]


class UserOut(BaseModel):
    """User entry for listings (no password hash)."""

    id: str
    email: str
    username: str
    role: str
    last_login: datetime | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class RoleUpdateRequest(BaseModel):
    """Body for PUT /users/{email}/role; accepts the legacy 'rol' key."""

    role: Role = Field(..., validation_alias=AliasChoices("rol", "role"))


class AddUserRequest(BaseModel):
    """Admin-created account. The password goes through the same hashing path as sign-up."""

    username: str = Field(..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    email: str
    role: Role = Field(default="employee", validation_alias=AliasChoices("rol", "role"))
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return normalize_required_text(v, "username")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)
