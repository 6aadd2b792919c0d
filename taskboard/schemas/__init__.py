"""Pydantic request/response schemas."""

from taskboard.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenClaims,
    TokenResponse,
)
from taskboard.schemas.common import MessageResponse
from taskboard.schemas.group import AddMembersRequest, GroupCreateRequest, GroupOut
from taskboard.schemas.health import HealthResponse
from taskboard.schemas.task import (
    GroupTaskCreateRequest,
    TaskCreatedResponse,
    TaskCreateRequest,
    TaskOut,
    TaskStatusRequest,
    TaskUpdateRequest,
)
from taskboard.schemas.user import AddUserRequest, RoleUpdateRequest, UserOut

__all__ = [
    "AddMembersRequest",
    "AddUserRequest",
    "GroupCreateRequest",
    "GroupOut",
    "GroupTaskCreateRequest",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
    "RegisterResponse",
    "RoleUpdateRequest",
    "TaskCreateRequest",
    "TaskCreatedResponse",
    "TaskOut",
    "TaskStatusRequest",
    "TaskUpdateRequest",
    "TokenClaims",
    "TokenResponse",
    "UserOut",
]
