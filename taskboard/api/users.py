"""User administration endpoints (admin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from taskboard.api.auth import get_app_settings, get_user_directory, require
from taskboard.core.config import Settings
from taskboard.core.database import get_db
from taskboard.core.errors import ValidationError
from taskboard.core.policy import Action
from taskboard.schemas.auth import TokenClaims
from taskboard.schemas.common import MessageResponse, normalize_email
from taskboard.schemas.user import AddUserRequest, RoleUpdateRequest, UserOut
from taskboard.services import users as user_service
from taskboard.services.directory import UserDirectory

router = APIRouter()


def _path_email(email: str) -> str:
    try:
        return normalize_email(email)
    except ValueError as e:
        raise ValidationError(str(e)) from e


@router.get("/users", response_model=list[UserOut])
def list_available_users(
    _admin: Annotated[TokenClaims, Depends(require(Action.LIST_AVAILABLE_USERS))],
    db: Annotated[Session, Depends(get_db)],
) -> list[UserOut]:
    """Users not yet in any group (candidates for a new group)."""
    return [UserOut.model_validate(u) for u in user_service.list_available_users(db)]


@router.get("/users/admin", response_model=list[UserOut])
def list_all_users(
    _admin: Annotated[TokenClaims, Depends(require(Action.LIST_ALL_USERS))],
    db: Annotated[Session, Depends(get_db)],
) -> list[UserOut]:
    return [UserOut.model_validate(u) for u in user_service.list_all_users(db)]


@router.put("/users/{email}/role", response_model=MessageResponse)
def change_user_role(
    email: str,
    body: RoleUpdateRequest,
    _admin: Annotated[TokenClaims, Depends(require(Action.CHANGE_USER_ROLE))],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Change a user's role. Takes effect in the user's next issued token."""
    user_service.change_role(db, _path_email(email), body.role)
    return MessageResponse(message="Role updated successfully")


@router.delete("/delete/users/{email}", response_model=MessageResponse)
def delete_user(
    email: str,
    _admin: Annotated[TokenClaims, Depends(require(Action.DELETE_USER))],
    db: Annotated[Session, Depends(get_db)],
    directory: Annotated[UserDirectory, Depends(get_user_directory)],
) -> MessageResponse:
    user_service.delete_user(db, directory, _path_email(email))
    return MessageResponse(message="User deleted successfully")


@router.post("/add/users", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def add_user(
    body: AddUserRequest,
    _admin: Annotated[TokenClaims, Depends(require(Action.ADD_USER))],
    db: Annotated[Session, Depends(get_db)],
    directory: Annotated[UserDirectory, Depends(get_user_directory)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> UserOut:
    """Create an account directly with a chosen role; the password is hashed like at sign-up."""
    user = user_service.create_account(
        db,
        directory,
        username=body.username,
        email=body.email,
        password=body.password,
        role=body.role,
        bcrypt_rounds=settings.BCRYPT_ROUNDS,
    )
    return UserOut.model_validate(user)
