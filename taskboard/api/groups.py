"""Group endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from taskboard.api.auth import require
from taskboard.core.database import get_db
from taskboard.core.policy import Action
from taskboard.schemas.auth import TokenClaims
from taskboard.schemas.group import AddMembersRequest, GroupCreateRequest, GroupOut
from taskboard.services import groups as group_service

router = APIRouter()


@router.post("/create/groups", response_model=GroupOut, status_code=status.HTTP_201_CREATED)
def create_group(
    body: GroupCreateRequest,
    claims: Annotated[TokenClaims, Depends(require(Action.CREATE_GROUP))],
    db: Annotated[Session, Depends(get_db)],
) -> GroupOut:
    """Create a group owned by the calling admin. Members may not already belong to a group."""
    return GroupOut.model_validate(group_service.create_group(db, claims, body))


@router.get("/groups", response_model=list[GroupOut])
def list_my_created_groups(
    claims: Annotated[TokenClaims, Depends(require(Action.LIST_CREATED_GROUPS))],
    db: Annotated[Session, Depends(get_db)],
) -> list[GroupOut]:
    return [GroupOut.model_validate(g) for g in group_service.list_created_groups(db, claims)]


@router.get("/user/group", response_model=GroupOut | None)
def get_my_group(
    claims: Annotated[TokenClaims, Depends(require(Action.VIEW_OWN_GROUP))],
    db: Annotated[Session, Depends(get_db)],
) -> GroupOut | None:
    """The group the caller is a member of, or null."""
    group = group_service.get_member_group(db, claims)
    return GroupOut.model_validate(group) if group is not None else None


@router.put("/groups/add-users", response_model=GroupOut)
def add_group_members(
    body: AddMembersRequest,
    _admin: Annotated[TokenClaims, Depends(require(Action.ADD_GROUP_MEMBERS))],
    db: Annotated[Session, Depends(get_db)],
) -> GroupOut:
    return GroupOut.model_validate(group_service.add_members(db, body))


@router.get("/admin/groups", response_model=list[GroupOut])
def list_all_groups(
    _admin: Annotated[TokenClaims, Depends(require(Action.LIST_ALL_GROUPS))],
    db: Annotated[Session, Depends(get_db)],
) -> list[GroupOut]:
    return [GroupOut.model_validate(g) for g in group_service.list_all_groups(db)]
