"""Task endpoints: self-owned tasks and group assignments."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from taskboard.api.auth import require
from taskboard.core.database import get_db
from taskboard.core.policy import Action
from taskboard.schemas.auth import TokenClaims
from taskboard.schemas.common import MessageResponse
from taskboard.schemas.task import (
    GroupTaskCreateRequest,
    TaskCreatedResponse,
    TaskCreateRequest,
    TaskOut,
    TaskStatusRequest,
    TaskUpdateRequest,
)
from taskboard.services import tasks as task_service

router = APIRouter()


@router.post("/record/tasks", response_model=TaskCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    body: TaskCreateRequest,
    claims: Annotated[TokenClaims, Depends(require(Action.CREATE_TASK))],
    db: Annotated[Session, Depends(get_db)],
) -> TaskCreatedResponse:
    task = task_service.create_task(db, claims, body)
    return TaskCreatedResponse(message="Task created successfully", taskId=task.id)


@router.get("/tasks", response_model=list[TaskOut])
def list_my_tasks(
    claims: Annotated[TokenClaims, Depends(require(Action.LIST_OWN_TASKS))],
    db: Annotated[Session, Depends(get_db)],
) -> list[TaskOut]:
    """Tasks owned by the authenticated user, oldest first."""
    return [TaskOut.model_validate(t) for t in task_service.list_own_tasks(db, claims)]


@router.put("/edit/tasks/{task_id}", response_model=TaskOut)
def edit_task(
    task_id: str,
    body: TaskUpdateRequest,
    claims: Annotated[TokenClaims, Depends(require(Action.EDIT_TASK))],
    db: Annotated[Session, Depends(get_db)],
) -> TaskOut:
    return TaskOut.model_validate(task_service.edit_task(db, claims, task_id, body))


@router.put("/tasks/status/{task_id}", response_model=TaskOut)
def update_task_status(
    task_id: str,
    body: TaskStatusRequest,
    claims: Annotated[TokenClaims, Depends(require(Action.UPDATE_TASK_STATUS))],
    db: Annotated[Session, Depends(get_db)],
) -> TaskOut:
    return TaskOut.model_validate(task_service.update_status(db, claims, task_id, body.status))


@router.delete("/delete/tasks/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: str,
    claims: Annotated[TokenClaims, Depends(require(Action.DELETE_TASK))],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete a task; 404 when the id does not exist."""
    task_service.delete_task(db, claims, task_id)
    return MessageResponse(message="Task deleted successfully")


@router.post("/record/user/task", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
def assign_task(
    body: GroupTaskCreateRequest,
    claims: Annotated[TokenClaims, Depends(require(Action.ASSIGN_GROUP_TASK))],
    db: Annotated[Session, Depends(get_db)],
) -> TaskOut:
    """Assign a task to a member of groupName. Only the group's creator may assign."""
    return TaskOut.model_validate(task_service.assign_group_task(db, claims, body))


@router.get("/user/group/tasks", response_model=list[TaskOut])
def list_assigned_tasks(
    claims: Annotated[TokenClaims, Depends(require(Action.LIST_ASSIGNED_TASKS))],
    db: Annotated[Session, Depends(get_db)],
) -> list[TaskOut]:
    return [TaskOut.model_validate(t) for t in task_service.list_assigned_tasks(db, claims)]


@router.get("/groups/{group_name}/tasks", response_model=list[TaskOut])
def list_group_tasks(
    group_name: str,
    claims: Annotated[TokenClaims, Depends(require(Action.LIST_GROUP_TASKS))],
    db: Annotated[Session, Depends(get_db)],
) -> list[TaskOut]:
    """Tasks assigned within a group; visible to its creator, its members and admins."""
    return [TaskOut.model_validate(t) for t in task_service.list_group_tasks(db, claims, group_name)]
