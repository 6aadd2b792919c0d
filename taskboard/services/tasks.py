"""Task handlers: self-owned tasks and tasks assigned to group members."""

import logging

from sqlalchemy.orm import Session

from taskboard.core.errors import ForbiddenError, NotFoundError
from taskboard.core.policy import Action, authorize
from taskboard.models import Task
from taskboard.models.base import utcnow
from taskboard.schemas.auth import TokenClaims
from taskboard.schemas.task import (
    GroupTaskCreateRequest,
    TaskCreateRequest,
    TaskUpdateRequest,
)
from taskboard.services.groups import require_group

logger = logging.getLogger(__name__)


def _ordered(query):
    return query.order_by(Task.created_at, Task.id).all()


def get_task(db: Session, task_id: str) -> Task:
    task = db.get(Task, task_id)
    if task is None:
        raise NotFoundError("Task not found")
    return task


def create_task(db: Session, claims: TokenClaims, body: TaskCreateRequest) -> Task:
    """Insert a task owned by the authenticated user."""
    if body.email is not None and body.email != claims.email:
        raise ForbiddenError("Tasks can only be created for yourself")
    task = Task(
        name_task=body.name_task,
        description=body.description,
        dead_line=body.dead_line,
        status=body.status,
        category=body.category,
        email=claims.email,
    )
    db.add(task)
    db.commit()
    return task


def list_own_tasks(db: Session, claims: TokenClaims) -> list[Task]:
    return _ordered(db.query(Task).filter(Task.email == claims.email))


def edit_task(db: Session, claims: TokenClaims, task_id: str, body: TaskUpdateRequest) -> Task:
    """Full-field update. The owner of a task cannot be changed."""
    task = get_task(db, task_id)
    authorize(claims, Action.EDIT_TASK, task)
    if body.email is not None and body.email != task.owner:
        raise ForbiddenError("Task owner cannot be changed")
    task.name_task = body.name_task
    task.description = body.description
    task.dead_line = body.dead_line
    task.status = body.status
    task.category = body.category
    task.updated_at = utcnow()
    db.commit()
    return task


def update_status(db: Session, claims: TokenClaims, task_id: str, status: str) -> Task:
    task = get_task(db, task_id)
    authorize(claims, Action.UPDATE_TASK_STATUS, task)
    task.status = status
    task.updated_at = utcnow()
    db.commit()
    return task


def delete_task(db: Session, claims: TokenClaims, task_id: str) -> None:
    """Remove a task. A missing id raises NotFoundError rather than succeeding silently."""
    task = get_task(db, task_id)
    authorize(claims, Action.DELETE_TASK, task)
    db.delete(task)
    db.commit()
    logger.info("Task %s deleted by %s", task_id, claims.email)


def assign_group_task(db: Session, claims: TokenClaims, body: GroupTaskCreateRequest) -> Task:
    """
    Create a task for a member of one of the caller's groups.

    The caller must have created the group and the assignee must already be
    one of its members.
    """
    group = require_group(db, body.groupName)
    authorize(claims, Action.ASSIGN_GROUP_TASK, group)
    if body.email not in group.members:
        raise ForbiddenError(f"{body.email} is not a member of group '{group.name}'")
    task = Task(
        name_task=body.name_task,
        description=body.description,
        dead_line=body.dead_line,
        status=body.status,
        category=body.category,
        assigned_to=body.email,
        group=group.name,
        created_by=claims.email,
    )
    db.add(task)
    db.commit()
    logger.info("Task %s in group %s assigned to %s", task.id, group.name, body.email)
    return task


def list_assigned_tasks(db: Session, claims: TokenClaims) -> list[Task]:
    return _ordered(db.query(Task).filter(Task.assigned_to == claims.email))


def list_group_tasks(db: Session, claims: TokenClaims, group_name: str) -> list[Task]:
    group = require_group(db, group_name)
    authorize(claims, Action.LIST_GROUP_TASKS, group)
    return _ordered(db.query(Task).filter(Task.group == group.name))
