"""
Access control policy: one declarative table of actions and the rule each requires.

Routes declare their action through the ``require(action)`` dependency in
``taskboard.api.auth``; services call ``authorize`` again with the loaded
resource when the rule depends on ownership.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from taskboard.core.errors import ForbiddenError, UnauthorizedError
from taskboard.models.user import ROLE_ADMIN
from taskboard.schemas.auth import TokenClaims

logger = logging.getLogger(__name__)


class Action(str, Enum):
    REFRESH_TOKEN = "token:refresh"
    CREATE_TASK = "tasks:create"
    LIST_OWN_TASKS = "tasks:list_own"
    EDIT_TASK = "tasks:edit"
    UPDATE_TASK_STATUS = "tasks:update_status"
    DELETE_TASK = "tasks:delete"
    ASSIGN_GROUP_TASK = "tasks:assign"
    LIST_ASSIGNED_TASKS = "tasks:list_assigned"
    LIST_GROUP_TASKS = "groups:list_tasks"
    CREATE_GROUP = "groups:create"
    LIST_CREATED_GROUPS = "groups:list_created"
    VIEW_OWN_GROUP = "groups:view_own"
    ADD_GROUP_MEMBERS = "groups:add_members"
    LIST_ALL_GROUPS = "groups:list_all"
    LIST_AVAILABLE_USERS = "users:list_available"
    LIST_ALL_USERS = "users:list_all"
    CHANGE_USER_ROLE = "users:change_role"
    DELETE_USER = "users:delete"
    ADD_USER = "users:add"


class Ownership(str, Enum):
    """Relation the caller must have to the resource."""

    TASK_PARTICIPANT = "task_participant"
    GROUP_CREATOR = "group_creator"
    GROUP_PARTICIPANT = "group_participant"


@dataclass(frozen=True)
class Rule:
    role: str | None = None
    ownership: Ownership | None = None
    # Admins pass ownership checks for this action.
    admin_override: bool = False


POLICY: dict[Action, Rule] = {
    Action.REFRESH_TOKEN: Rule(),
    Action.CREATE_TASK: Rule(),
    Action.LIST_OWN_TASKS: Rule(),
    Action.EDIT_TASK: Rule(ownership=Ownership.TASK_PARTICIPANT),
    Action.UPDATE_TASK_STATUS: Rule(ownership=Ownership.TASK_PARTICIPANT),
    Action.DELETE_TASK: Rule(ownership=Ownership.TASK_PARTICIPANT),
    Action.ASSIGN_GROUP_TASK: Rule(ownership=Ownership.GROUP_CREATOR),
    Action.LIST_ASSIGNED_TASKS: Rule(),
    Action.LIST_GROUP_TASKS: Rule(ownership=Ownership.GROUP_PARTICIPANT, admin_override=True),
    Action.CREATE_GROUP: Rule(role=ROLE_ADMIN),
    Action.LIST_CREATED_GROUPS: Rule(),
    Action.VIEW_OWN_GROUP: Rule(),
    Action.ADD_GROUP_MEMBERS: Rule(role=ROLE_ADMIN),
    Action.LIST_ALL_GROUPS: Rule(role=ROLE_ADMIN),
    Action.LIST_AVAILABLE_USERS: Rule(role=ROLE_ADMIN),
    Action.LIST_ALL_USERS: Rule(role=ROLE_ADMIN),
    Action.CHANGE_USER_ROLE: Rule(role=ROLE_ADMIN),
    Action.DELETE_USER: Rule(role=ROLE_ADMIN),
    Action.ADD_USER: Rule(role=ROLE_ADMIN),
}


def _has_ownership(email: str, ownership: Ownership, resource: Any) -> bool:
    if ownership is Ownership.TASK_PARTICIPANT:
        # Owner (self owner or assignee) or, for group tasks, the assigner.
        return email in (resource.owner, resource.created_by)
    if ownership is Ownership.GROUP_CREATOR:
        return resource.created_by == email
    if ownership is Ownership.GROUP_PARTICIPANT:
        return resource.created_by == email or email in resource.members
    raise ValueError(f"Unknown ownership rule: {ownership}")


def authorize(claims: TokenClaims | None, action: Action, resource: Any = None) -> None:
    """
    Allow or reject ``action`` for ``claims``.

    Without a resource only the role part of the rule is checked; the
    ownership part runs once the caller passes the loaded resource.
    Raises UnauthorizedError when there are no verified claims and
    ForbiddenError when the caller is not entitled.
    """
    if claims is None:
        raise UnauthorizedError("Not authenticated")
    rule = POLICY[action]
    if rule.role is not None and claims.role != rule.role:
        logger.info("Denied %s to %s: role %r required", action.value, claims.email, rule.role)
        raise ForbiddenError("Admin access required" if rule.role == ROLE_ADMIN else "Forbidden")
    if resource is None or rule.ownership is None:
        return
    if rule.admin_override and claims.role == ROLE_ADMIN:
        return
    if not _has_ownership(claims.email, rule.ownership, resource):
        logger.info("Denied %s to %s: not %s", action.value, claims.email, rule.ownership.value)
        raise ForbiddenError("You do not have access to this resource")
