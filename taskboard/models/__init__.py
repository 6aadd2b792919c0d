"""SQLAlchemy ORM models."""

from taskboard.models.base import Base
from taskboard.models.group import Group, GroupMember
from taskboard.models.identity import Identity
from taskboard.models.task import Task
from taskboard.models.user import User

__all__ = ["Base", "Group", "GroupMember", "Identity", "Task", "User"]
