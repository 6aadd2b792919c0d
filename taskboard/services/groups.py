"""Group creation, membership and lookups. A user belongs to at most one group."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskboard.core.errors import ConflictError, ForbiddenError, NotFoundError
from taskboard.models import Group, GroupMember
from taskboard.models.base import utcnow
from taskboard.schemas.auth import TokenClaims
from taskboard.schemas.group import AddMembersRequest, GroupCreateRequest

logger = logging.getLogger(__name__)


def get_group_by_name(db: Session, name: str) -> Group | None:
    return (
        db.query(Group)
        .filter(Group.name == name.strip())
        .order_by(Group.created_at, Group.id)
        .first()
    )


def require_group(db: Session, name: str) -> Group:
    group = get_group_by_name(db, name)
    if group is None:
        raise NotFoundError(f"Group '{name}' not found")
    return group


def _ensure_not_grouped(db: Session, emails: list[str]) -> None:
    """Raise ConflictError if any email already belongs to a group."""
    if not emails:
        return
    taken = (
        db.query(GroupMember.email)
        .filter(GroupMember.email.in_(emails))
        .order_by(GroupMember.email)
        .all()
    )
    if taken:
        listed = ", ".join(row.email for row in taken)
        raise ConflictError(f"Already a member of another group: {listed}")


def create_group(db: Session, claims: TokenClaims, body: GroupCreateRequest) -> Group:
    if body.created_by is not None and body.created_by != claims.email:
        raise ForbiddenError("created_by must be the authenticated user")
    if get_group_by_name(db, body.name) is not None:
        raise ConflictError(f"Group '{body.name}' already exists")
    _ensure_not_grouped(db, body.members)

    group = Group(name=body.name, description=body.description, created_by=claims.email)
    group.member_rows = [GroupMember(email=email) for email in body.members]
    db.add(group)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("Group name or membership already taken") from e
    logger.info("Group %s created by %s with %d members", group.name, claims.email, len(body.members))
    return group


def add_members(db: Session, body: AddMembersRequest) -> Group:
    """Union-merge members into the group; emails already in it are skipped."""
    group = require_group(db, body.groupName)
    current = set(group.members)
    new_members = [email for email in body.members if email not in current]
    _ensure_not_grouped(db, new_members)

    if new_members:
        for email in new_members:
            group.member_rows.append(GroupMember(email=email))
        group.updated_at = utcnow()
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise ConflictError("Membership already taken") from e
        logger.info("Added %d members to group %s", len(new_members), group.name)
    return group


def list_created_groups(db: Session, claims: TokenClaims) -> list[Group]:
    return (
        db.query(Group)
        .filter(Group.created_by == claims.email)
        .order_by(Group.created_at, Group.id)
        .all()
    )


def list_all_groups(db: Session) -> list[Group]:
    return db.query(Group).order_by(Group.created_at, Group.id).all()


def get_member_group(db: Session, claims: TokenClaims) -> Group | None:
    """The caller's group, or None. Earliest-created group wins if the store holds several."""
    return (
        db.query(Group)
        .join(GroupMember, GroupMember.group_id == Group.id)
        .filter(GroupMember.email == claims.email)
        .order_by(Group.created_at, Group.id)
        .first()
    )
