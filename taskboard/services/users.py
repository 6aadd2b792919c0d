"""Account lifecycle: registration, login, token refresh and user administration."""

import logging

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from taskboard.core.errors import (
    ConflictError,
    DirectoryError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
)
from taskboard.core.security import TokenService, hash_password, verify_password
from taskboard.models import Group, GroupMember, Task, User
from taskboard.models.base import utcnow
from taskboard.models.user import ROLE_EMPLOYEE
from taskboard.schemas.auth import TokenClaims
from taskboard.services.directory import UserDirectory

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str) -> User | None:
    """Earliest-created user with this email (emails are unique, the order only fixes ties)."""
    return (
        db.query(User)
        .filter(User.email == email.strip().lower())
        .order_by(User.created_at, User.id)
        .first()
    )


def claims_for(user: User) -> TokenClaims:
    return TokenClaims(sub=user.id, email=user.email, username=user.username, role=user.role)


def create_account(
    db: Session,
    directory: UserDirectory,
    *,
    username: str,
    email: str,
    password: str,
    role: str = ROLE_EMPLOYEE,
    bcrypt_rounds: int,
) -> User:
    """
    Create the directory identity and the paired user document.

    If the document cannot be written the identity is deleted again, so a
    failed registration never leaves an orphan identity behind.
    """
    if get_user_by_email(db, email) is not None:
        raise ConflictError("Email is already registered")

    uid = directory.create_identity(email=email, password=password, display_name=username)
    user = User(
        id=uid,
        email=email,
        username=username,
        password_hash=hash_password(password, rounds=bcrypt_rounds),
        role=role,
    )
    db.add(user)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("User document write failed for uid=%s; removing directory identity", uid)
        try:
            directory.delete_identity(uid)
        except DirectoryError:
            logger.error("Compensation failed: directory identity %s is orphaned", uid)
        if isinstance(e, IntegrityError):
            raise ConflictError("Email is already registered") from e
        logger.error("Failed to store user document: %s", e)
        raise InternalError() from e

    logger.info("Created account uid=%s role=%s", uid, role)
    return user


def login(db: Session, token_service: TokenService, email: str, password: str) -> str:
    """Verify credentials, stamp last_login and return a session token."""
    user = get_user_by_email(db, email)
    if user is None:
        raise NotFoundError("Email not found")
    if not verify_password(password, user.password_hash):
        logger.info("Failed login for uid=%s", user.id)
        raise UnauthorizedError("Incorrect password")

    user.last_login = utcnow()
    db.commit()
    logger.info("Login uid=%s", user.id)
    return token_service.issue(claims_for(user))


def refresh_token(db: Session, token_service: TokenService, claims: TokenClaims) -> str:
    """Re-issue a token for a still-valid one, picking up the user's current role."""
    user = db.get(User, claims.sub)
    if user is None:
        raise UnauthorizedError("User no longer exists")
    return token_service.issue(claims_for(user))


def list_all_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.created_at, User.id).all()


def list_available_users(db: Session) -> list[User]:
    """Users that are not a member of any group."""
    grouped = select(GroupMember.email)
    return (
        db.query(User)
        .filter(User.email.not_in(grouped))
        .order_by(User.created_at, User.id)
        .all()
    )


def change_role(db: Session, email: str, role: str) -> User:
    user = get_user_by_email(db, email)
    if user is None:
        raise NotFoundError("User not found")
    previous = user.role
    user.role = role
    db.commit()
    logger.info("Role of uid=%s changed from %s to %s", user.id, previous, role)
    return user


def delete_user(db: Session, directory: UserDirectory, email: str) -> None:
    """
    Delete the user document, everything it owns and the directory identity.

    Owned data goes in one transaction: group memberships, self-owned tasks,
    tasks assigned to the user and tasks the user assigned. A user who still
    created a group cannot be deleted, otherwise a later account with the same
    email would inherit the group.

    The rows are committed before the identity is removed, so a directory
    failure leaves at most an orphan identity that can no longer log in.
    """
    user = get_user_by_email(db, email)
    if user is None:
        raise NotFoundError("User not found")
    if db.query(Group.id).filter(Group.created_by == user.email).first() is not None:
        raise ConflictError("User still owns groups; delete or reassign them first")

    uid = user.id
    try:
        removed = (
            db.query(Task)
            .filter(
                or_(
                    Task.email == user.email,
                    Task.assigned_to == user.email,
                    Task.created_by == user.email,
                )
            )
            .delete(synchronize_session=False)
        )
        db.query(GroupMember).filter(GroupMember.email == user.email).delete(synchronize_session=False)
        db.delete(user)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("User document removal failed for uid=%s: %s", uid, e)
        raise InternalError() from e

    try:
        directory.delete_identity(uid)
    except DirectoryError:
        logger.error("User uid=%s deleted but directory identity is orphaned", uid)
        raise
    logger.info("Deleted user uid=%s with %d tasks", uid, removed)
