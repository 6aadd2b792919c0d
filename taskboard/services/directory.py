"""
User directory: the identity provider that owns account records.

Two backends share the same interface. ``LocalUserDirectory`` keeps identities
in the ``identities`` table through its own sessions, so its writes commit
independently of the request session. ``HttpUserDirectory`` talks to an
external directory service over REST:

  POST   {base}/users          {"email", "password", "display_name"} -> {"uid"}
  DELETE {base}/users/{uid}
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

import httpx
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from taskboard.core.errors import ConflictError, DirectoryError
from taskboard.core.security import hash_password
from taskboard.models import Identity

if TYPE_CHECKING:
    from taskboard.core.config import Settings

logger = logging.getLogger(__name__)


class UserDirectory(Protocol):
    def create_identity(self, email: str, password: str, display_name: str) -> str:
        """Create an identity and return its uid. Raises ConflictError if the email is taken."""
        ...

    def delete_identity(self, uid: str) -> None:
        """Delete an identity. Unknown uids are ignored."""
        ...


class LocalUserDirectory:
    """Identity records stored in the application database."""

    def __init__(self, session_factory: sessionmaker[Session], bcrypt_rounds: int) -> None:
        self._session_factory = session_factory
        self._bcrypt_rounds = bcrypt_rounds

    def create_identity(self, email: str, password: str, display_name: str) -> str:
        identity = Identity(
            email=email,
            display_name=display_name,
            password_hash=hash_password(password, rounds=self._bcrypt_rounds),
        )
        with self._session_factory() as db:
            db.add(identity)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                raise ConflictError("Email is already registered") from e
            except SQLAlchemyError as e:
                db.rollback()
                logger.error("Local directory failed to create identity: %s", e)
                raise DirectoryError() from e
            return identity.uid

    def delete_identity(self, uid: str) -> None:
        with self._session_factory() as db:
            try:
                db.query(Identity).filter(Identity.uid == uid).delete(synchronize_session=False)
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                logger.error("Local directory failed to delete identity %s: %s", uid, e)
                raise DirectoryError() from e


class HttpUserDirectory:
    """Identity records held by an external directory service."""

    def __init__(self, base_url: str, api_key: str | None = None, timeout: float = 10.0,
                 transport: httpx.BaseTransport | None = None) -> None:
        headers = {"Accept": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def create_identity(self, email: str, password: str, display_name: str) -> str:
        payload = {"email": email, "password": password, "display_name": display_name}
        try:
            resp = self._client.post("/users", json=payload)
        except httpx.HTTPError as e:
            logger.error("User directory unreachable: %s", e)
            raise DirectoryError() from e
        if resp.status_code == 409:
            raise ConflictError("Email is already registered")
        if resp.status_code >= 400:
            logger.error("User directory returned %s on create: %s", resp.status_code, resp.text[:500])
            raise DirectoryError()
        try:
            uid = resp.json().get("uid")
        except ValueError:
            uid = None
        if not uid:
            raise DirectoryError("User directory response missing uid")
        return str(uid)

    def delete_identity(self, uid: str) -> None:
        try:
            resp = self._client.delete(f"/users/{uid}")
        except httpx.HTTPError as e:
            logger.error("User directory unreachable: %s", e)
            raise DirectoryError() from e
        if resp.status_code == 404:
            return
        if resp.status_code >= 400:
            logger.error("User directory returned %s on delete: %s", resp.status_code, resp.text[:500])
            raise DirectoryError()


def build_user_directory(settings: Settings, session_factory: sessionmaker[Session]) -> UserDirectory:
    """Pick the backend named by USER_DIRECTORY_BACKEND. Raises ValueError when misconfigured."""
    if settings.USER_DIRECTORY_BACKEND == "http":
        if not settings.USER_DIRECTORY_URL:
            raise ValueError("USER_DIRECTORY_URL is required when USER_DIRECTORY_BACKEND=http")
        api_key = (
            settings.USER_DIRECTORY_API_KEY.get_secret_value()
            if settings.USER_DIRECTORY_API_KEY is not None
            else None
        )
        return HttpUserDirectory(
            settings.USER_DIRECTORY_URL,
            api_key=api_key,
            timeout=settings.USER_DIRECTORY_TIMEOUT_SEC,
        )
    return LocalUserDirectory(session_factory, bcrypt_rounds=settings.BCRYPT_ROUNDS)
