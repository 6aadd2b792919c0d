"""SQLAlchemy declarative Base and shared model configuration."""

import uuid
from datetime import UTC, datetime

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


def new_id() -> str:
    """Opaque store-assigned document id."""
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(UTC)
