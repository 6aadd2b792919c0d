"""ORM model backing the local user directory (identity records)."""

from sqlalchemy import Column, DateTime, String

from taskboard.models.base import Base, new_id, utcnow


class Identity(Base):
    """Identity record owned by LocalUserDirectory, paired with a users row by id."""

    __tablename__ = "identities"

    uid = Column(String(128), primary_key=True, default=new_id)
    email = Column(String(320), nullable=False, unique=True, index=True)
    display_name = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
