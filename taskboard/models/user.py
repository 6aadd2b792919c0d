"""ORM model for application users (profile, credential hash and role)."""

from sqlalchemy import Column, DateTime, String

from taskboard.models.base import Base, new_id, utcnow

ROLE_EMPLOYEE = "employee"
ROLE_ADMIN = "admin"
ROLES = (ROLE_EMPLOYEE, ROLE_ADMIN)


class User(Base):
    """
    User document keyed by the identity id issued by the user directory.

    role: 'employee' (default) or 'admin'
    """

    __tablename__ = "users"

    id = Column(String(128), primary_key=True, default=new_id)
    email = Column(String(320), nullable=False, unique=True, index=True)
    username = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=ROLE_EMPLOYEE)
    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
