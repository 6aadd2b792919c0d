"""ORM model for tasks, either self-owned or assigned within a group."""

from sqlalchemy import Column, Date, DateTime, String, Text

from taskboard.models.base import Base, new_id, utcnow


class Task(Base):
    """
    A task has exactly one owner field set:

    - self-owned: ``email`` is the owner;
    - group-assigned: ``assigned_to`` is the owner, ``group`` names the group and
      ``created_by`` is the assigner.
    """

    __tablename__ = "tasks"

    id = Column(String(64), primary_key=True, default=new_id)
    name_task = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    dead_line = Column(Date, nullable=True)
    status = Column(String(64), nullable=False)
    category = Column(String(255), nullable=True)
    email = Column(String(320), nullable=True, index=True)
    assigned_to = Column(String(320), nullable=True, index=True)
    group = Column(String(255), nullable=True, index=True)
    created_by = Column(String(320), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    @property
    def owner(self) -> str | None:
        """Email of the user this task belongs to."""
        return self.email or self.assigned_to
