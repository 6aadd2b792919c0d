"""ORM models for groups and their member emails."""

from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from taskboard.models.base import Base, new_id, utcnow


class Group(Base):
    """
    A named group owned by the admin who created it.

    Members are stored one row per email in group_members; the unique index on
    group_members.email keeps every user in at most one group.
    """

    __tablename__ = "groups"

    id = Column(String(64), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    created_by = Column(String(320), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    member_rows = relationship(
        "GroupMember",
        back_populates="group",
        cascade="all, delete-orphan",
        order_by="GroupMember.added_at",
        lazy="selectin",
    )

    @property
    def members(self) -> list[str]:
        return [row.email for row in self.member_rows]


class GroupMember(Base):
    __tablename__ = "group_members"

    group_id = Column(String(64), ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True)
    email = Column(String(320), primary_key=True, unique=True, index=True)
    added_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    group = relationship("Group", back_populates="member_rows")
