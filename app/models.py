"""
SQLAlchemy models for the task manager.
Users (credentials), members (team roster) and tasks assigned to members.
"""
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    Column,
    String,
    Text,
    DateTime,
    Index,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


class TimestampMixin:
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)


class User(TimestampMixin, Base):
    """
    Model for API users. Only the bcrypt hash of the password is stored.
    """
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=_new_id)
    username = Column(String(120), nullable=False, unique=True, index=True)
    password_hash = Column(String(120), nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"


class Member(TimestampMixin, Base):
    """
    Model for team members.
    """
    __tablename__ = "members"

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String(200), nullable=False, index=True)
    email = Column(String(320), nullable=False, unique=True)
    role = Column(String(100), nullable=False, default="member")

    def __repr__(self) -> str:
        return f"<Member(id={self.id}, name={self.name})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "createdAt": _isoformat(self.created_at),
            "updatedAt": _isoformat(self.updated_at),
        }


class Task(TimestampMixin, Base):
    """
    Model for tasks, optionally assigned to a member.

    `assignee_id` carries no foreign key: a reference to a member that does
    not exist is stored as given and resolves to no assignee when read.
    """
    __tablename__ = "tasks"

    id = Column(String(32), primary_key=True, default=_new_id)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    priority = Column(String(16), nullable=False, default="medium")
    status = Column(String(16), nullable=False, default="todo")
    assignee_id = Column(String(64), nullable=True)
    due_date = Column(DateTime, nullable=True)

    assignee = relationship(
        "Member",
        primaryjoin="foreign(Task.assignee_id) == Member.id",
        viewonly=True,
        lazy="joined",
    )

    __table_args__ = (
        Index('ix_tasks_priority', 'priority'),
        Index('ix_tasks_status', 'status'),
        Index('ix_tasks_assignee', 'assignee_id'),
    )

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, title={self.title}, status={self.status})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "status": self.status,
            "assignee": self.assignee.to_dict() if self.assignee else None,
            "dueDate": _isoformat(self.due_date),
            "createdAt": _isoformat(self.created_at),
            "updatedAt": _isoformat(self.updated_at),
        }
