from sqlmodel import SQLModel, Field, Relationship
from typing import Optional
from datetime import date, datetime
from enum import Enum

from .base import UTCDateTime, utcnow


class TaskPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class Task(SQLModel, table=True):
    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True, nullable=False)
    title: str = Field(nullable=False)
    description: Optional[str] = Field(default=None)
    due_date: Optional[date] = Field(default=None)
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, nullable=False)
    completed: bool = Field(default=False, nullable=False)

    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime, nullable=False)

    # Relationship to user
    user: Optional["User"] = Relationship(back_populates="tasks")
