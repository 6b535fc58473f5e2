from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List
from datetime import datetime

from .base import UTCDateTime, utcnow


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    # Stored lowercased, which makes uniqueness case-insensitive
    email: str = Field(unique=True, index=True, nullable=False)
    password_hash: str = Field(nullable=False)
    name: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTCDateTime, nullable=False)

    # Relationship to tasks
    tasks: List["Task"] = Relationship(back_populates="user")
