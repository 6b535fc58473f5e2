from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import date, datetime
from ..models.task import TaskPriority


# Wire names are camelCase; populate_by_name lets Python code use field names
class TaskCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: Optional[str] = None
    due_date: Optional[date] = Field(default=None, alias="dueDate")
    priority: Optional[TaskPriority] = None


class TaskUpdate(BaseModel):
    """Partial update: only fields present in the request body are applied."""
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[date] = Field(default=None, alias="dueDate")
    priority: Optional[TaskPriority] = None
    completed: Optional[bool] = None


class TaskRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    user_id: int = Field(alias="userId")
    title: str
    description: Optional[str] = None
    due_date: Optional[date] = Field(default=None, alias="dueDate")
    priority: TaskPriority
    completed: bool
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
