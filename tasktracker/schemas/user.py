from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class UserRegister(BaseModel):
    email: str
    password: str
    name: Optional[str] = None


class UserLogin(BaseModel):
    email: str
    password: str


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    email: str
    name: Optional[str] = None
    created_at: datetime = Field(alias="createdAt")


class AuthResponse(BaseModel):
    message: str
    user: UserRead
