# api/users/models.py
from typing import Literal

from pydantic import BaseModel, Field

from api.auth.models import UserResponse


class UserUpdate(BaseModel):
    """Admin update of a user's role and account status."""
    role: Literal["buyer", "manager", "admin"]
    status: Literal["active", "suspended"]


class SuspendRequest(BaseModel):
    reason: str = Field(..., min_length=1, max_length=255)
    feedback: str | None = Field(None, max_length=2000)


class UserListResponse(BaseModel):
    """List of users response."""
    users: list[UserResponse]
    total: int
