# api/auth/models.py
"""
Pydantic models for authentication endpoints.
"""
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field, ConfigDict


class RegisterRequest(BaseModel):
    """Self-registration. Admin accounts cannot be self-registered."""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    role: Literal["buyer", "manager"] = "buyer"


class LoginRequest(BaseModel):
    """Login credentials."""
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)


class SuccessResponse(BaseModel):
    success: bool = True


class SessionUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str


class LoginResponse(BaseModel):
    """Login result; the session token itself travels in the cookie."""
    user: SessionUser


class UserResponse(BaseModel):
    """User data response."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str
    status: str
    suspend_reason: str | None = None
    suspend_feedback: str | None = None
    created_at: datetime
    last_login_at: datetime | None = None
