"""
Authentication schemas.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from comichub.kernel.models.profile import AppealStatus, UserRole


class RegisterRequest(BaseModel):
    """Account registration request."""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    username: str = Field(..., min_length=3, max_length=30, pattern=r"^[a-zA-Z0-9_]+$")
    display_name: Optional[str] = Field(None, max_length=50)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not any(c.isalpha() for c in v):
            raise ValueError("Password must contain at least one letter")
        if not any(c.isdigit() for c in v):
            raise ValueError("Password must contain at least one digit")
        return v


class LoginRequest(BaseModel):
    """Login request."""

    email: EmailStr
    password: str


class ProfileResponse(BaseModel):
    """The caller's own profile, including moderation state."""

    id: uuid.UUID
    email: str
    username: str
    display_name: Optional[str] = None
    bio: Optional[str] = None
    role: UserRole
    is_banned: bool
    ban_reason: Optional[str] = None
    banned_at: Optional[datetime] = None
    appeal_status: AppealStatus
    appeal_text: Optional[str] = None
    appeal_submitted_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    """Authentication token response."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: ProfileResponse
