"""
Admin models for dashboard authentication.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime
from typing import Optional

# bcrypt only looks at the first 72 bytes and bcrypt>=5 refuses longer input
BCRYPT_MAX_BYTES = 72


class AdminCredentials(BaseModel):
    """Body of /auth/register and /auth/login."""
    email: EmailStr = Field(..., description="Admin email address")
    password: str = Field(..., min_length=8, max_length=72, description="Password (bcrypt limit is 72 bytes)")

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, v):
        if len(v.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes when UTF-8 encoded")
        return v

    class Config:
        extra = "forbid"


class AdminResponse(BaseModel):
    """Model for admin responses. Never includes the password hash."""
    id: str = Field(..., description="Document ID")
    email: str
    created_at: datetime = Field(..., alias="createdAt")
    last_login_at: Optional[datetime] = Field(None, alias="lastLoginAt")

    class Config:
        populate_by_name = True


class AuthResponse(BaseModel):
    """Authentication response."""
    success: bool
    message: str
    token: Optional[str] = None
    token_type: str = "bearer"
    admin: Optional[AdminResponse] = None
