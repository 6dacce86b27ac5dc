"""
Authentication and user schemas.
"""
from datetime import datetime

from pydantic import EmailStr, Field

from funnelpress.models.user import UserRole
from funnelpress.schemas.common import BaseSchema, IDSchema, TimestampSchema


class LoginRequest(BaseSchema):
    """Login request schema."""

    email: EmailStr
    password: str = Field(min_length=8)


class TokenResponse(BaseSchema):
    """Token response schema."""

    access_token: str
    token_type: str = "bearer"


class UserResponse(IDSchema, TimestampSchema):
    """User response schema."""

    email: str
    name: str
    role: UserRole
    permissions: list[str] | None = None
    tenant_id: str | None = None
    last_login_at: datetime | None = None


class AuthResponse(TokenResponse):
    """Authentication response with user info."""

    user: UserResponse


class UserCreate(BaseSchema):
    email: EmailStr
    password: str = Field(min_length=8)
    name: str = Field(min_length=1, max_length=255)
    role: UserRole = UserRole.EDITOR
    permissions: list[str] = []


class UserUpdate(BaseSchema):
    """User update schema."""

    email: EmailStr | None = None
    name: str | None = Field(default=None, min_length=1, max_length=255)
    role: UserRole | None = None
    permissions: list[str] | None = None


class UserEnvelope(BaseSchema):
    user: UserResponse


class UserListEnvelope(BaseSchema):
    users: list[UserResponse]
