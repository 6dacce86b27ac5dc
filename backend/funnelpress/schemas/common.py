"""
Common Pydantic schemas used across the API.
"""
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


class IDSchema(BaseSchema):
    """Schema with string ID."""

    id: str


class TimestampSchema(BaseSchema):
    """Schema with timestamps."""

    created_at: datetime
    updated_at: datetime


class MessageResponse(BaseSchema):
    """Simple message response."""

    message: str
    success: bool = True


class SuccessResponse(BaseSchema):
    success: bool = True


class ErrorResponse(BaseSchema):
    """Error response."""

    error: str
    details: str | None = None
