"""
Email subscriber schemas.
"""
from datetime import datetime

from pydantic import EmailStr, Field

from funnelpress.models.subscriber import SubscriberStatus
from funnelpress.schemas.common import BaseSchema, IDSchema, TimestampSchema


class SubscribeRequest(BaseSchema):
    site_id: str
    email: EmailStr
    name: str | None = Field(default=None, max_length=255)
    source: str = "website"
    tags: list[str] = []
    page_url: str | None = Field(default=None, max_length=2000)


class SubscribeResponse(BaseSchema):
    success: bool = True
    message: str
    subscriber_id: str | None = None


class SubscriberResponse(IDSchema, TimestampSchema):
    site_id: str
    email: str
    name: str | None = None
    source: str
    tags: list[str] | None = None
    status: SubscriberStatus
    page_url: str | None = None
    subscribed_at: datetime
    unsubscribed_at: datetime | None = None


class SubscriberStats(BaseSchema):
    total: int
    active: int
    this_week: int
    unsubscribed: int


class SubscriberListResponse(BaseSchema):
    subscribers: list[SubscriberResponse]
    stats: SubscriberStats
