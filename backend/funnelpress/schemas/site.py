"""
Site schemas.
"""
from datetime import datetime

from pydantic import Field

from funnelpress.models.site import SiteStatus
from funnelpress.schemas.common import BaseSchema, IDSchema, TimestampSchema

SUBDOMAIN_PATTERN = r"^[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?$"


class SiteCreate(BaseSchema):
    """Create site request."""

    name: str = Field(min_length=1, max_length=255)
    subdomain: str | None = Field(default=None, pattern=SUBDOMAIN_PATTERN)
    domain: str | None = Field(default=None, max_length=255)
    theme: str = "medical"
    settings: dict = {}
    brand_profile: dict = {}
    content_profile: dict = {}
    page_config: dict = {}
    status: SiteStatus = SiteStatus.DRAFT


class SiteUpdate(BaseSchema):
    """Update site request. Only provided fields are written."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    subdomain: str | None = Field(default=None, pattern=SUBDOMAIN_PATTERN)
    domain: str | None = Field(default=None, max_length=255)
    theme: str | None = None
    settings: dict | None = None
    brand_profile: dict | None = None
    content_profile: dict | None = None
    page_config: dict | None = None
    status: SiteStatus | None = None


class SiteResponse(IDSchema, TimestampSchema):
    """Site response schema."""

    tenant_id: str | None = None
    name: str
    subdomain: str | None = None
    domain: str | None = None
    theme: str
    settings: dict | None = None
    brand_profile: dict | None = None
    content_profile: dict | None = None
    page_config: dict | None = None
    status: SiteStatus
    published_at: datetime | None = None
    version: int


class SiteEnvelope(BaseSchema):
    site: SiteResponse | None = None


class SiteQueryResponse(BaseSchema):
    """Either a single lookup result or a listing."""

    site: SiteResponse | None = None
    sites: list[SiteResponse] | None = None
