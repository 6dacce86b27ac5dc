"""
Navigation template schemas.
"""
from typing import Any

from pydantic import Field

from funnelpress.models.navigation import NavigationBaseType
from funnelpress.schemas.common import BaseSchema, IDSchema, TimestampSchema


class NavigationTemplateCreate(BaseSchema):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    base_type: NavigationBaseType
    is_system: bool = False
    config: dict[str, Any]


class NavigationTemplateUpdate(BaseSchema):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    base_type: NavigationBaseType | None = None
    config: dict[str, Any] | None = None


class NavigationTemplateResponse(IDSchema, TimestampSchema):
    name: str
    description: str | None = None
    base_type: NavigationBaseType
    is_system: bool
    config: dict[str, Any]


class NavigationTemplateEnvelope(BaseSchema):
    template: NavigationTemplateResponse


class NavigationTemplateListEnvelope(BaseSchema):
    templates: list[NavigationTemplateResponse]
