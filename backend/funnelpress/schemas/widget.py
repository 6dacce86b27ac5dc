"""
Widget definition, instance, and category schemas.
"""
from typing import Any, Literal, Union

from pydantic import Field

from funnelpress.schemas.common import BaseSchema, IDSchema, TimestampSchema

WIDGET_ID_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class WidgetDefinitionCreate(BaseSchema):
    """Register (create or replace) a widget definition."""

    id: str = Field(min_length=1, max_length=100, pattern=WIDGET_ID_PATTERN)
    widget_type: str | None = None
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    category: str = "content"
    category_id: str | None = None
    version: str = "1.0.0"
    template: str = Field(min_length=1)
    styles: str | None = None
    script: str | None = None
    default_config: dict[str, Any] = {}
    triggers: list[dict[str, Any]] | None = None
    active: bool = True
    is_global: bool = True

    @property
    def resolved_type(self) -> str:
        """Built-in definitions use their id as the type key."""
        return self.widget_type or self.id


class WidgetDefinitionResponse(IDSchema, TimestampSchema):
    widget_type: str
    name: str
    description: str | None = None
    category: str
    category_id: str | None = None
    version: str
    template: str
    styles: str | None = None
    script: str | None = None
    default_config: dict[str, Any] | None = None
    config_schema: dict[str, Any] | None = None
    triggers: list[dict[str, Any]] | None = None
    active: bool
    is_global: bool


class WidgetInstanceResponse(IDSchema, TimestampSchema):
    definition_id: str
    site_id: str
    page_id: str | None = None
    config: dict[str, Any]
    sort_order: int
    enabled: bool
    version: int


class RegisterWidgetAction(BaseSchema):
    action: Literal["register_widget"]
    definition: WidgetDefinitionCreate


class CreateInstanceAction(BaseSchema):
    action: Literal["create_instance"]
    site_id: str
    widget_id: str
    page_id: str | None = None
    settings: dict[str, Any] = {}


class UpdateInstanceAction(BaseSchema):
    action: Literal["update_instance"]
    instance_id: str
    settings: dict[str, Any]


class SetInstanceEnabledAction(BaseSchema):
    action: Literal["set_instance_enabled"]
    instance_id: str
    enabled: bool


# Discriminated on "action" at the request boundary
WidgetAction = Union[
    RegisterWidgetAction,
    CreateInstanceAction,
    UpdateInstanceAction,
    SetInstanceEnabledAction,
]


class WidgetCategoryCreate(BaseSchema):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    color_bg: str | None = None
    color_text: str | None = None
    color_border: str | None = None
    icon: str | None = None
    site_id: str | None = None
    is_global: bool = False


class CategoryOrder(BaseSchema):
    id: str
    sort_order: int


class WidgetCategoryReorder(BaseSchema):
    categories: list[CategoryOrder] = Field(min_length=1)


class WidgetCategoryResponse(IDSchema, TimestampSchema):
    site_id: str | None = None
    name: str
    slug: str
    description: str | None = None
    color_bg: str
    color_text: str
    color_border: str
    icon: str | None = None
    sort_order: int
    is_global: bool


class WidgetCategoryListResponse(BaseSchema):
    global_categories: list[WidgetCategoryResponse] = Field(serialization_alias="global")
    site: list[WidgetCategoryResponse]


class WidgetListResponse(BaseSchema):
    """Definitions, or a site's instances."""

    definitions: list[WidgetDefinitionResponse] | None = None
    instances: list[WidgetInstanceResponse] | None = None


class WidgetActionResponse(BaseSchema):
    success: bool = True
    instance_id: str | None = None
    definition: WidgetDefinitionResponse | None = None
    instance: WidgetInstanceResponse | None = None


class WidgetCategoryEnvelope(BaseSchema):
    success: bool = True
    category: WidgetCategoryResponse
