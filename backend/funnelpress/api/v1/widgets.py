"""
Widget endpoints: definitions, instances, and rendering.
"""
from typing import Annotated

from fastapi import APIRouter, Body, Query
from fastapi.responses import HTMLResponse

from funnelpress.core.deps import Registry
from funnelpress.schemas.common import SuccessResponse
from funnelpress.schemas.widget import (
    CreateInstanceAction,
    RegisterWidgetAction,
    UpdateInstanceAction,
    WidgetAction,
    WidgetActionResponse,
    WidgetDefinitionResponse,
    WidgetInstanceResponse,
    WidgetListResponse,
)

router = APIRouter(prefix="/widgets", tags=["Widgets"])

RENDER_CACHE_CONTROL = "public, max-age=300"


@router.get("", response_model=WidgetListResponse, response_model_exclude_unset=True)
async def list_widgets(
    registry: Registry,
    category: str | None = None,
    site_id: str | None = Query(default=None, alias="siteId"),
    page_id: str | None = Query(default=None, alias="pageId"),
    site_wide_only: bool = Query(default=False, alias="siteWideOnly"),
    include_disabled: bool = Query(default=False, alias="includeDisabled"),
):
    """Definitions by default; a site's instances when ``siteId`` is given."""
    if site_id:
        instances = await registry.get_widget_instances(
            site_id,
            page_id,
            site_wide_only=site_wide_only,
            enabled_only=not include_disabled,
        )
        return WidgetListResponse(
            instances=[WidgetInstanceResponse.model_validate(i) for i in instances]
        )

    definitions = await registry.get_widget_definitions(category)
    return WidgetListResponse(
        definitions=[WidgetDefinitionResponse.model_validate(d) for d in definitions]
    )


@router.post("", response_model=WidgetActionResponse)
async def widget_action(
    action: Annotated[WidgetAction, Body(discriminator="action")],
    registry: Registry,
):
    """Register a definition or create, update, or toggle an instance."""
    if isinstance(action, RegisterWidgetAction):
        definition = await registry.register_widget(action.definition)
        return WidgetActionResponse(
            definition=WidgetDefinitionResponse.model_validate(definition)
        )

    if isinstance(action, CreateInstanceAction):
        instance = await registry.create_widget_instance(
            action.widget_id, action.site_id, action.page_id, action.settings
        )
    elif isinstance(action, UpdateInstanceAction):
        instance = await registry.update_widget_instance(action.instance_id, action.settings)
    else:
        instance = await registry.set_widget_instance_enabled(action.instance_id, action.enabled)

    return WidgetActionResponse(
        instance_id=instance.id,
        instance=WidgetInstanceResponse.model_validate(instance),
    )


@router.get("/render", response_class=HTMLResponse)
async def render_widget(
    registry: Registry,
    instance_id: str = Query(alias="instanceId"),
):
    """Rendered HTML for one instance. Missing instances render a comment."""
    html = await registry.render_widget(instance_id)
    return HTMLResponse(content=html, headers={"Cache-Control": RENDER_CACHE_CONTROL})


@router.delete("", response_model=SuccessResponse)
async def delete_widget_instance(
    registry: Registry,
    instance_id: str = Query(alias="instanceId"),
):
    """Delete a widget instance."""
    await registry.delete_widget_instance(instance_id)
    return SuccessResponse()
