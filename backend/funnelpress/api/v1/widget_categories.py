"""
Widget category endpoints for the admin widget library.
"""
from fastapi import APIRouter, Query

from funnelpress.core.deps import Registry
from funnelpress.schemas.common import SuccessResponse
from funnelpress.schemas.widget import (
    WidgetCategoryCreate,
    WidgetCategoryEnvelope,
    WidgetCategoryListResponse,
    WidgetCategoryReorder,
    WidgetCategoryResponse,
)

router = APIRouter(prefix="/widget-categories", tags=["Widget Categories"])


@router.get("", response_model=WidgetCategoryListResponse)
async def list_categories(
    registry: Registry,
    site_id: str | None = Query(default=None, alias="siteId"),
):
    """Global categories, plus the site's own when ``siteId`` is given."""
    categories = await registry.list_categories(site_id)
    return WidgetCategoryListResponse(
        global_categories=[WidgetCategoryResponse.model_validate(c) for c in categories["global"]],
        site=[WidgetCategoryResponse.model_validate(c) for c in categories["site"]],
    )


@router.post("", response_model=WidgetCategoryEnvelope)
async def create_category(data: WidgetCategoryCreate, registry: Registry):
    """Create a category at the end of its scope."""
    category = await registry.create_category(data)
    return WidgetCategoryEnvelope(category=WidgetCategoryResponse.model_validate(category))


@router.patch("", response_model=SuccessResponse)
async def reorder_categories(data: WidgetCategoryReorder, registry: Registry):
    """Set explicit sort orders."""
    await registry.reorder_categories(data.categories)
    return SuccessResponse()


@router.delete("", response_model=SuccessResponse)
async def delete_category(
    registry: Registry,
    category_id: str = Query(alias="id"),
):
    """Delete a category; its widgets become uncategorized."""
    await registry.delete_category(category_id)
    return SuccessResponse()
