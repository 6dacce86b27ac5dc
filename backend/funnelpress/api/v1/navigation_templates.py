"""
Navigation template endpoints.
"""
from fastapi import APIRouter, Query, status

from funnelpress.core.deps import QueriesDep
from funnelpress.core.exceptions import NotFoundError
from funnelpress.models.navigation import NavigationBaseType
from funnelpress.schemas.common import SuccessResponse
from funnelpress.schemas.navigation import (
    NavigationTemplateCreate,
    NavigationTemplateEnvelope,
    NavigationTemplateListEnvelope,
    NavigationTemplateResponse,
    NavigationTemplateUpdate,
)

router = APIRouter(prefix="/navigation-templates", tags=["Navigation Templates"])


@router.get("", response_model=NavigationTemplateListEnvelope)
async def list_templates(
    queries: QueriesDep,
    system_only: bool = Query(default=False, alias="systemOnly"),
    base_type: NavigationBaseType | None = Query(default=None, alias="baseType"),
):
    """List navigation templates."""
    nav = queries.navigation_template_queries
    if system_only:
        templates = await nav.get_system_templates()
    elif base_type is not None:
        templates = await nav.get_by_base_type(base_type)
    else:
        templates = await nav.get_all()
    return NavigationTemplateListEnvelope(
        templates=[NavigationTemplateResponse.model_validate(t) for t in templates]
    )


@router.post("", response_model=NavigationTemplateEnvelope, status_code=status.HTTP_201_CREATED)
async def create_template(data: NavigationTemplateCreate, queries: QueriesDep):
    template = await queries.navigation_template_queries.create(data)
    await queries.log_activity("create", "navigation_template", template.id, {"name": template.name})
    return NavigationTemplateEnvelope(template=NavigationTemplateResponse.model_validate(template))


@router.get("/{template_id}", response_model=NavigationTemplateEnvelope)
async def get_template(template_id: str, queries: QueriesDep):
    template = await queries.navigation_template_queries.get_by_id(template_id)
    if template is None:
        raise NotFoundError("Navigation template")
    return NavigationTemplateEnvelope(template=NavigationTemplateResponse.model_validate(template))


@router.put("/{template_id}", response_model=NavigationTemplateEnvelope)
async def update_template(
    template_id: str, data: NavigationTemplateUpdate, queries: QueriesDep
):
    template = await queries.navigation_template_queries.update(template_id, data)
    if template is None:
        raise NotFoundError("Navigation template")
    await queries.log_activity("update", "navigation_template", template.id)
    return NavigationTemplateEnvelope(template=NavigationTemplateResponse.model_validate(template))


@router.delete("/{template_id}", response_model=SuccessResponse)
async def delete_template(template_id: str, queries: QueriesDep):
    if not await queries.navigation_template_queries.delete(template_id):
        raise NotFoundError("Navigation template")
    await queries.log_activity("delete", "navigation_template", template_id)
    return SuccessResponse()
