"""
Page endpoints.
"""
from fastapi import APIRouter, Query, status

from funnelpress.core.deps import QueriesDep
from funnelpress.core.exceptions import NotFoundError, ValidationError
from funnelpress.schemas.common import SuccessResponse
from funnelpress.schemas.content import (
    PageCreate,
    PageEnvelope,
    PageQueryResponse,
    PageResponse,
    PageUpdate,
)

router = APIRouter(prefix="/pages", tags=["Pages"])


@router.get("", response_model=PageQueryResponse, response_model_exclude_unset=True)
async def list_pages(
    queries: QueriesDep,
    site_id: str | None = Query(default=None, alias="siteId"),
    slug: str | None = None,
    published: bool = False,
):
    """List a site's pages, or resolve one by slug."""
    if not site_id:
        raise ValidationError("siteId is required")

    if slug:
        page = await queries.page_queries.get_by_slug(site_id, slug)
        if page is None or (published and not page.published):
            return PageQueryResponse(page=None)
        return PageQueryResponse(page=PageResponse.model_validate(page))

    pages = await queries.page_queries.get_all_by_site(site_id, published_only=published)
    return PageQueryResponse(pages=[PageResponse.model_validate(p) for p in pages])


@router.post("", response_model=PageEnvelope, status_code=status.HTTP_201_CREATED)
async def create_page(data: PageCreate, queries: QueriesDep):
    """Create a page."""
    if not await queries.site_queries.get_by_id(data.site_id):
        raise NotFoundError("Site")
    page = await queries.page_queries.create(data)
    await queries.log_activity("create", "page", page.id, {"slug": page.slug})
    return PageEnvelope(page=PageResponse.model_validate(page))


@router.get("/{page_id}", response_model=PageEnvelope)
async def get_page(page_id: str, queries: QueriesDep):
    """Get a page by ID."""
    page = await queries.page_queries.get_by_id(page_id)
    if not page:
        raise NotFoundError("Page")
    return PageEnvelope(page=PageResponse.model_validate(page))


@router.put("/{page_id}", response_model=PageEnvelope)
async def update_page(page_id: str, data: PageUpdate, queries: QueriesDep):
    """Update the provided fields of a page."""
    page = await queries.page_queries.update(page_id, data)
    if not page:
        raise NotFoundError("Page")
    return PageEnvelope(page=PageResponse.model_validate(page))


@router.delete("/{page_id}", response_model=SuccessResponse)
async def delete_page(page_id: str, queries: QueriesDep):
    """Delete a page and its widget placements."""
    if not await queries.page_queries.delete(page_id):
        raise NotFoundError("Page")
    await queries.log_activity("delete", "page", page_id)
    return SuccessResponse()
