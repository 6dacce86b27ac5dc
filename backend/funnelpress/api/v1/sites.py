"""
Site endpoints.

Sites are looked up without a tenant filter so public pages can resolve them
by subdomain or custom domain.
"""
from fastapi import APIRouter, Query, status

from funnelpress.core.deps import QueriesDep
from funnelpress.core.exceptions import NotFoundError
from funnelpress.models.site import Site, SiteStatus
from funnelpress.schemas.common import SuccessResponse
from funnelpress.schemas.site import (
    SiteCreate,
    SiteEnvelope,
    SiteQueryResponse,
    SiteResponse,
    SiteUpdate,
)

router = APIRouter(prefix="/sites", tags=["Sites"])


def _lookup_result(site: Site | None, published_only: bool) -> SiteQueryResponse:
    if site is None or (published_only and site.status != SiteStatus.PUBLISHED):
        return SiteQueryResponse(site=None)
    return SiteQueryResponse(site=SiteResponse.model_validate(site))


@router.get("", response_model=SiteQueryResponse, response_model_exclude_unset=True)
async def list_sites(
    queries: QueriesDep,
    subdomain: str | None = None,
    domain: str | None = None,
    published_only: bool = Query(default=False, alias="publishedOnly"),
):
    """List sites, or resolve one by subdomain or domain."""
    if subdomain:
        site = await queries.site_queries.get_by_subdomain(subdomain)
        return _lookup_result(site, published_only)
    if domain:
        site = await queries.site_queries.get_by_domain(domain)
        return _lookup_result(site, published_only)

    sites = await queries.site_queries.get_all(published_only=published_only)
    return SiteQueryResponse(sites=[SiteResponse.model_validate(s) for s in sites])


@router.post("", response_model=SiteEnvelope, status_code=status.HTTP_201_CREATED)
async def create_site(data: SiteCreate, queries: QueriesDep):
    """Create a new site."""
    site = await queries.site_queries.create(data)
    await queries.log_activity("create", "site", site.id, {"name": site.name})
    return SiteEnvelope(site=SiteResponse.model_validate(site))


@router.get("/{site_id}", response_model=SiteEnvelope)
async def get_site(site_id: str, queries: QueriesDep):
    """Get a site by ID."""
    site = await queries.site_queries.get_by_id(site_id)
    if not site:
        raise NotFoundError("Site")
    return SiteEnvelope(site=SiteResponse.model_validate(site))


@router.put("/{site_id}", response_model=SiteEnvelope)
async def update_site(site_id: str, data: SiteUpdate, queries: QueriesDep):
    """Update the provided fields of a site."""
    site = await queries.site_queries.update(site_id, data)
    if not site:
        raise NotFoundError("Site")
    await queries.log_activity(
        "update", "site", site.id, {"fields": sorted(data.model_fields_set)}
    )
    return SiteEnvelope(site=SiteResponse.model_validate(site))


@router.delete("/{site_id}", response_model=SuccessResponse)
async def delete_site(site_id: str, queries: QueriesDep):
    """Delete a site with its content and widget placements."""
    site = await queries.site_queries.get_by_id(site_id)
    if not site:
        raise NotFoundError("Site")
    articles = await queries.article_queries.delete_by_site(site_id)
    pages = await queries.page_queries.delete_by_site(site_id)
    await queries.site_queries.delete(site_id)
    await queries.log_activity(
        "delete", "site", site_id, {"articles": articles, "pages": pages}
    )
    return SuccessResponse()
