"""
Article endpoints.
"""
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import async_sessionmaker

from funnelpress.core.deps import QueriesDep
from funnelpress.core.exceptions import NotFoundError
from funnelpress.database import get_session_maker
from funnelpress.schemas.common import SuccessResponse
from funnelpress.schemas.content import (
    ArticleCreate,
    ArticleEnvelope,
    ArticleQueryResponse,
    ArticleResponse,
    ArticleUpdate,
)
from funnelpress.services.attribution import ClickContext, record_view

router = APIRouter(prefix="/articles", tags=["Articles"])


@router.get("", response_model=ArticleQueryResponse, response_model_exclude_unset=True)
async def list_articles(
    queries: QueriesDep,
    site_id: str | None = Query(default=None, alias="siteId"),
    slug: str | None = None,
    published: bool = False,
):
    """List articles, or resolve one by site and slug."""
    if site_id and slug:
        article = await queries.article_queries.get_by_slug(site_id, slug)
        if article is None or (published and not article.published):
            return ArticleQueryResponse(article=None)
        return ArticleQueryResponse(article=ArticleResponse.model_validate(article))

    if site_id:
        articles = await queries.article_queries.get_all_by_site(site_id, published_only=published)
    else:
        articles = await queries.article_queries.get_all()
    return ArticleQueryResponse(articles=[ArticleResponse.model_validate(a) for a in articles])


@router.post("", response_model=ArticleEnvelope, status_code=status.HTTP_201_CREATED)
async def create_article(data: ArticleCreate, queries: QueriesDep):
    """Create an article."""
    if not await queries.site_queries.get_by_id(data.site_id):
        raise NotFoundError("Site")
    article = await queries.article_queries.create(data)
    await queries.log_activity("create", "article", article.id, {"slug": article.slug})
    return ArticleEnvelope(article=ArticleResponse.model_validate(article))


@router.get("/{article_id}", response_model=ArticleEnvelope)
async def get_article(article_id: str, queries: QueriesDep):
    """Get an article by ID."""
    article = await queries.article_queries.get_by_id(article_id)
    if not article:
        raise NotFoundError("Article")
    return ArticleEnvelope(article=ArticleResponse.model_validate(article))


@router.put("/{article_id}", response_model=ArticleEnvelope)
async def update_article(article_id: str, data: ArticleUpdate, queries: QueriesDep):
    """Update the provided fields of an article."""
    article = await queries.article_queries.update(article_id, data)
    if not article:
        raise NotFoundError("Article")
    await queries.log_activity(
        "update", "article", article.id, {"fields": sorted(data.model_fields_set)}
    )
    return ArticleEnvelope(article=ArticleResponse.model_validate(article))


@router.delete("/{article_id}", response_model=SuccessResponse)
async def delete_article(article_id: str, queries: QueriesDep):
    """Delete an article."""
    if not await queries.article_queries.delete(article_id):
        raise NotFoundError("Article")
    await queries.log_activity("delete", "article", article_id)
    return SuccessResponse()


@router.post("/{article_id}/view", response_model=SuccessResponse)
async def track_article_view(
    article_id: str,
    request: Request,
    background_tasks: BackgroundTasks,
    session_maker: Annotated[async_sessionmaker, Depends(get_session_maker)],
):
    """Record a view. Always succeeds; recording happens after the response."""
    context = ClickContext.from_request(request)
    background_tasks.add_task(record_view, article_id, context, session_maker)
    return SuccessResponse()
