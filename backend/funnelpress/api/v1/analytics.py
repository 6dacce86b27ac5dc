"""
Analytics endpoints: click collection and reports.
"""
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request, Response
from sqlalchemy.ext.asyncio import async_sessionmaker

from funnelpress.config import settings
from funnelpress.core.deps import Aggregator
from funnelpress.database import get_session_maker
from funnelpress.schemas.analytics import ArticleReport, SiteReport, WidgetClickRequest
from funnelpress.schemas.common import SuccessResponse
from funnelpress.services.analytics_service import TimeRange
from funnelpress.services.attribution import ClickContext, record_click, resolve_session_id

router = APIRouter(prefix="/analytics", tags=["Analytics"])

SESSION_COOKIE_MAX_AGE = 60 * 30


@router.post("/widget-click", response_model=SuccessResponse)
async def track_widget_click(
    event: WidgetClickRequest,
    request: Request,
    response: Response,
    background_tasks: BackgroundTasks,
    session_maker: Annotated[async_sessionmaker, Depends(get_session_maker)],
):
    """Record a widget click after the response is sent. Always succeeds."""
    session_id, is_new = resolve_session_id(event.session_id, request.cookies)
    if is_new:
        response.set_cookie(
            settings.SESSION_COOKIE_NAME,
            session_id,
            max_age=SESSION_COOKIE_MAX_AGE,
            httponly=True,
            samesite="lax",
        )

    context = ClickContext.from_request(request, session_id=session_id)
    background_tasks.add_task(record_click, event, context, session_maker)
    return SuccessResponse()


@router.get("/site/{site_id}", response_model=SiteReport)
async def site_analytics(
    site_id: str,
    aggregator: Aggregator,
    time_range: str | None = Query(default=None, alias="timeRange"),
):
    """Traffic and conversion report for a site."""
    return await aggregator.site_report(site_id, TimeRange.parse(time_range))


@router.get("/article/{article_id}", response_model=ArticleReport)
async def article_analytics(
    article_id: str,
    aggregator: Aggregator,
    time_range: str | None = Query(default=None, alias="timeRange"),
):
    """Traffic and conversion report for one article."""
    return await aggregator.article_report(article_id, TimeRange.parse(time_range))
