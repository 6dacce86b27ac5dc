"""
Analytics request and report schemas.
"""
from pydantic import Field

from funnelpress.schemas.common import BaseSchema


class WidgetClickRequest(BaseSchema):
    """Outbound click reported by the page script."""

    site_id: str
    article_id: str | None = None
    widget_id: str | None = None
    widget_type: str = Field(min_length=1, max_length=100)
    widget_name: str | None = None
    click_type: str = "cta"
    destination_url: str | None = Field(default=None, max_length=2000)
    is_external: bool | None = None
    session_id: str | None = Field(default=None, max_length=64)
    page_url: str | None = Field(default=None, max_length=2000)


class SiteSummary(BaseSchema):
    total_views: int = 0
    total_clicks: int = 0
    internal_clicks: int = 0
    total_emails: int = 0
    unique_visitors: int = 0
    click_through_rate: float = 0.0
    email_conversion_rate: float = 0.0
    average_conversion_rate: float = 0.0


class ArticleStats(BaseSchema):
    id: str
    title: str
    slug: str
    published: bool = False
    boosted: bool = False
    real_views: int = 0
    widget_clicks: int = 0
    conversion_rate: float = 0.0


class TopWidget(BaseSchema):
    type: str
    widget_id: str | None = None
    name: str | None = None
    clicks: int


class DailyCount(BaseSchema):
    date: str
    count: int


class SiteCharts(BaseSchema):
    views_by_date: list[DailyCount] = []
    clicks_by_date: list[DailyCount] = []


class SiteReport(BaseSchema):
    time_range: str
    summary: SiteSummary
    articles: list[ArticleStats]
    top_widgets: list[TopWidget]
    charts: SiteCharts


class WidgetBreakdown(BaseSchema):
    type: str
    widget_id: str | None = None
    clicks: int


class ArticleReport(BaseSchema):
    article_id: str
    time_range: str
    views: int = 0
    clicks: int = 0
    conversion_rate: float = 0.0
    widget_breakdown: list[WidgetBreakdown] = []
