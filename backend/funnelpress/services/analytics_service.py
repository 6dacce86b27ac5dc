"""
Analytics aggregation over view and click events.

Reports are computed on demand for a lookback window. Each sub-aggregate runs
in its own savepoint; if one fails, it contributes its zero value and the
rest of the report is still produced.
"""
import logging
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Any, Awaitable, Callable, TypeVar

from funnelpress.core.exceptions import NotFoundError
from funnelpress.models.subscriber import SubscriberStatus
from funnelpress.queries import Queries
from funnelpress.schemas.analytics import (
    ArticleReport,
    ArticleStats,
    DailyCount,
    SiteCharts,
    SiteReport,
    SiteSummary,
    TopWidget,
    WidgetBreakdown,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

TOP_WIDGETS_LIMIT = 10


class TimeRange(str, Enum):
    LAST_24_HOURS = "24h"
    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"
    LAST_90_DAYS = "90d"

    @property
    def days(self) -> int:
        return {"24h": 1, "7d": 7, "30d": 30, "90d": 90}[self.value]

    @classmethod
    def parse(cls, value: str | None) -> "TimeRange":
        """Unknown or missing values fall back to 30 days."""
        try:
            return cls(value)
        except ValueError:
            return cls.LAST_30_DAYS


def clamp_rate(value: float) -> float:
    return round(min(max(value, 0.0), 100.0), 2)


def rate(numerator: int, denominator: int) -> float:
    """Percentage rounded to 2 places; 0 when there is nothing to divide by."""
    if denominator <= 0:
        return 0.0
    return round(numerator / denominator * 100, 2)


class AnalyticsAggregator:
    """Builds site and article reports."""

    def __init__(self, queries: Queries, now: Callable[[], datetime] | None = None):
        self.queries = queries
        self.analytics = queries.analytics_queries
        self._now = now or (lambda: datetime.now(timezone.utc))

    async def _safe(self, label: str, default: T, fn: Callable[[], Awaitable[T]]) -> T:
        try:
            async with self.queries.db.begin_nested():
                return await fn()
        except Exception:
            logger.exception(f"Analytics sub-aggregate '{label}' failed; using default")
            return default

    def _window(self, time_range: TimeRange) -> tuple[datetime, list[str]]:
        """Lower bound and the UTC dates it spans, ``since``'s date through today."""
        now = self._now()
        since = now - timedelta(days=time_range.days)
        first: date = since.date()
        span = (now.date() - first).days
        days = [(first + timedelta(days=offset)).isoformat() for offset in range(span + 1)]
        return since, days

    async def site_report(self, site_id: str, time_range: TimeRange = TimeRange.LAST_30_DAYS) -> SiteReport:
        since, days = self._window(time_range)
        a = self.analytics

        total_views = await self._safe("total_views", 0, lambda: a.count_views(since, site_id=site_id))
        total_clicks = await self._safe(
            "total_clicks", 0, lambda: a.count_clicks(since, site_id=site_id, external=True)
        )
        internal_clicks = await self._safe(
            "internal_clicks", 0, lambda: a.count_clicks(since, site_id=site_id, external=False)
        )
        total_emails = await self._safe(
            "total_emails",
            0,
            lambda: self.queries.email_queries.count(
                site_id, status=SubscriberStatus.ACTIVE, since=since
            ),
        )
        unique_visitors = await self._safe(
            "unique_visitors", 0, lambda: a.count_unique_visitors(site_id, since)
        )

        articles = await self._safe("articles", [], lambda: self._article_stats(site_id, since))
        top_widgets = await self._safe(
            "top_widgets", [], lambda: a.top_widgets(site_id, since, limit=TOP_WIDGETS_LIMIT)
        )
        views_by_day = await self._safe("views_by_date", {}, lambda: a.views_by_day(site_id, since))
        clicks_by_day = await self._safe("clicks_by_date", {}, lambda: a.clicks_by_day(site_id, since))

        average = (
            clamp_rate(sum(s.conversion_rate for s in articles) / len(articles)) if articles else 0.0
        )

        summary = SiteSummary(
            total_views=total_views,
            total_clicks=total_clicks,
            internal_clicks=internal_clicks,
            total_emails=total_emails,
            unique_visitors=unique_visitors,
            click_through_rate=clamp_rate(rate(total_clicks, total_views)),
            email_conversion_rate=clamp_rate(rate(total_emails, total_views)),
            average_conversion_rate=average,
        )

        return SiteReport(
            time_range=time_range.value,
            summary=summary,
            articles=articles,
            top_widgets=[
                TopWidget(**{**w, "name": w["name"] or w["type"]}) for w in top_widgets
            ],
            charts=SiteCharts(
                views_by_date=[DailyCount(date=d, count=views_by_day.get(d, 0)) for d in days],
                clicks_by_date=[DailyCount(date=d, count=clicks_by_day.get(d, 0)) for d in days],
            ),
        )

    async def _article_stats(self, site_id: str, since: datetime) -> list[ArticleStats]:
        articles = await self.queries.article_queries.get_all_by_site(site_id)
        views = await self.analytics.views_by_article(site_id, since)
        clicks = await self.analytics.external_clicks_by_article(site_id, since)

        stats = []
        for article in articles:
            real_views = views.get(article.id, 0)
            widget_clicks = clicks.get(article.id, 0)
            stats.append(
                ArticleStats(
                    id=article.id,
                    title=article.title,
                    slug=article.slug,
                    published=article.published,
                    boosted=article.boosted,
                    real_views=real_views,
                    widget_clicks=widget_clicks,
                    conversion_rate=clamp_rate(rate(widget_clicks, real_views)),
                )
            )
        stats.sort(key=lambda s: s.real_views, reverse=True)
        return stats

    async def article_report(
        self, article_id: str, time_range: TimeRange = TimeRange.LAST_30_DAYS
    ) -> ArticleReport:
        article = await self.queries.article_queries.get_by_id(article_id)
        if article is None:
            raise NotFoundError("Article")

        since, _ = self._window(time_range)
        a = self.analytics

        views = await self._safe("views", 0, lambda: a.count_views(since, article_id=article_id))
        clicks = await self._safe(
            "clicks", 0, lambda: a.count_clicks(since, article_id=article_id, external=True)
        )
        breakdown: list[dict[str, Any]] = await self._safe(
            "widget_breakdown", [], lambda: a.widget_breakdown(article_id, since)
        )

        return ArticleReport(
            article_id=article_id,
            time_range=time_range.value,
            views=views,
            clicks=clicks,
            conversion_rate=clamp_rate(rate(clicks, views)),
            widget_breakdown=[WidgetBreakdown(**b) for b in breakdown],
        )
