"""
Per-request query factory.
"""
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from funnelpress.queries.activity import ActivityLogQueries
from funnelpress.queries.analytics import AnalyticsQueries
from funnelpress.queries.articles import ArticleQueries
from funnelpress.queries.emails import EmailQueries
from funnelpress.queries.navigation import NavigationTemplateQueries
from funnelpress.queries.pages import PageQueries
from funnelpress.queries.sites import SiteQueries
from funnelpress.queries.users import UserQueries
from funnelpress.queries.widgets import WidgetQueries


class Queries:
    """Bundle of entity query objects bound to one session and tenant.

    Each entity applies its own isolation policy; see
    ``funnelpress.queries.policy``.
    """

    def __init__(self, db: AsyncSession, tenant_id: str | None = None):
        self.db = db
        self.tenant_id = tenant_id
        self.user_queries = UserQueries(db, tenant_id)
        self.site_queries = SiteQueries(db, tenant_id)
        self.article_queries = ArticleQueries(db, tenant_id)
        self.page_queries = PageQueries(db, tenant_id)
        self.widget_queries = WidgetQueries(db, tenant_id)
        self.email_queries = EmailQueries(db, tenant_id)
        self.analytics_queries = AnalyticsQueries(db, tenant_id)
        self.navigation_template_queries = NavigationTemplateQueries(db, tenant_id)
        self.activity_log_queries = ActivityLogQueries(db, tenant_id)

    async def log_activity(
        self,
        action: str,
        resource_type: str,
        resource_id: str | None = None,
        details: dict[str, Any] | None = None,
        **extra: Any,
    ):
        return await self.activity_log_queries.log(
            action, resource_type, resource_id, details, **extra
        )


def create_queries(db: AsyncSession, tenant_id: str | None = None) -> Queries:
    """Build the query bundle for one request."""
    return Queries(db, tenant_id)
