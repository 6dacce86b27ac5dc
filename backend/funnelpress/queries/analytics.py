"""
Traffic event inserts and the aggregate reads behind analytics reports.
"""
from datetime import datetime
from typing import Any

from sqlalchemy import distinct, func, select

from funnelpress.models.analytics import ClickEvent, ViewEvent
from funnelpress.queries.base import EntityQueries


def _day_key(value: Any) -> str:
    # date() yields a string on SQLite and a date on PostgreSQL
    return str(value)[:10]


class AnalyticsQueries(EntityQueries):
    entity = "analytics"
    model = ClickEvent

    def _utc_day(self, column):
        """Calendar day of a timestamp in UTC, whatever the session time zone."""
        if self.db.get_bind().dialect.name == "postgresql":
            return func.date(func.timezone("UTC", column))
        # SQLite keeps timestamps as naive UTC text
        return func.date(column)

    async def add_view(self, **values) -> ViewEvent:
        event = ViewEvent(**values)
        self.db.add(event)
        await self.db.flush()
        return event

    async def add_click(self, **values) -> ClickEvent:
        event = ClickEvent(**values)
        self.db.add(event)
        await self.db.flush()
        return event

    async def count_views(
        self,
        since: datetime,
        site_id: str | None = None,
        article_id: str | None = None,
    ) -> int:
        stmt = select(func.count(ViewEvent.id)).where(ViewEvent.viewed_at >= since)
        if site_id:
            stmt = stmt.where(ViewEvent.site_id == site_id)
        if article_id:
            stmt = stmt.where(ViewEvent.article_id == article_id)
        result = await self.db.execute(stmt)
        return result.scalar() or 0

    async def count_clicks(
        self,
        since: datetime,
        site_id: str | None = None,
        article_id: str | None = None,
        external: bool | None = True,
    ) -> int:
        stmt = select(func.count(ClickEvent.id)).where(ClickEvent.clicked_at >= since)
        if site_id:
            stmt = stmt.where(ClickEvent.site_id == site_id)
        if article_id:
            stmt = stmt.where(ClickEvent.article_id == article_id)
        if external is not None:
            stmt = stmt.where(ClickEvent.is_external.is_(external))
        result = await self.db.execute(stmt)
        return result.scalar() or 0

    async def count_unique_visitors(self, site_id: str, since: datetime) -> int:
        result = await self.db.execute(
            select(func.count(distinct(ViewEvent.visitor_hash))).where(
                ViewEvent.site_id == site_id,
                ViewEvent.viewed_at >= since,
                ViewEvent.visitor_hash.is_not(None),
            )
        )
        return result.scalar() or 0

    async def views_by_article(self, site_id: str, since: datetime) -> dict[str, int]:
        result = await self.db.execute(
            select(ViewEvent.article_id, func.count(ViewEvent.id))
            .where(ViewEvent.site_id == site_id, ViewEvent.viewed_at >= since)
            .group_by(ViewEvent.article_id)
        )
        return {article_id: count for article_id, count in result.all()}

    async def external_clicks_by_article(self, site_id: str, since: datetime) -> dict[str, int]:
        result = await self.db.execute(
            select(ClickEvent.article_id, func.count(ClickEvent.id))
            .where(
                ClickEvent.site_id == site_id,
                ClickEvent.clicked_at >= since,
                ClickEvent.is_external.is_(True),
                ClickEvent.article_id.is_not(None),
            )
            .group_by(ClickEvent.article_id)
        )
        return {article_id: count for article_id, count in result.all()}

    async def top_widgets(self, site_id: str, since: datetime, limit: int = 10) -> list[dict]:
        clicks = func.count(ClickEvent.id).label("clicks")
        result = await self.db.execute(
            select(
                ClickEvent.widget_type,
                ClickEvent.widget_id,
                func.max(ClickEvent.widget_name),
                clicks,
            )
            .where(
                ClickEvent.site_id == site_id,
                ClickEvent.clicked_at >= since,
                ClickEvent.is_external.is_(True),
            )
            .group_by(ClickEvent.widget_type, ClickEvent.widget_id)
            .order_by(clicks.desc(), ClickEvent.widget_type)
            .limit(limit)
        )
        return [
            {"type": widget_type, "widget_id": widget_id, "name": name, "clicks": count}
            for widget_type, widget_id, name, count in result.all()
        ]

    async def widget_breakdown(self, article_id: str, since: datetime) -> list[dict]:
        clicks = func.count(ClickEvent.id).label("clicks")
        result = await self.db.execute(
            select(ClickEvent.widget_type, ClickEvent.widget_id, clicks)
            .where(
                ClickEvent.article_id == article_id,
                ClickEvent.clicked_at >= since,
                ClickEvent.is_external.is_(True),
            )
            .group_by(ClickEvent.widget_type, ClickEvent.widget_id)
            .order_by(clicks.desc(), ClickEvent.widget_type)
        )
        return [
            {"type": widget_type, "widget_id": widget_id, "clicks": count}
            for widget_type, widget_id, count in result.all()
        ]

    async def views_by_day(self, site_id: str, since: datetime) -> dict[str, int]:
        day = self._utc_day(ViewEvent.viewed_at)
        result = await self.db.execute(
            select(day, func.count(ViewEvent.id))
            .where(ViewEvent.site_id == site_id, ViewEvent.viewed_at >= since)
            .group_by(day)
        )
        return {_day_key(d): count for d, count in result.all()}

    async def clicks_by_day(self, site_id: str, since: datetime) -> dict[str, int]:
        day = self._utc_day(ClickEvent.clicked_at)
        result = await self.db.execute(
            select(day, func.count(ClickEvent.id))
            .where(
                ClickEvent.site_id == site_id,
                ClickEvent.clicked_at >= since,
                ClickEvent.is_external.is_(True),
            )
            .group_by(day)
        )
        return {_day_key(d): count for d, count in result.all()}
