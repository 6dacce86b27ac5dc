"""
Email subscriber queries. Scoped by site only.
"""
from datetime import datetime

from sqlalchemy import func, select

from funnelpress.models.base import utcnow
from funnelpress.models.subscriber import EmailSubscriber, SubscriberStatus
from funnelpress.queries.base import EntityQueries


class EmailQueries(EntityQueries):
    entity = "emails"
    model = EmailSubscriber

    async def get_all_by_site(self, site_id: str) -> list[EmailSubscriber]:
        return await self._all(
            EmailSubscriber.site_id == site_id,
            order_by=(EmailSubscriber.subscribed_at.desc(),),
        )

    async def get_by_id(self, subscriber_id: str) -> EmailSubscriber | None:
        return await self._first(EmailSubscriber.id == subscriber_id)

    async def get_by_email(self, site_id: str, email: str) -> EmailSubscriber | None:
        return await self._first(
            EmailSubscriber.site_id == site_id,
            EmailSubscriber.email == email.lower(),
        )

    async def get_active_count(self, site_id: str) -> int:
        return await self.count(site_id, status=SubscriberStatus.ACTIVE)

    async def count(
        self,
        site_id: str,
        status: SubscriberStatus | None = None,
        since: datetime | None = None,
    ) -> int:
        stmt = select(func.count(EmailSubscriber.id)).where(EmailSubscriber.site_id == site_id)
        if status is not None:
            stmt = stmt.where(EmailSubscriber.status == status)
        if since is not None:
            stmt = stmt.where(EmailSubscriber.subscribed_at >= since)
        result = await self.db.execute(stmt)
        return result.scalar() or 0

    async def create(
        self,
        site_id: str,
        email: str,
        name: str | None = None,
        source: str = "website",
        tags: list[str] | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
        page_url: str | None = None,
    ) -> EmailSubscriber:
        subscriber = EmailSubscriber(
            site_id=site_id,
            email=email.lower(),
            name=name,
            source=source,
            tags=tags or [],
            ip_address=ip_address,
            user_agent=user_agent,
            page_url=page_url,
            status=SubscriberStatus.ACTIVE,
            subscribed_at=utcnow(),
        )
        return await self._insert(subscriber, "Email already subscribed")

    async def reactivate(
        self,
        subscriber: EmailSubscriber,
        source: str | None = None,
        tags: list[str] | None = None,
        page_url: str | None = None,
    ) -> EmailSubscriber:
        subscriber.status = SubscriberStatus.ACTIVE
        subscriber.unsubscribed_at = None
        subscriber.source = source or subscriber.source
        subscriber.tags = tags or []
        subscriber.page_url = page_url or subscriber.page_url
        await self.db.flush()
        return subscriber

    async def unsubscribe(self, subscriber: EmailSubscriber) -> EmailSubscriber:
        subscriber.status = SubscriberStatus.UNSUBSCRIBED
        subscriber.unsubscribed_at = utcnow()
        await self.db.flush()
        return subscriber

    async def delete(self, subscriber_id: str) -> bool:
        return await self._remove(await self.get_by_id(subscriber_id))
