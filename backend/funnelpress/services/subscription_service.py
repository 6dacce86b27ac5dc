"""
Email subscription flow for public signup forms.
"""
import csv
import io
import logging
from dataclasses import dataclass
from datetime import timedelta

from funnelpress.core.exceptions import ConflictError, NotFoundError
from funnelpress.models.base import utcnow
from funnelpress.models.subscriber import EmailSubscriber, SubscriberStatus
from funnelpress.queries import Queries
from funnelpress.schemas.subscriber import SubscribeRequest, SubscriberStats

logger = logging.getLogger(__name__)

MSG_SUBSCRIBED = "Successfully subscribed!"
MSG_ALREADY = "You are already subscribed!"
MSG_RESUBSCRIBED = "Welcome back! You have been resubscribed."

CSV_HEADERS = ["Email", "Name", "Source", "Tags", "Status", "Page URL", "Subscribed At"]


@dataclass
class SubscribeResult:
    message: str
    created: bool = False
    subscriber: EmailSubscriber | None = None


class SubscriptionService:
    """Subscribe, unsubscribe, and report on a site's email list."""

    def __init__(self, queries: Queries):
        self.queries = queries
        self.emails = queries.email_queries

    async def subscribe(
        self,
        data: SubscribeRequest,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> SubscribeResult:
        if await self.queries.site_queries.get_by_id(data.site_id) is None:
            raise NotFoundError("Site")

        email = data.email.lower()
        existing = await self.emails.get_by_email(data.site_id, email)
        if existing:
            if existing.status == SubscriberStatus.UNSUBSCRIBED:
                await self.emails.reactivate(existing, data.source, data.tags, data.page_url)
                return SubscribeResult(MSG_RESUBSCRIBED, subscriber=existing)
            return SubscribeResult(MSG_ALREADY, subscriber=existing)

        try:
            subscriber = await self.emails.create(
                site_id=data.site_id,
                email=email,
                name=data.name,
                source=data.source,
                tags=data.tags,
                ip_address=ip_address,
                user_agent=user_agent,
                page_url=data.page_url,
            )
        except ConflictError:
            # Lost a race with a concurrent signup for the same address
            logger.info(f"Concurrent subscribe for site {data.site_id}")
            return SubscribeResult(MSG_ALREADY)

        logger.info(f"New subscriber {subscriber.id} on site {data.site_id}")
        return SubscribeResult(MSG_SUBSCRIBED, created=True, subscriber=subscriber)

    async def unsubscribe(self, site_id: str, email: str) -> EmailSubscriber:
        subscriber = await self.emails.get_by_email(site_id, email)
        if subscriber is None:
            raise NotFoundError("Subscriber")
        return await self.emails.unsubscribe(subscriber)

    async def list_with_stats(self, site_id: str) -> tuple[list[EmailSubscriber], SubscriberStats]:
        subscribers = await self.emails.get_all_by_site(site_id)
        week_ago = utcnow() - timedelta(days=7)
        total = len(subscribers)
        active = await self.emails.get_active_count(site_id)
        this_week = await self.emails.count(site_id, since=week_ago)
        stats = SubscriberStats(
            total=total,
            active=active,
            this_week=this_week,
            unsubscribed=total - active,
        )
        return subscribers, stats

    async def export_csv(self, site_id: str) -> str:
        subscribers = await self.emails.get_all_by_site(site_id)
        output = io.StringIO()
        writer = csv.writer(output, quoting=csv.QUOTE_ALL)

        writer.writerow(CSV_HEADERS)
        for sub in subscribers:
            writer.writerow([
                sub.email,
                sub.name or "",
                sub.source or "website",
                ",".join(sub.tags or []),
                sub.status.value,
                sub.page_url or "",
                sub.subscribed_at.isoformat() if sub.subscribed_at else "",
            ])

        return output.getvalue()
