"""
Unit tests for the email subscription flow.
"""
import csv
import io

import pytest

from funnelpress.core.exceptions import NotFoundError
from funnelpress.models import SubscriberStatus
from funnelpress.queries import create_queries
from funnelpress.schemas.subscriber import SubscribeRequest
from funnelpress.services.subscription_service import (
    CSV_HEADERS,
    MSG_ALREADY,
    MSG_RESUBSCRIBED,
    MSG_SUBSCRIBED,
    SubscriptionService,
)


@pytest.fixture
def service(db_session_with_data):
    return SubscriptionService(create_queries(db_session_with_data))


class TestSubscribe:
    """Test subscribing addresses."""

    @pytest.mark.asyncio
    async def test_new_subscriber(self, service, site_id):
        result = await service.subscribe(
            SubscribeRequest(site_id=site_id, email="Reader@Example.com", tags=["guide"]),
            ip_address="203.0.113.7",
        )

        assert result.created is True
        assert result.message == MSG_SUBSCRIBED
        assert result.subscriber.email == "reader@example.com"
        assert result.subscriber.status == SubscriberStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_already_subscribed(self, service, site_id):
        request = SubscribeRequest(site_id=site_id, email="reader@example.com")
        await service.subscribe(request)

        result = await service.subscribe(request)

        assert result.created is False
        assert result.message == MSG_ALREADY

    @pytest.mark.asyncio
    async def test_resubscribe_after_unsubscribe(self, service, site_id):
        request = SubscribeRequest(site_id=site_id, email="reader@example.com")
        await service.subscribe(request)
        await service.unsubscribe(site_id, "reader@example.com")

        result = await service.subscribe(
            SubscribeRequest(site_id=site_id, email="reader@example.com", source="exit-intent-popup")
        )

        assert result.message == MSG_RESUBSCRIBED
        assert result.subscriber.status == SubscriberStatus.ACTIVE
        assert result.subscriber.unsubscribed_at is None
        assert result.subscriber.source == "exit-intent-popup"

    @pytest.mark.asyncio
    async def test_unknown_site(self, service):
        with pytest.raises(NotFoundError):
            await service.subscribe(SubscribeRequest(site_id="missing", email="a@example.com"))


class TestUnsubscribe:
    """Test unsubscribing addresses."""

    @pytest.mark.asyncio
    async def test_unsubscribe(self, service, site_id):
        await service.subscribe(SubscribeRequest(site_id=site_id, email="reader@example.com"))

        subscriber = await service.unsubscribe(site_id, "Reader@example.com")

        assert subscriber.status == SubscriberStatus.UNSUBSCRIBED
        assert subscriber.unsubscribed_at is not None

    @pytest.mark.asyncio
    async def test_unknown_address(self, service, site_id):
        with pytest.raises(NotFoundError):
            await service.unsubscribe(site_id, "nobody@example.com")


class TestReporting:
    """Test listing and export."""

    @pytest.mark.asyncio
    async def test_stats(self, service, site_id):
        for email in ("a@example.com", "b@example.com", "c@example.com"):
            await service.subscribe(SubscribeRequest(site_id=site_id, email=email))
        await service.unsubscribe(site_id, "c@example.com")

        subscribers, stats = await service.list_with_stats(site_id)

        assert len(subscribers) == 3
        assert stats.total == 3
        assert stats.active == 2
        assert stats.unsubscribed == 1
        assert stats.this_week == 3

    @pytest.mark.asyncio
    async def test_export_csv(self, service, site_id):
        await service.subscribe(
            SubscribeRequest(site_id=site_id, email="a@example.com", name='Ann "A" Lee', tags=["x", "y"])
        )

        content = await service.export_csv(site_id)
        rows = list(csv.reader(io.StringIO(content)))

        assert rows[0] == CSV_HEADERS
        assert rows[1][:6] == ["a@example.com", 'Ann "A" Lee', "website", "x,y", "active", ""]
        assert content.startswith('"Email","Name"')
