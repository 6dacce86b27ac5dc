"""
Unit tests for click attribution.

Covers:
- Outbound classification of destination URLs
- Client IP and session resolution
- Page origin precedence
- Recording clicks and views
"""
import pytest
from sqlalchemy import select

from funnelpress.models import Article, ClickEvent, ViewEvent
from funnelpress.schemas.analytics import WidgetClickRequest
from funnelpress.services.attribution import (
    ClickContext,
    client_ip,
    is_external_url,
    page_origin,
    record_click,
    record_view,
    resolve_session_id,
)

ORIGIN = "https://example.com"


class TestIsExternalUrl:
    """Test outbound link classification."""

    @pytest.mark.parametrize(
        "url",
        [None, "", "   ", "#pricing", "/#top", "/pricing", "javascript:void(0)", "mailto:a@b.c", "tel:+15551234"],
    )
    def test_never_external(self, url):
        assert is_external_url(url, ORIGIN) is False

    @pytest.mark.parametrize(
        "url",
        [
            "https://shop.other.com/buy",
            "//cdn.other.com/x",
            "http://example.com/pricing",
            "https://example.com:8443/pricing",
            "https://www.example.com/",
        ],
    )
    def test_external(self, url):
        assert is_external_url(url, ORIGIN) is True

    @pytest.mark.parametrize(
        "url",
        ["https://example.com/pricing", "https://EXAMPLE.com:443/x", "pricing", "../up"],
    )
    def test_same_origin(self, url):
        assert is_external_url(url, ORIGIN) is False

    def test_origin_may_be_full_page_url(self):
        assert is_external_url("https://example.com/a", "https://example.com/blog/post?x=1") is False

    def test_without_origin_only_absolute_http_counts(self):
        assert is_external_url("https://shop.other.com", None) is True
        assert is_external_url("ftp://files.other.com", None) is False
        assert is_external_url("pricing", None) is False

    def test_malformed_port_is_internal(self):
        assert is_external_url("https://example.com:99999/", ORIGIN) is False


class TestClientIp:
    """Test client address extraction."""

    def test_first_forwarded_hop(self):
        headers = {"x-forwarded-for": "203.0.113.7, 10.0.0.1", "x-real-ip": "10.0.0.2"}

        assert client_ip(headers) == "203.0.113.7"

    def test_real_ip_fallback(self):
        assert client_ip({"x-real-ip": " 198.51.100.4 "}) == "198.51.100.4"

    def test_unknown(self):
        assert client_ip({}) == "unknown"


class TestSessionId:
    """Test session id resolution."""

    def test_supplied_wins(self):
        assert resolve_session_id("abc", {"fp_sid": "cookie"}) == ("abc", False)

    def test_cookie_used(self):
        assert resolve_session_id(None, {"fp_sid": "cookie"}) == ("cookie", False)

    def test_new_session_minted(self):
        session_id, is_new = resolve_session_id(None, {})

        assert is_new is True
        assert len(session_id) == 32


class TestPageOrigin:
    """Test where the click's page origin comes from."""

    def test_page_url_first(self):
        context = ClickContext(visitor_hash="v", origin_header="https://a.com", referer="https://b.com/x")

        assert page_origin("https://page.com/p", context, "site.com") == "https://page.com/p"

    def test_origin_header_then_referer(self):
        context = ClickContext(visitor_hash="v", origin_header=None, referer="https://b.com/x")

        assert page_origin(None, context, "site.com") == "https://b.com/x"

    def test_relative_page_url_skipped(self):
        context = ClickContext(visitor_hash="v", origin_header="https://a.com")

        assert page_origin("/relative", context) == "https://a.com"

    def test_site_domain_last(self):
        assert page_origin(None, ClickContext(visitor_hash="v"), "site.com") == "https://site.com"

    def test_nothing_known(self):
        assert page_origin(None, ClickContext(visitor_hash="v")) is None


class TestRecordClick:
    """Test persisting click events."""

    @pytest.mark.asyncio
    async def test_outbound_click_recorded(self, db_session_with_data, session_maker, site_id, article_id):
        event = WidgetClickRequest(
            site_id=site_id,
            article_id=article_id,
            widget_type="cta-button",
            widget_id="w1",
            destination_url="https://shop.other.com/buy",
            page_url="https://example.com/test-article",
        )
        context = ClickContext(visitor_hash="abc123", user_agent="pytest", session_id="s1")

        stored = await record_click(event, context, session_maker)

        assert stored is not None
        result = await db_session_with_data.execute(select(ClickEvent))
        click = result.scalars().one()
        assert click.is_external is True
        assert click.session_id == "s1"
        assert click.visitor_hash == "abc123"

    @pytest.mark.asyncio
    async def test_server_classification_overrides_client(self, db_session_with_data, session_maker, site_id):
        event = WidgetClickRequest(
            site_id=site_id,
            widget_type="cta-button",
            destination_url="/pricing",
            is_external=True,
        )

        stored = await record_click(event, ClickContext(visitor_hash="v"), session_maker)

        assert stored.is_external is False

    @pytest.mark.asyncio
    async def test_unknown_site_dropped(self, db_session_with_data, session_maker):
        event = WidgetClickRequest(site_id="missing", widget_type="cta-button")

        assert await record_click(event, ClickContext(visitor_hash="v"), session_maker) is None

        result = await db_session_with_data.execute(select(ClickEvent))
        assert result.scalars().all() == []


class TestRecordView:
    """Test persisting article views."""

    @pytest.mark.asyncio
    async def test_view_recorded_and_counter_bumped(
        self, db_session_with_data, session_maker, article_id, site_id
    ):
        context = ClickContext(visitor_hash="v1", referer="https://google.com/")

        stored = await record_view(article_id, context, session_maker)

        assert stored is not None
        assert stored.site_id == site_id
        result = await db_session_with_data.execute(select(ViewEvent))
        assert len(result.scalars().all()) == 1
        article = await db_session_with_data.get(Article, article_id)
        await db_session_with_data.refresh(article)
        assert article.views == 1

    @pytest.mark.asyncio
    async def test_unknown_article_dropped(self, db_session_with_data, session_maker):
        assert await record_view("missing", ClickContext(visitor_hash="v"), session_maker) is None
