"""
Click Attribution

Classifies widget clicks as outbound or internal, derives a private visitor
identity, and records click and view events. Recording is fire-and-forget:
failures are logged and never reach the visitor.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Mapping, Optional
from urllib.parse import urljoin, urlsplit

from fastapi import Request
from sqlalchemy.ext.asyncio import async_sessionmaker

from funnelpress.config import settings
from funnelpress.core.security import hash_visitor
from funnelpress.database import get_db_context
from funnelpress.models.analytics import ClickEvent, ViewEvent
from funnelpress.queries import create_queries
from funnelpress.schemas.analytics import WidgetClickRequest

logger = logging.getLogger(__name__)

NON_NAVIGATING_SCHEMES = ("javascript:", "mailto:", "tel:")
DEFAULT_PORTS = {"http": 80, "https": 443}
USER_AGENT_MAX_LENGTH = 500


def _origin(url: str) -> Optional[tuple[str, str, Optional[int]]]:
    """(scheme, host, effective port) of an absolute URL, or None."""
    parts = urlsplit(url)
    if not parts.scheme or not parts.hostname:
        return None
    scheme = parts.scheme.lower()
    return scheme, parts.hostname, parts.port or DEFAULT_PORTS.get(scheme)


def is_external_url(url: Optional[str], current_origin: Optional[str]) -> bool:
    """Whether following ``url`` from a page on ``current_origin`` leaves the site.

    ``current_origin`` may be an origin or any URL on it. Without a known
    origin only absolute http(s) URLs count as external.
    """
    if not url or not url.strip():
        return False
    url = url.strip()
    if url.startswith("#") or url.startswith("/#"):
        return False
    if url.lower().startswith(NON_NAVIGATING_SCHEMES):
        return False
    # Root-relative path; "//host" is protocol-relative and handled below
    if url.startswith("/") and not url.startswith("//"):
        return False

    try:
        base = _origin(current_origin) if current_origin else None
        if base is None:
            target = _origin(url)
            return target is not None and target[0] in DEFAULT_PORTS
        target = _origin(urljoin(current_origin, url))
        return target is not None and target != base
    except ValueError:
        # Malformed port or host
        return False


def client_ip(headers: Mapping[str, str]) -> str:
    """First X-Forwarded-For hop, then X-Real-IP, else "unknown"."""
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()
    return "unknown"


def new_session_id() -> str:
    return uuid.uuid4().hex


def resolve_session_id(
    supplied: Optional[str], cookies: Mapping[str, str]
) -> tuple[str, bool]:
    """Return (session id, whether it was newly minted)."""
    if supplied:
        return supplied, False
    cookie = cookies.get(settings.SESSION_COOKIE_NAME)
    if cookie:
        return cookie, False
    return new_session_id(), True


@dataclass
class ClickContext:
    """Request-derived data captured before the response is sent."""

    visitor_hash: str
    user_agent: Optional[str] = None
    origin_header: Optional[str] = None
    referer: Optional[str] = None
    session_id: Optional[str] = None

    @classmethod
    def from_request(cls, request: Request, session_id: Optional[str] = None) -> "ClickContext":
        user_agent = request.headers.get("user-agent")
        return cls(
            visitor_hash=hash_visitor(client_ip(request.headers)),
            user_agent=user_agent[:USER_AGENT_MAX_LENGTH] if user_agent else None,
            origin_header=request.headers.get("origin"),
            referer=request.headers.get("referer"),
            session_id=session_id,
        )


def page_origin(
    page_url: Optional[str],
    context: ClickContext,
    site_domain: Optional[str] = None,
) -> Optional[str]:
    """Origin of the page the click happened on, by decreasing trust."""
    for candidate in (page_url, context.origin_header, context.referer):
        if candidate and _safe_origin(candidate):
            return candidate
    if site_domain:
        return f"https://{site_domain}"
    return None


def _safe_origin(url: str) -> bool:
    try:
        return _origin(url) is not None
    except ValueError:
        return False


async def record_click(
    event: WidgetClickRequest,
    context: ClickContext,
    session_maker: async_sessionmaker | None = None,
) -> Optional[ClickEvent]:
    """Persist a widget click. Returns the stored event, or None on failure."""
    try:
        async with get_db_context(session_maker) as db:
            queries = create_queries(db)
            site = await queries.site_queries.get_by_id(event.site_id)
            if site is None:
                logger.warning(f"Dropping click for unknown site {event.site_id}")
                return None

            origin = page_origin(event.page_url, context, site.domain)
            if origin is not None:
                external = is_external_url(event.destination_url, origin)
            elif event.is_external is not None:
                external = event.is_external
            else:
                external = is_external_url(event.destination_url, None)

            stored = await queries.analytics_queries.add_click(
                site_id=event.site_id,
                article_id=event.article_id,
                widget_type=event.widget_type,
                widget_id=event.widget_id,
                widget_name=event.widget_name,
                click_type=event.click_type,
                destination_url=event.destination_url,
                is_external=external,
                session_id=context.session_id,
                visitor_hash=context.visitor_hash,
                user_agent=context.user_agent,
            )
            return stored
    except Exception:
        logger.exception(f"Failed to record widget click for site {event.site_id}")
        return None


async def record_view(
    article_id: str,
    context: ClickContext,
    session_maker: async_sessionmaker | None = None,
) -> Optional[ViewEvent]:
    """Persist an article view and bump its display counter."""
    try:
        async with get_db_context(session_maker) as db:
            queries = create_queries(db)
            article = await queries.article_queries.get_by_id(article_id)
            if article is None:
                logger.warning(f"Dropping view for unknown article {article_id}")
                return None

            stored = await queries.analytics_queries.add_view(
                article_id=article.id,
                site_id=article.site_id,
                visitor_hash=context.visitor_hash,
                user_agent=context.user_agent,
                referrer=context.referer,
            )
            await queries.article_queries.increment_views(article.id)
            return stored
    except Exception:
        logger.exception(f"Failed to record view for article {article_id}")
        return None
