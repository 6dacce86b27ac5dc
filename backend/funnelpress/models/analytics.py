"""
Append-only traffic events used by the analytics aggregator.
"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text

from funnelpress.models.base import Base, utcnow


class ViewEvent(Base):
    """One article view."""

    __tablename__ = "view_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    article_id = Column(
        String(36),
        ForeignKey("articles.id", ondelete="CASCADE"),
        nullable=False,
    )
    site_id = Column(
        String(36),
        ForeignKey("sites.id", ondelete="CASCADE"),
        nullable=False,
    )
    visitor_hash = Column(String(64), nullable=True)
    user_agent = Column(Text, nullable=True)
    referrer = Column(String(2000), nullable=True)
    viewed_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        Index("idx_view_events_site_time", "site_id", "viewed_at"),
        Index("idx_view_events_article_time", "article_id", "viewed_at"),
    )


class ClickEvent(Base):
    """One widget click.

    Only rows with ``is_external`` set count toward conversion metrics.
    """

    __tablename__ = "click_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    site_id = Column(
        String(36),
        ForeignKey("sites.id", ondelete="CASCADE"),
        nullable=False,
    )
    article_id = Column(
        String(36),
        ForeignKey("articles.id", ondelete="SET NULL"),
        nullable=True,
    )
    widget_type = Column(String(100), nullable=False)
    widget_id = Column(String(100), nullable=True)
    widget_name = Column(String(255), nullable=True)
    click_type = Column(String(50), nullable=False, default="cta")
    destination_url = Column(String(2000), nullable=True)
    is_external = Column(Boolean, nullable=False, default=False)
    session_id = Column(String(64), nullable=True)
    visitor_hash = Column(String(64), nullable=True)
    user_agent = Column(Text, nullable=True)
    clicked_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        Index("idx_click_events_site_time", "site_id", "clicked_at"),
        Index("idx_click_events_article_time", "article_id", "clicked_at"),
        Index("idx_click_events_widget", "site_id", "widget_type", "widget_id"),
    )
