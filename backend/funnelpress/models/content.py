"""
Content models: articles and pages belonging to a site.
"""
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from funnelpress.models.base import Base, BaseModel, JSONType


class Article(Base, BaseModel):
    """Long-form article served under a site."""

    __tablename__ = "articles"

    site_id = Column(
        String(36),
        ForeignKey("sites.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(500), nullable=False)
    slug = Column(String(255), nullable=False)
    excerpt = Column(Text, nullable=True)
    content = Column(Text, nullable=True)
    category = Column(String(100), nullable=True, index=True)
    image = Column(String(1000), nullable=True)

    featured = Column(Boolean, nullable=False, default=False)
    trending = Column(Boolean, nullable=False, default=False)
    hero = Column(Boolean, nullable=False, default=False)
    boosted = Column(Boolean, nullable=False, default=False)
    published = Column(Boolean, nullable=False, default=False)
    published_at = Column(DateTime(timezone=True), nullable=True)

    read_time = Column(Integer, nullable=False, default=5)
    # Display counter; real traffic lives in view_events
    views = Column(Integer, nullable=False, default=0)
    author_name = Column(String(255), nullable=True)
    author_image = Column(String(1000), nullable=True)
    tags = Column(JSONType, default=list)
    seo_title = Column(String(500), nullable=True)
    seo_description = Column(Text, nullable=True)
    canonical_url = Column(String(1000), nullable=True)
    tracking_config = Column(JSONType, nullable=True)
    version = Column(Integer, nullable=False, default=1)

    # Relationships
    site = relationship("Site", back_populates="articles")

    __table_args__ = (
        UniqueConstraint("site_id", "slug", name="uq_article_site_slug"),
        Index("idx_articles_site_published", "site_id", "published"),
    )

    def __repr__(self) -> str:
        return f"<Article {self.slug}>"


class Page(Base, BaseModel):
    """Standalone page (about, landing, etc.) served under a site."""

    __tablename__ = "pages"

    site_id = Column(
        String(36),
        ForeignKey("sites.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(500), nullable=False)
    slug = Column(String(255), nullable=False)
    content = Column(Text, nullable=True)
    template = Column(String(100), nullable=False, default="default")
    published = Column(Boolean, nullable=False, default=False)
    published_at = Column(DateTime(timezone=True), nullable=True)
    seo_title = Column(String(500), nullable=True)
    seo_description = Column(Text, nullable=True)
    version = Column(Integer, nullable=False, default=1)

    # Relationships
    site = relationship("Site", back_populates="pages")
    widget_instances = relationship(
        "WidgetInstance", back_populates="page", cascade="all, delete-orphan"
    )

    __table_args__ = (
        UniqueConstraint("site_id", "slug", name="uq_page_site_slug"),
        Index("idx_pages_site_published", "site_id", "published"),
    )

    def __repr__(self) -> str:
        return f"<Page {self.slug}>"
